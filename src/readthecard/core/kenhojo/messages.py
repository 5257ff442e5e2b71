"""Card input-support applet messages and results.

Each operation has a Message/Result pair. Failures are raised as
CardError subclasses rather than reported in the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from readthecard.core.base import Message, Result
from readthecard.core.kenhojo.basicfour import BasicFourRecord
from readthecard.core.kenhojo.tags import KENHOJO_AP


@dataclass
class SelectApplicationMessage(Message):
    """SELECT the applet by AID."""

    aid: bytes = KENHOJO_AP


@dataclass
class SelectApplicationResult(Result):
    aid: bytes


@dataclass
class VerifyPinMessage(Message):
    """VERIFY the 4-digit PIN."""

    pin: str

    def __repr__(self) -> str:
        return "VerifyPinMessage(pin='****')"


@dataclass
class VerifyPinResult(Result):
    verified: bool


@dataclass
class ReadFileMessage(Message):
    """READ BINARY a whole EF by short file identifier."""

    file_id: int


@dataclass
class ReadFileResult(Result):
    file_id: int
    data: bytes


@dataclass
class ReadBasicFourMessage(Message):
    """Read and decode the Basic Four EF (PIN must already be verified)."""

    encoding: str = "utf-8"


@dataclass
class ReadBasicFourResult(Result):
    raw: bytes
    record: BasicFourRecord
