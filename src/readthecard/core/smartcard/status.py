"""ISO 7816 status word classification."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatusOutcome:
    """Base class for classified status words."""


@dataclass(frozen=True)
class Success(StatusOutcome):
    """90 00."""


@dataclass(frozen=True)
class MoreData(StatusOutcome):
    """61 XX: XX more bytes are available."""

    available: int


@dataclass(frozen=True)
class WrongLength(StatusOutcome):
    """6C XX: resend with Le = XX."""

    le: int


@dataclass(frozen=True)
class PinRetry(StatusOutcome):
    """63 CX: verification failed, X attempts left."""

    remaining: int


@dataclass(frozen=True)
class PinLocked(StatusOutcome):
    """69 84: reference data blocked."""


@dataclass(frozen=True)
class ApplicationError(StatusOutcome):
    """Any status word not covered above."""

    sw1: int
    sw2: int

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2


def classify(sw1: int, sw2: int) -> StatusOutcome:
    """Map a status word to its outcome."""
    if sw1 == 0x90 and sw2 == 0x00:
        return Success()
    if sw1 == 0x61:
        return MoreData(available=sw2)
    if sw1 == 0x6C:
        return WrongLength(le=sw2)
    if sw1 == 0x63:
        return PinRetry(remaining=sw2 & 0x0F)
    if sw1 == 0x69 and sw2 == 0x84:
        return PinLocked()
    return ApplicationError(sw1=sw1, sw2=sw2)
