from __future__ import annotations

import pytest

from readthecard.core.base import Agent
from readthecard.core.kenhojo import KenhojoProtocol
from readthecard.core.smartcard.errors import DeviceError

SCRIPTED_READER = "Scripted Reader 0"


class ScriptedCard:
    """Reader adapter that replays canned raw responses and records commands."""

    def __init__(self, *responses: bytes) -> None:
        self.responses = list(responses)
        self.commands: list[bytes] = []
        self.connected = False
        self.exclusive = False
        self.disconnects = 0

    def list_readers(self) -> list[str]:
        return [SCRIPTED_READER]

    def connect(self, reader_name: str, exclusive: bool = False) -> None:
        if reader_name != SCRIPTED_READER:
            raise DeviceError(f"reader not found: {reader_name}")
        self.connected = True
        self.exclusive = exclusive

    def disconnect(self) -> None:
        self.connected = False
        self.disconnects += 1

    def transmit(self, command: bytes) -> bytes:
        self.commands.append(bytes(command))
        return self.responses.pop(0)


def sw(hexstr: str, data: bytes = b"") -> bytes:
    """Raw response: ``data`` followed by the status word ``hexstr``."""
    return data + bytes.fromhex(hexstr)


@pytest.fixture
def scripted():
    """Factory for a (card, protocol) pair replaying the given responses."""

    def make(*responses: bytes) -> tuple[ScriptedCard, KenhojoProtocol]:
        card = ScriptedCard(*responses)
        return card, KenhojoProtocol(Agent(card).transmit)

    return make
