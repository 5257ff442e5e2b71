from __future__ import annotations

import logging
from typing import Protocol

from readthecard.core.smartcard import APDU, Response
from readthecard.core.smartcard.errors import DeviceError, ProtocolError

lg = logging.getLogger(__name__)

# Receive buffer sizes: control commands (SELECT, VERIFY) and data commands.
CONTROL_BUFFER = 258
DATA_BUFFER = 512


class CardChannel(Protocol):
    """Reader adapter contract: pyscard ``Card`` or the simulated ``MockCard``."""

    def list_readers(self) -> list[str]: ...
    def connect(self, reader_name: str, exclusive: bool = False) -> None: ...
    def disconnect(self) -> None: ...
    def transmit(self, command: bytes) -> bytes: ...


class Agent:
    """Agent that manages card connectivity and APDU transmission.

    Protocol-specific operations live in standalone protocol classes
    (ISO7816, KenhojoProtocol) that receive agent.transmit as a callable.
    An Agent is one card session: it is not safe to share between
    concurrent read operations.
    """

    def __init__(self, card: CardChannel) -> None:
        self._card = card
        self._reader: str | None = None

    @property
    def reader(self) -> str | None:
        return self._reader

    def connect(self, reader: str | None = None, exclusive: bool = False) -> None:
        """Connect to the named reader, or the first one available."""
        if reader is None:
            available = self._card.list_readers()
            if not available:
                raise DeviceError("no readers found")
            reader = available[0]
        self._card.connect(reader, exclusive=exclusive)
        self._reader = reader
        lg.info("connected to %s", reader)

    def disconnect(self) -> None:
        """Disconnect from the card."""
        if self._reader is not None:
            lg.debug("disconnecting from %s", self._reader)
        self._card.disconnect()
        self._reader = None

    def transmit(self, apdu: APDU, bufsize: int = CONTROL_BUFFER) -> Response:
        """Send exactly ``apdu`` and parse the reply into a Response."""
        raw = self._card.transmit(apdu.to_bytes())
        if len(raw) > bufsize:
            raise ProtocolError(f"response of {len(raw)} bytes overflows {bufsize} byte buffer")
        return Response.from_bytes(raw)
