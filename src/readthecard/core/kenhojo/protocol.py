"""Card input-support applet protocol operations.

SELECT the applet, VERIFY the 4-digit PIN, and READ BINARY a short EF
in windows of up to 256 bytes. Each operation sends its commands once;
nothing here retries on the caller's behalf.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from readthecard.core.base.iso7816 import ISO7816, MAX_LE, MAX_OFFSET
from readthecard.core.kenhojo.tags import EF_PIN, KENHOJO_AP
from readthecard.core.smartcard import Response
from readthecard.core.smartcard.errors import (
    AuthError,
    ProtocolError,
    SelectionError,
    ValidationError,
)
from readthecard.core.smartcard.status import (
    MoreData,
    PinLocked,
    PinRetry,
    Success,
    WrongLength,
)

lg = logging.getLogger(__name__)

PIN_LENGTH = 4
_DIGITS = frozenset("0123456789")


def validate_pin(pin: str) -> bytes:
    """Return the ASCII bytes of ``pin`` or raise ValidationError."""
    if not isinstance(pin, str) or len(pin) != PIN_LENGTH or not set(pin) <= _DIGITS:
        raise ValidationError(f"PIN must be exactly {PIN_LENGTH} digits")
    return pin.encode("ascii")


def _raise_for(label: str, resp: Response) -> None:
    """Raise the error matching a non-success response."""
    outcome = resp.outcome
    if isinstance(outcome, PinRetry):
        raise AuthError(remaining=outcome.remaining)
    if isinstance(outcome, PinLocked):
        raise AuthError(locked=True)
    raise ProtocolError(f"{label} failed", resp.sw)


class KenhojoProtocol:
    """Protocol operations for the card input-support applet."""

    def __init__(self, transmit: Callable[..., Response]) -> None:
        self._iso = ISO7816(transmit)

    def select_application(self, aid: bytes = KENHOJO_AP) -> None:
        """SELECT by DF name, no response data (00 A4 04 0C)."""
        resp = self._iso.send_select(aid, p1=0x04, p2=0x0C)
        if not isinstance(resp.outcome, Success):
            raise SelectionError(resp.sw)

    def verify_pin(self, pin: str) -> None:
        """VERIFY the PIN EF (00 20 00 81). Consumes a card retry on failure."""
        data = validate_pin(pin)
        resp = self._iso.send_verify(data, ref=0x80 | EF_PIN)
        if not isinstance(resp.outcome, Success):
            _raise_for("VERIFY", resp)

    def read_file(self, file_id: int) -> bytes:
        """Read a whole transparent EF by short file identifier."""
        data = bytearray()
        offset = 0
        stalled = 0
        while True:
            if offset > MAX_OFFSET:
                raise ProtocolError(f"READ BINARY offset {offset} beyond addressable range")
            resp = self._iso.send_read_binary(offset, MAX_LE, sfi=file_id)
            outcome = resp.outcome

            if isinstance(outcome, Success):
                data += resp.data
                break

            if isinstance(outcome, WrongLength):
                resp = self._iso.send_read_binary(offset, outcome.le or MAX_LE, sfi=file_id)
                if not isinstance(resp.outcome, (Success, MoreData, WrongLength)):
                    _raise_for("READ BINARY", resp)
                data += resp.data
                break

            if isinstance(outcome, MoreData):
                data += resp.data
                if resp.data:
                    stalled = 0
                else:
                    stalled += 1
                    if stalled >= 2:
                        raise ProtocolError("READ BINARY made no progress", resp.sw)
                offset += len(resp.data)
                continue

            _raise_for("READ BINARY", resp)

        lg.debug("read %d bytes from EF %02X", len(data), file_id)
        return bytes(data)
