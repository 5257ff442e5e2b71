from __future__ import annotations

import logging
from collections.abc import Callable

from readthecard.core.base.agent import CONTROL_BUFFER, DATA_BUFFER
from readthecard.core.smartcard import APDU, Response
from readthecard.core.smartcard.logging import PROTOCOL, format_sw

lg = logging.getLogger(__name__)

# Largest Le a short READ BINARY can request (encoded as 00).
MAX_LE = 256

# Largest offset expressible in P1-P2 with bit 8 of P1 clear.
MAX_OFFSET = 0x7FFF


def read_binary_params(offset: int, sfi: int | None = None) -> tuple[int, int]:
    """Return (P1, P2) for READ BINARY at ``offset``.

    With an SFI and an offset up to 255 the short EF form is used
    (P1 = 80 | SFI, P2 = offset). Larger offsets, or no SFI, use the
    15-bit offset form against the current EF.
    """
    if not 0 <= offset <= MAX_OFFSET:
        raise ValueError(f"offset out of range: {offset}")
    if sfi is not None and offset <= 0xFF:
        return 0x80 | (sfi & 0x1F), offset
    return (offset >> 8) & 0x7F, offset & 0xFF


class ISO7816:
    """ISO 7816-4 protocol operations."""

    def __init__(self, transmit: Callable[..., Response]) -> None:
        self._transmit = transmit

    def _send(self, label: str, apdu: APDU, bufsize: int = CONTROL_BUFFER) -> Response:
        resp = self._transmit(apdu, bufsize)
        lg.log(PROTOCOL, "%s %s", label, format_sw(resp.sw1, resp.sw2))
        return resp

    # -- commands --

    def send_select(
        self, data: bytes, p1: int = 0x04, p2: int = 0x0C,
    ) -> Response:
        """SELECT (00 A4). P1=selection method, P2=response control."""
        le: int | None = None if (p2 & 0x0C) == 0x0C else 0x00
        apdu = APDU(cla=0x00, ins=0xA4, p1=p1, p2=p2, data=data, le=le)
        return self._send(f"SELECT {data.hex().upper()}", apdu)

    def send_verify(self, data: bytes, ref: int) -> Response:
        """VERIFY (00 20). P2 = reference data qualifier."""
        apdu = APDU(cla=0x00, ins=0x20, p1=0x00, p2=ref, data=data)
        return self._send(f"VERIFY ref={ref:02X}", apdu)

    def send_read_binary(
        self, offset: int, length: int, *, sfi: int | None = None,
    ) -> Response:
        """Read binary data (00 B0). SFI in P1 bit 8 while offset fits P2."""
        p1, p2 = read_binary_params(offset, sfi)
        le = min(length, MAX_LE)
        apdu = APDU(cla=0x00, ins=0xB0, p1=p1, p2=p2, le=le)
        if p1 & 0x80:
            label = f"READ BINARY SFI={sfi:02X} offset={offset:02X} le={le:02X}"
        else:
            label = f"READ BINARY offset={offset:04X} le={le:02X}"
        return self._send(label, apdu, DATA_BUFFER)
