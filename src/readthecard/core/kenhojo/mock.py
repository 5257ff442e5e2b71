"""Simulated reader and card carrying the input-support applet.

Stands in for the pyscard ``Card`` when no hardware is at hand: the
``--mock`` CLI option and the test suite both drive the full protocol
stack through it. Only the commands the applet needs are implemented.
"""

from __future__ import annotations

import logging

from readthecard.core.kenhojo.basicfour import BasicFourRecord, encode
from readthecard.core.kenhojo.tags import EF_BASIC_FOUR, EF_PIN, KENHOJO_AP
from readthecard.core.smartcard.errors import DeviceError
from readthecard.core.smartcard.logging import log_hex, mask_command

lg = logging.getLogger(__name__)

MOCK_READER = "Mock Card Reader 0"

MOCK_RECORD = BasicFourRecord(
    name="山田太郎",
    address="東京都千代田区霞が関1-2-3",
    birth_date="19800101",
    gender="1",
)

SW_OK = b"\x90\x00"
SW_WRONG_P1P2 = b"\x6b\x00"
SW_FILE_NOT_FOUND = b"\x6a\x82"
SW_REF_NOT_FOUND = b"\x6a\x88"
SW_SECURITY = b"\x69\x82"
SW_BLOCKED = b"\x69\x84"
SW_CONDITIONS = b"\x69\x85"
SW_NO_CURRENT_EF = b"\x69\x86"
SW_INS_NOT_SUPPORTED = b"\x6d\x00"


def _split(command: bytes) -> tuple[int, int, int, bytes, int | None]:
    """Split a short command APDU into (INS, P1, P2, data, Le)."""
    ins, p1, p2 = command[1], command[2], command[3]
    body = command[4:]
    if not body:
        return ins, p1, p2, b"", None
    if len(body) == 1:
        return ins, p1, p2, b"", body[0] or 256
    lc = body[0]
    data = body[1 : 1 + lc]
    le = body[1 + lc] if len(body) > 1 + lc else None
    if le == 0:
        le = 256
    return ins, p1, p2, data, le


class MockCard:
    """In-memory reader adapter with a card inserted.

    ``chunk`` caps the bytes returned per READ BINARY; when more remain the
    card answers 61 XX so the read is chained. ``strict_le`` makes the card
    answer 6C XX whenever Le does not match the bytes left in the window.
    """

    def __init__(
        self,
        record: BasicFourRecord = MOCK_RECORD,
        pin: str = "1234",
        retries: int = 3,
        *,
        data: bytes | None = None,
        chunk: int | None = None,
        strict_le: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self._pin = pin.encode("ascii")
        self._max_retries = retries
        self.retries = retries
        self._files = {EF_BASIC_FOUR: data if data is not None else encode(record, encoding)}
        self._chunk = chunk
        self._strict_le = strict_le
        self._connected = False
        self._selected = False
        self._verified = False
        self._current_ef: int | None = None
        self.history: list[bytes] = []

    @property
    def connected(self) -> bool:
        return self._connected

    def list_readers(self) -> list[str]:
        return [MOCK_READER]

    def connect(self, reader_name: str, exclusive: bool = False) -> None:
        if reader_name != MOCK_READER:
            raise DeviceError(f"reader not found: {reader_name}")
        if self._connected:
            raise DeviceError(f"reader busy: {reader_name}")
        self._connected = True
        self._selected = False
        self._verified = False
        self._current_ef = None

    def disconnect(self) -> None:
        self._connected = False

    def transmit(self, command: bytes) -> bytes:
        if not self._connected:
            raise DeviceError("not connected to a card")
        self.history.append(bytes(command))
        log_hex(lg, ">> ", mask_command(bytes(command)))
        ins, p1, p2, data, le = _split(command)
        if ins == 0xA4:
            resp = self._select(p1, data)
        elif ins == 0x20:
            resp = self._verify(p2, data)
        elif ins == 0xB0:
            resp = self._read_binary(p1, p2, le)
        else:
            resp = SW_INS_NOT_SUPPORTED
        log_hex(lg, "<< ", resp)
        return resp

    # -- commands --

    def _select(self, p1: int, data: bytes) -> bytes:
        if p1 == 0x04 and data == KENHOJO_AP:
            self._selected = True
            self._verified = False
            self._current_ef = None
            return SW_OK
        return SW_FILE_NOT_FOUND

    def _verify(self, p2: int, data: bytes) -> bytes:
        if not self._selected:
            return SW_CONDITIONS
        if p2 != 0x80 | EF_PIN:
            return SW_REF_NOT_FOUND
        if self.retries == 0:
            return SW_BLOCKED
        if data == self._pin:
            self.retries = self._max_retries
            self._verified = True
            return SW_OK
        self.retries -= 1
        self._verified = False
        return bytes([0x63, 0xC0 | self.retries])

    def _read_binary(self, p1: int, p2: int, le: int | None) -> bytes:
        if not self._selected:
            return SW_CONDITIONS
        if p1 & 0x80:
            ef = p1 & 0x1F
            if ef not in self._files:
                return SW_FILE_NOT_FOUND
            self._current_ef = ef
            offset = p2
        else:
            if self._current_ef is None:
                return SW_NO_CURRENT_EF
            offset = (p1 << 8) | p2
        if not self._verified:
            return SW_SECURITY

        content = self._files[self._current_ef]
        if offset >= len(content):
            return SW_WRONG_P1P2
        le = le or 256
        window = len(content) - offset
        if self._chunk is not None:
            window = min(window, self._chunk)
        if self._strict_le and le != window and window <= 0xFF:
            return bytes([0x6C, window])
        n = min(le, window)
        rest = len(content) - offset - n
        if rest > 0 and self._chunk is not None:
            return content[offset : offset + n] + bytes([0x61, min(rest, 0xFF)])
        return content[offset : offset + n] + SW_OK
