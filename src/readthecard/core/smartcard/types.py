from __future__ import annotations

from dataclasses import dataclass

from readthecard.core.smartcard.errors import ProtocolError
from readthecard.core.smartcard.status import StatusOutcome, classify


@dataclass(frozen=True)
class APDU:
    """ISO 7816 short command APDU."""

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""
    le: int | None = None

    def to_bytes(self) -> bytes:
        if len(self.data) > 255 or (self.le is not None and self.le > 256):
            raise ValueError("extended length APDUs are not supported")
        buf = bytearray([self.cla, self.ins, self.p1, self.p2])
        if self.data:
            buf.append(len(self.data))
            buf.extend(self.data)
        if self.le is not None:
            buf.append(0x00 if self.le == 256 else self.le)
        return bytes(buf)

    def __repr__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass(frozen=True)
class Response:
    """ISO 7816 response APDU."""

    data: bytes
    sw1: int
    sw2: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> Response:
        """Split a raw response into payload and trailing status word."""
        if len(raw) < 2:
            raise ProtocolError(f"response too short: {len(raw)} byte(s), status word missing")
        return cls(data=bytes(raw[:-2]), sw1=raw[-2], sw2=raw[-1])

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2

    @property
    def success(self) -> bool:
        return self.sw1 == 0x90 and self.sw2 == 0x00

    @property
    def outcome(self) -> StatusOutcome:
        return classify(self.sw1, self.sw2)

    def __repr__(self) -> str:
        sw = f"SW={self.sw:04X}"
        if self.data:
            return f"{self.data.hex(' ').upper()} {sw}"
        return sw
