"""Simple TLV walker: 2-byte big-endian tag, 1-byte length, value.

Parsing is lenient. A truncated tag, length or value ends the walk and
everything complete up to that point is returned.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class TLV:
    """A single simple-TLV entry."""

    tag: int
    value: bytes = b""

    @property
    def length(self) -> int:
        return len(self.value)

    def format(self, tag_names: dict[int, str] | None = None) -> str:
        """Format this entry as a single human-readable line."""
        names = tag_names or {}
        name = names.get(self.tag, "")
        label = f"{self.tag:04X} {name}".rstrip()
        return f"{label}: {self.value.hex(' ').upper()}".rstrip()

    def __repr__(self) -> str:
        return f"TLV({self.tag:04X}, {self.value.hex().upper()})"


def iter_tlv(data: bytes) -> Iterator[TLV]:
    """Yield complete entries from ``data`` in order, stopping at truncation."""
    offset = 0
    end = len(data)
    while offset < end:
        if end - offset < 2:
            return
        tag = (data[offset] << 8) | data[offset + 1]
        offset += 2
        if offset >= end:
            return
        length = data[offset]
        offset += 1
        if offset + length > end:
            return
        yield TLV(tag=tag, value=bytes(data[offset : offset + length]))
        offset += length


def parse(data: bytes) -> list[TLV]:
    """Parse a byte sequence into a list of simple-TLV entries."""
    return list(iter_tlv(data))


def encode(tag: int, value: bytes) -> bytes:
    """Encode one entry. ``value`` must fit a 1-byte length."""
    if len(value) > 0xFF:
        raise ValueError(f"value too long for simple TLV: {len(value)} bytes")
    return tag.to_bytes(2, "big") + bytes([len(value)]) + value
