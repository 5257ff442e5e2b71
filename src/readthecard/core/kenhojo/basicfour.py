"""Basic Four record and its TLV codec."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from readthecard.core.kenhojo import tags
from readthecard.core.smartcard.logging import TRACE
from readthecard.core.smartcard.tlv import encode as encode_tlv
from readthecard.core.smartcard.tlv import iter_tlv

lg = logging.getLogger(__name__)

_FIELDS: dict[int, str] = {
    tags.NAME: "name",
    tags.ADDRESS: "address",
    tags.BIRTH_DATE: "birth_date",
    tags.GENDER: "gender",
}


@dataclass(frozen=True)
class BasicFourRecord:
    """The four identity fields as stored on the card.

    ``birth_date`` keeps the card's own notation and ``gender`` the numeric
    code ("1", "2", "9"); see ``app.kenhojo.display`` for presentation.
    """

    name: str = ""
    address: str = ""
    birth_date: str = ""
    gender: str = ""


def decode(data: bytes, encoding: str = "utf-8") -> BasicFourRecord:
    """Decode a Basic Four EF into a record. Never raises.

    Unknown tags are skipped, a repeated tag overwrites the earlier value,
    and a truncated trailing entry is dropped. Undecodable bytes become
    U+FFFD.
    """
    values: dict[str, str] = {}
    for node in iter_tlv(data):
        field_name = _FIELDS.get(node.tag)
        if field_name is None:
            lg.log(TRACE, "skipping tag %04X (%d bytes)", node.tag, node.length)
            continue
        values[field_name] = node.value.decode(encoding, errors="replace")
    return BasicFourRecord(**values)


def encode(record: BasicFourRecord, encoding: str = "utf-8") -> bytes:
    """Encode a record the way the card lays out the EF."""
    out = bytearray()
    for tag, field_name in _FIELDS.items():
        out += encode_tlv(tag, getattr(record, field_name).encode(encoding))
    return bytes(out)
