import random

from readthecard.core.kenhojo.basicfour import BasicFourRecord, decode, encode
from readthecard.core.smartcard.tlv import TLV, parse

SAMPLE = (
    bytes.fromhex("DF2106") + "山田".encode()
    + bytes.fromhex("DF2209") + "東京都".encode()
    + bytes.fromhex("DF2309") + b"H01.01.01"
    + bytes.fromhex("DF2401") + b"1"
)


def test_decode_sample():
    assert decode(SAMPLE) == BasicFourRecord(
        name="山田", address="東京都", birth_date="H01.01.01", gender="1",
    )


def test_decode_empty():
    assert decode(b"") == BasicFourRecord(name="", address="", birth_date="", gender="")


def test_truncated_trailing_value_is_dropped():
    data = SAMPLE[:-1]
    record = decode(data)
    assert record.name == "山田"
    assert record.birth_date == "H01.01.01"
    assert record.gender == ""


def test_truncated_tag_and_length():
    assert decode(SAMPLE + b"\xDF").gender == "1"
    assert decode(SAMPLE + b"\xDF\x21").name == "山田"


def test_unknown_tags_are_skipped():
    data = bytes.fromhex("FF2003AABBCC") + SAMPLE + bytes.fromhex("DF2500")
    assert decode(data) == decode(SAMPLE)


def test_later_tag_overwrites_earlier():
    data = SAMPLE + bytes.fromhex("DF2103") + b"abc"
    assert decode(data).name == "abc"


def test_invalid_utf8_is_replaced():
    data = bytes.fromhex("DF2102FFFE")
    assert decode(data).name == "��"


def test_legacy_encoding():
    record = BasicFourRecord(name="山田", address="東京都", birth_date="H01.01.01", gender="2")
    assert decode(encode(record, "shift_jis"), "shift_jis") == record


def test_decode_is_total():
    rng = random.Random(7816)
    for _ in range(500):
        data = bytes(rng.randrange(256) for _ in range(rng.randrange(64)))
        assert isinstance(decode(data), BasicFourRecord)


def test_parse_stops_at_truncation():
    assert parse(bytes.fromhex("DF2101410102")) == [TLV(tag=0xDF21, value=b"A")]


def test_tlv_format():
    assert TLV(0xDF24, b"1").format({0xDF24: "Gender"}) == "DF24 Gender: 31"
    assert TLV(0xDF99, b"").format() == "DF99:"
