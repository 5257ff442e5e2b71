import pytest

from readthecard.core.base import Agent
from readthecard.core.base.iso7816 import read_binary_params
from readthecard.core.kenhojo.tags import KENHOJO_AP
from readthecard.core.smartcard import APDU, Response
from readthecard.core.smartcard.errors import ProtocolError
from readthecard.core.smartcard.status import MoreData

from conftest import ScriptedCard, sw


def test_select_apdu_bytes():
    apdu = APDU(cla=0x00, ins=0xA4, p1=0x04, p2=0x0C, data=KENHOJO_AP)
    assert apdu.to_bytes() == bytes.fromhex("00A4040C0AD3921000000100010408")


def test_le_256_encodes_as_zero():
    apdu = APDU(cla=0x00, ins=0xB0, p1=0x82, p2=0x00, le=256)
    assert apdu.to_bytes() == bytes.fromhex("00B0820000")


def test_extended_length_rejected():
    with pytest.raises(ValueError):
        APDU(cla=0x00, ins=0xD6, p1=0, p2=0, data=bytes(300)).to_bytes()


def test_response_splits_status_word():
    resp = Response.from_bytes(bytes.fromhex("0102036103"))
    assert resp.data == b"\x01\x02\x03"
    assert resp.sw == 0x6103
    assert resp.outcome == MoreData(available=3)
    assert not resp.success


@pytest.mark.parametrize("raw", [b"", b"\x90"])
def test_response_without_status_word(raw):
    with pytest.raises(ProtocolError):
        Response.from_bytes(raw)


def test_agent_sends_exact_bytes():
    card = ScriptedCard(sw("9000"))
    apdu = APDU(cla=0x00, ins=0x20, p1=0x00, p2=0x81, data=b"1234")
    resp = Agent(card).transmit(apdu)
    assert card.commands == [bytes.fromhex("0020008104") + b"1234"]
    assert resp.success


def test_agent_rejects_oversized_response():
    card = ScriptedCard(sw("9000", bytes(300)))
    apdu = APDU(cla=0x00, ins=0xA4, p1=0x04, p2=0x0C, data=KENHOJO_AP)
    with pytest.raises(ProtocolError):
        Agent(card).transmit(apdu)


def test_agent_short_response_is_protocol_error():
    card = ScriptedCard(b"\x90")
    with pytest.raises(ProtocolError):
        Agent(card).transmit(APDU(cla=0x00, ins=0xB0, p1=0x82, p2=0x00, le=256), 512)


def test_short_ef_offset_form():
    assert read_binary_params(200, sfi=0x02) == (0x82, 200)


def test_long_offset_form():
    p1, p2 = read_binary_params(300, sfi=0x02)
    assert p1 & 0x80 == 0
    assert (p1 << 8) | p2 == 300


def test_offset_out_of_range():
    with pytest.raises(ValueError):
        read_binary_params(0x8000, sfi=0x02)
