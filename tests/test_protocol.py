import pytest

from readthecard.core.kenhojo.tags import EF_BASIC_FOUR
from readthecard.core.smartcard.errors import (
    AuthError,
    ProtocolError,
    SelectionError,
    ValidationError,
)

from conftest import sw


# --- SELECT ---


def test_select_application(scripted):
    card, proto = scripted(sw("9000"))
    proto.select_application()
    assert card.commands == [bytes.fromhex("00A4040C0AD3921000000100010408")]


def test_select_failure(scripted):
    card, proto = scripted(sw("6A82"))
    with pytest.raises(SelectionError) as exc:
        proto.select_application()
    assert exc.value.sw == 0x6A82


# --- VERIFY ---


def test_verify_pin(scripted):
    card, proto = scripted(sw("9000"))
    proto.verify_pin("1234")
    assert card.commands == [bytes.fromhex("002000810431323334")]


@pytest.mark.parametrize("pin", ["12a4", "123", "12345", "", "１２３４", " 123"])
def test_malformed_pin_rejected_before_io(scripted, pin):
    card, proto = scripted()
    with pytest.raises(ValidationError):
        proto.verify_pin(pin)
    assert card.commands == []


def test_wrong_pin_reports_attempts(scripted):
    card, proto = scripted(sw("63C2"))
    with pytest.raises(AuthError) as exc:
        proto.verify_pin("0000")
    assert exc.value.remaining == 2
    assert not exc.value.locked
    assert len(card.commands) == 1


def test_locked_pin(scripted):
    card, proto = scripted(sw("6984"))
    with pytest.raises(AuthError) as exc:
        proto.verify_pin("1234")
    assert exc.value.locked
    assert len(card.commands) == 1


@pytest.mark.parametrize("status", ["6A88", "6105", "6C04"])
def test_verify_unexpected_status(scripted, status):
    card, proto = scripted(sw(status))
    with pytest.raises(ProtocolError) as exc:
        proto.verify_pin("1234")
    assert exc.value.sw == int(status, 16)


# --- READ BINARY ---


def test_read_single_window(scripted):
    card, proto = scripted(sw("9000", b"hello"))
    assert proto.read_file(EF_BASIC_FOUR) == b"hello"
    assert card.commands == [bytes.fromhex("00B0820000")]


def test_read_chains_more_data(scripted):
    card, proto = scripted(sw("6105", b"0123456789"), sw("9000", b"abcde"))
    assert proto.read_file(EF_BASIC_FOUR) == b"0123456789abcde"
    assert card.commands == [bytes.fromhex("00B0820000"), bytes.fromhex("00B0820A00")]


def test_read_short_form_offset_200(scripted):
    card, proto = scripted(sw("6100", bytes(200)), sw("9000", b"x"))
    proto.read_file(EF_BASIC_FOUR)
    assert card.commands[1][2:4] == bytes([0x82, 200])


def test_read_long_form_offset_300(scripted):
    card, proto = scripted(sw("6100", bytes(300)), sw("9000", b"x"))
    assert len(proto.read_file(EF_BASIC_FOUR)) == 301
    p1, p2 = card.commands[1][2], card.commands[1][3]
    assert p1 & 0x80 == 0
    assert (p1 << 8) | p2 == 300


def test_read_wrong_length_retries_once(scripted):
    card, proto = scripted(sw("6C04"), sw("9000", b"abcd"))
    assert proto.read_file(EF_BASIC_FOUR) == b"abcd"
    assert card.commands == [bytes.fromhex("00B0820000"), bytes.fromhex("00B0820004")]


def test_read_wrong_length_stops_after_retry(scripted):
    card, proto = scripted(sw("6C04"), sw("6104", b"abcd"))
    assert proto.read_file(EF_BASIC_FOUR) == b"abcd"
    assert len(card.commands) == 2


def test_read_wrong_length_retry_error(scripted):
    card, proto = scripted(sw("6C04"), sw("6A82"))
    with pytest.raises(ProtocolError):
        proto.read_file(EF_BASIC_FOUR)


def test_read_aborts_without_progress(scripted):
    card, proto = scripted(sw("6100"), sw("6100"))
    with pytest.raises(ProtocolError):
        proto.read_file(EF_BASIC_FOUR)
    assert len(card.commands) == 2


def test_single_empty_more_data_is_tolerated(scripted):
    card, proto = scripted(sw("6100"), sw("6102", b"ab"), sw("6100"), sw("9000", b"cd"))
    assert proto.read_file(EF_BASIC_FOUR) == b"abcd"


def test_read_security_status_not_satisfied(scripted):
    card, proto = scripted(sw("6982"))
    with pytest.raises(ProtocolError) as exc:
        proto.read_file(EF_BASIC_FOUR)
    assert exc.value.sw == 0x6982


@pytest.mark.parametrize(
    "status, locked, remaining", [("6984", True, None), ("63C1", False, 1)],
)
def test_read_pin_outcomes_abort(scripted, status, locked, remaining):
    card, proto = scripted(sw(status))
    with pytest.raises(AuthError) as exc:
        proto.read_file(EF_BASIC_FOUR)
    assert exc.value.locked is locked
    assert exc.value.remaining == remaining


def test_read_offset_beyond_range(scripted):
    responses = [sw("6100", bytes(256))] * 128
    card, proto = scripted(*responses)
    with pytest.raises(ProtocolError):
        proto.read_file(EF_BASIC_FOUR)
    assert len(card.commands) == 128
