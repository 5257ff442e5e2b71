from readthecard.app.kenhojo.display import (
    format_birth_date,
    format_gender,
    format_record,
    read_aloud_text,
)
from readthecard.core.kenhojo import BasicFourRecord


def test_era_birth_date():
    assert format_birth_date("H01.01.01") == "平成1年1月1日"
    assert format_birth_date("S60.12.31") == "昭和60年12月31日"


def test_western_birth_date():
    assert format_birth_date("19800101") == "1980年1月1日"


def test_unrecognised_birth_date_kept():
    assert format_birth_date("1980/01/01") == "1980/01/01"
    assert format_birth_date("") == ""


def test_gender_labels():
    assert format_gender("1") == "男性"
    assert format_gender("2") == "女性"
    assert format_gender("9") == "適用不能"
    assert format_gender("x") == "x"


def test_format_record():
    record = BasicFourRecord(name="山田", address="東京都", birth_date="H01.01.01", gender="1")
    text = format_record(record)
    assert "山田" in text
    assert "平成1年1月1日" in text
    assert "男性" in text


def test_read_aloud_text():
    record = BasicFourRecord(name="山田", address="東京都", birth_date="H01.01.01", gender="9")
    assert read_aloud_text(record) == (
        "お名前は山田さんです。住所は東京都です。生年月日は平成1年1月1日です。性別は不明です。"
    )
