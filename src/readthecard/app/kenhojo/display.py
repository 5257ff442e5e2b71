"""Human-readable Basic Four formatting."""

from __future__ import annotations

import re

from readthecard.core.kenhojo.basicfour import BasicFourRecord

# --- Lookup tables ---

_GENDERS: dict[str, str] = {
    "1": "男性",
    "2": "女性",
    "9": "適用不能",
}

_ERAS: dict[str, str] = {
    "M": "明治",
    "T": "大正",
    "S": "昭和",
    "H": "平成",
    "R": "令和",
}

_ERA_DATE = re.compile(r"^([MTSHR])(\d{2})\.(\d{2})\.(\d{2})$")
_WESTERN_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def format_birth_date(value: str) -> str:
    """Render H01.01.01 or 19890101 style dates; anything else verbatim."""
    match = _ERA_DATE.match(value)
    if match:
        era, year, month, day = match.groups()
        return f"{_ERAS[era]}{int(year)}年{int(month)}月{int(day)}日"
    match = _WESTERN_DATE.match(value)
    if match:
        year, month, day = match.groups()
        return f"{int(year)}年{int(month)}月{int(day)}日"
    return value


def format_gender(value: str) -> str:
    return _GENDERS.get(value, value)


def format_record(record: BasicFourRecord) -> str:
    """Format a record as an aligned block for terminal output."""
    rows = [
        ("Name", record.name),
        ("Address", record.address),
        ("Birth date", format_birth_date(record.birth_date)),
        ("Gender", format_gender(record.gender)),
    ]
    return "\n".join(f"  {label:12s} {value}" for label, value in rows)


def read_aloud_text(record: BasicFourRecord) -> str:
    """Sentence spoken after a successful read."""
    gender = _GENDERS[record.gender] if record.gender in ("1", "2") else "不明"
    return (
        f"お名前は{record.name}さんです。"
        f"住所は{record.address}です。"
        f"生年月日は{format_birth_date(record.birth_date)}です。"
        f"性別は{gender}です。"
    )
