"""Card input-support applet (券面事項入力補助AP) identifiers and TLV tags."""

# Applet identifier
KENHOJO_AP = bytes.fromhex("D3921000000100010408")

# Short EF identifiers inside the applet
EF_PIN = 0x01
EF_BASIC_FOUR = 0x02

# Basic Four TLV tags
NAME = 0xDF21
ADDRESS = 0xDF22
BIRTH_DATE = 0xDF23
GENDER = 0xDF24

TAG_NAMES: dict[int, str] = {
    NAME: "Name",
    ADDRESS: "Address",
    BIRTH_DATE: "Birth Date",
    GENDER: "Gender",
}
