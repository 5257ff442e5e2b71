from readthecard.core.kenhojo.basicfour import BasicFourRecord, decode
from readthecard.core.kenhojo.messages import (
    ReadBasicFourMessage,
    ReadBasicFourResult,
    ReadFileMessage,
    ReadFileResult,
    SelectApplicationMessage,
    SelectApplicationResult,
    VerifyPinMessage,
    VerifyPinResult,
)
from readthecard.core.kenhojo.protocol import KenhojoProtocol, validate_pin
from readthecard.core.kenhojo.terminal import KenhojoTerminal

__all__ = [
    "BasicFourRecord",
    "KenhojoProtocol",
    "KenhojoTerminal",
    "ReadBasicFourMessage",
    "ReadBasicFourResult",
    "ReadFileMessage",
    "ReadFileResult",
    "SelectApplicationMessage",
    "SelectApplicationResult",
    "VerifyPinMessage",
    "VerifyPinResult",
    "decode",
    "validate_pin",
]
