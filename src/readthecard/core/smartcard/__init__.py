from readthecard.core.smartcard.card import Card
from readthecard.core.smartcard.logging import PROTOCOL, TRACE
from readthecard.core.smartcard.types import APDU, Response

__all__ = ["APDU", "Card", "PROTOCOL", "Response", "TRACE"]
