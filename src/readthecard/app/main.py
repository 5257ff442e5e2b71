# filename : main.py


import logging

from readthecard.app.kenhojo import list_readers, read_identity_record
from readthecard.core.base import CardChannel
from readthecard.core.kenhojo import BasicFourRecord
from readthecard.core.kenhojo.mock import MockCard
from readthecard.core.smartcard import Card
from readthecard.speech import select_speaker

lg = logging.getLogger(__name__)


def _card(mock: bool) -> CardChannel:
    return MockCard() if mock else Card()


def readers(mock: bool = False) -> list[str]:
    return list_readers(_card(mock))


def main(
    pin: str,
    reader: str | None = None,
    exclusive: bool = False,
    encoding: str = "utf-8",
    speak: bool = True,
    voicevox_dir: str | None = None,
    mock: bool = False,
) -> BasicFourRecord:
    lg.debug("readthecard v1")
    speaker = select_speaker(voicevox_dir) if speak else None
    try:
        return read_identity_record(
            pin,
            card=_card(mock),
            reader=reader,
            exclusive=exclusive,
            encoding=encoding,
            speaker=speaker,
        )
    finally:
        if speaker is not None:
            speaker.close()
