"""Card input-support applet session: select, verify, read, decode.

Constructs the stack (Card -> Agent -> Terminal), runs one identity read
and disconnects on every exit path. The engine holds no cross-call lock;
ReaderService is the caller-side serialiser for applications that may
start reads from more than one thread.
"""

from __future__ import annotations

import codecs
import logging
import threading
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager

from readthecard.app.kenhojo.display import read_aloud_text
from readthecard.core.base import Agent, CardChannel
from readthecard.core.kenhojo import (
    BasicFourRecord,
    KenhojoTerminal,
    ReadBasicFourMessage,
    SelectApplicationMessage,
    VerifyPinMessage,
    validate_pin,
)
from readthecard.core.smartcard import Card
from readthecard.core.smartcard.errors import CardError, ValidationError
from readthecard.speech import Speaker, announce

lg = logging.getLogger(__name__)


def list_readers(card: CardChannel | None = None) -> list[str]:
    """Names of the readers known to the card service."""
    card = card if card is not None else Card()
    return card.list_readers()


@contextmanager
def open_session(
    card: CardChannel,
    reader: str | None = None,
    exclusive: bool = False,
) -> Iterator[KenhojoTerminal]:
    """Connect to ``reader`` (first available if None) for the block's duration."""
    agent = Agent(card)
    agent.connect(reader, exclusive=exclusive)
    try:
        yield KenhojoTerminal(agent)
    finally:
        agent.disconnect()


def check_encoding(encoding: str) -> str:
    """Canonical name of a bytes-to-str codec; ValidationError otherwise."""
    try:
        name = codecs.lookup(encoding).name
        # rejects bytes-to-bytes codecs such as hex and base64
        b"".decode(name)
    except LookupError as exc:
        raise ValidationError(f"unknown text encoding: {encoding}") from exc
    return name


def read_identity_record(
    pin: str,
    *,
    card: CardChannel | None = None,
    reader: str | None = None,
    exclusive: bool = False,
    encoding: str = "utf-8",
    speaker: Speaker | None = None,
) -> BasicFourRecord:
    """Read the Basic Four record, authenticating with ``pin``.

    Raises a CardError subclass on failure; PIN and encoding problems are
    reported before the reader is touched. When ``speaker`` is given the
    record is read aloud afterwards; speech failures are logged only.
    """
    validate_pin(pin)
    encoding = check_encoding(encoding)
    card = card if card is not None else Card()

    with open_session(card, reader, exclusive) as terminal:
        try:
            terminal.send(SelectApplicationMessage())
            terminal.send(VerifyPinMessage(pin=pin))
            result = terminal.send(ReadBasicFourMessage(encoding=encoding))
        except CardError as exc:
            terminal.on_error(exc)
            raise

    lg.info("read Basic Four (%d bytes)", len(result.raw))
    if speaker is not None:
        announce(speaker, read_aloud_text(result.record))
    return result.record


class ReaderService:
    """Runs identity reads against one reader, one at a time.

    Owns a lock spanning the whole select/verify/read sequence, a worker
    thread so callers need not block, and the speaker, which is closed
    with the service. Speech runs on its own thread and never delays or
    alters a read.
    """

    def __init__(
        self,
        card: CardChannel | None = None,
        reader: str | None = None,
        *,
        exclusive: bool = False,
        encoding: str = "utf-8",
        speaker: Speaker | None = None,
    ) -> None:
        self._card = card if card is not None else Card()
        self._reader = reader
        self._exclusive = exclusive
        self._encoding = check_encoding(encoding)
        self._speaker = speaker
        self._lock = threading.Lock()
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="card")
        self._speech = ThreadPoolExecutor(max_workers=1, thread_name_prefix="speech")

    def list_readers(self) -> list[str]:
        return self._card.list_readers()

    def read_identity_record(self, pin: str, speak: bool = True) -> BasicFourRecord:
        """Blocking read; concurrent callers queue on the service lock."""
        with self._lock:
            record = read_identity_record(
                pin,
                card=self._card,
                reader=self._reader,
                exclusive=self._exclusive,
                encoding=self._encoding,
            )
        if speak and self._speaker is not None:
            self._speech.submit(announce, self._speaker, read_aloud_text(record))
        return record

    def submit(self, pin: str, speak: bool = True) -> Future[BasicFourRecord]:
        """Queue a read on the worker thread. Use ``result(timeout=...)`` for a deadline."""
        return self._worker.submit(self.read_identity_record, pin, speak)

    def close(self) -> None:
        self._worker.shutdown(wait=True)
        self._speech.shutdown(wait=True)
        if self._speaker is not None:
            self._speaker.close()

    def __enter__(self) -> ReaderService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
