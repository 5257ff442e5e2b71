from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartcard.Exceptions import SmartcardException
from smartcard.scard import SCARD_SHARE_EXCLUSIVE, SCARD_SHARE_SHARED
from smartcard.System import readers

from readthecard.core.smartcard.errors import DeviceError
from readthecard.core.smartcard.observer import LoggingCardObserver

if TYPE_CHECKING:
    from smartcard.CardConnection import CardConnection

lg = logging.getLogger(__name__)


class Card:
    """Wrapper around pyscard for contact smartcard communication.

    Raw bytes in, raw bytes out: ``transmit`` returns the response with its
    trailing status word still attached. pyscard failures surface as
    DeviceError.
    """

    def __init__(self) -> None:
        self._connection: CardConnection | None = None
        self._observer = LoggingCardObserver()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    @staticmethod
    def list_readers() -> list[str]:
        try:
            return [str(r) for r in readers()]
        except SmartcardException as exc:
            raise DeviceError(f"smart card service unavailable: {exc}") from exc

    def connect(self, reader_name: str, exclusive: bool = False) -> None:
        try:
            available = {str(r): r for r in readers()}
        except SmartcardException as exc:
            raise DeviceError(f"smart card service unavailable: {exc}") from exc
        reader = available.get(reader_name)
        if reader is None:
            raise DeviceError(f"reader not found: {reader_name}")

        connection = reader.createConnection()
        connection.addObserver(self._observer)
        mode = SCARD_SHARE_EXCLUSIVE if exclusive else SCARD_SHARE_SHARED
        try:
            connection.connect(mode=mode)
        except SmartcardException as exc:
            connection.deleteObserver(self._observer)
            raise DeviceError(f"cannot connect to {reader_name}: {exc}") from exc
        self._connection = connection

    def disconnect(self) -> None:
        if self._connection is not None:
            try:
                self._connection.disconnect()
            except SmartcardException as exc:
                lg.warning("disconnect failed: %s", exc)
            finally:
                self._connection.deleteObserver(self._observer)
                self._connection = None

    def transmit(self, command: bytes) -> bytes:
        if self._connection is None:
            raise DeviceError("not connected to a card")
        try:
            data, sw1, sw2 = self._connection.transmit(list(command))
        except SmartcardException as exc:
            raise DeviceError(f"transmit failed: {exc}") from exc
        return bytes(data) + bytes([sw1, sw2])
