from smartcard.Exceptions import CardConnectionException

from readthecard.core.smartcard import Card


class FailingConnection:
    def __init__(self) -> None:
        self.observers_removed = 0

    def disconnect(self) -> None:
        raise CardConnectionException("card removed")

    def deleteObserver(self, observer) -> None:
        self.observers_removed += 1


def test_disconnect_failure_is_not_raised():
    card = Card()
    connection = FailingConnection()
    card._connection = connection
    card.disconnect()
    assert not card.connected
    assert connection.observers_removed == 1
    card.disconnect()
