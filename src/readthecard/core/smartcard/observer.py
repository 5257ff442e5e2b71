from __future__ import annotations

import logging

from smartcard.CardConnectionObserver import CardConnectionObserver

from readthecard.core.smartcard.logging import PROTOCOL, TRACE, format_sw, log_hex, mask_command

lg = logging.getLogger(__name__)


class LoggingCardObserver(CardConnectionObserver):
    """CardConnectionObserver that logs APDU traffic via Python logging."""

    def update(self, observable, event):
        if event.type == "connect":
            lg.log(PROTOCOL, "connect")

        elif event.type == "reconnect":
            lg.log(PROTOCOL, "reconnect")

        elif event.type == "disconnect":
            lg.log(PROTOCOL, "disconnect")

        elif event.type == "command":
            log_hex(lg, ">> ", mask_command(bytes(event.args[0])))

        elif event.type == "response":
            data, sw1, sw2 = event.args[0], event.args[1], event.args[2]
            if data:
                log_hex(lg, "<< ", bytes(data))
            lg.log(TRACE, "<< %s", format_sw(sw1, sw2))
