from __future__ import annotations

import logging

from readthecard.core.base import Agent, Terminal
from readthecard.core.base.terminal import handles
from readthecard.core.kenhojo.basicfour import decode
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
from readthecard.core.kenhojo.protocol import KenhojoProtocol
from readthecard.core.kenhojo.tags import EF_BASIC_FOUR, TAG_NAMES
from readthecard.core.smartcard.logging import TRACE
from readthecard.core.smartcard.tlv import iter_tlv

lg = logging.getLogger(__name__)


class KenhojoTerminal(Terminal):
    """Terminal for the card input-support applet.

    Handlers expect to be sent in order: select, verify, then reads.
    """

    def __init__(self, agent: Agent) -> None:
        super().__init__(agent)
        self._proto = KenhojoProtocol(agent.transmit)

    @handles(SelectApplicationMessage)
    def _select(self, message: SelectApplicationMessage) -> SelectApplicationResult:
        self._proto.select_application(message.aid)
        return SelectApplicationResult(aid=message.aid)

    @handles(VerifyPinMessage)
    def _verify_pin(self, message: VerifyPinMessage) -> VerifyPinResult:
        self._proto.verify_pin(message.pin)
        return VerifyPinResult(verified=True)

    @handles(ReadFileMessage)
    def _read_file(self, message: ReadFileMessage) -> ReadFileResult:
        data = self._proto.read_file(message.file_id)
        return ReadFileResult(file_id=message.file_id, data=data)

    @handles(ReadBasicFourMessage)
    def _read_basic_four(self, message: ReadBasicFourMessage) -> ReadBasicFourResult:
        raw = self._proto.read_file(EF_BASIC_FOUR)
        if lg.isEnabledFor(TRACE):
            for node in iter_tlv(raw):
                lg.log(TRACE, "TLV %s", node.format(TAG_NAMES))
        return ReadBasicFourResult(raw=raw, record=decode(raw, message.encoding))
