from readthecard.core.base.agent import CONTROL_BUFFER, DATA_BUFFER, Agent, CardChannel
from readthecard.core.base.iso7816 import ISO7816
from readthecard.core.base.message import Message, Result
from readthecard.core.base.terminal import Terminal

__all__ = [
    "Agent",
    "CONTROL_BUFFER",
    "CardChannel",
    "DATA_BUFFER",
    "ISO7816",
    "Message",
    "Result",
    "Terminal",
]
