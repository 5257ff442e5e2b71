from readthecard.speech.speaker import (
    CommandSpeaker,
    NullSpeaker,
    Speaker,
    VoicevoxSpeaker,
    announce,
    select_speaker,
)
from readthecard.speech.voicevox import VoicevoxCore, WavBuffer

__all__ = [
    "CommandSpeaker",
    "NullSpeaker",
    "Speaker",
    "VoicevoxCore",
    "VoicevoxSpeaker",
    "WavBuffer",
    "announce",
    "select_speaker",
]
