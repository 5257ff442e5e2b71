"""Speech feedback: one ``speak`` contract, implementations picked at startup."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from readthecard.core.smartcard.errors import SpeechError
from readthecard.speech.voicevox import VoicevoxCore

lg = logging.getLogger(__name__)

# Seconds an external synthesis or playback process may run.
COMMAND_TIMEOUT = 120


class Speaker(Protocol):
    """Speaks text. ``speak`` raises SpeechError on failure."""

    def speak(self, text: str) -> None: ...
    def close(self) -> None: ...


def _run(argv: list[str]) -> None:
    try:
        subprocess.run(argv, capture_output=True, check=True, timeout=COMMAND_TIMEOUT)
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        raise SpeechError(f"{argv[0]} failed: {exc}") from exc


def _ps_quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


class NullSpeaker:
    """Logs the text instead of speaking it."""

    def speak(self, text: str) -> None:
        lg.info("speech: %s", text)

    def close(self) -> None:
        pass


class CommandSpeaker:
    """Speaks through an external text-to-speech program."""

    def __init__(self, build: Callable[[str], list[str]]) -> None:
        self._build = build

    @classmethod
    def for_platform(cls) -> CommandSpeaker | None:
        """The platform's built-in synthesiser, or None if none is installed."""
        if sys.platform == "win32":
            if shutil.which("powershell") is None:
                return None
            return cls(lambda text: [
                "powershell", "-NoProfile", "-Command",
                "Add-Type -AssemblyName System.Speech; "
                "$synth = New-Object System.Speech.Synthesis.SpeechSynthesizer; "
                f"$synth.Speak({_ps_quote(text)})",
            ])
        if sys.platform == "darwin":
            if shutil.which("say") is None:
                return None
            return cls(lambda text: ["say", text])
        for program in ("espeak-ng", "espeak"):
            if shutil.which(program) is not None:
                return cls(lambda text, program=program: [program, "-v", "ja", text])
        return None

    def speak(self, text: str) -> None:
        _run(self._build(text))

    def close(self) -> None:
        pass


def player_command(path: Path) -> list[str] | None:
    """Command line that plays a WAV file synchronously, if one is available."""
    if sys.platform == "win32":
        return [
            "powershell", "-NoProfile", "-Command",
            f"$player = New-Object System.Media.SoundPlayer {_ps_quote(str(path))}; "
            "$player.PlaySync(); $player.Dispose()",
        ]
    if sys.platform == "darwin":
        return ["afplay", str(path)]
    for program in ("paplay", "aplay"):
        if shutil.which(program) is not None:
            return [program, str(path)]
    return None


class VoicevoxSpeaker:
    """VOICEVOX synthesis, falling back to ``fallback`` on any failure."""

    def __init__(
        self,
        core: VoicevoxCore,
        fallback: Speaker,
        player: Callable[[Path], list[str] | None] = player_command,
    ) -> None:
        self._core = core
        self._fallback = fallback
        self._player = player

    def speak(self, text: str) -> None:
        try:
            with self._core.synthesize(text) as wav:
                payload = wav.tobytes()
            self._play(payload)
        except SpeechError as exc:
            lg.warning("VOICEVOX failed, using fallback: %s", exc)
            self._fallback.speak(text)

    def _play(self, payload: bytes) -> None:
        fd, name = tempfile.mkstemp(prefix="readthecard_", suffix=".wav")
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            argv = self._player(path)
            if argv is None:
                raise SpeechError("no WAV player available")
            _run(argv)
        finally:
            path.unlink(missing_ok=True)

    def close(self) -> None:
        self._core.close()
        self._fallback.close()


def select_speaker(voicevox_dir: str | Path | None = None) -> Speaker:
    """Pick the best available speaker once, at startup."""
    fallback: Speaker = CommandSpeaker.for_platform() or NullSpeaker()
    if voicevox_dir is not None:
        try:
            core = VoicevoxCore(voicevox_dir)
        except SpeechError as exc:
            lg.warning("VOICEVOX unavailable: %s", exc)
        else:
            return VoicevoxSpeaker(core, fallback)
    lg.debug("using %s", type(fallback).__name__)
    return fallback


def announce(speaker: Speaker, text: str) -> bool:
    """Speak ``text``, reporting but never raising failures."""
    try:
        speaker.speak(text)
    except SpeechError as exc:
        lg.warning("speech failed: %s", exc)
        return False
    except Exception:
        lg.warning("speech failed", exc_info=True)
        return False
    return True
