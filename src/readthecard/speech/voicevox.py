"""VOICEVOX Core bindings (C API, 0.14/0.15 compatible entry points).

The shared library is loaded by an explicitly constructed ``VoicevoxCore``
that owns it until ``close()``. Synthesised audio comes back in a buffer
allocated by the library; ``WavBuffer`` owns that buffer and hands it back
to ``voicevox_wav_free`` exactly once.
"""

from __future__ import annotations

import ctypes
import logging
import sys
from pathlib import Path

from readthecard.core.smartcard.errors import SpeechError

lg = logging.getLogger(__name__)

# ずんだもん (normal style)
ZUNDAMON = 3

DICT_DIR = "open_jtalk_dic_utf_8-1.11"


def library_name() -> str:
    if sys.platform == "win32":
        return "voicevox_core.dll"
    if sys.platform == "darwin":
        return "libvoicevox_core.dylib"
    return "libvoicevox_core.so"


class VoicevoxCore:
    """Loaded and initialised VOICEVOX Core with one speaker model."""

    def __init__(self, directory: str | Path, speaker_id: int = ZUNDAMON) -> None:
        directory = Path(directory)
        path = directory / library_name()
        if not path.exists():
            raise SpeechError(f"VOICEVOX Core not found: {path}")
        try:
            self._lib = ctypes.CDLL(str(path))
        except OSError as exc:
            raise SpeechError(f"cannot load {path}: {exc}") from exc
        self._bind()
        self.speaker_id = speaker_id
        self._initialized = False

        dict_path = str(directory / DICT_DIR).encode("utf-8")
        self._check(self._lib.voicevox_initialize(dict_path, False), "initialize")
        self._initialized = True
        try:
            self._check(self._lib.voicevox_load_model(speaker_id), "load model")
        except SpeechError:
            self.close()
            raise
        lg.info("VOICEVOX Core ready (speaker %d)", speaker_id)

    def _bind(self) -> None:
        lib = self._lib
        try:
            lib.voicevox_initialize.argtypes = [ctypes.c_char_p, ctypes.c_bool]
            lib.voicevox_initialize.restype = ctypes.c_int
            lib.voicevox_finalize.argtypes = []
            lib.voicevox_finalize.restype = None
            lib.voicevox_load_model.argtypes = [ctypes.c_uint]
            lib.voicevox_load_model.restype = ctypes.c_int
            lib.voicevox_tts.argtypes = [
                ctypes.c_char_p,
                ctypes.c_uint,
                ctypes.POINTER(ctypes.c_size_t),
                ctypes.POINTER(ctypes.POINTER(ctypes.c_uint8)),
            ]
            lib.voicevox_tts.restype = ctypes.c_int
            lib.voicevox_wav_free.argtypes = [ctypes.POINTER(ctypes.c_uint8)]
            lib.voicevox_wav_free.restype = None
            lib.voicevox_error_result_to_message.argtypes = [ctypes.c_int]
            lib.voicevox_error_result_to_message.restype = ctypes.c_char_p
        except AttributeError as exc:
            raise SpeechError(f"unsupported VOICEVOX Core build: {exc}") from exc

    def _check(self, code: int, what: str) -> None:
        if code != 0:
            message = self._lib.voicevox_error_result_to_message(code)
            text = message.decode("utf-8", errors="replace") if message else f"code {code}"
            raise SpeechError(f"VOICEVOX {what} failed: {text}")

    def synthesize(self, text: str) -> WavBuffer:
        """Synthesise ``text``; the caller must close the returned buffer."""
        if not self._initialized:
            raise SpeechError("VOICEVOX Core is closed")
        return WavBuffer(self, text)

    def close(self) -> None:
        if self._initialized:
            self._lib.voicevox_finalize()
            self._initialized = False
            lg.debug("VOICEVOX Core finalized")

    def __enter__(self) -> VoicevoxCore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class WavBuffer:
    """WAV bytes owned by VOICEVOX Core, released on close()."""

    def __init__(self, core: VoicevoxCore, text: str) -> None:
        self._lib = core._lib
        length = ctypes.c_size_t(0)
        ptr = ctypes.POINTER(ctypes.c_uint8)()
        code = self._lib.voicevox_tts(
            text.encode("utf-8"), core.speaker_id, ctypes.byref(length), ctypes.byref(ptr),
        )
        core._check(code, "tts")
        self._ptr: ctypes._Pointer | None = ptr
        self._length = length.value

    def tobytes(self) -> bytes:
        if self._ptr is None:
            raise SpeechError("WAV buffer already released")
        return ctypes.string_at(self._ptr, self._length)

    def close(self) -> None:
        if self._ptr is not None:
            self._lib.voicevox_wav_free(self._ptr)
            self._ptr = None

    def __enter__(self) -> WavBuffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
