"""Error taxonomy for card reads.

Every error is terminal for the current attempt. Nothing in the engine
retries on its own; callers inspect the attributes (status word, attempts
left) to decide what to tell the user.
"""

from __future__ import annotations


class CardError(Exception):
    """Base class for all errors raised while reading a card."""


class ValidationError(CardError):
    """Caller input rejected before any command reached the card."""


class DeviceError(CardError):
    """Card service unavailable, reader absent or busy, transport failure."""


class ProtocolError(CardError):
    """Malformed response, unexpected status word or a stalled read chain."""

    def __init__(self, message: str, sw: int | None = None) -> None:
        self.sw = sw
        if sw is not None:
            message = f"{message} (SW={sw:04X})"
        super().__init__(message)


class SelectionError(CardError):
    """The target applet could not be selected."""

    def __init__(self, sw: int) -> None:
        self.sw = sw
        super().__init__(f"application select failed (SW={sw:04X})")


class AuthError(CardError):
    """PIN rejected (``remaining`` attempts left) or PIN blocked (``locked``)."""

    def __init__(self, remaining: int | None = None, locked: bool = False) -> None:
        self.remaining = remaining
        self.locked = locked
        if locked:
            message = "PIN is locked; reset it at a municipal office"
        else:
            message = f"PIN rejected, {remaining} attempt(s) remaining"
        super().__init__(message)


class SpeechError(Exception):
    """Speech synthesis or playback failed."""
