"""Spoken announcements through ``QTextToSpeech``.

The Qt speech module is optional at runtime: some Linux installs ship
PyQt6 without a speech plugin.  A missing backend raises
``CuePlaybackUnavailable`` from ``say()``; the cue director logs it and
carries on.
"""

from __future__ import annotations

import logging
from typing import Protocol

from PyQt6.QtCore import QObject

from ..errors import CuePlaybackUnavailable


NORMAL_RATE = 1.0
DEFAULT_RATE = 1.2  # slightly brisk so announcements fit inside short rests


class SpeechBackend(Protocol):
    def say(self, text: str) -> None: ...
    def setRate(self, rate: float) -> None: ...


def qt_rate(rate: float) -> float:
    """Map a 1.0-is-normal speaking rate onto Qt's -1.0..1.0 scale."""
    return max(-1.0, min(1.0, rate - NORMAL_RATE))


def _create_qt_backend(parent: QObject | None) -> SpeechBackend:
    try:
        from PyQt6.QtTextToSpeech import QTextToSpeech
    except ImportError as exc:
        raise CuePlaybackUnavailable("QtTextToSpeech is not installed") from exc
    return QTextToSpeech(parent)


class Speaker(QObject):
    """Fire-and-forget text-to-speech.

    The backend is created lazily on the first announcement so that
    constructing a ``Speaker`` never touches the platform speech engine.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        backend: SpeechBackend | None = None,
        rate: float = DEFAULT_RATE,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._backend = backend
        self._enabled = True
        self._rate = rate
        self._logger = logger or logging.getLogger("intervalquest.audio")
        if self._backend is not None:
            self._backend.setRate(qt_rate(rate))

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    @property
    def rate(self) -> float:
        return self._rate

    def set_rate(self, rate: float) -> None:
        self._rate = rate
        if self._backend is not None:
            self._backend.setRate(qt_rate(rate))

    def say(self, text: str) -> None:
        """Speak *text*.  No-op when disabled or *text* is blank."""
        if not self._enabled or not text.strip():
            return
        if self._backend is None:
            self._backend = _create_qt_backend(self)
            self._backend.setRate(qt_rate(self._rate))
        self._logger.debug("Speaking: %s", text)
        self._backend.say(text)
