"""Map engine events to tones, announcements and toasts.

``cue_for`` is a pure function from an engine event to a ``Cue``.
``CueDirector`` subscribes to an engine and dispatches each cue to the
tone player and the speaker.  Playback failures are logged and dropped so
they can never stall the tick that produced them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import CuePlaybackUnavailable
from ..timer.engine import TimerEngine
from ..timer.state import (
    CountdownTick,
    Phase,
    PhaseEntered,
    PhaseTrigger,
    WorkoutFinished,
)


class TonePlayer(Protocol):
    def play(self, name: str) -> None: ...


class Announcer(Protocol):
    def say(self, text: str) -> None: ...


@dataclass(frozen=True)
class Cue:
    tone: str | None = None
    speech: str | None = None
    toast_title: str | None = None
    toast_description: str | None = None


def round_announcement(round_number: int, exercise: str | None) -> str:
    """Spoken text for the round being entered."""
    if exercise:
        return f"Round {round_number}, {exercise}"
    return f"Round {round_number}, work time"


def cue_for(event: object) -> Cue | None:
    """Return the cue for an engine event, or None for unknown events."""
    if isinstance(event, CountdownTick):
        return Cue(tone="countdown")

    if isinstance(event, WorkoutFinished):
        return Cue(
            tone="workout_complete",
            speech="Workout complete",
            toast_title="Workout Complete!",
            toast_description=f"You completed {event.total_rounds} rounds!",
        )

    if not isinstance(event, PhaseEntered):
        return None

    if event.trigger == PhaseTrigger.START:
        return Cue(speech=round_announcement(event.round, event.exercise))

    if event.phase == Phase.REST:
        return Cue(
            tone="work_complete",
            speech="Rest time",
            toast_title="Work Complete!",
            toast_description=f"Rest for {event.duration} seconds",
        )

    if event.exercise:
        detail = f"Round {event.round} - {event.exercise}"
    else:
        detail = f"Round {event.round} - Work for {event.duration} seconds"
    return Cue(
        tone="next_round",
        speech=round_announcement(event.round, event.exercise),
        toast_title="Next Round!",
        toast_description=detail,
    )


class CueDirector(QObject):
    """Subscribes to a ``TimerEngine`` and plays its cues.

    Signals
    -------
    toast(title: str, description: str)
        Re-emitted for whatever notification sink the host provides.
    """

    toast = pyqtSignal(str, str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        tones: TonePlayer | None = None,
        speaker: Announcer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._tones = tones
        self._speaker = speaker
        self._logger = logger or logging.getLogger("intervalquest.audio")

    def attach(self, engine: TimerEngine) -> None:
        """Subscribe to *engine*.  An unparented director is adopted by it."""
        if self.parent() is None:
            self.setParent(engine)
        engine.phase_entered.connect(self.handle)
        engine.countdown.connect(self.handle)
        engine.workout_finished.connect(self.handle)

    def detach(self, engine: TimerEngine) -> None:
        engine.phase_entered.disconnect(self.handle)
        engine.countdown.disconnect(self.handle)
        engine.workout_finished.disconnect(self.handle)
        if self.parent() is engine:
            self.setParent(None)

    def handle(self, event: object) -> None:
        cue = cue_for(event)
        if cue is None:
            return
        if cue.tone and self._tones is not None:
            self._dispatch("tone", self._tones.play, cue.tone)
        if cue.speech and self._speaker is not None:
            self._dispatch("speech", self._speaker.say, cue.speech)
        if cue.toast_title:
            self.toast.emit(cue.toast_title, cue.toast_description or "")

    def _dispatch(self, kind: str, fn: Callable[[str], None], arg: str) -> None:
        try:
            fn(arg)
        except CuePlaybackUnavailable as exc:
            self._logger.warning("Cue %s unavailable: %s", kind, exc)
        except Exception:
            self._logger.exception("Cue %s failed for %r", kind, arg)
