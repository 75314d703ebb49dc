"""Snapshots, command results and event payloads shared by the engine and
its subscribers.

Event payloads are frozen dataclasses emitted through ``pyqtSignal(object)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import IllegalTransition
from .config import TimerConfiguration
from .phases import Phase, PhaseTrigger, RunState
from .progress import overall_progress, phase_progress


# ── command reasons ───────────────────────────────────────────────────────

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_UPDATE_CONFIGURATION = "update_configuration"
COMMAND_SET_EXERCISES = "set_exercises"

REASON_STARTED = "started"
REASON_RESUMED = "resumed"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_UPDATED = "updated"
REASON_ALREADY_RUNNING = "already_running"
REASON_FINISHED = "finished"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_IDLE = "not_idle"


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only projection of the engine's live session."""

    run_state: RunState
    phase: Phase
    current_round: int
    time_remaining: int
    current_exercise_index: int
    configuration: TimerConfiguration
    exercises: tuple[str, ...] = ()

    @property
    def rounds(self) -> int:
        return self.configuration.rounds

    @property
    def phase_duration(self) -> int:
        if self.phase == Phase.WORK:
            return self.configuration.work_duration
        return self.configuration.rest_duration

    @property
    def current_exercise(self) -> str | None:
        if not self.exercises:
            return None
        return self.exercises[self.current_exercise_index % len(self.exercises)]

    @property
    def phase_progress(self) -> float:
        return phase_progress(self.time_remaining, self.phase_duration)

    @property
    def overall_progress(self) -> float:
        return overall_progress(
            self.phase, self.current_round, self.rounds, self.phase_progress
        )

    @property
    def is_idle(self) -> bool:
        return self.run_state == RunState.IDLE

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an engine command.  Rejections carry a reason code."""

    command: str
    accepted: bool
    reason: str
    snapshot: TimerSnapshot

    def unwrap(self) -> TimerSnapshot:
        """Return the snapshot, or raise ``IllegalTransition`` if rejected."""
        if not self.accepted:
            raise IllegalTransition(f"{self.command}: {self.reason}")
        return self.snapshot


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PhaseEntered:
    phase: Phase
    round: int
    total_rounds: int
    duration: int
    trigger: PhaseTrigger
    exercise: str | None = None


@dataclass(frozen=True)
class CountdownTick:
    seconds_left: int
    phase: Phase


@dataclass(frozen=True)
class WorkoutFinished:
    total_rounds: int
