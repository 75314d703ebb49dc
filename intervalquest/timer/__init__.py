"""Timer package."""

from .config import (
    ExerciseList,
    TimerConfiguration,
    DEFAULT_WORK_SECONDS,
    DEFAULT_REST_SECONDS,
    DEFAULT_ROUNDS,
)
from .engine import TimerEngine, COUNTDOWN_SECONDS
from .progress import overall_progress, phase_progress
from .scheduler import QtScheduler, Scheduler, TICK_INTERVAL_MS
from .phases import Phase, PhaseTrigger, RunState
from .state import (
    CommandResult,
    CountdownTick,
    PhaseEntered,
    TimerSnapshot,
    WorkoutFinished,
)

__all__ = [
    "TimerEngine",
    "TimerConfiguration",
    "ExerciseList",
    "TimerSnapshot",
    "CommandResult",
    "RunState",
    "Phase",
    "PhaseTrigger",
    "PhaseEntered",
    "CountdownTick",
    "WorkoutFinished",
    "Scheduler",
    "QtScheduler",
    "phase_progress",
    "overall_progress",
    "COUNTDOWN_SECONDS",
    "TICK_INTERVAL_MS",
    "DEFAULT_WORK_SECONDS",
    "DEFAULT_REST_SECONDS",
    "DEFAULT_ROUNDS",
]
