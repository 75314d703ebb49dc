"""Interval timer state machine for IntervalQuest.

Run states
----------
IDLE       Not counting down — initial, after reset, or after the workout.
RUNNING    Counting down the current phase.
PAUSED     Frozen mid-phase; remaining time, round and exercise are kept.

Phases
------
WORK → REST → WORK (next round) → ... → REST (last round) → FINISHED

Transitions
-----------
IDLE → RUNNING                  (start; announces the round)
PAUSED → RUNNING                (start)
RUNNING → PAUSED                (pause)
RUNNING → IDLE + FINISHED       (last rest reaches 0)
Any → IDLE + WORK round 1       (reset)

The engine never owns a clock.  A scheduler delivers ``tick()`` once per
second while running; pausing or resetting cancels the scheduled handle
and bumps a generation counter so a late callback from a cancelled handle
is dropped instead of applied to stale state.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from .config import ExerciseList, TimerConfiguration
from .scheduler import TICK_INTERVAL_MS, QtScheduler, ScheduledHandle, Scheduler
from .state import (
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SET_EXERCISES,
    COMMAND_START,
    COMMAND_UPDATE_CONFIGURATION,
    REASON_ALREADY_RUNNING,
    REASON_FINISHED,
    REASON_NOT_IDLE,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_RESUMED,
    REASON_STARTED,
    REASON_UPDATED,
    CommandResult,
    CountdownTick,
    Phase,
    PhaseEntered,
    PhaseTrigger,
    RunState,
    TimerSnapshot,
    WorkoutFinished,
)


# ── constants ─────────────────────────────────────────────────────────────

COUNTDOWN_SECONDS = 3  # countdown cue on the last 3 seconds of a phase


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Work/rest interval timer with round counting and exercise cycling.

    Signals
    -------
    ticked(remaining_seconds: int)
        Emitted on every accepted tick, after the decrement.
    state_changed(snapshot: TimerSnapshot)
        Emitted after every command or transition that changes state.
    phase_entered(event: PhaseEntered)
        Emitted when work starts from idle, when rest begins, and when
        the next round's work begins.
    round_advanced(round: int)
        Emitted on REST → WORK with the round being entered.
    countdown(event: CountdownTick)
        Emitted when 3, 2 or 1 seconds are left in a phase.
    workout_finished(event: WorkoutFinished)
        Emitted once when the last round's rest runs out.
    """

    ticked = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_entered = pyqtSignal(object)
    round_advanced = pyqtSignal(int)
    countdown = pyqtSignal(object)
    workout_finished = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        configuration: TimerConfiguration | None = None,
        exercises: Iterable[str] = (),
        scheduler: Scheduler | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._config: TimerConfiguration = configuration or TimerConfiguration()
        self._exercises: ExerciseList = ExerciseList(exercises)
        self._logger = logger or logging.getLogger("intervalquest.timer")

        # ── session state ─────────────────────────────────────────────
        self._run_state: RunState = RunState.IDLE
        self._phase: Phase = Phase.WORK
        self._round: int = 1
        self._remaining: int = self._config.work_duration
        self._exercise_index: int = 0

        # ── scheduling ────────────────────────────────────────────────
        self._scheduler: Scheduler = scheduler or QtScheduler(self)
        self._handle: ScheduledHandle | None = None
        self._generation: int = 0
        self._in_tick: bool = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_round(self) -> int:
        return self._round

    @property
    def time_remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining

    @property
    def current_exercise_index(self) -> int:
        return self._exercise_index

    @property
    def current_exercise(self) -> str | None:
        return self._exercises.name_at(self._exercise_index)

    @property
    def configuration(self) -> TimerConfiguration:
        return self._config

    @property
    def exercises(self) -> tuple[str, ...]:
        return self._exercises.as_tuple()

    @property
    def is_idle(self) -> bool:
        return self._run_state == RunState.IDLE

    @property
    def is_running(self) -> bool:
        return self._run_state == RunState.RUNNING

    @property
    def is_scheduled(self) -> bool:
        """True while a scheduler handle is armed."""
        return self._handle is not None

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            run_state=self._run_state,
            phase=self._phase,
            current_round=self._round,
            time_remaining=self._remaining,
            current_exercise_index=self._exercise_index,
            configuration=self._config,
            exercises=self._exercises.as_tuple(),
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> CommandResult:
        """Start from IDLE or resume from PAUSED."""
        if self._run_state == RunState.RUNNING:
            return self._result(COMMAND_START, False, REASON_ALREADY_RUNNING)
        if self._phase == Phase.FINISHED:
            return self._result(COMMAND_START, False, REASON_FINISHED)

        from_idle = self._run_state == RunState.IDLE
        self._run_state = RunState.RUNNING
        self._arm()
        self.state_changed.emit(self.snapshot())

        if from_idle:
            self._logger.info(
                "Workout started: round=%s/%s work=%ss rest=%ss",
                self._round,
                self._config.rounds,
                self._config.work_duration,
                self._config.rest_duration,
            )
            if self._phase == Phase.WORK:
                self.phase_entered.emit(self._phase_event(PhaseTrigger.START))
            return self._result(COMMAND_START, True, REASON_STARTED)

        self._logger.info(
            "Workout resumed: phase=%s remaining=%ss",
            self._phase.value,
            self._remaining,
        )
        return self._result(COMMAND_START, True, REASON_RESUMED)

    def pause(self) -> CommandResult:
        """Freeze the countdown.  Only valid while RUNNING."""
        if self._run_state != RunState.RUNNING:
            return self._result(COMMAND_PAUSE, False, REASON_NOT_RUNNING)
        self._disarm()
        self._run_state = RunState.PAUSED
        self._logger.info(
            "Workout paused: phase=%s round=%s remaining=%ss",
            self._phase.value,
            self._round,
            self._remaining,
        )
        self.state_changed.emit(self.snapshot())
        return self._result(COMMAND_PAUSE, True, REASON_PAUSED)

    def reset(self) -> CommandResult:
        """Discard the session and return to IDLE, round 1, work."""
        self._disarm()
        self._restore_initial()
        self._logger.info("Workout reset")
        self.state_changed.emit(self.snapshot())
        return self._result(COMMAND_RESET, True, REASON_RESET)

    def update_configuration(self, configuration: TimerConfiguration) -> CommandResult:
        """Replace the configuration.  Only valid while IDLE."""
        if self._run_state != RunState.IDLE:
            self._logger.warning(
                "Configuration change rejected while %s", self._run_state.value
            )
            return self._result(COMMAND_UPDATE_CONFIGURATION, False, REASON_NOT_IDLE)
        self._config = configuration
        self._restore_initial()
        self.state_changed.emit(self.snapshot())
        return self._result(COMMAND_UPDATE_CONFIGURATION, True, REASON_UPDATED)

    def set_exercises(self, exercises: Iterable[str]) -> CommandResult:
        """Replace the exercise list.  Only valid while IDLE."""
        if self._run_state != RunState.IDLE:
            self._logger.warning(
                "Exercise change rejected while %s", self._run_state.value
            )
            return self._result(COMMAND_SET_EXERCISES, False, REASON_NOT_IDLE)
        self._exercises = ExerciseList(exercises)
        self._exercise_index = 0
        self.state_changed.emit(self.snapshot())
        return self._result(COMMAND_SET_EXERCISES, True, REASON_UPDATED)

    # ══════════════════════════════════════════════════════════════════
    #  TICK
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> bool:
        """Advance one second.  Returns False when the tick was ignored."""
        if self._run_state != RunState.RUNNING or self._phase == Phase.FINISHED:
            return False
        if self._in_tick:
            self._logger.debug("Dropping overlapping tick")
            return False

        self._in_tick = True
        generation = self._generation
        try:
            self._remaining = max(0, self._remaining - 1)
            self.ticked.emit(self._remaining)

            if 0 < self._remaining <= COUNTDOWN_SECONDS:
                self.countdown.emit(CountdownTick(self._remaining, self._phase))

            # A subscriber may have paused or reset during the emits above.
            if self._remaining == 0 and generation == self._generation:
                self._transition()
        finally:
            self._in_tick = False
        return True

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — transitions
    # ══════════════════════════════════════════════════════════════════

    def _transition(self) -> None:
        if self._phase == Phase.WORK:
            self._phase = Phase.REST
            self._remaining = self._config.rest_duration
            self._logger.info(
                "Work complete: round=%s rest=%ss", self._round, self._remaining
            )
            self.state_changed.emit(self.snapshot())
            self.phase_entered.emit(self._phase_event(PhaseTrigger.WORK_COMPLETE))
            return

        if self._phase != Phase.REST:
            return

        if self._round < self._config.rounds:
            self._round += 1
            self._phase = Phase.WORK
            self._remaining = self._config.work_duration
            self._exercise_index = self._exercises.next_index(self._exercise_index)
            self._logger.info(
                "Next round: round=%s/%s exercise=%s",
                self._round,
                self._config.rounds,
                self.current_exercise,
            )
            self.state_changed.emit(self.snapshot())
            self.round_advanced.emit(self._round)
            self.phase_entered.emit(self._phase_event(PhaseTrigger.NEXT_ROUND))
            return

        self._disarm()
        self._phase = Phase.FINISHED
        self._run_state = RunState.IDLE
        self._remaining = 0
        self._logger.info("Workout complete: rounds=%s", self._config.rounds)
        self.state_changed.emit(self.snapshot())
        self.workout_finished.emit(WorkoutFinished(self._config.rounds))

    def _phase_event(self, trigger: PhaseTrigger) -> PhaseEntered:
        return PhaseEntered(
            phase=self._phase,
            round=self._round,
            total_rounds=self._config.rounds,
            duration=self._remaining,
            trigger=trigger,
            exercise=self.current_exercise if self._phase == Phase.WORK else None,
        )

    def _restore_initial(self) -> None:
        self._run_state = RunState.IDLE
        self._phase = Phase.WORK
        self._round = 1
        self._exercise_index = 0
        self._remaining = self._config.work_duration

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — scheduling
    # ══════════════════════════════════════════════════════════════════

    def _arm(self) -> None:
        self._disarm()
        self._handle = self._scheduler.schedule(
            functools.partial(self._on_scheduled, self._generation),
            TICK_INTERVAL_MS,
        )

    def _disarm(self) -> None:
        self._generation += 1
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.cancel()

    def _on_scheduled(self, generation: int) -> None:
        if generation != self._generation:
            self._logger.debug("Dropping tick from cancelled schedule")
            return
        self.tick()

    def _result(self, command: str, accepted: bool, reason: str) -> CommandResult:
        return CommandResult(
            command=command,
            accepted=accepted,
            reason=reason,
            snapshot=self.snapshot(),
        )
