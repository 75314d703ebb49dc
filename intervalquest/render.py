"""Pure projection of a timer snapshot onto display text."""

from __future__ import annotations

from dataclasses import dataclass

from .timer.state import Phase, RunState, TimerSnapshot


PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK: "WORK",
    Phase.REST: "REST",
    Phase.FINISHED: "COMPLETE",
}


def format_time(seconds: int) -> str:
    """``MM:SS``; minutes are not wrapped at an hour."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


@dataclass(frozen=True)
class DisplayState:
    time_text: str
    phase_label: str
    round_text: str
    exercise: str | None
    is_paused: bool
    phase_percent: int
    overall_percent: int
    primary_action: str

    def as_line(self) -> str:
        """One-line console rendering."""
        parts = [f"[{self.phase_label}]", self.time_text, self.round_text]
        if self.exercise:
            parts.append(self.exercise)
        parts.append(f"{self.overall_percent}%")
        if self.is_paused:
            parts.append("(paused)")
        return "  ".join(parts)


def render(snapshot: TimerSnapshot) -> DisplayState:
    if snapshot.run_state == RunState.RUNNING:
        action = "Pause"
    elif snapshot.run_state == RunState.PAUSED:
        action = "Resume"
    else:
        action = "Start"

    return DisplayState(
        time_text=format_time(snapshot.time_remaining),
        phase_label=PHASE_LABELS[snapshot.phase],
        round_text=f"Round {snapshot.current_round} of {snapshot.rounds}",
        exercise=snapshot.current_exercise,
        is_paused=snapshot.run_state == RunState.PAUSED,
        phase_percent=round(snapshot.phase_progress * 100),
        overall_percent=round(snapshot.overall_progress * 100),
        primary_action=action,
    )
