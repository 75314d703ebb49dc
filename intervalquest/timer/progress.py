"""Progress fractions derived from timer state.  No stored state."""

from __future__ import annotations

from .phases import Phase


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def phase_progress(time_remaining: int, phase_duration: int) -> float:
    """0.0 → 1.0 through the current phase."""
    if phase_duration <= 0:
        return 0.0
    return _clamp_unit(1.0 - time_remaining / phase_duration)


def overall_progress(
    phase: Phase, current_round: int, rounds: int, phase_fraction: float
) -> float:
    """0.0 → 1.0 through the whole workout.

    A round only contributes its work fraction while working; once rest
    begins the round counts as complete.
    """
    if rounds <= 0:
        return 0.0
    if phase == Phase.FINISHED:
        return 1.0
    segment = 1.0 if phase == Phase.REST else phase_fraction
    return _clamp_unit((current_round - 1 + segment) / rounds)
