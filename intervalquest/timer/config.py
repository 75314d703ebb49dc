"""Timer configuration and exercise list.

Both are plain value types.  The engine copies them on every change, so
callers can keep mutating their own ``ExerciseList`` without affecting a
running workout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..errors import InvalidConfiguration


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_SECONDS = 30
DEFAULT_REST_SECONDS = 10
DEFAULT_ROUNDS = 5
MINIMUM_VALUE = 1
MAX_DURATION_SECONDS = 3600
MAX_ROUNDS = 100


def _clamp(field_name: str, value: object, maximum: int) -> int:
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidConfiguration(
            f"{field_name} must be a whole number, got {value!r}"
        ) from exc
    return min(maximum, max(MINIMUM_VALUE, number))


@dataclass(frozen=True)
class TimerConfiguration:
    """Work/rest durations (seconds) and round count.

    Durations are clamped to 1..3600 and rounds to 1..100 on construction,
    which also covers ``dataclasses.replace``.
    """

    work_duration: int = DEFAULT_WORK_SECONDS
    rest_duration: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self) -> None:
        for name, maximum in (
            ("work_duration", MAX_DURATION_SECONDS),
            ("rest_duration", MAX_DURATION_SECONDS),
            ("rounds", MAX_ROUNDS),
        ):
            object.__setattr__(self, name, _clamp(name, getattr(self, name), maximum))

    @property
    def total_seconds(self) -> int:
        """Length of the whole workout if never paused."""
        return (self.work_duration + self.rest_duration) * self.rounds


class ExerciseList:
    """Ordered, duplicate-free list of exercise names.

    Names are whitespace-trimmed; empty names and duplicates are rejected
    on insert.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = []
        for name in names:
            self.add(name)

    # ── mutation ──────────────────────────────────────────────────────

    def add(self, name: str) -> bool:
        """Append *name*.  Returns False if it was empty or already present."""
        cleaned = (name or "").strip()
        if not cleaned or cleaned in self._names:
            return False
        self._names.append(cleaned)
        return True

    def remove(self, index: int) -> str | None:
        if not 0 <= index < len(self._names):
            return None
        return self._names.pop(index)

    def clear(self) -> None:
        self._names.clear()

    # ── cycling ───────────────────────────────────────────────────────

    def next_index(self, index: int) -> int:
        """Index of the exercise after *index*, wrapping around."""
        if not self._names:
            return 0
        return (index + 1) % len(self._names)

    def name_at(self, index: int) -> str | None:
        if not self._names:
            return None
        return self._names[index % len(self._names)]

    # ── container protocol ────────────────────────────────────────────

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __getitem__(self, index: int) -> str:
        return self._names[index]

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExerciseList):
            return self._names == other._names
        return NotImplemented

    def __repr__(self) -> str:
        return f"<ExerciseList {self._names!r}>"
