"""Preset value type and its persisted record schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from ..timer.config import ExerciseList, TimerConfiguration

MAX_NAME_LENGTH = 120


def clean_name(name: str) -> str:
    """Collapse whitespace; an empty result means the name is invalid."""
    return " ".join((name or "").split())[:MAX_NAME_LENGTH]


@dataclass(frozen=True)
class Preset:
    """A named configuration plus an optional exercise list."""

    name: str
    configuration: TimerConfiguration = field(default_factory=TimerConfiguration)
    exercises: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", clean_name(self.name))
        object.__setattr__(self, "exercises", ExerciseList(self.exercises).as_tuple())

    @classmethod
    def create(
        cls,
        name: str,
        work_duration: int,
        rest_duration: int,
        rounds: int,
        exercises: Iterable[str] = (),
    ) -> Preset:
        return cls(
            name=name,
            configuration=TimerConfiguration(work_duration, rest_duration, rounds),
            exercises=tuple(exercises),
        )

    @property
    def summary(self) -> str:
        """e.g. ``"20s work, 10s rest, 8 rounds"``."""
        cfg = self.configuration
        return f"{cfg.work_duration}s work, {cfg.rest_duration}s rest, {cfg.rounds} rounds"

    def same_content(self, other: Preset) -> bool:
        return (
            self.configuration == other.configuration
            and self.exercises == other.exercises
        )

    # ── record schema ─────────────────────────────────────────────────

    def to_record(self) -> dict[str, Any]:
        cfg = self.configuration
        return {
            "name": self.name,
            "work_duration": cfg.work_duration,
            "rest_duration": cfg.rest_duration,
            "rounds": cfg.rounds,
            "exercises": list(self.exercises),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Preset:
        return cls.create(
            name=record["name"],
            work_duration=record["work_duration"],
            rest_duration=record["rest_duration"],
            rounds=record["rounds"],
            exercises=record.get("exercises") or (),
        )
