"""Read-only presets shipped with the app."""

from __future__ import annotations

from .models import Preset


BUILTIN_PRESETS: tuple[Preset, ...] = (
    Preset.create(
        "Quick HIIT", 20, 10, 8,
        ["Jumping Jacks", "Push-ups", "Squats", "Burpees"],
    ),
    Preset.create(
        "Tabata Classic", 20, 10, 8,
        ["High Knees", "Mountain Climbers", "Plank", "Lunges"],
    ),
    Preset.create(
        "Strength Training", 45, 15, 6,
        ["Deadlifts", "Bench Press", "Squats", "Pull-ups", "Rows", "Overhead Press"],
    ),
    Preset.create(
        "Cardio Burst", 30, 15, 12,
        ["Jump Rope", "Running in Place", "Jumping Jacks", "High Knees"],
    ),
    Preset.create(
        "Beginner Friendly", 30, 30, 5,
        ["Walking in Place", "Arm Circles", "Bodyweight Squats", "Wall Push-ups", "Stretching"],
    ),
)

BUILTIN_NAMES: frozenset[str] = frozenset(p.name for p in BUILTIN_PRESETS)


def builtin_preset(name: str) -> Preset | None:
    for preset in BUILTIN_PRESETS:
        if preset.name == name:
            return preset
    return None


def is_builtin(name: str) -> bool:
    return name in BUILTIN_NAMES
