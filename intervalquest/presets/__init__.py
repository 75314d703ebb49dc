"""Presets package."""

from .builtin import BUILTIN_PRESETS, builtin_preset, is_builtin
from .models import Preset
from .repository import (
    DatabasePresetRepository,
    JsonPresetRepository,
    PresetRepository,
    PresetResult,
)

__all__ = [
    "BUILTIN_PRESETS",
    "builtin_preset",
    "is_builtin",
    "Preset",
    "PresetRepository",
    "PresetResult",
    "JsonPresetRepository",
    "DatabasePresetRepository",
]
