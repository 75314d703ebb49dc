"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalQuest/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)

``SettingsStore`` is the only writer of the timer configuration and
exercise list.  It validates every change and refuses it unless the
engine is idle.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path

from .errors import InvalidConfiguration
from .presets.models import Preset
from .timer.config import (
    DEFAULT_REST_SECONDS,
    DEFAULT_ROUNDS,
    DEFAULT_WORK_SECONDS,
    ExerciseList,
    TimerConfiguration,
)
from .timer.engine import TimerEngine
from .timer.state import (
    COMMAND_SET_EXERCISES,
    COMMAND_UPDATE_CONFIGURATION,
    REASON_NOT_IDLE,
    CommandResult,
)


# Reuse the app-support directory from db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalQuest"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

PRESET_BACKENDS = ("json", "database")

logger = logging.getLogger("intervalquest.settings")


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = DEFAULT_WORK_SECONDS      # seconds
    rest_duration: int = DEFAULT_REST_SECONDS
    rounds: int = DEFAULT_ROUNDS
    exercises: list[str] = field(default_factory=list)

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    speech_enabled: bool = True
    speech_rate: float = 1.2               # 1.0 = normal

    # ── presets ───────────────────────────────────────────────────────
    preset_backend: str = "json"           # json | database
    database_url: str | None = None

    @property
    def configuration(self) -> TimerConfiguration:
        return TimerConfiguration(self.work_duration, self.rest_duration, self.rounds)

    def normalize(self) -> None:
        """Clamp timer values and drop invalid exercises in place."""
        cfg = self.configuration
        self.work_duration = cfg.work_duration
        self.rest_duration = cfg.rest_duration
        self.rounds = cfg.rounds
        self.exercises = list(ExerciseList(self.exercises))
        self.sound_volume = max(0, min(int(self.sound_volume), 100))
        if self.preset_backend not in PRESET_BACKENDS:
            self.preset_backend = "json"


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            settings.normalize()
            return settings
    except (
        OSError, ValueError, TypeError, AttributeError, OverflowError, InvalidConfiguration,
    ) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


# ═══════════════════════════════════════════════════════════════════════════
#  SETTINGS STORE
# ═══════════════════════════════════════════════════════════════════════════


class SettingsStore:
    """Validated timer configuration and exercise list bound to an engine.

    Every mutation is refused while the engine is running or paused; an
    accepted mutation is copied into the engine immediately.
    """

    def __init__(self, engine: TimerEngine, settings: Settings | None = None) -> None:
        self._engine = engine
        self._settings = settings or Settings()
        self._settings.normalize()
        self._exercises = ExerciseList(self._settings.exercises)
        engine.update_configuration(self._settings.configuration)
        engine.set_exercises(self._exercises)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def configuration(self) -> TimerConfiguration:
        return self._settings.configuration

    @property
    def exercises(self) -> tuple[str, ...]:
        return self._exercises.as_tuple()

    @property
    def editable(self) -> bool:
        return self._engine.is_idle

    # ── configuration ─────────────────────────────────────────────────

    def update(
        self,
        *,
        work_duration: int | None = None,
        rest_duration: int | None = None,
        rounds: int | None = None,
    ) -> CommandResult:
        """Change any of the three timer values; each is clamped to >= 1."""
        if not self.editable:
            return self._rejected(COMMAND_UPDATE_CONFIGURATION)
        current = self.configuration
        cfg = TimerConfiguration(
            current.work_duration if work_duration is None else work_duration,
            current.rest_duration if rest_duration is None else rest_duration,
            current.rounds if rounds is None else rounds,
        )
        result = self._engine.update_configuration(cfg)
        if result.accepted:
            self._settings.work_duration = cfg.work_duration
            self._settings.rest_duration = cfg.rest_duration
            self._settings.rounds = cfg.rounds
        return result

    # ── exercises ─────────────────────────────────────────────────────

    def add_exercise(self, name: str) -> bool:
        """Append an exercise.  False if not editable, blank or duplicate."""
        if not self.editable:
            return False
        candidate = ExerciseList(self._exercises)
        if not candidate.add(name):
            return False
        return self._push_exercises(candidate).accepted

    def remove_exercise(self, index: int) -> str | None:
        if not self.editable:
            return None
        candidate = ExerciseList(self._exercises)
        removed = candidate.remove(index)
        if removed is None:
            return None
        self._push_exercises(candidate)
        return removed

    def set_exercises(self, names) -> CommandResult:
        if not self.editable:
            return self._rejected(COMMAND_SET_EXERCISES)
        return self._push_exercises(ExerciseList(names))

    # ── presets ───────────────────────────────────────────────────────

    def apply_preset(self, preset: Preset) -> bool:
        """Copy a preset's values in.  False while the engine is active."""
        if not self.editable:
            return False
        cfg = preset.configuration
        self.update(
            work_duration=cfg.work_duration,
            rest_duration=cfg.rest_duration,
            rounds=cfg.rounds,
        )
        self._push_exercises(ExerciseList(preset.exercises))
        logger.info("Preset applied: %s", preset.name)
        return True

    def snapshot_preset(self, name: str) -> Preset:
        """Bundle the current values as a preset named *name*."""
        return Preset(name=name, configuration=self.configuration, exercises=self.exercises)

    def save(self) -> None:
        save_settings(self._settings)

    # ── internal ──────────────────────────────────────────────────────

    def _push_exercises(self, exercises: ExerciseList) -> CommandResult:
        result = self._engine.set_exercises(exercises)
        if result.accepted:
            self._exercises = exercises
            self._settings.exercises = list(exercises)
        return result

    def _rejected(self, command: str) -> CommandResult:
        return CommandResult(
            command=command,
            accepted=False,
            reason=REASON_NOT_IDLE,
            snapshot=self._engine.snapshot(),
        )
