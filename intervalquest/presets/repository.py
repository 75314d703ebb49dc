"""Preset storage.

``PresetRepository`` holds the shared rules (built-ins are read-only,
names are unique, conflicting saves need ``overwrite=True``) and turns
storage failures into ``PresetResult`` values.  Subclasses only implement
the raw reads and writes:

- ``JsonPresetRepository``     — local JSON file
- ``DatabasePresetRepository`` — SQLAlchemy table, scoped per user; the
  database URL decides whether that is a local SQLite file or a shared
  remote server.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from ..errors import (
    InvalidConfiguration,
    PresetConflict,
    PresetError,
    PresetNotFound,
    PresetReadOnly,
    PresetStorageError,
)
from .builtin import BUILTIN_PRESETS, builtin_preset, is_builtin
from .models import Preset, clean_name


# ── result reasons ────────────────────────────────────────────────────────

REASON_SAVED = "saved"
REASON_UPDATED = "updated"
REASON_DELETED = "deleted"
REASON_CONFLICT = "conflict"
REASON_READ_ONLY = "read_only"
REASON_NOT_FOUND = "not_found"
REASON_INVALID_NAME = "invalid_name"
REASON_STORAGE_ERROR = "storage_error"

_REASON_ERRORS: dict[str, type[PresetError]] = {
    REASON_CONFLICT: PresetConflict,
    REASON_READ_ONLY: PresetReadOnly,
    REASON_NOT_FOUND: PresetNotFound,
    REASON_INVALID_NAME: PresetError,
    REASON_STORAGE_ERROR: PresetStorageError,
}


@dataclass(frozen=True)
class PresetResult:
    """Outcome of a save or delete."""

    ok: bool
    reason: str
    preset: Preset | None = None
    message: str = ""

    def unwrap(self) -> Preset | None:
        """Return the preset, or raise the error matching a failed result."""
        if not self.ok:
            raise _REASON_ERRORS.get(self.reason, PresetError)(self.message)
        return self.preset


# ═══════════════════════════════════════════════════════════════════════════
#  BASE REPOSITORY
# ═══════════════════════════════════════════════════════════════════════════


class PresetRepository(ABC):
    """Built-in presets followed by the user's own, newest first."""

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("intervalquest.presets")

    # ── public API ────────────────────────────────────────────────────

    def list(self) -> list[Preset]:
        """All presets.  A storage failure degrades to built-ins only."""
        try:
            user = self._load_user()
        except PresetStorageError as exc:
            self._logger.warning("Failed to load saved presets: %s", exc)
            user = []
        return [*BUILTIN_PRESETS, *user]

    def user_presets(self) -> list[Preset]:
        """Only the user's presets.  Raises ``PresetStorageError``."""
        return self._load_user()

    def get(self, name: str) -> Preset | None:
        name = clean_name(name)
        builtin = builtin_preset(name)
        if builtin is not None:
            return builtin
        try:
            return self._find(name)
        except PresetStorageError as exc:
            self._logger.warning("Failed to read preset %r: %s", name, exc)
            return None

    def save(self, preset: Preset, *, overwrite: bool = False) -> PresetResult:
        if not preset.name:
            return PresetResult(False, REASON_INVALID_NAME, message="Please enter a preset name.")
        if is_builtin(preset.name):
            return PresetResult(
                False, REASON_READ_ONLY, preset,
                f'"{preset.name}" is a built-in preset.',
            )

        try:
            existing = self._find(preset.name)
            if existing is None:
                self._insert(preset)
                self._logger.info("Preset saved: %s", preset.name)
                return PresetResult(True, REASON_SAVED, preset, f'"{preset.name}" has been saved.')

            if not existing.same_content(preset):
                if not overwrite:
                    return PresetResult(
                        False, REASON_CONFLICT, existing,
                        f'A different preset named "{preset.name}" already exists.',
                    )
                self._replace(preset)
            self._logger.info("Preset updated: %s", preset.name)
            return PresetResult(True, REASON_UPDATED, preset, f'"{preset.name}" has been updated.')
        except PresetStorageError as exc:
            self._logger.warning("Failed to save preset %r: %s", preset.name, exc)
            return PresetResult(
                False, REASON_STORAGE_ERROR, preset,
                "Failed to save preset. Please try again.",
            )

    def delete(self, name: str) -> PresetResult:
        name = clean_name(name)
        if is_builtin(name):
            return PresetResult(False, REASON_READ_ONLY, message=f'"{name}" is a built-in preset.')

        try:
            removed = self._remove(name)
        except PresetStorageError as exc:
            self._logger.warning("Failed to delete preset %r: %s", name, exc)
            return PresetResult(
                False, REASON_STORAGE_ERROR,
                message="Failed to delete preset. Please try again.",
            )

        if removed is None:
            return PresetResult(False, REASON_NOT_FOUND, message=f'No preset named "{name}".')
        self._logger.info("Preset deleted: %s", name)
        return PresetResult(True, REASON_DELETED, removed, f'"{name}" has been deleted.')

    # ── backend hooks (raise PresetStorageError on I/O failure) ───────

    @abstractmethod
    def _load_user(self) -> list[Preset]:
        """User presets, newest first."""

    @abstractmethod
    def _find(self, name: str) -> Preset | None: ...

    @abstractmethod
    def _insert(self, preset: Preset) -> None: ...

    @abstractmethod
    def _replace(self, preset: Preset) -> None: ...

    @abstractmethod
    def _remove(self, name: str) -> Preset | None:
        """Delete *name*, returning the removed preset or None."""


# ═══════════════════════════════════════════════════════════════════════════
#  LOCAL JSON FILE
# ═══════════════════════════════════════════════════════════════════════════

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalQuest"
PRESETS_PATH = APP_SUPPORT_DIR / "presets.json"


class JsonPresetRepository(PresetRepository):
    """Presets stored as ``{"presets": [record, ...]}``, newest first."""

    def __init__(
        self,
        path: Path | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self._path = path or PRESETS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[Preset]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return [Preset.from_record(r) for r in data.get("presets", [])]
        except (
            OSError, ValueError, KeyError, TypeError, AttributeError, OverflowError,
            InvalidConfiguration,
        ) as exc:
            raise PresetStorageError(f"{self._path}: {exc}") from exc

    def _write(self, presets: list[Preset]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps({"presets": [p.to_record() for p in presets]}, indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise PresetStorageError(f"{self._path}: {exc}") from exc

    def _load_user(self) -> list[Preset]:
        return self._read()

    def _find(self, name: str) -> Preset | None:
        for preset in self._read():
            if preset.name == name:
                return preset
        return None

    def _insert(self, preset: Preset) -> None:
        self._write([preset, *self._read()])

    def _replace(self, preset: Preset) -> None:
        self._write([preset if p.name == preset.name else p for p in self._read()])

    def _remove(self, name: str) -> Preset | None:
        presets = self._read()
        removed = next((p for p in presets if p.name == name), None)
        if removed is not None:
            self._write([p for p in presets if p.name != name])
        return removed


# ═══════════════════════════════════════════════════════════════════════════
#  DATABASE
# ═══════════════════════════════════════════════════════════════════════════


class DatabasePresetRepository(PresetRepository):
    """Presets in the ``user_presets`` table, scoped to one user id."""

    def __init__(
        self,
        user_id: str = "local",
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self._user_id = user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    @staticmethod
    def _to_preset(row) -> Preset:
        return Preset.create(
            name=row.name,
            work_duration=row.work_duration,
            rest_duration=row.rest_duration,
            rounds=row.rounds,
            exercises=row.exercises or (),
        )

    def _query(self, db):
        from ..database.models import UserPreset

        return db.query(UserPreset).filter(UserPreset.user_id == self._user_id)

    def _load_user(self) -> list[Preset]:
        from ..database.db import get_session
        from ..database.models import UserPreset

        try:
            with get_session() as db:
                rows = self._query(db).order_by(
                    UserPreset.created_at.desc(), UserPreset.id.desc()
                ).all()
                return [self._to_preset(r) for r in rows]
        except (SQLAlchemyError, OverflowError) as exc:
            raise PresetStorageError(str(exc)) from exc

    def _find(self, name: str) -> Preset | None:
        from ..database.db import get_session
        from ..database.models import UserPreset

        try:
            with get_session() as db:
                row = self._query(db).filter(UserPreset.name == name).first()
                return self._to_preset(row) if row else None
        except (SQLAlchemyError, OverflowError) as exc:
            raise PresetStorageError(str(exc)) from exc

    def _insert(self, preset: Preset) -> None:
        from ..database.db import get_session
        from ..database.models import UserPreset

        record = preset.to_record()
        try:
            with get_session() as db:
                db.add(UserPreset(user_id=self._user_id, **record))
        except (SQLAlchemyError, OverflowError) as exc:
            raise PresetStorageError(str(exc)) from exc

    def _replace(self, preset: Preset) -> None:
        from ..database.db import get_session
        from ..database.models import UserPreset

        record = preset.to_record()
        try:
            with get_session() as db:
                row = self._query(db).filter(UserPreset.name == preset.name).first()
                if row is None:
                    db.add(UserPreset(user_id=self._user_id, **record))
                    return
                row.work_duration = record["work_duration"]
                row.rest_duration = record["rest_duration"]
                row.rounds = record["rounds"]
                row.exercises = record["exercises"]
        except (SQLAlchemyError, OverflowError) as exc:
            raise PresetStorageError(str(exc)) from exc

    def _remove(self, name: str) -> Preset | None:
        from ..database.db import get_session
        from ..database.models import UserPreset

        try:
            with get_session() as db:
                row = self._query(db).filter(UserPreset.name == name).first()
                if row is None:
                    return None
                removed = self._to_preset(row)
                db.delete(row)
                return removed
        except (SQLAlchemyError, OverflowError) as exc:
            raise PresetStorageError(str(exc)) from exc
