"""Tests for presets: record schema, built-ins, JSON and database storage."""

from __future__ import annotations

import json
from contextlib import contextmanager

import pytest

from intervalquest.database.db import get_session
from intervalquest.database.models import UserPreset
from intervalquest.errors import PresetConflict, PresetReadOnly, PresetNotFound
from intervalquest.presets import (
    BUILTIN_PRESETS,
    DatabasePresetRepository,
    JsonPresetRepository,
    Preset,
    is_builtin,
)
from intervalquest.timer.config import TimerConfiguration


def _preset(name="Leg Day", work=40, rest=20, rounds=6, exercises=("Squats", "Lunges")):
    return Preset.create(name, work, rest, rounds, exercises)


@pytest.fixture(params=["json", "database"])
def repo(request, tmp_path):
    if request.param == "json":
        return JsonPresetRepository(tmp_path / "presets.json")
    return DatabasePresetRepository(user_id="alice")


# ═══════════════════════════════════════════════════════════════════════
#  MODEL
# ═══════════════════════════════════════════════════════════════════════


class TestPresetModel:

    def test_record_round_trip(self):
        p = _preset()
        record = p.to_record()
        assert record == {
            "name": "Leg Day",
            "work_duration": 40,
            "rest_duration": 20,
            "rounds": 6,
            "exercises": ["Squats", "Lunges"],
        }
        assert Preset.from_record(record) == p

    def test_record_without_exercises(self):
        p = Preset.from_record(
            {"name": "Plain", "work_duration": 30, "rest_duration": 10, "rounds": 5}
        )
        assert p.exercises == ()

    def test_name_whitespace_collapsed(self):
        assert Preset("  Leg   Day ").name == "Leg Day"

    def test_configuration_clamped(self):
        p = Preset.create("Zero", 0, 0, 0)
        assert p.configuration == TimerConfiguration(1, 1, 1)

    def test_configuration_capped(self):
        p = Preset.create("Huge", 10**30, 5000, 1000)
        assert p.configuration == TimerConfiguration(3600, 3600, 100)

    def test_summary(self):
        assert _preset().summary == "40s work, 20s rest, 6 rounds"


class TestBuiltins:

    def test_five_builtins(self):
        names = [p.name for p in BUILTIN_PRESETS]
        assert names == [
            "Quick HIIT",
            "Tabata Classic",
            "Strength Training",
            "Cardio Burst",
            "Beginner Friendly",
        ]

    def test_quick_hiit_values(self):
        hiit = BUILTIN_PRESETS[0]
        assert hiit.configuration == TimerConfiguration(20, 10, 8)
        assert hiit.exercises == ("Jumping Jacks", "Push-ups", "Squats", "Burpees")

    def test_is_builtin(self):
        assert is_builtin("Cardio Burst")
        assert not is_builtin("Leg Day")


# ═══════════════════════════════════════════════════════════════════════
#  REPOSITORY BEHAVIOUR (both backends)
# ═══════════════════════════════════════════════════════════════════════


class TestRepository:

    def test_list_starts_with_builtins(self, repo):
        assert repo.list() == list(BUILTIN_PRESETS)

    def test_save_then_list(self, repo):
        result = repo.save(_preset())
        assert result.ok
        assert result.reason == "saved"
        presets = repo.list()
        assert presets[-1] == _preset()
        assert len(presets) == len(BUILTIN_PRESETS) + 1

    def test_user_presets_newest_first(self, repo):
        repo.save(_preset("First"))
        repo.save(_preset("Second"))
        assert [p.name for p in repo.user_presets()] == ["Second", "First"]

    def test_get(self, repo):
        repo.save(_preset())
        assert repo.get("Leg Day") == _preset()
        assert repo.get("Tabata Classic") == BUILTIN_PRESETS[1]
        assert repo.get("Missing") is None

    def test_save_identical_is_update(self, repo):
        repo.save(_preset())
        result = repo.save(_preset())
        assert result.ok
        assert result.reason == "updated"
        assert len(repo.user_presets()) == 1

    def test_save_conflict_without_overwrite(self, repo):
        repo.save(_preset())
        result = repo.save(_preset(rounds=10))
        assert not result.ok
        assert result.reason == "conflict"
        assert result.preset == _preset()
        assert repo.get("Leg Day").configuration.rounds == 6

    def test_save_overwrite(self, repo):
        repo.save(_preset())
        result = repo.save(_preset(rounds=10, exercises=("Deadlifts",)), overwrite=True)
        assert result.ok
        assert result.reason == "updated"
        stored = repo.get("Leg Day")
        assert stored.configuration.rounds == 10
        assert stored.exercises == ("Deadlifts",)

    def test_save_builtin_name_is_read_only(self, repo):
        result = repo.save(_preset(name="Quick HIIT"))
        assert not result.ok
        assert result.reason == "read_only"

    def test_save_blank_name_rejected(self, repo):
        result = repo.save(_preset(name="   "))
        assert not result.ok
        assert result.reason == "invalid_name"

    def test_delete(self, repo):
        repo.save(_preset())
        result = repo.delete("Leg Day")
        assert result.ok
        assert result.reason == "deleted"
        assert result.preset == _preset()
        assert repo.get("Leg Day") is None

    def test_delete_missing(self, repo):
        result = repo.delete("Nope")
        assert not result.ok
        assert result.reason == "not_found"

    def test_delete_builtin_refused(self, repo):
        result = repo.delete("Beginner Friendly")
        assert not result.ok
        assert result.reason == "read_only"
        assert repo.get("Beginner Friendly") is not None


class TestPresetResultUnwrap:

    def test_ok_returns_preset(self, tmp_path):
        repo = JsonPresetRepository(tmp_path / "p.json")
        assert repo.save(_preset()).unwrap() == _preset()

    def test_conflict_raises(self, tmp_path):
        repo = JsonPresetRepository(tmp_path / "p.json")
        repo.save(_preset())
        with pytest.raises(PresetConflict):
            repo.save(_preset(rounds=2)).unwrap()

    def test_read_only_raises(self, tmp_path):
        repo = JsonPresetRepository(tmp_path / "p.json")
        with pytest.raises(PresetReadOnly):
            repo.delete("Quick HIIT").unwrap()

    def test_not_found_raises(self, tmp_path):
        repo = JsonPresetRepository(tmp_path / "p.json")
        with pytest.raises(PresetNotFound):
            repo.delete("Ghost").unwrap()


# ═══════════════════════════════════════════════════════════════════════
#  BACKEND SPECIFICS
# ═══════════════════════════════════════════════════════════════════════


class TestJsonBackend:

    def test_file_schema(self, tmp_path):
        path = tmp_path / "presets.json"
        JsonPresetRepository(path).save(_preset())
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"presets": [_preset().to_record()]}

    def test_corrupt_file_degrades_to_builtins(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text("NOT VALID JSON", encoding="utf-8")
        repo = JsonPresetRepository(path)
        assert repo.list() == list(BUILTIN_PRESETS)

    def test_infinite_duration_degrades_to_builtins(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(
            '{"presets": [{"name": "Broken", "work_duration": 1e400,'
            ' "rest_duration": 10, "rounds": 5, "exercises": []}]}',
            encoding="utf-8",
        )
        repo = JsonPresetRepository(path)
        assert repo.list() == list(BUILTIN_PRESETS)
        assert not repo.save(_preset()).ok

    def test_corrupt_file_save_reports_storage_error(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text("NOT VALID JSON", encoding="utf-8")
        result = JsonPresetRepository(path).save(_preset())
        assert not result.ok
        assert result.reason == "storage_error"

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "presets.json"
        assert JsonPresetRepository(path).save(_preset()).ok
        assert path.exists()


class TestDatabaseBackend:

    def test_scoped_per_user(self):
        alice = DatabasePresetRepository(user_id="alice")
        bob = DatabasePresetRepository(user_id="bob")
        alice.save(_preset())
        assert bob.get("Leg Day") is None
        assert bob.delete("Leg Day").reason == "not_found"
        assert bob.save(_preset(rounds=3)).reason == "saved"
        assert alice.get("Leg Day").configuration.rounds == 6

    def test_row_contents(self):
        DatabasePresetRepository(user_id="alice").save(_preset())
        with get_session() as db:
            row = db.query(UserPreset).one()
            assert row.user_id == "alice"
            assert row.name == "Leg Day"
            assert row.exercises == ["Squats", "Lunges"]
            assert row.created_at is not None

    def test_oversized_values_are_capped_before_storage(self):
        repo = DatabasePresetRepository(user_id="alice")
        result = repo.save(Preset.create("Huge", 10**30, 5, 2))
        assert result.ok
        assert repo.get("Huge").configuration.work_duration == 3600

    def test_driver_overflow_reports_storage_error(self, monkeypatch):
        @contextmanager
        def overflowing_session():
            raise OverflowError("Python int too large to convert to SQLite INTEGER")
            yield

        monkeypatch.setattr("intervalquest.database.db.get_session", overflowing_session)
        repo = DatabasePresetRepository(user_id="alice")
        result = repo.save(_preset())
        assert not result.ok
        assert result.reason == "storage_error"
        assert repo.list() == list(BUILTIN_PRESETS)
