"""Tests for cue tone synthesis and the SoundManager playback API."""

from __future__ import annotations

import io
import wave

import pytest

from intervalquest.audio.sounds import (
    SAMPLE_RATE,
    TAIL_MS,
    TONE_NAMES,
    TONES,
    SoundManager,
    generate_tone,
)


# ═══════════════════════════════════════════════════════════════════════
#  SOUND SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestToneGeneration:

    def test_tone_table(self):
        assert TONES["countdown"] == (1200.0, 100)
        assert TONES["work_complete"] == (600.0, 300)
        assert TONES["next_round"] == (800.0, 300)
        assert TONES["workout_complete"] == (1000.0, 500)

    @pytest.mark.parametrize("name", TONE_NAMES)
    def test_generator_produces_wav(self, name):
        data = generate_tone(*TONES[name])
        assert isinstance(data, bytes)
        assert data[:4] == b"RIFF"

    @pytest.mark.parametrize("name", TONE_NAMES)
    def test_wav_length_matches_duration(self, name):
        _, duration_ms = TONES[name]
        with wave.open(io.BytesIO(generate_tone(*TONES[name])), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == SAMPLE_RATE
            expected = SAMPLE_RATE * (duration_ms + TAIL_MS) // 1000
            assert wf.getnframes() == expected

    def test_longer_tone_is_longer(self):
        assert len(generate_tone(1000.0, 500)) > len(generate_tone(1200.0, 100))


@pytest.mark.usefixtures("qapp")
class TestSoundManager:

    def test_wav_files_generated(self, tmp_path):
        SoundManager(parent=None, sounds_dir=tmp_path)
        for name in TONE_NAMES:
            path = tmp_path / f"{name}.wav"
            assert path.exists(), f"Missing WAV: {name}"
            assert path.stat().st_size > 100

    def test_existing_files_are_kept(self, tmp_path):
        marker = tmp_path / "countdown.wav"
        marker.write_bytes(generate_tone(440.0, 50))
        before = marker.read_bytes()
        SoundManager(parent=None, sounds_dir=tmp_path)
        assert marker.read_bytes() == before

    def test_set_volume_clamps(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_volume(30)
        assert mgr.volume == 30
        mgr.set_volume(200)
        assert mgr.volume == 100
        mgr.set_volume(-10)
        assert mgr.volume == 0

    def test_set_enabled(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_enabled(False)
        assert mgr.enabled is False

    def test_play_unknown_name_no_crash(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.play("nonexistent_tone")

    def test_all_tones_loaded(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        for name in TONE_NAMES:
            assert name in mgr._effects
