"""Cue tone synthesis and playback using numpy + QSoundEffect.

Every cue is a single sine tone with a fast attack and an exponential
decay.  Tones are rendered to WAV files once and cached on disk so
subsequent launches only load them.

Tone names
----------
- ``countdown``        — short high blip on the last 3 seconds (1200 Hz)
- ``work_complete``    — lower tone when rest begins (600 Hz)
- ``next_round``       — mid tone when the next round's work begins (800 Hz)
- ``workout_complete`` — long tone when the workout is done (1000 Hz)
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalQuest"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100
TAIL_MS = 30

# name → (frequency Hz, duration ms)
TONES: dict[str, tuple[float, int]] = {
    "countdown": (1200.0, 100),
    "work_complete": (600.0, 300),
    "next_round": (800.0, 300),
    "workout_complete": (1000.0, 500),
}

TONE_NAMES = tuple(TONES)


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _samples(duration_ms: int) -> int:
    return SAMPLE_RATE * duration_ms // 1000


def _sine(freq: float, duration_ms: int) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_ms* milliseconds."""
    t = np.arange(_samples(duration_ms)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t)


def _decay_envelope(length: int, attack: int = 120, floor: float = 0.1) -> np.ndarray:
    """Linear attack then exponential ramp down to *floor* (in samples)."""
    env = np.geomspace(1.0, floor, length) if length > 0 else np.ones(0)
    a = min(attack, length)
    if a > 0:
        env[:a] *= np.linspace(0.0, 1.0, a)
    return env


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_tone(frequency: float, duration_ms: int, peak: float = 0.6) -> bytes:
    """Render one cue tone as WAV bytes."""
    tone = _sine(frequency, max(duration_ms, 1)) * peak
    shaped = tone * _decay_envelope(len(tone))
    # Short silent tail so QSoundEffect doesn't clip the release
    padded = np.concatenate([shaped, np.zeros(_samples(TAIL_MS))])
    return _to_wav_bytes(padded)


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages tone synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("countdown")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._logger = logger or logging.getLogger("intervalquest.audio")

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a tone by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            self._logger.debug("Unknown tone requested: %s", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Render any missing WAV files into the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, (frequency, duration_ms) in TONES.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate_tone(frequency, duration_ms))

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in TONE_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
