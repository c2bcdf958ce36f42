"""Cue sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Sound names
-----------
- ``prepare``  — three countdown pips and a high go-tone (3 s warning)
- ``stop``     — boxing-style bell when a work stage ends
- ``finish``   — celebratory fanfare after the last work stage
- ``click``    — subtle button click for manual navigation
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.state import Cue

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TabataTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


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


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_countdown() -> bytes:
    """Prepare — pip, pip, pip one second apart, then a longer high tone.

    Plays over the last three seconds of a rest stage so the go-tone lands
    on the start of the work stage.
    """
    parts: list[np.ndarray] = []
    for _ in range(3):
        pip = _sine(880.0, 0.12) * 0.5
        env = _make_envelope(len(pip), attack=60, decay=200, sustain_level=0.5, release=400)
        parts.append(pip * env)
        parts.append(_silence(0.88))
    go = _sine(1760.0, 0.45) * 0.5
    env = _make_envelope(len(go), attack=80, decay=400, sustain_level=0.6, release=4000)
    parts.append(go * env)
    return _to_wav_bytes(np.concatenate(parts))


def _generate_bell() -> bytes:
    """Stop — round bell (E5 plus inharmonic partials), long decay."""
    duration = 1.2
    base = _sine(659.25, duration) * 0.4
    partial = _sine(659.25 * 2.76, duration) * 0.12
    hum = _sine(659.25 * 0.5, duration) * 0.08
    combined = base + partial + hum
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.005),
        decay=int(SAMPLE_RATE * 0.25),
        sustain_level=0.3,
        release=int(SAMPLE_RATE * 0.8),
    )
    return _to_wav_bytes(combined * env)


def _generate_fanfare() -> bytes:
    """Finish — fanfare (G4→B4→D5→G5), final note held."""
    notes = [392.00, 493.88, 587.33, 783.99]  # G4, B4, D5, G5
    note_dur = 0.15
    gap = 0.03
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            tone = _sine(freq, 0.6) * 0.55
            overtone = _sine(freq * 2, 0.6) * 0.1
            combined = tone + overtone
            env = _make_envelope(len(combined), attack=100, decay=400, sustain_level=0.5, release=900)
            parts.append(combined * env)
        else:
            tone = _sine(freq, note_dur) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=200, sustain_level=0.4, release=250)
            parts.append(tone * env)
            parts.append(_silence(gap))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click — very short high tick, subtle."""
    duration = 0.015
    n_samples = int(SAMPLE_RATE * duration)
    tick = _sine(1200.0, duration) * 0.2
    env = _make_envelope(n_samples, attack=20, decay=50, sustain_level=0.0, release=n_samples - 70)
    # Pad with silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick * env, _silence(0.03)]))


CLICK = "click"

_CUE_GENERATORS: dict[Cue, Callable[[], bytes]] = {
    Cue.PREPARE: _generate_countdown,
    Cue.STOP: _generate_bell,
    Cue.FINISH: _generate_fanfare,
}

SOUND_NAMES = tuple(cue.value for cue in _CUE_GENERATORS) + (CLICK,)


# ═══════════════════════════════════════════════════════════════════════════
#  CUE PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Plays one sound per timer cue, plus a click for manual navigation.

    Each cue's WAV is cached as ``<cue value>.wav`` in *sounds_dir*.

    Usage::

        mgr = SoundManager(parent=self, volume=settings.sound_volume)
        engine.cue.connect(mgr.play_cue)
        reset_button.clicked.connect(mgr.silence)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: int = 70,
        enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._enabled = enabled
        self._level = self._clamp(volume)

        self._cue_effects: dict[Cue, QSoundEffect] = {}
        for cue, generator in _CUE_GENERATORS.items():
            self._cue_effects[cue] = self._effect(cue.value, generator)
        self._click = self._effect(CLICK, _generate_click)

    # ── settings ──────────────────────────────────────────────────────

    @property
    def volume(self) -> int:
        """Playback level, 0-100."""
        return self._level

    @volume.setter
    def volume(self, level: int) -> None:
        self._level = self._clamp(level)
        for effect in self._all_effects():
            effect.setVolume(self._level / 100.0)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.silence()

    @property
    def sounds_dir(self) -> Path:
        return self._sounds_dir

    # ── playback ──────────────────────────────────────────────────────

    def play_cue(self, cue: Cue) -> None:
        """Play the sound for *cue*.  No-op when muted."""
        if self._enabled:
            self._cue_effects[cue].play()

    def click(self) -> None:
        if self._enabled:
            self._click.play()

    def silence(self) -> None:
        """Cut off anything still playing (e.g. the 3 s countdown after a
        reset or a manual jump)."""
        for effect in self._all_effects():
            effect.stop()

    # ── internal ──────────────────────────────────────────────────────

    @staticmethod
    def _clamp(level: int) -> int:
        return max(0, min(int(level), 100))

    def _all_effects(self) -> list[QSoundEffect]:
        return [*self._cue_effects.values(), self._click]

    def _effect(self, name: str, generator: Callable[[], bytes]) -> QSoundEffect:
        """Load *name*.wav, synthesizing it into the cache first if missing."""
        path = self._sounds_dir / f"{name}.wav"
        if not path.exists():
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(generator())
            logger.debug("Generated %s", path)

        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(path)))
        effect.setVolume(self._level / 100.0)
        return effect
