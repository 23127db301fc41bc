"""Note renderers: a plucked-string synth and a pitch-shifting sample bank."""

import os
from typing import Dict, Optional, Sequence

import numpy as np
import soundfile as sf

from ..logger import get_logger
from ..note_utils import midi_to_frequency, note_name_to_midi

logger = get_logger(__name__)

# Sparse keymap across the guitar range; notes in between are pitch-shifted
SAMPLE_NOTES = ("E2", "A2", "D3", "G3", "B3", "E4")
SAMPLE_EXTENSIONS = (".wav", ".flac", ".ogg")

RELEASE_SECONDS = 0.3


def _release_envelope(length: int, sample_rate: int) -> np.ndarray:
    """Flat gain with a linear fade over the last RELEASE_SECONDS."""
    envelope = np.ones(length, dtype=np.float32)
    fade = min(length, int(RELEASE_SECONDS * sample_rate))
    if fade > 0:
        envelope[-fade:] = np.linspace(1.0, 0.0, fade, dtype=np.float32)
    return envelope


def karplus_strong(
    frequency: float,
    duration: float,
    sample_rate: int,
    decay: float = 0.996,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Render a plucked string with the Karplus-Strong algorithm.

    Args:
        frequency: Pitch in Hz
        duration: Length in seconds, release included
        sample_rate: Output sample rate
        decay: Loss factor applied by the averaging filter
        rng: Noise source for the initial burst

    Returns:
        Mono float32 samples in [-1, 1]
    """
    total = max(int(duration * sample_rate), 1)
    period = max(int(round(sample_rate / frequency)), 2)
    rng = rng or np.random.default_rng()

    ring = rng.uniform(-1.0, 1.0, period).astype(np.float32)
    out = np.empty(total, dtype=np.float32)
    for start in range(0, total, period):
        chunk = min(period, total - start)
        out[start:start + chunk] = ring[:chunk]
        # Two-point average of the ring with itself shifted by one sample
        ring = decay * 0.5 * (ring + np.roll(ring, -1))

    peak = float(np.max(np.abs(out))) or 1.0
    return out / peak * _release_envelope(total, sample_rate)


class PluckSynth:
    """Synthesised fallback used when no samples are available."""

    def __init__(self, sample_rate: int = 44100, decay: float = 0.996):
        self.sample_rate = sample_rate
        self.decay = decay
        self._rng = np.random.default_rng()

    def load(self) -> None:
        pass

    def render(self, midi: int, duration: float) -> np.ndarray:
        return karplus_strong(
            midi_to_frequency(midi),
            duration + RELEASE_SECONDS,
            self.sample_rate,
            decay=self.decay,
            rng=self._rng,
        )


class SampleBank:
    """Plays recorded notes, pitch-shifting the nearest one by resampling."""

    def __init__(
        self,
        sample_dir: str,
        sample_rate: int = 44100,
        notes: Sequence[str] = SAMPLE_NOTES,
    ):
        self.sample_dir = sample_dir
        self.sample_rate = sample_rate
        self.notes = tuple(notes)
        self._samples: Dict[int, np.ndarray] = {}

    @property
    def loaded_notes(self) -> Sequence[int]:
        return sorted(self._samples)

    def _find_file(self, note: str) -> Optional[str]:
        for ext in SAMPLE_EXTENSIONS:
            path = os.path.join(self.sample_dir, f"{note}{ext}")
            if os.path.exists(path):
                return path
        return None

    def load(self) -> None:
        """Read every sample file that exists.

        Raises:
            FileNotFoundError: If the directory holds none of the samples
        """
        for note in self.notes:
            path = self._find_file(note)
            if path is None:
                logger.debug("No sample for %s in %s", note, self.sample_dir)
                continue

            data, file_rate = sf.read(path, dtype="float32", always_2d=True)
            mono = data.mean(axis=1)
            if file_rate != self.sample_rate and len(mono) > 1:
                mono = self._resample(mono, file_rate / self.sample_rate)
            self._samples[note_name_to_midi(note)] = mono.astype(np.float32)

        if not self._samples:
            raise FileNotFoundError(f"No samples found in {self.sample_dir}")
        logger.info("Loaded %d samples from %s", len(self._samples), self.sample_dir)

    @staticmethod
    def _resample(data: np.ndarray, ratio: float) -> np.ndarray:
        """Read ``data`` at ``ratio`` times its speed using linear interpolation."""
        positions = np.arange(0, len(data) - 1, ratio)
        return np.interp(positions, np.arange(len(data)), data).astype(np.float32)

    def render(self, midi: int, duration: float) -> np.ndarray:
        if not self._samples:
            raise RuntimeError("SampleBank.render called before load()")

        nearest = min(self._samples, key=lambda m: abs(m - midi))
        ratio = 2.0 ** ((midi - nearest) / 12.0)
        shifted = self._resample(self._samples[nearest], ratio)

        length = min(len(shifted), int((duration + RELEASE_SECONDS) * self.sample_rate))
        out = shifted[:length]
        return out * _release_envelope(len(out), self.sample_rate)
