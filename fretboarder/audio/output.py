"""Audio output through sounddevice with a small voice mixer."""

import threading
from typing import List, Optional

import numpy as np
import sounddevice as sd

from ..core.interfaces import IAudioBackend
from ..logger import get_logger
from .synth import PluckSynth, SampleBank

logger = get_logger(__name__)


class _Voice:
    __slots__ = ("buffer", "start_frame")

    def __init__(self, buffer: np.ndarray, start_frame: int):
        self.buffer = buffer
        self.start_frame = start_frame


class SoundDeviceBackend(IAudioBackend):
    """Renders notes with a sample bank (or the pluck synth) and mixes them
    into a single sounddevice output stream."""

    def __init__(
        self,
        sample_rate: int = 44100,
        sample_dir: Optional[str] = None,
        device_id: Optional[int] = None,
        blocksize: int = 512,
    ):
        self._sample_rate = sample_rate
        self._sample_dir = sample_dir
        self._device_id = device_id
        self._blocksize = blocksize
        self._renderer = None
        self._stream: Optional[sd.OutputStream] = None
        self._voices: List[_Voice] = []
        self._frame = 0
        self._lock = threading.Lock()

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def load(self) -> None:
        """Pick a renderer and open the output stream.

        Samples are tried first; any failure falls back to the pluck synth.
        Failing to open the device propagates to the caller.
        """
        renderer = None
        if self._sample_dir:
            try:
                bank = SampleBank(self._sample_dir, self._sample_rate)
                bank.load()
                renderer = bank
            except (OSError, RuntimeError) as e:
                logger.warning(f"Samples unavailable, falling back to synth: {e}")
        if renderer is None:
            renderer = PluckSynth(self._sample_rate)
            renderer.load()
        self._renderer = renderer

        self._stream = sd.OutputStream(
            device=self._device_id,
            channels=1,
            samplerate=self._sample_rate,
            blocksize=self._blocksize,
            callback=self._audio_callback,
            dtype="float32",
        )
        self._stream.start()
        logger.info(f"Audio output started using {type(renderer).__name__}")

    def render(self, midi: int, duration: float) -> np.ndarray:
        return self._renderer.render(midi, duration)

    def play(self, buffer: np.ndarray, delay: float = 0.0) -> None:
        with self._lock:
            start = self._frame + int(max(delay, 0.0) * self._sample_rate)
            self._voices.append(_Voice(np.asarray(buffer, dtype=np.float32), start))

    def _audio_callback(self, outdata: np.ndarray, frames: int, _time_info, status) -> None:
        if status:
            logger.debug(f"Output status: {status}")
        mix = np.zeros(frames, dtype=np.float32)
        with self._lock:
            block_start = self._frame
            block_end = block_start + frames
            alive = []
            for voice in self._voices:
                voice_end = voice.start_frame + len(voice.buffer)
                lo = max(block_start, voice.start_frame)
                hi = min(block_end, voice_end)
                if hi > lo:
                    mix[lo - block_start:hi - block_start] += voice.buffer[
                        lo - voice.start_frame:hi - voice.start_frame
                    ]
                if voice_end > block_end:
                    alive.append(voice)
            self._voices = alive
            self._frame = block_end
        outdata[:, 0] = np.clip(mix, -1.0, 1.0)

    def close(self) -> None:
        if self._stream:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        with self._lock:
            self._voices = []
