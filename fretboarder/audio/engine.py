"""Audio engine with an explicit lifecycle and a queue-or-drop contract.

``AudioEngine`` is handed to the game as a capability. Until its backend is
ready, note requests wait in a bounded queue (the oldest is dropped when it
overflows); once ready the queue is drained with a short stagger. If the
backend fails to load, every later request is dropped. No method raises into
the caller.
"""

import threading
from collections import deque
from typing import Callable, Deque, Optional, Tuple, Union

from ..core.interfaces import AudioState, IAudioBackend, IAudioEngine
from ..logger import get_logger
from ..note_utils import note_name_to_midi
from ..sound_cue import FALLBACK_NOTE, SoundCue, cue_for_note

logger = get_logger(__name__)

INCORRECT_NOTE = "E2"
START_JINGLE = (("C4", 0.0), ("E4", 0.1), ("G4", 0.2))
DRAIN_STAGGER = 0.05  # seconds between queued notes when draining


class NullAudioEngine(IAudioEngine):
    """Silent stand-in used when audio is disabled and in tests."""

    @property
    def state(self) -> AudioState:
        return AudioState.UNINITIALIZED

    def init(self) -> None:
        pass

    def play_note(self, note_name: str, duration: float = 0.25) -> None:
        pass

    def play_correct_sound(self, cue: Optional[Union[SoundCue, str]] = None) -> None:
        pass

    def play_incorrect_sound(self) -> None:
        pass

    def play_start_sound(self) -> None:
        pass

    def shutdown(self) -> None:
        pass


class AudioEngine(IAudioEngine):
    """Plays game sounds through an ``IAudioBackend``."""

    def __init__(
        self,
        backend_factory: Callable[[], IAudioBackend],
        volume: float = 0.6,
        queue_limit: int = 16,
        note_duration: float = 0.25,
        threaded: bool = True,
    ):
        """Initialize the engine; nothing is loaded until ``init()``.

        Args:
            backend_factory: Creates the backend when loading starts
            volume: Linear gain applied to rendered notes
            queue_limit: Notes kept while the backend is loading
            note_duration: Default note length in seconds
            threaded: Load the backend on a background thread
        """
        self._backend_factory = backend_factory
        self._backend: Optional[IAudioBackend] = None
        self._volume = volume
        self._note_duration = note_duration
        self._threaded = threaded
        self._state = AudioState.UNINITIALIZED
        self._queue: Deque[Tuple[str, float]] = deque(maxlen=max(queue_limit, 1))
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> AudioState:
        return self._state

    @property
    def queued(self) -> int:
        return len(self._queue)

    def init(self) -> None:
        with self._lock:
            if self._state is not AudioState.UNINITIALIZED:
                return
            self._state = AudioState.LOADING

        if self._threaded:
            self._thread = threading.Thread(target=self._load, name="audio-loader", daemon=True)
            self._thread.start()
        else:
            self._load()

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until loading finished; True if the engine is ready."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self._state is AudioState.READY

    def _load(self) -> None:
        try:
            backend = self._backend_factory()
            backend.load()
        except Exception as e:
            logger.error(f"Could not start audio backend: {e}")
            with self._lock:
                if self._state is not AudioState.LOADING:
                    return
                self._state = AudioState.FAILED
                dropped = len(self._queue)
                self._queue.clear()
            if dropped:
                logger.debug(f"Dropped {dropped} queued notes")
            return

        with self._lock:
            # Shut down while loading: the backend was never handed over
            abandoned = self._state is not AudioState.LOADING
            if not abandoned:
                self._backend = backend
                self._state = AudioState.READY
                pending = list(self._queue)
                self._queue.clear()

        if abandoned:
            try:
                backend.close()
            except Exception as e:
                logger.error(f"Error closing audio backend: {e}")
            logger.info("Audio shut down before it was ready")
            return

        logger.info("Audio ready")
        for i, (note_name, duration) in enumerate(pending):
            self._emit(note_name, duration, delay=i * DRAIN_STAGGER)

    def _emit(self, note_name: str, duration: float, delay: float = 0.0) -> None:
        midi = note_name_to_midi(note_name)
        if midi is None:
            logger.warning(f"Cannot play unknown note {note_name!r}")
            return
        try:
            buffer = self._backend.render(midi, duration) * self._volume
            self._backend.play(buffer, delay)
        except Exception as e:
            logger.warning(f"playNote failed for {note_name}: {e}")

    def play_note(self, note_name: str, duration: Optional[float] = None) -> None:
        duration = self._note_duration if duration is None else duration
        with self._lock:
            state = self._state
            if state in (AudioState.UNINITIALIZED, AudioState.LOADING):
                self._queue.append((note_name, duration))
                return
        if state is AudioState.FAILED:
            logger.debug(f"Audio unavailable, dropping {note_name}")
            return
        self._emit(note_name, duration)

    def play_correct_sound(self, cue: Optional[Union[SoundCue, str]] = None) -> None:
        if isinstance(cue, SoundCue):
            self.play_note(cue.note_name)
        elif isinstance(cue, str):
            self.play_note(cue_for_note(cue).note_name)
        else:
            self.play_note(FALLBACK_NOTE)

    def play_incorrect_sound(self) -> None:
        self.play_note(INCORRECT_NOTE)

    def play_start_sound(self) -> None:
        # The jingle is only worth playing in time; never queued
        if self._state is not AudioState.READY:
            return
        for note_name, delay in START_JINGLE:
            self._emit(note_name, self._note_duration, delay=delay)

    def shutdown(self) -> None:
        with self._lock:
            backend = self._backend
            self._backend = None
            self._queue.clear()
            self._state = AudioState.UNINITIALIZED
        if backend is not None:
            try:
                backend.close()
            except Exception as e:
                logger.error(f"Error closing audio backend: {e}")
            logger.info("Audio shut down")
