"""Defines the core interfaces for the Fretboarder application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..sound_cue import SoundCue


class AudioState(Enum):
    """Lifecycle of an audio engine."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class IAudioEngine(ABC):
    """Interface for the sound collaborator of the game.

    Every method is fire-and-forget: implementations queue or drop requests
    they cannot serve yet and never raise into the caller.
    """

    @property
    @abstractmethod
    def state(self) -> AudioState:
        """Current lifecycle state."""
        pass

    @abstractmethod
    def init(self) -> None:
        """Begin preparing the backend; safe to call repeatedly."""
        pass

    @abstractmethod
    def play_note(self, note_name: str, duration: float = 0.25) -> None:
        """Play a note given in scientific pitch notation (e.g., 'E4')."""
        pass

    @abstractmethod
    def play_correct_sound(self, cue: Optional[Union[SoundCue, str]] = None) -> None:
        """Play the confirmation for a correct tap."""
        pass

    @abstractmethod
    def play_incorrect_sound(self) -> None:
        """Play the sound for a wrong tap."""
        pass

    @abstractmethod
    def play_start_sound(self) -> None:
        """Play the round-start jingle."""
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Release backend resources."""
        pass

    @property
    def is_ready(self) -> bool:
        return self.state is AudioState.READY


class IAudioBackend(ABC):
    """Interface for something that turns note requests into sound."""

    @abstractmethod
    def load(self) -> None:
        """Prepare the backend; may block and may raise on failure."""
        pass

    @abstractmethod
    def render(self, midi: int, duration: float) -> np.ndarray:
        """Render one note as mono float32 samples."""
        pass

    @abstractmethod
    def play(self, buffer: np.ndarray, delay: float = 0.0) -> None:
        """Queue ``buffer`` for output ``delay`` seconds from now."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Stop output and release the device."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of rendered buffers."""
        pass
