"""Sound output for Fretboarder."""

from typing import Any, Dict, Optional

from ..core.interfaces import IAudioEngine
from .engine import AudioEngine, NullAudioEngine


def create_audio_engine(config: Optional[Dict[str, Any]] = None) -> IAudioEngine:
    """Build the engine described by an ``audio`` config section.

    The sounddevice backend is imported only when the engine starts loading,
    so a machine without PortAudio still gets a working (silent) game.
    """
    config = config or {}
    if not config.get("enabled", True):
        return NullAudioEngine()

    def backend_factory():
        from .output import SoundDeviceBackend

        return SoundDeviceBackend(
            sample_rate=config.get("sample_rate", 44100),
            sample_dir=config.get("sample_dir"),
            device_id=config.get("device_id"),
        )

    return AudioEngine(
        backend_factory,
        volume=config.get("volume", 0.6),
        queue_limit=config.get("queue_limit", 16),
        note_duration=config.get("note_duration", 0.25),
    )


__all__ = ["AudioEngine", "NullAudioEngine", "create_audio_engine"]
