"""Core components for the Fretboarder application."""

# Import interfaces for easier access
from .interfaces import AudioState, IAudioBackend, IAudioEngine

__all__ = ["AudioState", "IAudioBackend", "IAudioEngine"]
