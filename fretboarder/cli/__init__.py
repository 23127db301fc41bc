"""Command-line tools for inspecting fretboards, scales and sound cues."""

from .main import cli

__all__ = ["cli"]
