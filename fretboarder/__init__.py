"""Fretboarder - a fretboard note-finding trainer."""

__version__ = "0.1.0"
