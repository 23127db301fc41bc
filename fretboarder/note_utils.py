"""Utility functions for working with MIDI numbers, note names and frequencies."""

import logging
from typing import Optional, Union

import numpy as np

from .note_matcher import NoteMatcher
from .pitch_space import PitchSpace

# Get logger for this module
logger = logging.getLogger(__name__)

A4_MIDI = 69
A4_FREQUENCY = 440.0


def midi_to_note_name(midi_number: int) -> str:
    """Convert a MIDI number to a note name in Scientific Pitch Notation.

    Args:
        midi_number: MIDI note number (60 is middle C)

    Returns:
        Sharp-spelled note name with octave (e.g., 'C4', 'A#2')

    Note:
        - Middle C is C4 (MIDI 60)
        - Octave numbers change between B and C (e.g., B3 -> C4)
    """
    midi_number = int(midi_number)
    note_name = PitchSpace.from_midi(midi_number)
    octave = (midi_number // 12) - 1
    return f"{note_name}{octave}"


def note_name_to_midi(note_name: str, default_octave: int = 4) -> Optional[int]:
    """Convert a note name such as 'E2' or 'Bb' to a MIDI number.

    Names without an octave use ``default_octave``. Returns None for names
    that cannot be parsed.
    """
    parsed = NoteMatcher.parse(note_name)
    if parsed is None:
        return None
    pitch_class, octave = parsed
    if octave is None:
        octave = default_octave

    # B# and Cb cross the octave boundary in SPN
    spelled = str(note_name).strip()[:2].capitalize()
    if spelled == "B#":
        octave += 1
    elif spelled == "Cb":
        octave -= 1

    return (octave + 1) * 12 + PitchSpace.C_BASED.index(pitch_class)


def midi_to_frequency(midi_number: Union[int, float, np.ndarray]) -> Union[float, np.ndarray]:
    """Equal-tempered frequency in Hz for a MIDI number (A4 = 440 Hz)."""
    result = A4_FREQUENCY * np.power(2.0, (np.asarray(midi_number, dtype=float) - A4_MIDI) / 12.0)
    if np.ndim(result) == 0:
        return float(result)
    return result
