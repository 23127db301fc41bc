"""Translate fretboard positions and note names into audible cues.

A cue carries a sounding pitch (MIDI number, SPN name and frequency). Octave
matters here, so positions are resolved through each instrument's open-string
MIDI numbers rather than through pitch classes. How the cue becomes sound is
up to the audio engine.
"""

from dataclasses import dataclass
from typing import Optional

from .instruments import DEFAULT_INSTRUMENT, INSTRUMENTS
from .logger import get_logger
from .note_utils import midi_to_frequency, midi_to_note_name, note_name_to_midi

logger = get_logger(__name__)

DEFAULT_OCTAVE = 4
FALLBACK_NOTE = "E4"


@dataclass(frozen=True)
class SoundCue:
    """A sounding pitch ready for the audio engine."""

    note_name: str  # SPN, e.g. 'E4'
    midi: int
    frequency: float  # Hz

    def __str__(self):
        return self.note_name


def string_fret_midi(instrument: Optional[str], string_index: int, fret_index: int) -> int:
    """Sounding MIDI number of ``fret_index`` on ``string_index``.

    Unknown instruments fall back to the guitar; a string index the instrument
    does not have falls back to its first string.
    """
    inst = INSTRUMENTS.get(instrument or DEFAULT_INSTRUMENT)
    if inst is None:
        logger.debug("No open-string pitches for %r, using %s", instrument, DEFAULT_INSTRUMENT)
        inst = INSTRUMENTS[DEFAULT_INSTRUMENT]

    if 0 <= string_index < len(inst.open_midi):
        base = inst.open_midi[string_index]
    else:
        base = inst.open_midi[0]
    return base + fret_index


def cue_from_midi(midi: int) -> SoundCue:
    return SoundCue(midi_to_note_name(midi), midi, midi_to_frequency(midi))


def cue_for_position(instrument: Optional[str], string_index: int, fret_index: int) -> SoundCue:
    return cue_from_midi(string_fret_midi(instrument, string_index, fret_index))


def cue_for_note(note_name: Optional[str], octave: int = DEFAULT_OCTAVE) -> SoundCue:
    """Cue for a note name; a bare pitch class is placed in ``octave``.

    Unparseable names yield the fallback cue (E4) rather than an error.
    """
    midi = note_name_to_midi(note_name, default_octave=octave) if note_name else None
    if midi is None:
        logger.debug("Cannot resolve note %r, using %s", note_name, FALLBACK_NOTE)
        midi = note_name_to_midi(FALLBACK_NOTE)
    return cue_from_midi(midi)


def describe(cue: SoundCue) -> str:
    """Short label such as 'E4 (329.63 Hz)' for logs and the CLI."""
    return f"{cue.note_name} ({cue.frequency:.2f} Hz)"
