"""The twelve pitch classes and the interval math over them."""

from typing import ClassVar, Dict, List, Optional, Tuple, TypeAlias

from .logger import get_logger

logger = get_logger(__name__)

PitchClass: TypeAlias = str

# Canonical order, index 0-11. A comes first to match the instrument catalog.
ALL_NOTES: Tuple[PitchClass, ...] = (
    "A",
    "A#",
    "B",
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
)

# Natural notes only, in the same order
WHOLE_NOTES: Tuple[PitchClass, ...] = ("A", "B", "C", "D", "E", "F", "G")

PITCH_CLASS_COUNT = len(ALL_NOTES)

_NOTE_INDEX: Dict[PitchClass, int] = {note: i for i, note in enumerate(ALL_NOTES)}


class PitchSpace:
    """Rotational arithmetic over the 12 pitch classes."""

    # C-based semitone index, as used for MIDI numbers and octaves
    C_BASED: ClassVar[List[PitchClass]] = [
        "C",
        "C#",
        "D",
        "D#",
        "E",
        "F",
        "F#",
        "G",
        "G#",
        "A",
        "A#",
        "B",
    ]

    @staticmethod
    def is_pitch_class(note: object) -> bool:
        return isinstance(note, str) and note in _NOTE_INDEX

    @staticmethod
    def index(note: PitchClass) -> Optional[int]:
        """Return the 0-11 index of ``note`` or None if it is not a pitch class."""
        return _NOTE_INDEX.get(note)

    @staticmethod
    def from_index(index: int) -> PitchClass:
        return ALL_NOTES[index % PITCH_CLASS_COUNT]

    @classmethod
    def transpose(cls, note: PitchClass, semitones: int) -> Optional[PitchClass]:
        """Move ``note`` by ``semitones`` (negative allowed), wrapping mod 12.

        Returns None when ``note`` is not a recognised pitch class.
        """
        start = cls.index(note)
        if start is None:
            logger.debug("Cannot transpose unknown pitch class %r", note)
            return None
        return cls.from_index(start + semitones)

    @classmethod
    def interval(cls, low: PitchClass, high: PitchClass) -> Optional[int]:
        """Ascending semitone distance from ``low`` to ``high`` in [0, 11]."""
        a = cls.index(low)
        b = cls.index(high)
        if a is None or b is None:
            return None
        return (b - a) % PITCH_CLASS_COUNT

    @staticmethod
    def is_natural(note: PitchClass) -> bool:
        return note in WHOLE_NOTES

    @classmethod
    def from_midi(cls, midi_number: int) -> PitchClass:
        return cls.C_BASED[midi_number % PITCH_CLASS_COUNT]
