import re
from typing import Optional, Tuple

from .logger import get_logger
from .pitch_space import PitchClass, PitchSpace

# Get logger for this module
logger = get_logger(__name__)

# Compile regex to extract note name and octave
# This pattern matches:
# - Note name (A-G, case insensitive)
# - Optional accidental (#, b, or a doubled one)
# - Optional octave number (0-9+)
NOTE_PATTERN = re.compile(r"^([A-Ga-g](?:##|bb|#|b)?)(-?[0-9]*)$")

# Spellings that do not reduce by a simple flat->sharp swap
ENHARMONIC_MAP = {
    "B#": "C",
    "E#": "F",
    "Cb": "B",
    "Fb": "E",
    "A##": "B",
    "B##": "C#",
    "C##": "D",
    "D##": "E",
    "E##": "F#",
    "F##": "G",
    "G##": "A",
    "Abb": "G",
    "Bbb": "A",
    "Cbb": "A#",
    "Dbb": "C",
    "Ebb": "D",
    "Fbb": "D#",
    "Gbb": "F",
}


class NoteMatcher:
    """
    Encapsulates logic for turning user-facing note names into pitch classes,
    including normalization and enharmonic equivalence.
    """

    @staticmethod
    def normalize_to_sharp(note: str) -> str:
        flat_to_sharp = {
            "Ab": "G#",
            "Bb": "A#",
            "Db": "C#",
            "Eb": "D#",
            "Gb": "F#",
        }
        if len(note) > 1 and note[1] == "b" and note[:3] not in ENHARMONIC_MAP:
            return flat_to_sharp.get(note[:2], note[:2]) + note[2:]
        return note

    @classmethod
    def parse(cls, name: object) -> Optional[Tuple[PitchClass, Optional[int]]]:
        """Split a note name into its pitch class and optional octave.

        Args:
            name: A note name such as 'A', 'Bb', 'C#4' or 'E##2'

        Returns:
            ``(pitch_class, octave)`` with the pitch class sharp-spelled, or
            None if the name cannot be parsed
        """
        text = str(name).strip() if name is not None else ""
        if not text:
            return None

        match = NOTE_PATTERN.match(text)
        if not match:
            logger.debug("Invalid note format: '%s'", text)
            return None

        spelled = match.group(1)
        spelled = spelled[0].upper() + spelled[1:]
        octave = int(match.group(2)) if match.group(2) not in ("", "-") else None

        if spelled in ENHARMONIC_MAP:
            pitch_class = ENHARMONIC_MAP[spelled]
        else:
            pitch_class = cls.normalize_to_sharp(spelled)

        if not PitchSpace.is_pitch_class(pitch_class):
            logger.debug("Unrecognised spelling '%s' (from '%s')", spelled, text)
            return None

        logger.debug("Parsed '%s' -> %s (octave: %s)", text, pitch_class, octave)
        return pitch_class, octave

    @classmethod
    def pitch_class(cls, name: object) -> Optional[PitchClass]:
        """Return the sharp-spelled pitch class of ``name`` or None."""
        parsed = cls.parse(name)
        return parsed[0] if parsed else None
