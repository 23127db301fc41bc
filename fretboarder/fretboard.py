"""Fretboard pitch grid and position lookup.

The layout is a string x fret grid of pitch classes derived from a tuning.
Everything here is a pure function of its arguments; layouts are plain tuples
so they can be shared freely between the game core and the front end.
"""

from typing import Iterable, List, Optional, Sequence

from .logger import get_logger
from .note_types import FretboardLayout, FretCoordinate, FretRange, Tuning
from .pitch_space import PitchClass, PitchSpace

logger = get_logger(__name__)


def build_layout(tuning: Sequence[PitchClass], fret_count: int) -> FretboardLayout:
    """Build the pitch-class grid for ``tuning``.

    Each string starts at its open pitch class and walks ``fret_count - 1``
    semitones up, wrapping mod 12. A ``fret_count`` below 1 still yields the
    open-string column.

    Args:
        tuning: Open pitch class of every string, highest-pitched first
        fret_count: Number of fret columns including the open string

    Returns:
        One tuple of pitch classes per string, indexed by fret
    """
    columns = max(int(fret_count), 1)
    layout = []
    for open_note in tuning:
        string = [open_note]
        for step in range(1, columns):
            string.append(PitchSpace.transpose(open_note, step))
        layout.append(tuple(string))

    logger.debug("Built layout for tuning %s with %d frets", list(tuning), columns)
    return tuple(layout)


def note_at(layout: FretboardLayout, coordinate: FretCoordinate) -> Optional[PitchClass]:
    """Pitch class at ``coordinate`` or None when it is off the board."""
    if not 0 <= coordinate.string_index < len(layout):
        return None
    string = layout[coordinate.string_index]
    if not 0 <= coordinate.fret_index < len(string):
        return None
    return string[coordinate.fret_index]


def find_positions(
    targets: Iterable[PitchClass], fret_range: FretRange, layout: FretboardLayout
) -> List[FretCoordinate]:
    """Every coordinate in ``fret_range`` whose pitch class is in ``targets``.

    Results are string-major, fret-minor. Frets past the end of a string are
    skipped.
    """
    wanted = set(targets)
    positions = []
    if not wanted:
        return positions

    for string_index, string in enumerate(layout):
        last = min(fret_range.end, len(string) - 1)
        for fret_index in range(fret_range.start, last + 1):
            if string[fret_index] in wanted:
                positions.append(FretCoordinate(string_index, fret_index))
    return positions


def notes_in_range(
    layout: FretboardLayout, fret_range: FretRange, whole_notes_only: bool = False
) -> List[PitchClass]:
    """Distinct pitch classes present in ``fret_range``, in first-seen order."""
    seen = []
    for string in layout:
        last = min(fret_range.end, len(string) - 1)
        for fret_index in range(fret_range.start, last + 1):
            note = string[fret_index]
            if whole_notes_only and not PitchSpace.is_natural(note):
                continue
            if note not in seen:
                seen.append(note)
    return seen


def tuning_of(layout: FretboardLayout) -> Tuning:
    """The open-string column of ``layout``."""
    return tuple(string[0] for string in layout)
