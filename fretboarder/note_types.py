"""Type definitions for the Fretboarder project."""

from dataclasses import dataclass
from typing import Tuple

from .pitch_space import PitchClass

Tuning = Tuple[PitchClass, ...]
FretboardLayout = Tuple[Tuple[PitchClass, ...], ...]


@dataclass(frozen=True, order=True)
class FretCoordinate:
    """Represents a position on the fretboard."""

    string_index: int  # 0 is the highest-pitched string
    fret_index: int  # 0 for open string

    @property
    def key(self) -> str:
        return f"{self.string_index}-{self.fret_index}"

    @classmethod
    def from_key(cls, key: str) -> "FretCoordinate":
        """Parse a ``"{string}-{fret}"`` key back into a coordinate.

        Raises:
            ValueError: If the key is not two dash-separated integers
        """
        string_part, sep, fret_part = key.partition("-")
        if not sep:
            raise ValueError(f"Invalid fret key: {key!r}")
        return cls(int(string_part), int(fret_part))

    def __str__(self):
        return f"S{self.string_index}F{self.fret_index}"


@dataclass(frozen=True)
class FretRange:
    """Closed interval of fret indices, ``start <= end``."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid fret range [{self.start}, {self.end}]")

    def contains(self, fret_index: int) -> bool:
        return self.start <= fret_index <= self.end

    def frets(self) -> range:
        return range(self.start, self.end + 1)

    def with_start(self, fret_index: int) -> "FretRange":
        """Move the start marker; moving it past the end collapses the range."""
        if fret_index > self.end:
            return FretRange(fret_index, fret_index)
        return FretRange(fret_index, self.end)

    def with_end(self, fret_index: int) -> "FretRange":
        """Move the end marker; moving it before the start collapses the range."""
        if fret_index < self.start:
            return FretRange(fret_index, fret_index)
        return FretRange(self.start, fret_index)

    def clamp(self, max_fret: int) -> "FretRange":
        end = min(self.end, max_fret)
        return FretRange(min(self.start, end), end)

    def __str__(self):
        return f"[{self.start}, {self.end}]"


@dataclass(frozen=True)
class Scale:
    """A named set of semitone offsets from a root."""

    name: str
    intervals: Tuple[int, ...]  # each in [0, 11], root first

    def __post_init__(self):
        if any(not 0 <= i <= 11 for i in self.intervals):
            raise ValueError(f"Scale {self.name!r} has an interval outside [0, 11]")


@dataclass(frozen=True)
class Instrument:
    """A fretted instrument: tuning, fret count and open-string pitches."""

    name: str
    tuning: Tuning  # highest-pitched string first
    frets: int  # number of fret columns including the open string
    open_midi: Tuple[int, ...]  # MIDI number of each open string, same order

    @property
    def string_count(self) -> int:
        return len(self.tuning)

    @property
    def max_fret(self) -> int:
        return max(self.frets - 1, 0)
