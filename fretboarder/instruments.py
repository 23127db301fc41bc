"""Instrument catalog: tuning, fret count and open-string pitches."""

from typing import Dict

from .fretboard import build_layout
from .note_types import FretboardLayout, Instrument

INSTRUMENTS: Dict[str, Instrument] = {
    inst.name: inst
    for inst in (
        # High E4 (top) -> Low E2 (bottom)
        Instrument("Guitar", ("E", "B", "G", "D", "A", "E"), 13, (64, 59, 55, 50, 45, 40)),
        # G2, D2, A1, E1
        Instrument("Bass", ("G", "D", "A", "E"), 13, (43, 38, 33, 28)),
        # A4, E4, C4, G4 (re-entrant)
        Instrument("Ukulele", ("A", "E", "C", "G"), 13, (69, 64, 60, 67)),
        # E5, A4, D4, G3
        Instrument("Mandolin", ("E", "A", "D", "G"), 13, (76, 69, 62, 55)),
    )
}

DEFAULT_INSTRUMENT = "Guitar"


def get_instrument(name: str) -> Instrument:
    """Look up an instrument by name.

    Raises:
        ValueError: If the instrument is not in the catalog
    """
    if name not in INSTRUMENTS:
        raise ValueError(f"Unknown instrument: {name}")
    return INSTRUMENTS[name]


def layout_for(instrument: Instrument) -> FretboardLayout:
    return build_layout(instrument.tuning, instrument.frets)
