import unittest

import pytest

from fretboarder.sound_cue import (
    cue_for_note,
    cue_for_position,
    cue_from_midi,
    describe,
    string_fret_midi,
)


class TestSoundCue(unittest.TestCase):
    def test_open_high_e(self):
        cue = cue_for_position("Guitar", 0, 0)
        self.assertEqual(cue.note_name, "E4")
        self.assertEqual(cue.midi, 64)
        self.assertAlmostEqual(cue.frequency, 329.63, places=2)
        self.assertEqual(str(cue), "E4")

    def test_unknown_instrument_falls_back_to_guitar(self):
        self.assertEqual(string_fret_midi("Banjo", 5, 3), 43)
        self.assertEqual(string_fret_midi(None, 0, 1), 65)

    def test_bad_string_falls_back_to_first(self):
        self.assertEqual(string_fret_midi("Bass", 9, 2), 45)

    def test_cue_for_note(self):
        self.assertEqual(cue_for_note("A").frequency, 440.0)
        self.assertEqual(cue_for_note("A", octave=2).note_name, "A2")
        self.assertEqual(cue_for_note("Bb3").note_name, "A#3")

    def test_unresolvable_note_uses_fallback(self):
        self.assertEqual(cue_for_note("xyz").note_name, "E4")
        self.assertEqual(cue_for_note(None).note_name, "E4")
        self.assertEqual(cue_for_note("").note_name, "E4")

    def test_describe(self):
        self.assertEqual(describe(cue_from_midi(64)), "E4 (329.63 Hz)")
        self.assertEqual(describe(cue_from_midi(69)), "A4 (440.00 Hz)")


@pytest.mark.parametrize(
    "instrument, string_index, fret_index, expected",
    [
        ("Guitar", 5, 0, "E2"),
        ("Guitar", 5, 12, "E3"),
        ("Guitar", 1, 1, "C4"),
        ("Bass", 3, 0, "E1"),
        ("Ukulele", 3, 0, "G4"),
        ("Mandolin", 0, 0, "E5"),
    ],
)
def test_position_pitch(instrument, string_index, fret_index, expected):
    assert cue_for_position(instrument, string_index, fret_index).note_name == expected


if __name__ == "__main__":
    unittest.main()
