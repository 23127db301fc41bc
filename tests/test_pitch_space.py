import unittest

import pytest

from fretboarder.pitch_space import ALL_NOTES, WHOLE_NOTES, PitchSpace


class TestPitchSpace(unittest.TestCase):
    def test_catalog(self):
        self.assertEqual(len(ALL_NOTES), 12)
        self.assertEqual(len(set(ALL_NOTES)), 12)
        self.assertEqual(ALL_NOTES[0], "A")
        self.assertTrue(all(note in ALL_NOTES for note in WHOLE_NOTES))

    def test_index(self):
        self.assertEqual(PitchSpace.index("A"), 0)
        self.assertEqual(PitchSpace.index("G#"), 11)
        self.assertIsNone(PitchSpace.index("Bb"))

    def test_transpose_unknown_note(self):
        self.assertIsNone(PitchSpace.transpose("H", 3))
        self.assertIsNone(PitchSpace.transpose("Db", 1))

    def test_interval(self):
        self.assertEqual(PitchSpace.interval("C", "A"), 9)
        self.assertEqual(PitchSpace.interval("A", "C"), 3)
        self.assertEqual(PitchSpace.interval("E", "E"), 0)
        self.assertIsNone(PitchSpace.interval("C", "X"))

    def test_is_natural(self):
        self.assertTrue(PitchSpace.is_natural("B"))
        self.assertFalse(PitchSpace.is_natural("F#"))

    def test_from_midi(self):
        self.assertEqual(PitchSpace.from_midi(60), "C")
        self.assertEqual(PitchSpace.from_midi(40), "E")
        self.assertEqual(PitchSpace.from_midi(69), "A")


@pytest.mark.parametrize(
    "note, semitones, expected",
    [
        ("E", 1, "F"),
        ("G#", 1, "A"),
        ("A", -1, "G#"),
        ("C", 12, "C"),
        ("C", 25, "C#"),
        ("D", -14, "C"),
    ],
)
def test_transpose_wraps(note, semitones, expected):
    assert PitchSpace.transpose(note, semitones) == expected


if __name__ == "__main__":
    unittest.main()
