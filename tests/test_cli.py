import unittest

from click.testing import CliRunner

from fretboarder.cli.main import cli


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_positions(self):
        result = self.runner.invoke(cli, ["positions", "E"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("E on Guitar, frets [0, 12]: 8 positions", result.output)

    def test_positions_flat_and_range(self):
        result = self.runner.invoke(cli, ["positions", "Bb", "-i", "Bass", "-s", "0", "-e", "5"])
        self.assertEqual(result.exit_code, 0, result.output)
        # G string fret 3 and A string fret 1; the D and E strings only reach A# past fret 5
        self.assertIn("A# on Bass, frets [0, 5]: 2 positions", result.output)

    def test_positions_banner(self):
        result = self.runner.invoke(cli, ["positions", "C", "--banner"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertGreater(len(result.output.splitlines()), 8)

    def test_positions_bad_note(self):
        result = self.runner.invoke(cli, ["positions", "H"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Unknown note", result.output)

    def test_positions_bad_range(self):
        result = self.runner.invoke(cli, ["positions", "E", "-s", "9", "-e", "3"])
        self.assertNotEqual(result.exit_code, 0)

    def test_scale(self):
        result = self.runner.invoke(cli, ["scale", "C", "Major"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("C Major: C D E F G A B", result.output)
        self.assertIn("48 positions on Guitar", result.output)

    def test_scale_bad_root(self):
        result = self.runner.invoke(cli, ["scale", "H", "Major"])
        self.assertNotEqual(result.exit_code, 0)

    def test_layout(self):
        result = self.runner.invoke(cli, ["layout", "-i", "Ukulele", "--natural-only"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Ukulele: A E C G (13 frets)", result.output)
        self.assertIn("Notes: A B C D E F G", result.output)

    def test_cue(self):
        result = self.runner.invoke(cli, ["cue", "5:0"])
        self.assertEqual(result.output.strip(), "E2 (82.41 Hz)")
        result = self.runner.invoke(cli, ["cue", "A"])
        self.assertEqual(result.output.strip(), "A4 (440.00 Hz)")
        result = self.runner.invoke(cli, ["cue", "x:y"])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
