import logging
import unittest

import pytest

from fretboarder import main as fretboarder_main
from fretboarder.logger import get_logger
from fretboarder.logging_config import MODULE_LOG_LEVELS, setup_logging


class TestLoggingConfig(unittest.TestCase):
    def tearDown(self):
        setup_logging()

    def test_module_levels(self):
        setup_logging()
        for name, level in MODULE_LOG_LEVELS.items():
            self.assertEqual(logging.getLogger(name).level, level)

    def test_override_level(self):
        setup_logging(level="debug")
        self.assertEqual(logging.getLogger("fretboarder.scheduler").level, logging.DEBUG)
        self.assertEqual(logging.getLogger("").level, logging.ERROR)

    def test_single_shared_handler(self):
        setup_logging()
        setup_logging()
        package = logging.getLogger("fretboarder")
        self.assertEqual(len(package.handlers), 1)
        self.assertFalse(package.propagate)
        self.assertIs(package.handlers[0], logging.getLogger("").handlers[0])

    def test_invalid_level_keeps_defaults(self):
        setup_logging(level="LOUD")
        self.assertEqual(logging.getLogger("fretboarder").level, logging.INFO)

    def test_get_logger_is_cached(self):
        self.assertIs(get_logger("fretboarder.fretboard"), get_logger("fretboarder.fretboard"))
        self.assertEqual(get_logger("fretboarder.fretboard").name, "fretboarder.fretboard")


class _StopAfterLogging(Exception):
    pass


@pytest.mark.parametrize("argv, expected", [([], None), (["--debug"], "DEBUG")])
def test_main_keeps_module_levels_unless_debugging(monkeypatch, argv, expected):
    levels = []

    def record(level=None):
        levels.append(level)
        raise _StopAfterLogging()

    monkeypatch.setattr(fretboarder_main, "setup_logging", record)
    with pytest.raises(_StopAfterLogging):
        fretboarder_main.main(argv)
    assert levels == [expected]


def test_default_setup_keeps_quiet_modules_quiet():
    setup_logging(None)
    assert logging.getLogger("fretboarder.scheduler").level == logging.WARNING
    assert logging.getLogger("fretboarder.ui").level == logging.WARNING
    assert logging.getLogger("fretboarder.note_game").level == logging.INFO


if __name__ == "__main__":
    unittest.main()
