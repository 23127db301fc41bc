"""Centralized logging configuration for Fretboarder.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "fretboarder": logging.INFO,
    "fretboarder.main": logging.INFO,
    "fretboarder.cli": logging.WARNING,
    # Music theory and board model
    "fretboarder.pitch_space": logging.INFO,
    "fretboarder.note_matcher": logging.INFO,  # Set to DEBUG for detailed parsing info
    "fretboarder.fretboard": logging.INFO,
    "fretboarder.scales": logging.INFO,
    "fretboarder.sound_cue": logging.INFO,
    # Game components
    "fretboarder.note_game_core": logging.INFO,
    "fretboarder.note_game": logging.INFO,
    "fretboarder.scheduler": logging.WARNING,  # Fires every frame, keep quiet
    "fretboarder.core": logging.INFO,
    "fretboarder.audio": logging.INFO,
    "fretboarder.ui": logging.WARNING,  # UI modules often noisy, keep at WARNING
    "fretboarder.logger": logging.WARNING,  # Logger module itself should be quiet
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'fretboarder' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("fretboarder"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Apply module-specific levels. Only the top-level names get the handler;
    # submodules propagate up to them.
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name if module_name else "")
        logger.setLevel(module_level)

        if module_name in ("", "fretboarder"):
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
            logger.addHandler(_console_handler)
            logger.propagate = False

    # Confirm setup complete
    logging.getLogger("fretboarder").info("Logging configuration complete")
