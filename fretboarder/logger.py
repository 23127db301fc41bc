"""Centralized lazy-loading logger accessor for Fretboarder."""
import logging
from typing import Dict

# Module-level cache for loggers
_logger_cache: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a lazily initialized logger with the given name.

    Levels and handlers are applied by ``logging_config.setup_logging``; this
    accessor only caches the logger objects so modules can grab one at import
    time without caring whether logging was configured yet.

    Args:
        name: The full module name (e.g., 'fretboarder.fretboard')

    Returns:
        A logger instance
    """
    if name not in _logger_cache:
        _logger_cache[name] = logging.getLogger(name)
    return _logger_cache[name]
