#!/usr/bin/env python3

import argparse
import random

from .audio import create_audio_engine
from .core.config import ConfigManager
from .instruments import INSTRUMENTS
from .logger import get_logger
from .logging_config import setup_logging
from .note_game import NoteGame
from .note_game_core import GameMode
from .scales import SCALES


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Fretboarder - find every position of a note on the fretboard"
    )

    # Game settings; anything omitted comes from the saved config
    parser.add_argument(
        "--instrument",
        type=str,
        choices=sorted(INSTRUMENTS),
        help="Instrument to train on.",
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=[mode.value for mode in GameMode],
        help="Game mode: note_cycle or scale_drill.",
    )
    parser.add_argument("--root", type=str, help="Scale root for scale_drill (e.g. C, F#, Bb).")
    parser.add_argument(
        "--scale",
        type=str,
        choices=list(SCALES),
        help="Scale for scale_drill.",
    )
    parser.add_argument(
        "--natural-only",
        action="store_true",
        default=None,
        help="Only natural notes in note_cycle mode.",
    )
    parser.add_argument("--start-fret", type=int, help="First fret of the practice range.")
    parser.add_argument("--end-fret", type=int, help="Last fret of the practice range.")
    parser.add_argument("--seed", type=int, help="Seed for the note order, for repeatable rounds.")

    # Audio settings
    parser.add_argument("--no-audio", action="store_true", help="Disable sound.")
    parser.add_argument("--sample-dir", type=str, help="Directory with guitar samples (E2.wav ...).")
    parser.add_argument("--device", type=int, help="Audio output device ID.")

    parser.add_argument(
        "--config-dir", type=str, help="Configuration directory (default: ~/.config/fretboarder)."
    )
    parser.add_argument(
        "--save", action="store_true", help="Save the selections given on the command line."
    )

    # Debugging
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    return parser.parse_args(argv)


def _selection_overrides(args):
    overrides = {
        "instrument": args.instrument,
        "mode": args.mode,
        "root": args.root,
        "scale": args.scale,
        "whole_notes_only": args.natural_only,
        "fret_start": args.start_fret,
        "fret_end": args.end_fret,
    }
    return {k: v for k, v in overrides.items() if v is not None}


def main(argv=None):
    """Main entry point for the Fretboarder game."""
    args = parse_arguments(argv)

    # Configure logging
    setup_logging(level="DEBUG" if args.debug else None)
    logger = get_logger(__name__)

    config_manager = ConfigManager(args.config_dir)
    overrides = _selection_overrides(args)
    if overrides and args.save:
        config_manager.update_config("game", overrides)

    audio_config = config_manager.get_config("audio")
    if args.no_audio:
        audio_config["enabled"] = False
    if args.sample_dir:
        audio_config["sample_dir"] = args.sample_dir
    if args.device is not None:
        audio_config["device_id"] = args.device

    # The UI pulls in pygame; keep it out of import time for the CLI and tests
    from .ui import PygameUI

    game = None
    try:
        rng = random.Random(args.seed) if args.seed is not None else None
        game = NoteGame.from_config(config_manager, audio=create_audio_engine(audio_config), rng=rng)
        if "instrument" in overrides:
            game.set_instrument(overrides["instrument"])
        game.apply_selections(overrides)
        logger.info(f"Selections: {game.selections()}")

        ui = PygameUI()
        ui.run(game)

    except Exception:
        logger.exception("An unhandled error occurred in the main application.")
        raise
    finally:
        logger.info("Fretboarder is shutting down.")


if __name__ == "__main__":
    main()
