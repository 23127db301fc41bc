"""Game controller: the single actor that drives a session.

``NoteGame`` holds the current ``SessionState`` and replaces it through the
pure transitions in ``note_game_core``. It also owns what the state machine
deliberately does not: the player's selections, presentation timers, sound
requests and detection of a completed round. The front end calls ``tap`` on
input and ``update`` once per frame.
"""

import random
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from . import note_game_core as core
from .audio import NullAudioEngine
from .core.config import DEFAULT_CONFIGS, ConfigManager
from .core.events import GameEvents
from .core.interfaces import IAudioEngine
from .fretboard import note_at
from .instruments import DEFAULT_INSTRUMENT, get_instrument, layout_for
from .logger import get_logger
from .note_game_core import GameMode, GameState, SessionState
from .note_matcher import NoteMatcher
from .note_types import FretCoordinate, FretRange
from .pitch_space import PitchSpace
from .scales import DEFAULT_SCALE, SCALES
from .scheduler import Scheduler
from .sound_cue import cue_for_position

# Get logger for this module
logger = get_logger(__name__)

ADVANCE_TIMER = "advance"
REVIEW_TIMER = "review"
FLASH_TIMER = "flash"
SHAKE_TIMER = "shake"


class TapResult(Enum):
    IGNORED = "ignored"  # no round, outside the range or off the board
    REVEALED = "revealed"  # label shown, nothing scored
    CORRECT = "correct"
    ALREADY_FOUND = "already_found"
    INCORRECT = "incorrect"


class FretStatus(Enum):
    """How a single fret should be drawn."""

    NORMAL = "normal"
    OUT_OF_RANGE = "out_of_range"
    DISABLED = "disabled"  # accidental while only natural notes count
    HINT = "hint"  # unfound target shown during review or practice
    FLASH = "flash"
    FOUND = "found"


class NoteGame:
    """A fretboard note-finding game for one player"""

    def __init__(
        self,
        instrument: str = DEFAULT_INSTRUMENT,
        audio: Optional[IAudioEngine] = None,
        timing: Optional[Dict[str, float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the game.

        Args:
            instrument: Catalog name of the instrument to train on
            audio: Sound collaborator; a silent one is used when omitted
            timing: Overrides for the presentation windows, in seconds
            rng: Random source for note queues, for reproducible rounds
        """
        self.audio = audio if audio is not None else NullAudioEngine()
        self.timing = dict(DEFAULT_CONFIGS["timing"])
        self.timing.update(timing or {})
        self.rng = rng or random.Random()
        self.events = GameEvents()
        self.scheduler = Scheduler()
        self.state: SessionState = core.initial_state()
        self._generation = 0

        self.instrument = get_instrument(instrument)
        self.layout = layout_for(self.instrument)
        self.fret_range = FretRange(0, self.instrument.max_fret)
        self.game_mode = GameMode.NOTE_CYCLE
        self.root = "C"
        self.scale = DEFAULT_SCALE
        self.whole_notes_only = False

        logger.debug("NoteGame initialized for %s", self.instrument.name)

    @classmethod
    def from_config(
        cls,
        config_manager: ConfigManager,
        audio: Optional[IAudioEngine] = None,
        rng: Optional[random.Random] = None,
    ) -> "NoteGame":
        """Create a game with the saved selections and timing."""
        game_config = config_manager.get_config("game")
        game = cls(
            instrument=game_config.get("instrument", DEFAULT_INSTRUMENT),
            audio=audio,
            timing=config_manager.get_config("timing"),
            rng=rng,
        )
        game.apply_selections(game_config)
        return game

    # --- Selections (only while no round is active) ---

    def _can_configure(self) -> bool:
        if self.state.is_active:
            logger.debug("Selections are locked while a round is active")
            return False
        return True

    def apply_selections(self, selections: Dict[str, Any]) -> None:
        """Apply a ``game`` config section; unknown values are skipped."""
        if "mode" in selections:
            self.set_game_mode(selections["mode"])
        if "root" in selections:
            self.set_root(selections["root"])
        if "scale" in selections:
            self.set_scale(selections["scale"])
        if "whole_notes_only" in selections:
            self.set_whole_notes_only(bool(selections["whole_notes_only"]))
        start = selections.get("fret_start", self.fret_range.start)
        end = selections.get("fret_end", self.fret_range.end)
        self.set_fret_end(self.instrument.max_fret)
        self.set_fret_start(int(start))
        self.set_fret_end(int(end))

    def selections(self) -> Dict[str, Any]:
        """Current selections in ``game`` config form."""
        return {
            "instrument": self.instrument.name,
            "mode": self.game_mode.value,
            "root": self.root,
            "scale": self.scale,
            "fret_start": self.fret_range.start,
            "fret_end": self.fret_range.end,
            "whole_notes_only": self.whole_notes_only,
        }

    def set_instrument(self, name: str) -> bool:
        if not self._can_configure():
            return False
        self.instrument = get_instrument(name)
        self.layout = layout_for(self.instrument)
        self.fret_range = self.fret_range.clamp(self.instrument.max_fret)
        logger.info("Instrument set to %s", name)
        return True

    def set_fret_start(self, fret_index: int) -> bool:
        if not self._can_configure():
            return False
        fret_index = min(max(fret_index, 0), self.instrument.max_fret)
        self.fret_range = self.fret_range.with_start(fret_index)
        return True

    def set_fret_end(self, fret_index: int) -> bool:
        if not self._can_configure():
            return False
        fret_index = min(max(fret_index, 0), self.instrument.max_fret)
        self.fret_range = self.fret_range.with_end(fret_index)
        return True

    def set_game_mode(self, mode) -> bool:
        if not self._can_configure():
            return False
        try:
            self.game_mode = GameMode(mode)
        except ValueError:
            logger.warning("Unknown game mode %r", mode)
            return False
        return True

    def set_root(self, root: str) -> bool:
        if not self._can_configure():
            return False
        pitch_class = NoteMatcher.pitch_class(root)
        if pitch_class is None:
            logger.warning("Unknown root note %r", root)
            return False
        self.root = pitch_class
        return True

    def set_scale(self, scale: str) -> bool:
        if not self._can_configure():
            return False
        if scale not in SCALES:
            logger.warning("Unknown scale %r", scale)
            return False
        self.scale = scale
        return True

    def set_whole_notes_only(self, enabled: bool) -> bool:
        if not self._can_configure():
            return False
        self.whole_notes_only = enabled
        return True

    # --- Commands ---

    def _dispatch(self, transition: Callable[..., SessionState], *args) -> SessionState:
        old = self.state
        new = transition(old, *args)
        if new is not old:
            self.state = new
            self.events.emit_state_changed(old, new)
        return new

    def _later(self, name: str, delay: float, action: Callable[[], None]) -> None:
        """Schedule ``action`` unless the session is replaced before it fires."""
        generation = self._generation

        def fire():
            if generation == self._generation:
                action()

        self.scheduler.schedule(name, delay, fire)

    def _new_session(self) -> None:
        self._generation += 1
        self.scheduler.cancel_all()

    def start(self, practice: bool = False) -> SessionState:
        """Start a round with the current selections; restarts an active one."""
        self.audio.init()
        self.audio.play_start_sound()
        self._new_session()

        base = core.initial_state() if self.state.is_active else self.state
        old = self.state
        self.state = core.start(
            base,
            self.game_mode,
            self.fret_range,
            self.root,
            self.scale,
            self.whole_notes_only,
            practice,
            self.layout,
            self.rng,
        )
        self.events.emit_state_changed(old, self.state)
        return self.state

    def stop(self) -> SessionState:
        self._new_session()
        return self._dispatch(core.stop)

    def tap(self, string_index: int, fret_index: int) -> TapResult:
        """Handle the player tapping a fret."""
        self.audio.init()
        state = self.state
        if not state.is_active or not self.fret_range.contains(fret_index):
            return TapResult.IGNORED

        coordinate = FretCoordinate(string_index, fret_index)
        note = note_at(self.layout, coordinate)
        if note is None:
            return TapResult.IGNORED

        self._dispatch(core.reveal, coordinate, note)
        self._later(f"reveal:{coordinate.key}", self.timing["reveal"], lambda: self._dispatch(core.hide, coordinate))

        if state.is_reviewing:
            return TapResult.REVEALED
        if self._natural_only() and not PitchSpace.is_natural(note):
            return TapResult.REVEALED

        if note in state.notes_to_find:
            self.audio.play_correct_sound(cue_for_position(self.instrument.name, string_index, fret_index))
            already_found = coordinate.key in state.found_frets
            self._dispatch(core.guess_correct, coordinate)
            if already_found:
                return TapResult.ALREADY_FOUND
            self._later(FLASH_TIMER, self.timing["flash"], lambda: self._dispatch(core.clear_flash))
            return TapResult.CORRECT

        self.audio.play_incorrect_sound()
        self._dispatch(core.flash_incorrect, coordinate)
        self._later(SHAKE_TIMER, self.timing["shake"], lambda: self._dispatch(core.clear_shake))
        if self._dispatch(core.guess_incorrect, coordinate).is_reviewing:
            self._later(REVIEW_TIMER, self.timing["review"], lambda: self._dispatch(core.end_review))
        return TapResult.INCORRECT

    def update(self, delta_seconds: float) -> None:
        """Advance the game by one frame of ``delta_seconds`` wall-clock time."""
        self.scheduler.advance(delta_seconds)
        self._dispatch(core.tick, delta_seconds)
        self._check_round_complete()

    def _check_round_complete(self) -> None:
        if self.state.mode is not GameState.RUNNING:
            return
        if self.scheduler.pending(ADVANCE_TIMER):
            return
        if core.is_round_complete(self.state, self.layout):
            completed_at = self.state.timer
            self._later(
                ADVANCE_TIMER,
                self.timing["advance_delay"],
                lambda: self._complete_round(completed_at),
            )

    def _complete_round(self, completed_at: float) -> None:
        """Leave a completed round; a scale drill reports ``completed_at`` as its time."""
        state = self.state
        if state.mode is not GameState.RUNNING or not core.is_round_complete(state, self.layout):
            # Interrupted by a review window; the next update re-checks
            return

        self.events.emit_round_complete(state)
        if state.game_mode is GameMode.NOTE_CYCLE:
            new = self._dispatch(core.advance_note)
        else:
            new = self._dispatch(core.finish, completed_at)

        if new.is_over:
            self.events.emit_game_over(new)

    def shutdown(self) -> None:
        self._new_session()
        self.audio.shutdown()

    # --- Queries for the front end ---

    @property
    def progress(self) -> float:
        return core.progress(self.state)

    def _natural_only(self) -> bool:
        """Whether accidentals are switched off; only the note cycle uses it."""
        if self.state.is_active:
            return self.state.whole_notes_only and self.state.game_mode is GameMode.NOTE_CYCLE
        return self.whole_notes_only and self.game_mode is GameMode.NOTE_CYCLE

    def positions_to_find(self) -> List[FretCoordinate]:
        return list(core.positions_to_find(self.state, self.layout))

    def fret_status(self, coordinate: FretCoordinate) -> FretStatus:
        """Drawing state of one fret; hints take precedence over flash and found."""
        state = self.state
        note = note_at(self.layout, coordinate)
        if note is None or not self.fret_range.contains(coordinate.fret_index):
            return FretStatus.OUT_OF_RANGE
        if self._natural_only() and not PitchSpace.is_natural(note):
            return FretStatus.DISABLED

        key = coordinate.key
        found = key in state.found_frets
        if (state.is_reviewing or (state.is_active and state.practice)) and note in state.notes_to_find and not found:
            return FretStatus.HINT
        if state.flash_fret == key:
            return FretStatus.FLASH
        if found:
            return FretStatus.FOUND
        return FretStatus.NORMAL
