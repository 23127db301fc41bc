"""Session state machine for the fretboard note trainer.

Every transition is a pure function from a ``SessionState`` to a new
``SessionState``. Nothing here mutates its input, schedules timers, plays
sound or raises for input that is part of the command protocol: a command
sent in a state that does not accept it returns the state unchanged.

States::

    IDLE -> RUNNING <-> REVIEWING
               |            |
               +-> OVER <---+        (stop() from anywhere -> IDLE)
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple, Union

from .fretboard import find_positions, notes_in_range
from .logger import get_logger
from .note_types import FretboardLayout, FretCoordinate, FretRange, Scale
from .pitch_space import PitchClass
from .scales import notes_in_scale

# Get logger for this module
logger = get_logger(__name__)

WELCOME_MESSAGE = 'Select an instrument and mode, then click "Play" to begin!'
STOPPED_MESSAGE = 'Game Stopped. Click "Play" to start again!'
NO_NOTES_MESSAGE = "No notes available in this range."
ALREADY_FOUND_MESSAGE = "You already found that one!"
CORRECT_MESSAGE = "Correct!"
INCORRECT_MESSAGE = "Not quite! Here are the correct notes."
CONTINUE_MESSAGE = "Continue finding the notes."
PRACTICE_COMPLETE_MESSAGE = "Practice Complete!"


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    REVIEWING = "reviewing"
    OVER = "over"


class GameMode(Enum):
    NOTE_CYCLE = "note_cycle"  # find every position of one note, then the next
    SCALE_DRILL = "scale_drill"  # find every position of every note in a scale


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one training session."""

    mode: GameState = GameState.IDLE
    game_mode: GameMode = GameMode.NOTE_CYCLE
    practice: bool = False
    timer: float = 0.0  # seconds, never rounded here
    note_queue: Tuple[PitchClass, ...] = ()
    note_queue_index: int = 0
    current_note: str = ""
    notes_to_find: Tuple[PitchClass, ...] = ()
    found_frets: Tuple[str, ...] = ()  # fret keys, in the order found
    total_notes_in_round: int = 0
    total_frets_found_in_round: int = 0
    flash_fret: Optional[str] = None
    shake_fret: Optional[str] = None
    revealed_frets: Tuple[Tuple[str, str], ...] = ()  # (fret key, label) pairs, in reveal order
    message: str = WELCOME_MESSAGE
    fret_range: Optional[FretRange] = None
    whole_notes_only: bool = False

    @property
    def is_active(self) -> bool:
        """True while a round is in play, including the review window."""
        return self.mode in (GameState.RUNNING, GameState.REVIEWING)

    @property
    def is_reviewing(self) -> bool:
        return self.mode is GameState.REVIEWING

    @property
    def is_over(self) -> bool:
        return self.mode is GameState.OVER

    @property
    def revealed(self) -> Dict[str, str]:
        """Labels currently shown on the board, keyed by fret key."""
        return dict(self.revealed_frets)


def initial_state(message: str = WELCOME_MESSAGE) -> SessionState:
    return SessionState(message=message)


def _final_message(state: SessionState) -> str:
    if state.practice:
        return PRACTICE_COMPLETE_MESSAGE
    return f"Finished! Final Time: {state.timer:.2f}s"


def start(
    state: SessionState,
    game_mode: Union[GameMode, str],
    fret_range: FretRange,
    root: str,
    scale: Union[Scale, str],
    whole_notes_only: bool,
    practice: bool,
    layout: FretboardLayout,
    rng: Optional[random.Random] = None,
) -> SessionState:
    """Build a new round and enter RUNNING.

    Args:
        state: Current state; must be IDLE or OVER
        game_mode: Note cycle or scale drill
        fret_range: Frets that take part in the round
        root: Scale root (scale drill only)
        scale: ``Scale`` or catalog scale name (scale drill only)
        whole_notes_only: Restrict the note cycle to natural notes
        practice: Untimed round that never enters review
        layout: Fretboard grid of the selected instrument
        rng: Source used to shuffle the note queue

    Returns:
        The running state, or an IDLE state with a diagnostic message when
        the configuration yields nothing to find
    """
    if state.is_active:
        logger.debug("Ignoring start while a round is active")
        return state

    try:
        game_mode = GameMode(game_mode)
    except ValueError:
        logger.warning("Unknown game mode %r, round not started", game_mode)
        return initial_state(f"Unknown game mode: {game_mode}")
    rng = rng or random.Random()

    if game_mode is GameMode.NOTE_CYCLE:
        queue = notes_in_range(layout, fret_range, whole_notes_only)
        rng.shuffle(queue)
        if not queue:
            logger.info("No notes in range %s, round not started", fret_range)
            return initial_state(NO_NOTES_MESSAGE)

        total = sum(len(find_positions([note], fret_range, layout)) for note in queue)
        first = queue[0]
        notes_to_find: Tuple[PitchClass, ...] = (first,)
        note_queue = tuple(queue)
        current_note = first if not practice else ""
        message = f"Find all the {first} notes!"
    else:
        scale_name = scale.name if isinstance(scale, Scale) else str(scale)
        notes_to_find = notes_in_scale(root, scale)
        if not notes_to_find:
            logger.info("%s %s resolves to no notes, round not started", root, scale_name)
            return initial_state(f"No notes found for {root} {scale_name}.")

        total = len(find_positions(notes_to_find, fret_range, layout))
        note_queue = ()
        current_note = ""
        if practice:
            message = f"Practice the {root} {scale_name} scale."
        else:
            message = f"Find all notes in {root} {scale_name}!"

    if total == 0:
        logger.info("Nothing to find in range %s, round not started", fret_range)
        return initial_state(NO_NOTES_MESSAGE)

    logger.info(
        "Round started: %s, %d positions, range %s%s",
        game_mode.value,
        total,
        fret_range,
        " (practice)" if practice else "",
    )
    return SessionState(
        mode=GameState.RUNNING,
        game_mode=game_mode,
        practice=practice,
        note_queue=note_queue,
        current_note=current_note,
        notes_to_find=notes_to_find,
        total_notes_in_round=total,
        message=message,
        fret_range=fret_range,
        whole_notes_only=whole_notes_only,
    )


def stop(state: SessionState) -> SessionState:
    if state.is_active:
        logger.info("Round stopped after %.2fs", state.timer)
    return initial_state(STOPPED_MESSAGE)


def tick(state: SessionState, delta_seconds: float) -> SessionState:
    """Add ``delta_seconds`` of wall-clock time to a timed, active round.

    The review window does not pause the clock.
    """
    if not state.is_active or state.practice:
        return state
    if delta_seconds is None or delta_seconds <= 0:
        return state
    return replace(state, timer=state.timer + delta_seconds)


def guess_correct(state: SessionState, coordinate: FretCoordinate) -> SessionState:
    if state.mode is not GameState.RUNNING:
        return state

    key = coordinate.key
    if key in state.found_frets:
        return replace(state, message=ALREADY_FOUND_MESSAGE)

    logger.debug("Found %s (%d/%d)", key, state.total_frets_found_in_round + 1, state.total_notes_in_round)
    return replace(
        state,
        message=CORRECT_MESSAGE,
        found_frets=state.found_frets + (key,),
        flash_fret=key,
        total_frets_found_in_round=state.total_frets_found_in_round + 1,
    )


def guess_incorrect(state: SessionState, coordinate: FretCoordinate) -> SessionState:
    """Enter the review window after a wrong tap; practice rounds never do."""
    if state.practice or state.mode is not GameState.RUNNING:
        return state

    logger.debug("Incorrect guess at %s, reviewing", coordinate.key)
    return replace(state, mode=GameState.REVIEWING, message=INCORRECT_MESSAGE)


def end_review(state: SessionState) -> SessionState:
    if state.mode is not GameState.REVIEWING:
        return state
    return replace(state, mode=GameState.RUNNING, message=CONTINUE_MESSAGE)


def advance_note(state: SessionState) -> SessionState:
    """Move to the next queued note, or end the session after the last one."""
    if state.mode is not GameState.RUNNING:
        return state

    new_index = state.note_queue_index + 1
    if new_index >= len(state.note_queue):
        return finish(state)

    new_note = state.note_queue[new_index]
    logger.debug("Advancing to %s (%d/%d)", new_note, new_index + 1, len(state.note_queue))
    return replace(
        state,
        found_frets=(),
        note_queue_index=new_index,
        current_note=new_note,
        notes_to_find=(new_note,),
        message=f"All found! Now find all the {new_note} notes!",
    )


def finish(state: SessionState, final_time: Optional[float] = None) -> SessionState:
    """End an active session.

    Args:
        state: Current state; must be RUNNING or REVIEWING
        final_time: Timer value at the moment the last position was found.
            Defaults to the current timer.
    """
    if not state.is_active:
        return state

    if final_time is not None:
        state = replace(state, timer=final_time)
    message = _final_message(state)
    logger.info(message)
    return replace(state, mode=GameState.OVER, message=message)


def flash_incorrect(state: SessionState, coordinate: FretCoordinate) -> SessionState:
    return replace(state, shake_fret=coordinate.key)


def clear_flash(state: SessionState) -> SessionState:
    if state.flash_fret is None:
        return state
    return replace(state, flash_fret=None)


def clear_shake(state: SessionState) -> SessionState:
    if state.shake_fret is None:
        return state
    return replace(state, shake_fret=None)


def reveal(state: SessionState, coordinate: FretCoordinate, label: str) -> SessionState:
    kept = tuple(pair for pair in state.revealed_frets if pair[0] != coordinate.key)
    return replace(state, revealed_frets=kept + ((coordinate.key, label),))


def hide(state: SessionState, coordinate: FretCoordinate) -> SessionState:
    kept = tuple(pair for pair in state.revealed_frets if pair[0] != coordinate.key)
    if len(kept) == len(state.revealed_frets):
        return state
    return replace(state, revealed_frets=kept)


def positions_to_find(state: SessionState, layout: FretboardLayout) -> Sequence[FretCoordinate]:
    if state.fret_range is None:
        return []
    return find_positions(state.notes_to_find, state.fret_range, layout)


def is_round_complete(state: SessionState, layout: FretboardLayout) -> bool:
    """True when every position of the current target has been found."""
    if not state.is_active:
        return False
    positions = positions_to_find(state, layout)
    return len(positions) > 0 and len(state.found_frets) == len(positions)


def progress(state: SessionState) -> float:
    """Share of the round's positions found so far, in percent."""
    if not state.is_active or state.total_notes_in_round == 0:
        return 0.0
    return state.total_frets_found_in_round / state.total_notes_in_round * 100


