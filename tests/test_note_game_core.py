import random
import unittest
from dataclasses import replace

import pytest

from fretboarder import note_game_core as core
from fretboarder.fretboard import build_layout, find_positions
from fretboarder.instruments import get_instrument, layout_for
from fretboarder.note_game_core import GameMode, GameState
from fretboarder.note_types import FretCoordinate, FretRange
from fretboarder.pitch_space import ALL_NOTES

GUITAR = layout_for(get_instrument("Guitar"))
FULL_NECK = FretRange(0, 12)


def start_cycle(layout=GUITAR, fret_range=FULL_NECK, practice=False, whole_notes_only=False, seed=7):
    return core.start(
        core.initial_state(),
        GameMode.NOTE_CYCLE,
        fret_range,
        "C",
        "Major",
        whole_notes_only,
        practice,
        layout,
        random.Random(seed),
    )


def start_drill(root="C", scale="Major", layout=GUITAR, fret_range=FULL_NECK, practice=False):
    return core.start(
        core.initial_state(),
        GameMode.SCALE_DRILL,
        fret_range,
        root,
        scale,
        False,
        practice,
        layout,
    )


class TestStartNoteCycle(unittest.TestCase):
    def test_full_neck_round(self):
        state = start_cycle()
        self.assertIs(state.mode, GameState.RUNNING)
        self.assertEqual(sorted(state.note_queue), sorted(ALL_NOTES))
        self.assertEqual(state.total_notes_in_round, 78)
        self.assertEqual(state.note_queue_index, 0)
        first = state.note_queue[0]
        self.assertEqual(state.current_note, first)
        self.assertEqual(state.notes_to_find, (first,))
        self.assertEqual(state.message, f"Find all the {first} notes!")
        self.assertEqual(state.timer, 0.0)
        self.assertEqual(state.found_frets, ())

    def test_seeded_shuffle_is_repeatable(self):
        self.assertEqual(start_cycle(seed=3).note_queue, start_cycle(seed=3).note_queue)

    def test_practice_hides_current_note(self):
        state = start_cycle(practice=True)
        self.assertTrue(state.practice)
        self.assertEqual(state.current_note, "")
        self.assertEqual(len(state.notes_to_find), 1)

    def test_whole_notes_only(self):
        state = start_cycle(whole_notes_only=True)
        self.assertEqual(sorted(state.note_queue), ["A", "B", "C", "D", "E", "F", "G"])

    def test_no_natural_notes_in_range(self):
        layout = build_layout(("C",), 13)
        state = start_cycle(layout=layout, fret_range=FretRange(1, 1), whole_notes_only=True)
        self.assertIs(state.mode, GameState.IDLE)
        self.assertEqual(state.message, core.NO_NOTES_MESSAGE)

    def test_single_string(self):
        layout = build_layout(("C",), 13)
        state = start_cycle(layout=layout)
        # C appears at the open string and the twelfth fret
        self.assertEqual(state.total_notes_in_round, 13)
        self.assertEqual(find_positions(["E"], FULL_NECK, layout), [FretCoordinate(0, 4)])

    def test_start_while_active_is_ignored(self):
        state = start_cycle()
        self.assertIs(
            core.start(state, GameMode.NOTE_CYCLE, FULL_NECK, "C", "Major", False, False, GUITAR),
            state,
        )

    def test_unknown_mode(self):
        state = core.start(core.initial_state(), "bogus", FULL_NECK, "C", "Major", False, False, GUITAR)
        self.assertIs(state.mode, GameState.IDLE)
        self.assertEqual(state.message, "Unknown game mode: bogus")

    def test_start_from_over(self):
        over = core.finish(start_cycle())
        self.assertIs(
            core.start(over, GameMode.NOTE_CYCLE, FULL_NECK, "C", "Major", False, False, GUITAR).mode,
            GameState.RUNNING,
        )


class TestStartScaleDrill(unittest.TestCase):
    def test_c_major(self):
        state = start_drill()
        self.assertIs(state.mode, GameState.RUNNING)
        self.assertEqual(state.notes_to_find, ("C", "D", "E", "F", "G", "A", "B"))
        self.assertEqual(state.note_queue, ())
        self.assertEqual(state.current_note, "")
        self.assertEqual(state.total_notes_in_round, 48)
        self.assertEqual(state.message, "Find all notes in C Major!")

    def test_practice_message(self):
        state = start_drill(root="A", scale="Minor Pentatonic", practice=True)
        self.assertEqual(state.message, "Practice the A Minor Pentatonic scale.")

    def test_unknown_root(self):
        state = start_drill(root="H")
        self.assertIs(state.mode, GameState.IDLE)
        self.assertEqual(state.message, "No notes found for H Major.")

    def test_no_positions_in_range(self):
        layout = build_layout(("C",), 13)
        state = start_drill(layout=layout, fret_range=FretRange(1, 1))
        self.assertIs(state.mode, GameState.IDLE)
        self.assertEqual(state.message, core.NO_NOTES_MESSAGE)


class TestGuesses(unittest.TestCase):
    def setUp(self):
        self.state = start_cycle()
        self.target = find_positions(self.state.notes_to_find, FULL_NECK, GUITAR)[0]

    def test_guess_correct(self):
        state = core.guess_correct(self.state, self.target)
        self.assertEqual(state.found_frets, (self.target.key,))
        self.assertEqual(state.flash_fret, self.target.key)
        self.assertEqual(state.total_frets_found_in_round, 1)
        self.assertEqual(state.message, core.CORRECT_MESSAGE)
        # The input snapshot is untouched
        self.assertEqual(self.state.found_frets, ())

    def test_duplicate_guess_changes_only_the_message(self):
        once = core.clear_flash(core.guess_correct(self.state, self.target))
        twice = core.guess_correct(once, self.target)
        self.assertEqual(twice.message, core.ALREADY_FOUND_MESSAGE)
        self.assertEqual(replace(twice, message=once.message), once)

    def test_guess_ignored_when_not_running(self):
        idle = core.initial_state()
        self.assertIs(core.guess_correct(idle, self.target), idle)
        reviewing = core.guess_incorrect(self.state, self.target)
        self.assertIs(core.guess_correct(reviewing, self.target), reviewing)

    def test_guess_incorrect_enters_review(self):
        state = core.guess_incorrect(self.state, FretCoordinate(0, 1))
        self.assertIs(state.mode, GameState.REVIEWING)
        self.assertEqual(state.message, core.INCORRECT_MESSAGE)

        state = core.end_review(state)
        self.assertIs(state.mode, GameState.RUNNING)
        self.assertEqual(state.message, core.CONTINUE_MESSAGE)

    def test_practice_never_reviews(self):
        state = start_cycle(practice=True)
        self.assertIs(core.guess_incorrect(state, FretCoordinate(0, 1)), state)

    def test_end_review_only_from_reviewing(self):
        self.assertIs(core.end_review(self.state), self.state)


class TestTimer(unittest.TestCase):
    def test_tick_accumulates(self):
        state = core.tick(core.tick(start_cycle(), 0.25), 0.5)
        self.assertAlmostEqual(state.timer, 0.75)

    def test_tick_runs_during_review(self):
        state = core.guess_incorrect(start_cycle(), FretCoordinate(0, 1))
        self.assertAlmostEqual(core.tick(state, 1.0).timer, 1.0)

    def test_tick_gated(self):
        practice = start_cycle(practice=True)
        self.assertIs(core.tick(practice, 1.0), practice)
        idle = core.initial_state()
        self.assertIs(core.tick(idle, 1.0), idle)
        running = start_cycle()
        self.assertIs(core.tick(running, 0), running)
        self.assertIs(core.tick(running, -1.0), running)
        over = core.finish(core.tick(running, 2.0))
        self.assertIs(core.tick(over, 1.0), over)


class TestRoundProgression(unittest.TestCase):
    def _find_all(self, state, layout=GUITAR):
        for coordinate in core.positions_to_find(state, layout):
            state = core.guess_correct(state, coordinate)
        return state

    def test_round_complete_and_advance(self):
        state = self._find_all(start_cycle())
        self.assertTrue(core.is_round_complete(state, GUITAR))

        next_state = core.advance_note(state)
        second = state.note_queue[1]
        self.assertEqual(next_state.note_queue_index, 1)
        self.assertEqual(next_state.current_note, second)
        self.assertEqual(next_state.notes_to_find, (second,))
        self.assertEqual(next_state.found_frets, ())
        self.assertEqual(next_state.total_frets_found_in_round, state.total_frets_found_in_round)
        self.assertEqual(next_state.message, f"All found! Now find all the {second} notes!")
        self.assertFalse(core.is_round_complete(next_state, GUITAR))

    def test_full_cycle_finishes(self):
        state = core.tick(start_cycle(), 1.5)
        for _ in state.note_queue:
            state = core.advance_note(self._find_all(state))
        self.assertIs(state.mode, GameState.OVER)
        self.assertEqual(state.message, "Finished! Final Time: 1.50s")
        self.assertEqual(state.total_frets_found_in_round, 78)

    def test_scale_drill_finishes_after_one_round(self):
        state = self._find_all(start_drill())
        self.assertTrue(core.is_round_complete(state, GUITAR))
        self.assertAlmostEqual(core.progress(state), 100.0)
        self.assertIs(core.advance_note(state).mode, GameState.OVER)

    def test_practice_finish_message(self):
        state = core.finish(start_cycle(practice=True))
        self.assertEqual(state.message, core.PRACTICE_COMPLETE_MESSAGE)

    def test_finish_reports_given_final_time(self):
        state = core.tick(self._find_all(start_drill()), 1.6)
        over = core.finish(state, 1.1)
        self.assertIs(over.mode, GameState.OVER)
        self.assertEqual(over.timer, 1.1)
        self.assertEqual(over.message, "Finished! Final Time: 1.10s")
        self.assertEqual(core.finish(state).message, "Finished! Final Time: 1.60s")

    def test_finish_ignored_when_idle(self):
        idle = core.initial_state()
        self.assertIs(core.finish(idle, 3.0), idle)

    def test_progress(self):
        state = start_drill()
        first = core.positions_to_find(state, GUITAR)[0]
        self.assertAlmostEqual(core.progress(core.guess_correct(state, first)), 100 / 48)

    def test_not_complete_when_idle(self):
        self.assertFalse(core.is_round_complete(core.initial_state(), GUITAR))
        self.assertEqual(core.progress(core.initial_state()), 0.0)


class TestPresentation(unittest.TestCase):
    def test_stop(self):
        state = core.stop(start_cycle())
        self.assertIs(state.mode, GameState.IDLE)
        self.assertEqual(state.message, core.STOPPED_MESSAGE)
        self.assertEqual(state.timer, 0.0)

    def test_reveal_and_hide_do_not_mutate(self):
        base = start_cycle()
        shown = core.reveal(base, FretCoordinate(1, 1), "C")
        self.assertEqual(shown.revealed, {"1-1": "C"})
        self.assertEqual(base.revealed_frets, ())

        hidden = core.hide(shown, FretCoordinate(1, 1))
        self.assertEqual(hidden.revealed_frets, ())
        self.assertEqual(shown.revealed, {"1-1": "C"})
        self.assertIs(core.hide(hidden, FretCoordinate(1, 1)), hidden)

    def test_shake_and_flash_clear(self):
        state = core.flash_incorrect(start_cycle(), FretCoordinate(2, 3))
        self.assertEqual(state.shake_fret, "2-3")
        self.assertIsNone(core.clear_shake(state).shake_fret)
        self.assertIs(core.clear_flash(state), state)

    def test_reveal_replaces_label_for_same_fret(self):
        state = core.reveal(start_cycle(), FretCoordinate(1, 1), "C")
        state = core.reveal(state, FretCoordinate(0, 3), "G")
        state = core.reveal(state, FretCoordinate(1, 1), "C")
        self.assertEqual(state.revealed_frets, (("0-3", "G"), ("1-1", "C")))


@pytest.mark.parametrize(
    "make_state",
    [
        core.initial_state,
        start_cycle,
        start_drill,
        lambda: core.reveal(start_cycle(), FretCoordinate(1, 1), "C"),
        lambda: core.guess_incorrect(start_cycle(), FretCoordinate(0, 1)),
    ],
)
def test_states_are_hashable(make_state):
    state = make_state()
    assert hash(state) == hash(make_state())
    assert {state: "seen"}[make_state()] == "seen"


if __name__ == "__main__":
    unittest.main()
