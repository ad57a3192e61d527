from __future__ import annotations

import unittest

from potstirrers.board import Board
from potstirrers.config import RulesConfig
from potstirrers.moves import (
    card_steps,
    get_frames,
    has_sorry_move,
    has_swap_move,
    movable,
    simulate,
)
from potstirrers.pawn import Pawn, initial_pawns
from potstirrers.types import (
    SORRY,
    START,
    Color,
    NumericCard,
    SafetyPlace,
    TrackPlace,
)

RED = int(Color.RED)


class SimulateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board.from_config()

    def test_card_steps(self) -> None:
        self.assertEqual(card_steps(NumericCard(0)), 1)
        self.assertEqual(card_steps(NumericCard(-4)), -4)
        self.assertEqual(card_steps(NumericCard(12)), 12)
        self.assertIsNone(card_steps(SORRY))
        self.assertIsNone(card_steps(None))

    def test_exit_start(self) -> None:
        for steps in (1, 2, -1, -4):
            result = simulate(RED, START, steps, self.board)
            self.assertTrue(result.legal, steps)
            self.assertEqual(result.place, TrackPlace(2))
        blue = simulate(int(Color.BLUE), START, 2, self.board)
        self.assertEqual(blue.place, TrackPlace(17))

    def test_exit_start_needs_small_card(self) -> None:
        result = simulate(RED, START, 3, self.board)
        self.assertFalse(result.legal)
        self.assertEqual(result.place, START)

    def test_zero_steps_illegal(self) -> None:
        self.assertFalse(simulate(RED, TrackPlace(10), 0, self.board).legal)

    def test_forward_wraps_track(self) -> None:
        result = simulate(int(Color.BLUE), TrackPlace(58), 4, self.board)
        self.assertEqual(result.place, TrackPlace(2))

    def test_backward_wraps_track(self) -> None:
        frames = get_frames(RED, TrackPlace(1), -4, self.board)
        self.assertEqual(frames, [TrackPlace(p) for p in (0, 59, 58, 57)])

    def test_backward_never_leaves_lane(self) -> None:
        self.assertFalse(simulate(RED, SafetyPlace(2), -1, self.board).legal)

    def test_enters_home_lane(self) -> None:
        frames = get_frames(RED, TrackPlace(58), 3, self.board)
        self.assertEqual(frames, [TrackPlace(59), TrackPlace(0), SafetyPlace(0)])

    def test_does_not_pass_own_lane_entry(self) -> None:
        # Blue walks past Red's lane entry
        result = simulate(int(Color.BLUE), TrackPlace(58), 3, self.board)
        self.assertEqual(result.place, TrackPlace(1))

    def test_lane_overshoot_illegal(self) -> None:
        self.assertTrue(simulate(RED, SafetyPlace(4), 1, self.board).legal)
        self.assertFalse(simulate(RED, SafetyPlace(4), 2, self.board).legal)
        self.assertFalse(simulate(RED, SafetyPlace(5), 1, self.board).legal)

    def test_frame_counts(self) -> None:
        self.assertEqual(len(get_frames(RED, TrackPlace(10), 7, self.board)), 7)
        self.assertEqual(len(get_frames(RED, TrackPlace(10), -4, self.board)), 4)
        # Exiting Start is one frame whatever the card
        self.assertEqual(len(get_frames(RED, START, 2, self.board)), 1)
        self.assertEqual(get_frames(RED, START, 5, self.board), [])

    def test_accepts_pawn(self) -> None:
        pawn = Pawn(color=RED, slot=0, place=TrackPlace(20))
        self.assertEqual(simulate(RED, pawn, 3, self.board).place, TrackPlace(23))

    def test_full_lap_diverts_into_own_lane(self) -> None:
        # Single steps never carry a pawn round to its cell again: it turns
        # into its lane at the entry and stops on the last lane cell
        length = self.board.track_length
        for color in Color:
            for start in range(length):
                place = TrackPlace(start)
                to_entry = self.board.distance_to_home(color, start)
                for step in range(1, length + 1):
                    result = simulate(int(color), place, 1, self.board)
                    if not result.legal:
                        break
                    place = result.place
                    self.assertNotEqual(place, TrackPlace(start))
                    if step <= to_entry:
                        self.assertEqual(place, TrackPlace((start + step) % length))
                    else:
                        self.assertEqual(place, SafetyPlace(step - to_entry - 1))
                if to_entry + 6 <= length:
                    self.assertEqual(place, SafetyPlace(self.board.last_safety))
                self.assertEqual(step, min(to_entry + 7, length))


class MovableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board.from_config()
        self.rules = RulesConfig(win_rule="any_lane", capture_own_color=True)
        self.pawns = initial_pawns()

    def test_start_pawns(self) -> None:
        self.assertEqual(movable(NumericCard(2), RED, self.pawns, self.board, self.rules), [0, 1, 2, 3])
        self.assertEqual(movable(NumericCard(5), RED, self.pawns, self.board, self.rules), [])
        self.assertEqual(movable(SORRY, RED, self.pawns, self.board, self.rules), [])

    def test_zero_card_only_moves_start_pawns(self) -> None:
        self.pawns[RED][0].move_to(TrackPlace(10))
        slots = movable(NumericCard(0), RED, self.pawns, self.board, self.rules)
        self.assertEqual(slots, [1, 2, 3])
        for pawn in self.pawns[RED][1:]:
            pawn.move_to(SafetyPlace(pawn.slot))
        self.assertEqual(movable(NumericCard(0), RED, self.pawns, self.board, self.rules), [])

    def test_lane_stacking_blocked(self) -> None:
        self.pawns[RED][0].move_to(SafetyPlace(3))
        self.pawns[RED][1].move_to(SafetyPlace(1))
        slots = movable(NumericCard(2), RED, self.pawns, self.board, self.rules)
        self.assertNotIn(1, slots)
        self.assertIn(0, slots)

    def test_final_cell_rule_allows_stacking_on_last_cell(self) -> None:
        self.pawns[RED][0].move_to(SafetyPlace(5))
        self.pawns[RED][1].move_to(SafetyPlace(3))
        card = NumericCard(2)
        self.assertNotIn(1, movable(card, RED, self.pawns, self.board, self.rules))
        final_rules = RulesConfig(win_rule="final_cell")
        self.assertIn(1, movable(card, RED, self.pawns, self.board, final_rules))

    def test_track_stacking_is_legal(self) -> None:
        self.pawns[RED][0].move_to(TrackPlace(10))
        self.pawns[RED][1].move_to(TrackPlace(13))
        self.assertIn(0, movable(NumericCard(3), RED, self.pawns, self.board, self.rules))

    def test_sorry_and_swap_availability(self) -> None:
        self.assertFalse(has_sorry_move(RED, self.pawns))
        self.assertFalse(has_swap_move(RED, self.pawns))
        self.pawns[int(Color.BLUE)][0].move_to(TrackPlace(40))
        self.assertTrue(has_sorry_move(RED, self.pawns))
        self.assertFalse(has_swap_move(RED, self.pawns))
        self.pawns[RED][0].move_to(TrackPlace(12))
        self.assertTrue(has_swap_move(RED, self.pawns))
        for pawn in self.pawns[RED]:
            pawn.move_to(TrackPlace(12))
        self.assertFalse(has_sorry_move(RED, self.pawns))


if __name__ == "__main__":
    unittest.main()
