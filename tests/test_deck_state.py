from __future__ import annotations

import random
import unittest
from collections import Counter

from potstirrers.config import config
from potstirrers.deck import DrawPile, build_deck
from potstirrers.errors import SnapshotError
from potstirrers.pawn import initial_pawns
from potstirrers.state import GameState
from potstirrers.types import (
    SHUFFLE,
    SORRY,
    SWAP,
    Color,
    NumericCard,
    SafetyPlace,
    TrackPlace,
    card_from_value,
    card_to_value,
)


class CardTests(unittest.TestCase):
    def test_card_values(self):
        self.assertEqual(card_from_value(7), NumericCard(7))
        self.assertEqual(card_from_value(-4), NumericCard(-4))
        self.assertIs(card_from_value("Sorry"), SORRY)
        self.assertEqual(card_to_value(SWAP), "Swap")
        self.assertEqual(card_to_value(NumericCard(0)), 0)
        self.assertEqual(str(SHUFFLE), "Shuffle")

    def test_unknown_cards(self):
        with self.assertRaises(ValueError):
            card_from_value("Joker")
        with self.assertRaises(ValueError):
            card_from_value(True)


class DeckTests(unittest.TestCase):
    def test_build_deck_multiset(self):
        deck = build_deck(random.Random(1))
        self.assertEqual(len(deck), len(config.BASE_DECK) * config.DECK_COPIES)
        counts = Counter(card_to_value(c) for c in deck)
        self.assertEqual(counts["Sorry"], config.DECK_COPIES)
        self.assertEqual(counts[12], config.DECK_COPIES)
        self.assertNotIn(6, counts)
        self.assertNotIn(9, counts)

    def test_seeded_shuffle_is_reproducible(self):
        self.assertEqual(build_deck(random.Random(5)), build_deck(random.Random(5)))

    def test_pile_rebuilds_when_empty(self):
        pile = DrawPile(rng=random.Random(3), cards=[NumericCard(4)])
        self.assertEqual(pile.draw(), NumericCard(4))
        self.assertEqual(len(pile), 0)
        pile.draw()
        self.assertEqual(pile.reshuffles, 1)
        self.assertEqual(len(pile), len(config.BASE_DECK) * config.DECK_COPIES - 1)

    def test_deal(self):
        pile = DrawPile(rng=random.Random(3))
        hand = pile.deal(config.HAND_SIZE)
        self.assertEqual(len(hand), 3)


class GameStateTests(unittest.TestCase):
    def make_state(self):
        pawns = initial_pawns()
        pawns[0][1].move_to(TrackPlace(21))
        pawns[3][2].move_to(SafetyPlace(4))
        return GameState(
            pawns=pawns,
            draw_pile=[NumericCard(3), SORRY],
            hand=[NumericCard(-1), SWAP, SHUFFLE],
            turn_index=3,
            direction=-1,
            log=["Red plays 2"],
        )

    def test_colors(self):
        state = self.make_state()
        self.assertEqual(state.current_color, Color.GREEN)
        self.assertEqual(state.next_color, Color.YELLOW)
        state.direction = 1
        self.assertEqual(state.next_color, Color.RED)

    def test_dict_form(self):
        data = self.make_state().to_dict()
        self.assertEqual(data["pawns"]["Red"][1], {"region": "track", "position": 21})
        self.assertEqual(data["pawns"]["Green"][2], {"region": "safety", "safety_index": 4})
        self.assertEqual(data["pawns"]["Blue"][0], {"region": "start"})
        self.assertEqual(data["hand"], [-1, "Swap", "Shuffle"])
        self.assertIsNone(data["winner"])

        restored = GameState.from_dict(data)
        self.assertEqual(restored.pawns[0][1].place, TrackPlace(21))
        self.assertEqual(restored.pawns[3][2].place, SafetyPlace(4))
        self.assertEqual(restored.draw_pile, [NumericCard(3), SORRY])
        self.assertEqual(restored.direction, -1)
        self.assertEqual(restored.log, ["Red plays 2"])

    def test_copy_is_independent(self):
        state = self.make_state()
        other = state.copy()
        other.pawns[0][1].send_home()
        other.hand.pop()
        self.assertTrue(state.pawns[0][1].is_on_track())
        self.assertEqual(len(state.hand), 3)

    def test_oversized_hand_rejected(self):
        data = self.make_state().to_dict()
        data["hand"] = [1, 2, 3, 4, 5]
        with self.assertRaises(SnapshotError):
            GameState.from_dict(data)
        data["hand"] = [1, 2]
        self.assertEqual(len(GameState.from_dict(data).hand), 2)

    def test_malformed_snapshots(self):
        data = self.make_state().to_dict()
        with self.assertRaises(SnapshotError):
            GameState.from_dict({"hand": []})

        bad = dict(data, direction=2)
        with self.assertRaises(SnapshotError):
            GameState.from_dict(bad)

        pawns = dict(data["pawns"], Red=data["pawns"]["Red"][:3])
        with self.assertRaises(SnapshotError):
            GameState.from_dict(dict(data, pawns=pawns))

        red = [dict(p) for p in data["pawns"]["Red"]]
        red[0] = {"region": "track", "position": 60}
        with self.assertRaises(SnapshotError):
            GameState.from_dict(dict(data, pawns=dict(data["pawns"], Red=red)))

        red[0] = {"region": "moon"}
        with self.assertRaises(ValueError):
            GameState.from_dict(dict(data, pawns=dict(data["pawns"], Red=red)))

        with self.assertRaises(SnapshotError):
            GameState.from_dict(dict(data, hand=["Joker"]))


if __name__ == "__main__":
    unittest.main()
