from __future__ import annotations

import unittest

from potstirrers.simulator import GameSummary, Simulator, win_counts
from potstirrers.types import Color


class SimulatorTests(unittest.TestCase):
    def test_requires_one_strategy_per_color(self) -> None:
        with self.assertRaises(ValueError):
            Simulator(strategies=("heuristic", "random"))
        with self.assertRaises(KeyError):
            Simulator(strategies=("heuristic", "random", "random", "nope"), seed=1).play_game()

    def test_batch_runs(self) -> None:
        sim = Simulator(strategies=("heuristic", "random", "heuristic", "random"), seed=11, max_turns=150)
        summaries = sim.run(2)
        self.assertEqual(len(summaries), 2)
        for summary in summaries:
            self.assertLessEqual(summary.turns, 150)
            self.assertGreaterEqual(summary.cards_played, summary.turns)
            self.assertEqual(set(summary.captures), set(Color))
            if summary.winner is None:
                self.assertEqual(summary.turns, 150)

    def test_seed_is_reproducible(self) -> None:
        first = Simulator(seed=5, max_turns=120).play_game()
        second = Simulator(seed=5, max_turns=120).play_game()
        self.assertEqual(first, second)

    def test_win_counts(self) -> None:
        captures = {c: 0 for c in Color}
        summaries = [
            GameSummary(winner=Color.BLUE, turns=80, captures=captures, cards_played=90),
            GameSummary(winner=Color.BLUE, turns=95, captures=captures, cards_played=99),
            GameSummary(winner=None, turns=1000, captures=captures, cards_played=1010),
        ]
        counts = win_counts(summaries)
        self.assertEqual(counts["Blue"], 2)
        self.assertEqual(counts["Red"], 0)
        self.assertEqual(counts["none"], 1)


if __name__ == "__main__":
    unittest.main()
