from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np
from loguru import logger

from .config import RulesConfig, config, rules_config
from .errors import InvariantViolation
from .game import Game
from .strategy import RandomStrategy, create
from .types import Color, EventTag, GameEvent


@dataclass(slots=True)
class GameSummary:
    winner: Optional[Color]
    turns: int
    captures: Dict[Color, int]
    cards_played: int

    @property
    def finished(self) -> bool:
        return self.winner is not None


@dataclass(slots=True)
class Simulator:
    """Plays complete computer-vs-computer games headlessly.

    One strategy name per color, in turn order. A single seed drives the draw
    pile and every randomized strategy so a batch is reproducible.
    """

    strategies: Sequence[str] = ("heuristic", "heuristic", "heuristic", "heuristic")
    seed: Optional[int] = None
    max_turns: int = config.MAX_TURNS
    rules: RulesConfig = field(default_factory=lambda: rules_config)
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.strategies) != config.NUM_COLORS:
            raise ValueError(
                f"Need {config.NUM_COLORS} strategies, got {len(self.strategies)}"
            )
        self.rng = random.Random(self.seed)

    def build_game(self) -> Game:
        players = {}
        for color, name in zip(Color, self.strategies):
            strategy = create(name)
            if isinstance(strategy, RandomStrategy):
                strategy.rng = random.Random(self.rng.getrandbits(32))
            players[color] = strategy
        return Game(
            strategies=players,
            rng=random.Random(self.rng.getrandbits(32)),
            rules=self.rules,
        )

    def play_game(self) -> GameSummary:
        game = self.build_game()
        captures: Counter = Counter()
        committed = 0

        def on_event(event: GameEvent) -> None:
            if event.tag == EventTag.CAPTURE and event.color is not None:
                captures[event.color] += 1

        def on_state(_snapshot) -> None:
            nonlocal committed
            committed += 1

        game.add_listener(on_event)
        game.add_state_listener(on_state)

        while game.state.winner is None and game.turns_played < self.max_turns:
            if not game.play_ai_turn():
                raise InvariantViolation(
                    f"{game.current_color.label} did not act in phase {game.phase.value}"
                )

        if game.state.winner is None:
            logger.warning(f"Game stopped after {game.turns_played} turns without a winner")

        return GameSummary(
            winner=game.state.winner,
            turns=game.turns_played,
            captures={color: captures.get(color, 0) for color in Color},
            cards_played=committed,
        )

    def run(self, games: int) -> List[GameSummary]:
        summaries = []
        for index in range(games):
            summary = self.play_game()
            winner = summary.winner.label if summary.winner is not None else "nobody"
            logger.debug(f"Game {index + 1}/{games}: {winner} in {summary.turns} turns")
            summaries.append(summary)
        return summaries


def win_counts(summaries: Sequence[GameSummary]) -> Dict[str, int]:
    """Wins per color label, plus unfinished games under "none"."""
    winners = [int(s.winner) for s in summaries if s.winner is not None]
    counts = np.bincount(np.asarray(winners, dtype=np.int64), minlength=config.NUM_COLORS)
    out = {color.label: int(counts[color]) for color in Color}
    out["none"] = len(summaries) - len(winners)
    return out
