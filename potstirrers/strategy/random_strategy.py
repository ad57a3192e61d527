from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from ..moves import has_sorry_move, has_swap_move, movable
from ..types import NumericCard, ShuffleCard, SorryCard, SwapCard
from .base import BaseStrategy
from .types import ActionKind, AIAction

if TYPE_CHECKING:
    from ..board import Board
    from ..config import RulesConfig
    from ..state import GameState


@dataclass(slots=True)
class RandomStrategy(BaseStrategy):
    """Uniform choice among every legal action in hand; baseline opponent."""

    name: ClassVar[str] = "random"

    rng: random.Random = field(default_factory=random.Random)

    def legal_actions(
        self,
        state: "GameState",
        board: "Board",
        rules: "RulesConfig",
        can_shuffle: bool = True,
    ) -> list[AIAction]:
        color = int(state.current_color)
        pawns = state.pawns
        opponents = [
            p for c, row in enumerate(pawns) if c != color for p in row if p.is_on_track()
        ]
        actions: list[AIAction] = []
        for index, card in enumerate(state.hand):
            if isinstance(card, NumericCard):
                for slot in movable(card, color, pawns, board, rules):
                    actions.append(AIAction(ActionKind.NUMERIC, index, pawn=(color, slot)))
            elif isinstance(card, SorryCard) and has_sorry_move(color, pawns):
                own = next(p for p in pawns[color] if p.is_in_start())
                for victim in opponents:
                    actions.append(
                        AIAction(
                            ActionKind.SORRY,
                            index,
                            pawn=(color, own.slot),
                            target=(victim.color, victim.slot),
                        )
                    )
            elif isinstance(card, SwapCard) and has_swap_move(color, pawns):
                for mine in pawns[color]:
                    if not mine.is_on_track():
                        continue
                    for theirs in opponents:
                        actions.append(
                            AIAction(
                                ActionKind.SWAP,
                                index,
                                pawn=(color, mine.slot),
                                target=(theirs.color, theirs.slot),
                            )
                        )
            elif isinstance(card, ShuffleCard) and can_shuffle:
                actions.append(AIAction(ActionKind.SHUFFLE, index))
        return actions

    def choose(
        self,
        state: "GameState",
        board: "Board",
        rules: "RulesConfig",
        can_shuffle: bool = True,
    ) -> AIAction:
        actions = self.legal_actions(state, board, rules, can_shuffle)
        if not actions:
            return self.fallback_discard(state)
        return self.rng.choice(actions)
