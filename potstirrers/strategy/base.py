from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from ..types import NumericCard, ShuffleCard, SorryCard, SwapCard
from .types import ActionKind, AIAction

if TYPE_CHECKING:
    from ..board import Board
    from ..config import RulesConfig
    from ..state import GameState


class BaseStrategy:
    """Base class for computer players.

    A strategy only reads the state snapshot it is given; the game replays the
    returned action through the same commands a human would use.
    """

    name: ClassVar[str] = "base"

    def choose(
        self,
        state: "GameState",
        board: "Board",
        rules: "RulesConfig",
        can_shuffle: bool = True,
    ) -> AIAction:  # pragma: no cover - abstract
        raise NotImplementedError

    @staticmethod
    def fallback_discard(state: "GameState") -> AIAction:
        """Discard the first playable-kind card so the turn always ends."""
        for index, card in enumerate(state.hand):
            if isinstance(card, (NumericCard, SorryCard, ShuffleCard, SwapCard)):
                return AIAction(ActionKind.DISCARD, index)
        return AIAction(ActionKind.DISCARD, 0)
