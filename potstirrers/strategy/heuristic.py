"""Heuristic computer player.

Decision order for one turn:

1. Sorry, aimed at the opponent pawn closest to our own home-lane entry.
2. Swap, when trading places with an opponent gains more for us than for them.
3. The best numeric (card, pawn) pair in hand, scored on progress, slides,
   leaving Start, bumps, and how much capture threat from the next color
   the move removes.
4. Shuffle once per turn to reroll a dead hand.
5. Discard, so the turn always ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Iterable, Sequence

from loguru import logger

from ..config import AIConfig, ai_config
from ..moves import card_steps, get_frames, has_sorry_move, has_swap_move, movable
from ..pawn import Pawn, copy_pawns
from ..resolution import resolve
from ..types import (
    Card,
    NumericCard,
    SafetyPlace,
    ShuffleCard,
    SorryCard,
    SwapCard,
    TrackPlace,
)
from .base import BaseStrategy
from .types import ActionKind, AIAction

if TYPE_CHECKING:
    from ..board import Board
    from ..config import RulesConfig
    from ..state import GameState


def _find(hand: Sequence[Card], kind: type) -> int | None:
    return next((i for i, card in enumerate(hand) if isinstance(card, kind)), None)


def compute_threat(
    attacker: int,
    defender: int,
    cards: Iterable[Card],
    pawns: Sequence[Sequence[Pawn]],
    board: "Board",
    rules: "RulesConfig",
    weights: AIConfig = ai_config,
) -> float:
    """Best capture value `attacker` can reach against `defender` with any of `cards`."""
    best = 0.0
    defender_cells = {p.position for p in pawns[int(defender)] if p.is_on_track()}
    if not defender_cells:
        return best
    for card in cards:
        steps = card_steps(card)
        if steps is None:
            continue
        for slot in movable(card, attacker, pawns, board, rules):
            frames = get_frames(attacker, pawns[int(attacker)][slot], steps, board)
            last = frames[-1]
            if not isinstance(last, TrackPlace):
                continue
            info = board.slide_info(last.position)
            if defender_cells.isdisjoint(info.affected):
                continue
            threat = weights.threat_base
            if info.distance > 0:
                threat += info.distance * weights.threat_slide
            best = max(best, threat)
    return best


@dataclass(slots=True)
class HeuristicStrategy(BaseStrategy):
    """Greedy single-turn scorer with a threat-denial look at the next color."""

    name: ClassVar[str] = "heuristic"

    weights: AIConfig = field(default_factory=lambda: ai_config)

    def choose(
        self,
        state: "GameState",
        board: "Board",
        rules: "RulesConfig",
        can_shuffle: bool = True,
    ) -> AIAction:
        color = int(state.current_color)

        action = self.choose_sorry(state, board)
        if action is None:
            action = self.choose_swap(state, board)
        if action is None:
            action = self.choose_numeric(state, board, rules)
        if action is None and can_shuffle:
            index = _find(state.hand, ShuffleCard)
            if index is not None:
                action = AIAction(ActionKind.SHUFFLE, index)
        if action is None:
            action = self.fallback_discard(state)

        logger.debug(
            f"Heuristic for color {color}: {action.kind.value} slot {action.card_index} "
            f"(score {action.score:.1f})"
        )
        return action

    # --- Sorry ---
    def choose_sorry(self, state: "GameState", board: "Board") -> AIAction | None:
        index = _find(state.hand, SorryCard)
        color = int(state.current_color)
        if index is None or not has_sorry_move(color, state.pawns):
            return None

        best: tuple[int, Pawn] | None = None
        for other, row in enumerate(state.pawns):
            if other == color:
                continue
            for pawn in row:
                if not pawn.is_on_track():
                    continue
                dist = board.distance_to_home(color, pawn.position)
                if best is None or dist < best[0]:
                    best = (dist, pawn)
        if best is None:
            return None

        own = next(p for p in state.pawns[color] if p.is_in_start())
        _, victim = best
        return AIAction(
            ActionKind.SORRY,
            index,
            pawn=(color, own.slot),
            target=(victim.color, victim.slot),
        )

    # --- Swap ---
    def choose_swap(self, state: "GameState", board: "Board") -> AIAction | None:
        index = _find(state.hand, SwapCard)
        color = int(state.current_color)
        if index is None or not has_swap_move(color, state.pawns):
            return None

        best: AIAction | None = None
        for mine in state.pawns[color]:
            if not mine.is_on_track():
                continue
            before = board.distance_to_home(color, mine.position)
            for other, row in enumerate(state.pawns):
                if other == color:
                    continue
                for theirs in row:
                    if not theirs.is_on_track():
                        continue
                    gain = before - board.distance_to_home(color, theirs.position)
                    if gain <= 0:
                        continue
                    opp_gain = board.distance_to_home(
                        other, theirs.position
                    ) - board.distance_to_home(other, mine.position)
                    score = gain * self.weights.swap_gain
                    if opp_gain > 0:
                        score -= opp_gain * self.weights.swap_opponent_gain
                    if score <= 0:
                        continue
                    if best is None or score > best.score:
                        best = AIAction(
                            ActionKind.SWAP,
                            index,
                            pawn=(color, mine.slot),
                            target=(other, theirs.slot),
                            score=score,
                        )
        return best

    # --- Numeric cards ---
    def choose_numeric(
        self, state: "GameState", board: "Board", rules: "RulesConfig"
    ) -> AIAction | None:
        best: AIAction | None = None
        for index, card in enumerate(state.hand):
            if not isinstance(card, NumericCard):
                continue
            action = self.score_numeric(state, index, board, rules)
            if action is not None and (best is None or action.score > best.score):
                best = action
        return best

    def score_numeric(
        self,
        state: "GameState",
        index: int,
        board: "Board",
        rules: "RulesConfig",
    ) -> AIAction | None:
        """Score playing hand slot `index`, or None if it moves nothing."""
        w = self.weights
        card = state.hand[index]
        color = int(state.current_color)
        pawns = state.pawns
        slots = movable(card, color, pawns, board, rules)
        if not slots:
            return None

        own = pawns[color]
        slot = next((s for s in slots if own[s].is_in_start()), slots[0])
        pawn = own[slot]
        steps = card_steps(card)
        last = get_frames(color, pawn, steps, board)[-1]

        lands_on_own = False
        lands_on_enemy = False
        slide_distance = 0
        final_track: int | None = None
        if isinstance(last, TrackPlace):
            info = board.slide_info(last.position)
            slide_distance = info.distance
            final_track = info.final_position
            grid = board.occupancy(pawns)
            if pawn.is_on_track():
                grid[color, pawn.position] -= 1
            cells = list(info.affected)
            lands_on_own = bool(grid[color, cells].sum() > 0)
            if not lands_on_own:
                grid[color, :] = 0
                lands_on_enemy = bool(grid[:, cells].sum() > 0)

        score = 0.0
        if steps > 0:
            score += steps * w.step
        else:
            score += abs(steps) * w.backward_step

        if final_track is not None and pawn.is_on_track():
            gain = board.distance_to_home(color, pawn.position) - board.distance_to_home(
                color, final_track
            )
            score += gain * w.distance_gain

        if slide_distance > 0:
            score += slide_distance * w.slide

        if isinstance(last, SafetyPlace):
            before = pawn.safety_index if pawn.is_in_safety() else -1
            safe_gain = last.index - before
            if safe_gain > 0:
                score += safe_gain * w.safety_gain
            if last.index == board.last_safety:
                score += w.final_safety_bonus

        if (
            pawn.is_in_start()
            and not lands_on_own
            and isinstance(last, TrackPlace)
            and last.position == board.track_entry(color)
        ):
            score += w.exit_start_bonus

        if lands_on_own:
            score -= w.own_landing_penalty
        if lands_on_enemy:
            score += w.capture_bonus

        score += self.threat_denial(state, index, slot, last, board, rules)

        return AIAction(ActionKind.NUMERIC, index, pawn=(color, slot), score=score)

    def threat_denial(
        self,
        state: "GameState",
        index: int,
        slot: int,
        landing: TrackPlace | SafetyPlace,
        board: "Board",
        rules: "RulesConfig",
    ) -> float:
        """Capture value the move takes away from the next color's remaining hand."""
        color = int(state.current_color)
        nxt = int(state.next_color)
        if nxt == color:
            return 0.0
        remaining = [c for i, c in enumerate(state.hand) if i != index]

        before = compute_threat(nxt, color, remaining, state.pawns, board, rules, self.weights)
        if before <= 0:
            return 0.0

        after_pawns = copy_pawns(state.pawns)
        after_pawns[color][slot].move_to(landing)
        if isinstance(landing, TrackPlace):
            resolve(after_pawns, color, slot, board, rules)
        after = compute_threat(nxt, color, remaining, after_pawns, board, rules, self.weights)
        return max(0.0, before - after)
