from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from .board import Board
from .config import RulesConfig, config, rules_config
from .deck import DrawPile
from .errors import InvariantViolation
from .moves import card_steps, get_frames, has_sorry_move, has_swap_move, movable
from .pawn import initial_pawns
from .resolution import resolve, winner
from .state import GameState
from .strategy.base import BaseStrategy
from .strategy.types import ActionKind, AIAction
from .types import (
    Card,
    Color,
    EventTag,
    GameEvent,
    NumericCard,
    PawnPlace,
    ShuffleCard,
    SorryCard,
    SwapCard,
    TrackPlace,
    TurnPhase,
)

EventListener = Callable[[GameEvent], None]
StateListener = Callable[[GameState], None]


@dataclass(slots=True)
class Game:
    """Turn state machine: the single owner of the game state.

    Phases run AWAITING_CARD -> AWAITING_TARGET -> ANIMATING -> RESOLVED and
    back to AWAITING_CARD for the next color. Commands are only accepted in
    the two awaiting phases; illegal ones return False and change nothing.
    """

    strategies: Dict[Color, BaseStrategy] = field(default_factory=dict)
    rng: random.Random = field(default_factory=random.Random)
    board: Board = field(default_factory=Board.from_config)
    rules: RulesConfig = field(default_factory=lambda: rules_config)
    state: GameState = field(init=False)
    phase: TurnPhase = field(default=TurnPhase.AWAITING_CARD, init=False)
    selected_index: Optional[int] = field(default=None, init=False)
    swap_source: Optional[Tuple[int, int]] = field(default=None, init=False)
    shuffles_this_turn: int = field(default=0, init=False)
    turns_played: int = field(default=0, init=False)
    _pile: DrawPile = field(init=False, repr=False)
    _frames: List[PawnPlace] = field(default_factory=list, init=False, repr=False)
    _moving: Optional[Tuple[int, int]] = field(default=None, init=False, repr=False)
    _listeners: List[EventListener] = field(default_factory=list, init=False, repr=False)
    _state_listeners: List[StateListener] = field(
        default_factory=list, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.strategies = {Color(c): s for c, s in self.strategies.items()}
        self.reset_game()

    # --- Listeners ---
    def add_listener(self, callback: EventListener) -> None:
        self._listeners.append(callback)

    def add_state_listener(self, callback: StateListener) -> None:
        self._state_listeners.append(callback)

    def _emit(self, tag: EventTag, message: str, color: Optional[Color] = None) -> None:
        self.state.log.append(message)
        logger.info(message)
        event = GameEvent(tag=tag, message=message, color=color)
        for callback in list(self._listeners):
            callback(event)

    def _publish(self) -> None:
        if not self._state_listeners:
            return
        snap = self.snapshot()
        for callback in list(self._state_listeners):
            callback(snap)

    # --- State ingress/egress ---
    @property
    def current_color(self) -> Color:
        return self.state.current_color

    @property
    def hand(self) -> List[Card]:
        return self.state.hand

    @property
    def is_animating(self) -> bool:
        return self.phase == TurnPhase.ANIMATING

    def is_ai(self, color: int) -> bool:
        return Color(color) in self.strategies

    def snapshot(self) -> GameState:
        snap = self.state.copy()
        snap.draw_pile = list(self._pile.cards)
        return snap

    def load_state(self, state: GameState) -> bool:
        """Replace the whole state with an external snapshot (rejected mid-animation)."""
        if self.is_animating:
            logger.warning("Ignoring state ingress while a move is animating")
            return False
        self._check_snapshot(state)
        self.state = state.copy()
        self._pile = DrawPile(rng=self.rng, cards=list(state.draw_pile))
        while len(self.state.hand) < config.HAND_SIZE:
            self.state.hand.append(self._pile.draw())
        self._sync_pile()
        self._clear_selection()
        self._frames = []
        self._moving = None
        self.shuffles_this_turn = 0
        self.phase = (
            TurnPhase.GAME_OVER if self.state.winner is not None else TurnPhase.AWAITING_CARD
        )
        return True

    @staticmethod
    def _check_snapshot(state: GameState) -> None:
        if len(state.pawns) != config.NUM_COLORS:
            raise InvariantViolation(
                f"Snapshot needs {config.NUM_COLORS} pawn rows, got {len(state.pawns)}"
            )
        for color, row in enumerate(state.pawns):
            if len(row) != config.PAWNS_PER_COLOR:
                raise InvariantViolation(
                    f"{Color(color).label} needs {config.PAWNS_PER_COLOR} pawns, got {len(row)}"
                )
            for slot, pawn in enumerate(row):
                if (pawn.color, pawn.slot) != (color, slot):
                    raise InvariantViolation(
                        f"Pawn ({pawn.color}, {pawn.slot}) filed under ({color}, {slot})"
                    )
        if len(state.hand) > config.HAND_SIZE:
            raise InvariantViolation(
                f"Hand holds at most {config.HAND_SIZE} cards, got {len(state.hand)}"
            )

    def reset_game(self) -> None:
        self._pile = DrawPile(rng=self.rng)
        self.state = GameState(
            pawns=initial_pawns(config.NUM_COLORS, config.PAWNS_PER_COLOR),
            hand=self._pile.deal(config.HAND_SIZE),
        )
        self._sync_pile()
        self._clear_selection()
        self._frames = []
        self._moving = None
        self.shuffles_this_turn = 0
        self.turns_played = 0
        self.phase = TurnPhase.AWAITING_CARD
        self._publish()

    # --- Helpers ---
    def _sync_pile(self) -> None:
        self.state.draw_pile = self._pile.cards

    def _clear_selection(self) -> None:
        self.selected_index = None
        self.swap_source = None

    def _label(self, color: int) -> str:
        label = Color(color).label
        return f"{label} (AI)" if self.is_ai(color) else label

    def _accepting(self) -> bool:
        return self.phase in (TurnPhase.AWAITING_CARD, TurnPhase.AWAITING_TARGET)

    def _replace_slot(self, index: int) -> None:
        self.state.hand[index] = self._pile.draw()
        self._sync_pile()

    def _check_winner(self) -> None:
        found = winner(self.state.pawns, self.board, self.rules)
        if found is not None and self.state.winner is None:
            self.state.winner = found
            self._emit(EventTag.WIN, f"{found.label} wins!", found)

    def _finish_action(self, index: int) -> None:
        """Commit a turn-ending action: refill the slot and pass the turn."""
        self.phase = TurnPhase.RESOLVED
        self._replace_slot(index)
        self._clear_selection()
        if self.state.winner is not None:
            self.phase = TurnPhase.GAME_OVER
        else:
            self._advance_turn()
        self._publish()

    def _advance_turn(self) -> None:
        self.state.turn_index = (self.state.turn_index + self.state.direction) % config.NUM_COLORS
        self.shuffles_this_turn = 0
        self.turns_played += 1
        self.phase = TurnPhase.AWAITING_CARD
        nxt = self.current_color
        self._emit(EventTag.TURN, f"Turn passes to {nxt.label}", nxt)

    def _discard(self, index: int) -> None:
        color = self.current_color
        card = self.state.hand[index]
        self._emit(EventTag.DRAW, f"{self._label(color)} discarded {card} (no moves)", color)
        self._finish_action(index)

    # --- Queries for the input layer ---
    def movable_slots(self) -> List[int]:
        if self.phase != TurnPhase.AWAITING_TARGET or self.selected_index is None:
            return []
        card = self.state.hand[self.selected_index]
        return movable(card, self.current_color, self.state.pawns, self.board, self.rules)

    def projections(self) -> Dict[int, PawnPlace]:
        """Final landing frame per movable slot for the selected numeric card."""
        if self.phase != TurnPhase.AWAITING_TARGET or self.selected_index is None:
            return {}
        card = self.state.hand[self.selected_index]
        steps = card_steps(card)
        if steps is None:
            return {}
        own = self.state.pawns[self.current_color]
        return {
            slot: get_frames(self.current_color, own[slot], steps, self.board)[-1]
            for slot in self.movable_slots()
        }

    def selectable_pawns(self) -> Dict[Color, List[int]]:
        """Pawns a select_pawn call would accept right now."""
        if self.phase != TurnPhase.AWAITING_TARGET or self.selected_index is None:
            return {}
        card = self.state.hand[self.selected_index]
        color = int(self.current_color)
        pawns = self.state.pawns
        out: Dict[Color, List[int]] = {}
        if isinstance(card, NumericCard):
            slots = self.movable_slots()
            if slots:
                out[Color(color)] = slots
        elif isinstance(card, SorryCard) or (
            isinstance(card, SwapCard) and self.swap_source is not None
        ):
            excluded = color if isinstance(card, SorryCard) else self.swap_source[0]
            for c, row in enumerate(pawns):
                if c == excluded:
                    continue
                slots = [p.slot for p in row if p.is_on_track()]
                if slots:
                    out[Color(c)] = slots
        elif isinstance(card, SwapCard):
            slots = [p.slot for p in pawns[color] if p.is_on_track()]
            if slots:
                out[Color(color)] = slots
        return out

    # --- Commands ---
    def select_card(self, index: int) -> bool:
        if not self._accepting():
            logger.debug(f"select_card({index}) rejected in phase {self.phase.value}")
            return False
        if not 0 <= index < len(self.state.hand):
            return False
        if self.phase == TurnPhase.AWAITING_TARGET and index == self.selected_index:
            return True

        self._clear_selection()
        self.phase = TurnPhase.AWAITING_CARD
        card = self.state.hand[index]
        color = self.current_color
        pawns = self.state.pawns

        if isinstance(card, ShuffleCard):
            self._play_shuffle(index)
            return True

        if isinstance(card, SwapCard):
            legal = has_swap_move(color, pawns)
        elif isinstance(card, SorryCard):
            legal = has_sorry_move(color, pawns)
        elif isinstance(card, NumericCard):
            legal = bool(movable(card, color, pawns, self.board, self.rules))
        else:
            raise InvariantViolation(f"Unknown card in hand: {card!r}")

        if not legal:
            self._discard(index)
            return True

        self.selected_index = index
        self.phase = TurnPhase.AWAITING_TARGET
        return True

    def select_pawn(self, color: int, slot: int) -> bool:
        if self.phase != TurnPhase.AWAITING_TARGET or self.selected_index is None:
            return False
        if not 0 <= int(color) < config.NUM_COLORS or not 0 <= slot < config.PAWNS_PER_COLOR:
            return False
        color = Color(color)
        card = self.state.hand[self.selected_index]
        pawn = self.state.pawns[color][slot]
        current = self.current_color

        if isinstance(card, SwapCard):
            if not pawn.is_on_track():
                return False
            if self.swap_source is None or color == self.swap_source[0]:
                if color != current:
                    return False
                self.swap_source = (int(color), slot)
                return True
            self._play_swap(self.swap_source, (int(color), slot))
            return True

        if isinstance(card, SorryCard):
            if color == current or not pawn.is_on_track():
                return False
            self._play_sorry((int(color), slot))
            return True

        if color != current:
            return False
        if slot not in movable(card, current, self.state.pawns, self.board, self.rules):
            return False
        self._start_move(slot)
        return True

    def discard_card(self, index: int) -> bool:
        if not self._accepting() or not 0 <= index < len(self.state.hand):
            return False
        self._clear_selection()
        self._discard(index)
        return True

    # --- Card effects ---
    def _play_shuffle(self, index: int) -> None:
        color = self.current_color
        self._emit(EventTag.DRAW, f"{self._label(color)} played Shuffle (new hand)", color)
        self.state.hand = self._pile.deal(config.HAND_SIZE)
        self._sync_pile()
        self.state.direction = -self.state.direction
        self.shuffles_this_turn += 1
        self.phase = TurnPhase.AWAITING_CARD
        self._publish()

    def _play_sorry(self, target: Tuple[int, int]) -> None:
        color = self.current_color
        own = next(p for p in self.state.pawns[color] if p.is_in_start())
        victim = self.state.pawns[target[0]][target[1]]
        position = victim.position
        self.phase = TurnPhase.RESOLVED
        victim.send_home()
        own.move_to(TrackPlace(position))
        self._emit(
            EventTag.CAPTURE,
            f"{self._label(color)} played Sorry on {Color(target[0]).label}",
            color,
        )
        self._check_winner()
        self._finish_action(self.selected_index)

    def _play_swap(self, source: Tuple[int, int], target: Tuple[int, int]) -> None:
        color = self.current_color
        a = self.state.pawns[source[0]][source[1]]
        b = self.state.pawns[target[0]][target[1]]
        if not (a.is_on_track() and b.is_on_track()):
            raise InvariantViolation("Swap requires two track pawns")
        self.phase = TurnPhase.RESOLVED
        a.place, b.place = b.place, a.place
        self._emit(EventTag.MOVE, f"{self._label(color)} played Swap", color)
        self._check_winner()
        self._finish_action(self.selected_index)

    # --- Animation ---
    def _start_move(self, slot: int) -> None:
        color = self.current_color
        card = self.state.hand[self.selected_index]
        self._frames = get_frames(color, self.state.pawns[color][slot], card_steps(card), self.board)
        if not self._frames:
            raise InvariantViolation(f"No frames for a movable pawn (slot {slot}, card {card})")
        self._moving = (int(color), slot)
        self.phase = TurnPhase.ANIMATING
        self._emit(EventTag.MOVE, f"{self._label(color)} plays {card}", color)

    def step_animation(self) -> bool:
        """Apply the next frame; returns True while more frames remain."""
        if self.phase != TurnPhase.ANIMATING or self._moving is None:
            return False
        color, slot = self._moving
        self.state.pawns[color][slot].move_to(self._frames.pop(0))
        if self._frames:
            return True
        self._complete_animation()
        return False

    def run_animation(self, delay: Optional[float] = None) -> None:
        """Play every pending frame, sleeping between frames."""
        if delay is None:
            delay = self.rules.frame_delay_ms / 1000.0
        while self.step_animation():
            if delay > 0:
                time.sleep(delay)

    def _complete_animation(self) -> None:
        color, slot = self._moving
        self._moving = None
        self.phase = TurnPhase.RESOLVED
        if self.state.pawns[color][slot].is_on_track():
            outcome = resolve(self.state.pawns, color, slot, self.board, self.rules)
            for cap in outcome.captures:
                self._emit(
                    EventTag.CAPTURE,
                    f"{cap.attacker.label} bumped {cap.victim.label}",
                    cap.attacker,
                )
        self._check_winner()
        self._finish_action(self.selected_index)

    # --- Computer turns ---
    def play_ai_turn(self, delay: float = 0.0) -> bool:
        """Run every decision the current computer color makes this turn.

        Returns False when it is not a computer color's turn to choose a card.
        """
        acted = False
        color = self.current_color
        while (
            self.phase == TurnPhase.AWAITING_CARD
            and self.current_color == color
            and self.is_ai(color)
        ):
            strategy = self.strategies[color]
            action = strategy.choose(
                self.snapshot(),
                self.board,
                self.rules,
                can_shuffle=self.shuffles_this_turn == 0,
            )
            if not self._execute(action) and self.current_color == color and self._accepting():
                logger.warning(
                    f"{color.label} strategy {strategy.name} chose an unplayable "
                    f"{action.kind.value}; discarding instead"
                )
                self._clear_selection()
                self.phase = TurnPhase.AWAITING_CARD
                self._discard(strategy.fallback_discard(self.state).card_index)
            if self.is_animating:
                self.run_animation(delay)
            acted = True
        return acted

    def _execute(self, action: AIAction) -> bool:
        if action.kind == ActionKind.DISCARD:
            return self.discard_card(action.card_index)
        if action.kind == ActionKind.SHUFFLE:
            if not isinstance(self.state.hand[action.card_index], ShuffleCard):
                return False
            return self.select_card(action.card_index)
        if not self.select_card(action.card_index):
            return False
        if self.phase != TurnPhase.AWAITING_TARGET:
            # Card had no target and was discarded on selection
            return True
        if action.kind == ActionKind.SWAP:
            return self.select_pawn(*action.pawn) and self.select_pawn(*action.target)
        if action.kind == ActionKind.SORRY:
            return self.select_pawn(*action.target)
        return self.select_pawn(*action.pawn)
