"""Move simulation: legality, resulting place, and per-step animation frames.

Nothing here applies bumps or slides; that is the resolution engine's job.
"""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from .board import Board, board as default_board
from .config import RulesConfig, rules_config
from .pawn import Pawn
from .types import (
    Card,
    MoveResult,
    NumericCard,
    PawnPlace,
    SafetyPlace,
    StartPlace,
    TrackPlace,
)


def card_steps(card: Card | None) -> int | None:
    """Step count a card moves a pawn by, or None for non-numeric cards.

    The zero card only ever lifts a pawn out of Start, which is a one-step move.
    """
    if not isinstance(card, NumericCard):
        return None
    return 1 if card.value == 0 else card.value


def _walk(
    color: int, place: PawnPlace, steps: int, board: Board
) -> list[PawnPlace] | None:
    """Frames for a move, or None when the move is illegal."""
    if steps == 0:
        return None

    if isinstance(place, StartPlace):
        if steps > board.start_exit_max:
            return None
        return [TrackPlace(board.track_entry(color))]

    frames: list[PawnPlace] = []
    if steps < 0:
        # Backward moves stay on the track; never backward out of a home lane
        if not isinstance(place, TrackPlace):
            return None
        position = place.position
        for _ in range(-steps):
            position = (position - 1) % board.track_length
            frames.append(TrackPlace(position))
        return frames

    current = place
    home_entry = board.home_lane_entry(color)
    for _ in range(steps):
        if isinstance(current, TrackPlace):
            if current.position == home_entry:
                current = SafetyPlace(0)
            else:
                current = TrackPlace(board.step_forward(current.position))
        elif isinstance(current, SafetyPlace):
            if current.index >= board.last_safety:
                return None
            current = SafetyPlace(current.index + 1)
        else:
            return None
        frames.append(current)
    return frames


def simulate(
    color: int, pawn: Pawn | PawnPlace, steps: int, board: Board = default_board
) -> MoveResult:
    """Check a move and return the resulting place (unchanged if illegal)."""
    place = pawn.place if isinstance(pawn, Pawn) else pawn
    frames = _walk(color, place, steps, board)
    if not frames:
        return MoveResult(legal=False, place=place)
    return MoveResult(legal=True, place=frames[-1])


def get_frames(
    color: int, pawn: Pawn | PawnPlace, steps: int, board: Board = default_board
) -> list[PawnPlace]:
    """One place per unit step; a single frame when leaving Start; empty if illegal."""
    place = pawn.place if isinstance(pawn, Pawn) else pawn
    return _walk(color, place, steps, board) or []


def _lane_blocked(
    own: Sequence[Pawn],
    slot: int,
    last: PawnPlace,
    board: Board,
    rules: RulesConfig,
) -> bool:
    if not isinstance(last, SafetyPlace):
        return False
    if rules.win_rule == "final_cell" and last.index == board.last_safety:
        return False
    return any(
        other.slot != slot and other.safety_index == last.index for other in own
    )


def movable(
    card: Card | None,
    color: int,
    pawns: Sequence[Sequence[Pawn]],
    board: Board = default_board,
    rules: RulesConfig = rules_config,
) -> list[int]:
    """Slots of `color` that can legally play a numeric card."""
    steps = card_steps(card)
    if steps is None:
        return []

    own = pawns[int(color)]
    slots: list[int] = []
    for pawn in own:
        if card.value == 0 and not pawn.is_in_start():
            continue
        frames = get_frames(color, pawn, steps, board)
        if not frames:
            continue
        if _lane_blocked(own, pawn.slot, frames[-1], board, rules):
            logger.debug(
                f"Slot {pawn.slot} of color {int(color)} blocked in home lane at {frames[-1]}"
            )
            continue
        slots.append(pawn.slot)
    return slots


def has_sorry_move(color: int, pawns: Sequence[Sequence[Pawn]]) -> bool:
    if not any(p.is_in_start() for p in pawns[int(color)]):
        return False
    return any(
        p.is_on_track()
        for c, row in enumerate(pawns)
        if c != int(color)
        for p in row
    )


def has_swap_move(color: int, pawns: Sequence[Sequence[Pawn]]) -> bool:
    if not any(p.is_on_track() for p in pawns[int(color)]):
        return False
    return any(
        p.is_on_track()
        for c, row in enumerate(pawns)
        if c != int(color)
        for p in row
    )
