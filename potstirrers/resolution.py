"""Post-move resolution: landing bumps, slides and win detection."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from .board import Board, board as default_board
from .config import RulesConfig, rules_config
from .errors import InvariantViolation
from .pawn import Pawn
from .types import Capture, Color, Resolution, TrackPlace


def _bump_at(
    pawns: Sequence[Sequence[Pawn]],
    mover: Pawn,
    position: int,
    board: Board,
    rules: RulesConfig,
) -> list[Capture]:
    captures: list[Capture] = []
    for victim in board.pawns_at(pawns, position, exclude=(mover.color, mover.slot)):
        if victim.color == mover.color and not rules.capture_own_color:
            continue
        victim.send_home()
        captures.append(
            Capture(
                attacker=Color(mover.color),
                attacker_slot=mover.slot,
                victim=Color(victim.color),
                victim_slot=victim.slot,
                position=position,
            )
        )
    return captures


def resolve(
    pawns: Sequence[Sequence[Pawn]],
    color: int,
    slot: int,
    board: Board = default_board,
    rules: RulesConfig = rules_config,
) -> Resolution:
    """Apply landing capture then at most one slide for a pawn that just landed.

    Mutates `pawns` in place.
    """
    mover = pawns[int(color)][slot]
    if not mover.is_on_track():
        raise InvariantViolation(
            f"resolve() called for {Color(int(color)).label} slot {slot} in {mover.region.value}"
        )

    landing = mover.position
    captures = _bump_at(pawns, mover, landing, board, rules)

    info = board.slide_info(landing)
    if info.distance > 0:
        for position in info.affected[1:]:
            captures.extend(_bump_at(pawns, mover, position, board, rules))
        mover.move_to(TrackPlace(info.final_position))
        logger.debug(
            f"{Color(int(color)).label} slides {landing} -> {info.final_position}"
        )

    return Resolution(
        final_place=mover.place, captures=captures, slide_distance=info.distance
    )


def winner(
    pawns: Sequence[Sequence[Pawn]],
    board: Board = default_board,
    rules: RulesConfig = rules_config,
) -> Color | None:
    """First color (in turn order) whose four pawns are all home."""
    for color, row in enumerate(pawns):
        if not row:
            continue
        if rules.win_rule == "final_cell":
            done = all(p.safety_index == board.last_safety for p in row)
        else:
            done = all(p.is_in_safety() for p in row)
        if done:
            return Color(color)
    return None
