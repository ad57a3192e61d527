"""Game state snapshot and its plain-dict form for session stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import config
from .errors import SnapshotError
from .pawn import Pawn, copy_pawns, initial_pawns
from .types import (
    START,
    Card,
    Color,
    SafetyPlace,
    TrackPlace,
    card_from_value,
    card_to_value,
)


@dataclass(slots=True)
class GameState:
    pawns: List[List[Pawn]] = field(default_factory=initial_pawns)
    draw_pile: List[Card] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)
    turn_index: int = 0
    direction: int = 1
    winner: Optional[Color] = None
    log: List[str] = field(default_factory=list)

    @property
    def current_color(self) -> Color:
        return Color(self.turn_index)

    @property
    def next_color(self) -> Color:
        return Color((self.turn_index + self.direction) % config.NUM_COLORS)

    def copy(self) -> "GameState":
        return GameState(
            pawns=copy_pawns(self.pawns),
            draw_pile=list(self.draw_pile),
            hand=list(self.hand),
            turn_index=self.turn_index,
            direction=self.direction,
            winner=self.winner,
            log=list(self.log),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the state to plain data for persistence or broadcast."""
        return {
            "pawns": {
                Color(color).label: [_pawn_to_dict(p) for p in row]
                for color, row in enumerate(self.pawns)
            },
            "draw_pile": [card_to_value(c) for c in self.draw_pile],
            "hand": [card_to_value(c) for c in self.hand],
            "turn_index": self.turn_index,
            "direction": self.direction,
            "winner": self.winner.label if self.winner is not None else None,
            "log": list(self.log),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        try:
            raw_pawns = data["pawns"]
            pawns: List[List[Pawn]] = []
            for color in Color:
                rows = raw_pawns[color.label]
                if len(rows) != config.PAWNS_PER_COLOR:
                    raise SnapshotError(
                        f"{color.label} needs {config.PAWNS_PER_COLOR} pawns, got {len(rows)}"
                    )
                pawns.append(
                    [_pawn_from_dict(int(color), slot, raw) for slot, raw in enumerate(rows)]
                )
            turn_index = int(data.get("turn_index", 0))
            direction = int(data.get("direction", 1))
            if not 0 <= turn_index < config.NUM_COLORS:
                raise SnapshotError(f"turn_index out of range: {turn_index}")
            if direction not in (1, -1):
                raise SnapshotError(f"direction must be +1 or -1, got {direction}")
            hand = [card_from_value(v) for v in data.get("hand", [])]
            if len(hand) > config.HAND_SIZE:
                raise SnapshotError(
                    f"Hand holds at most {config.HAND_SIZE} cards, got {len(hand)}"
                )
            winner = data.get("winner")
            return cls(
                pawns=pawns,
                draw_pile=[card_from_value(v) for v in data.get("draw_pile", [])],
                hand=hand,
                turn_index=turn_index,
                direction=direction,
                winner=Color.from_label(winner) if winner else None,
                log=list(data.get("log", [])),
            )
        except SnapshotError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Malformed game snapshot: {e}") from e


def _pawn_to_dict(pawn: Pawn) -> Dict[str, Any]:
    place = pawn.place
    if isinstance(place, TrackPlace):
        return {"region": "track", "position": place.position}
    if isinstance(place, SafetyPlace):
        return {"region": "safety", "safety_index": place.index}
    return {"region": "start"}


def _pawn_from_dict(color: int, slot: int, raw: Dict[str, Any]) -> Pawn:
    region = raw.get("region")
    if region == "start":
        place = START
    elif region == "track":
        position = int(raw["position"])
        if not 0 <= position < config.TRACK_LENGTH:
            raise SnapshotError(f"Track position out of range: {position}")
        place = TrackPlace(position)
    elif region == "safety":
        index = int(raw["safety_index"])
        if not 0 <= index < config.HOME_LANE_LENGTH:
            raise SnapshotError(f"Safety index out of range: {index}")
        place = SafetyPlace(index)
    else:
        raise SnapshotError(f"Unknown pawn region: {region!r}")
    return Pawn(color=color, slot=slot, place=place)

