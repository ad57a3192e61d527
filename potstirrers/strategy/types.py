from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ActionKind(Enum):
    NUMERIC = "numeric"
    SORRY = "sorry"
    SWAP = "swap"
    SHUFFLE = "shuffle"
    DISCARD = "discard"


@dataclass(slots=True)
class AIAction:
    """A complete decision for one computer turn, played through the command surface."""

    kind: ActionKind
    card_index: int
    pawn: Optional[Tuple[int, int]] = None  # (color, slot) moved or swapped from
    target: Optional[Tuple[int, int]] = None  # (color, slot) bumped or swapped with
    score: float = 0.0
