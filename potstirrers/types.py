from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Union


class Color(IntEnum):
    RED = 0
    BLUE = 1
    YELLOW = 2
    GREEN = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "Color":
        return cls[label.upper()]


class Region(Enum):
    START = "start"
    TRACK = "track"
    SAFETY = "safety"


# --- Pawn places: one variant per region, so position and lane index never coexist ---


@dataclass(frozen=True, slots=True)
class StartPlace:
    @property
    def region(self) -> Region:
        return Region.START


@dataclass(frozen=True, slots=True)
class TrackPlace:
    position: int

    @property
    def region(self) -> Region:
        return Region.TRACK


@dataclass(frozen=True, slots=True)
class SafetyPlace:
    index: int

    @property
    def region(self) -> Region:
        return Region.SAFETY


PawnPlace = Union[StartPlace, TrackPlace, SafetyPlace]
START = StartPlace()


# --- Cards ---


@dataclass(frozen=True, slots=True)
class NumericCard:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class SorryCard:
    def __str__(self) -> str:
        return "Sorry"


@dataclass(frozen=True, slots=True)
class SwapCard:
    def __str__(self) -> str:
        return "Swap"


@dataclass(frozen=True, slots=True)
class ShuffleCard:
    def __str__(self) -> str:
        return "Shuffle"


Card = Union[NumericCard, SorryCard, SwapCard, ShuffleCard]
SORRY = SorryCard()
SWAP = SwapCard()
SHUFFLE = ShuffleCard()

_SYMBOLIC_CARDS = {"Sorry": SORRY, "Swap": SWAP, "Shuffle": SHUFFLE}


def card_from_value(value: int | str) -> Card:
    """Build a card from its plain value (an int or a symbolic name)."""
    if isinstance(value, bool):
        raise ValueError(f"Not a card value: {value!r}")
    if isinstance(value, int):
        return NumericCard(value)
    try:
        return _SYMBOLIC_CARDS[value]
    except KeyError:
        raise ValueError(f"Unknown card: {value!r}") from None


def card_to_value(card: Card) -> int | str:
    if isinstance(card, NumericCard):
        return card.value
    return str(card)


# --- Turn machine ---


class TurnPhase(Enum):
    AWAITING_CARD = "awaiting_card"
    AWAITING_TARGET = "awaiting_target"
    ANIMATING = "animating"
    RESOLVED = "resolved"
    GAME_OVER = "game_over"


class EventTag(Enum):
    DRAW = "draw"
    MOVE = "move"
    CAPTURE = "capture"
    TURN = "turn"
    WIN = "win"


@dataclass(frozen=True, slots=True)
class GameEvent:
    tag: EventTag
    message: str
    color: Optional[Color] = None


@dataclass(frozen=True, slots=True)
class Capture:
    attacker: Color
    attacker_slot: int
    victim: Color
    victim_slot: int
    position: int


@dataclass(slots=True)
class MoveResult:
    legal: bool
    place: PawnPlace


@dataclass(slots=True)
class Resolution:
    final_place: PawnPlace
    captures: List[Capture] = field(default_factory=list)
    slide_distance: int = 0
