from __future__ import annotations

from dataclasses import dataclass

from .errors import InvariantViolation
from .types import START, PawnPlace, Region, SafetyPlace, StartPlace, TrackPlace


@dataclass(slots=True)
class Pawn:
    """Lightweight pawn model. Holds state only.

    Legality, bumps and slides are handled by the move simulator and the
    resolution engine, not the pawn.
    """

    color: int  # Color value 0..3
    slot: int  # 0..3 per color
    place: PawnPlace = START

    def __post_init__(self) -> None:
        if not isinstance(self.place, (StartPlace, TrackPlace, SafetyPlace)):
            raise InvariantViolation(f"Pawn place must be a region variant, got {self.place!r}")

    @property
    def region(self) -> Region:
        return self.place.region

    @property
    def position(self) -> int | None:
        """Track position, or None when the pawn is not on the track."""
        return self.place.position if isinstance(self.place, TrackPlace) else None

    @property
    def safety_index(self) -> int | None:
        return self.place.index if isinstance(self.place, SafetyPlace) else None

    def is_in_start(self) -> bool:
        return isinstance(self.place, StartPlace)

    def is_on_track(self) -> bool:
        return isinstance(self.place, TrackPlace)

    def is_in_safety(self) -> bool:
        return isinstance(self.place, SafetyPlace)

    def move_to(self, place: PawnPlace) -> None:
        if not isinstance(place, (StartPlace, TrackPlace, SafetyPlace)):
            raise InvariantViolation(f"Cannot move pawn to {place!r}")
        self.place = place

    def send_home(self) -> None:
        self.place = START

    def copy(self) -> "Pawn":
        return Pawn(color=self.color, slot=self.slot, place=self.place)


def initial_pawns(num_colors: int = 4, pawns_per_color: int = 4) -> list[list[Pawn]]:
    """Every color's pawns in Start, indexed as pawns[color][slot]."""
    return [
        [Pawn(color=color, slot=slot) for slot in range(pawns_per_color)]
        for color in range(num_colors)
    ]


def copy_pawns(pawns: list[list[Pawn]]) -> list[list[Pawn]]:
    return [[pawn.copy() for pawn in row] for row in pawns]
