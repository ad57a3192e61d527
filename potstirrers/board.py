from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .config import Config, config
from .pawn import Pawn


@dataclass(frozen=True, slots=True)
class SlideSegment:
    start: int
    end: int
    color: int  # display only; capture logic ignores it

    def contains(self, position: int) -> bool:
        return self.start <= position <= self.end


@dataclass(frozen=True, slots=True)
class SlideInfo:
    """Where a pawn landing on a track cell ends up and which cells it sweeps."""

    final_position: int
    distance: int
    affected: tuple[int, ...]  # landing cell first, then every swept cell


@dataclass(slots=True)
class Board:
    """Board topology: track, entries, home lanes and slides (no rule logic)."""

    track_length: int
    home_lane_length: int
    track_entries: tuple[int, ...]
    home_entries: tuple[int, ...]
    slides: tuple[SlideSegment, ...]
    start_exit_max: int = 2
    _slide_lookup: np.ndarray = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        # -1 = no slide, otherwise the index into self.slides
        self._slide_lookup = np.full(self.track_length, -1, dtype=np.int16)
        for idx, segment in enumerate(self.slides):
            span = self._slide_lookup[segment.start : segment.end + 1]
            span[span == -1] = idx

    @classmethod
    def from_config(cls, cfg: Config = config) -> "Board":
        return cls(
            track_length=cfg.TRACK_LENGTH,
            home_lane_length=cfg.HOME_LANE_LENGTH,
            track_entries=tuple(cfg.TRACK_ENTRY),
            home_entries=tuple(cfg.HOME_ENTRY),
            slides=tuple(SlideSegment(s, e, c) for s, e, c in cfg.SLIDES),
            start_exit_max=cfg.START_EXIT_MAX,
        )

    @property
    def last_safety(self) -> int:
        return self.home_lane_length - 1

    # --- Lookups ---
    def track_entry(self, color: int) -> int:
        return self.track_entries[int(color)]

    def home_lane_entry(self, color: int) -> int:
        return self.home_entries[int(color)]

    def is_slide_at(self, position: int) -> SlideSegment | None:
        idx = int(self._slide_lookup[position % self.track_length])
        return self.slides[idx] if idx >= 0 else None

    def slide_info(self, position: int) -> SlideInfo:
        segment = self.is_slide_at(position)
        if segment is None:
            return SlideInfo(position, 0, (position,))
        affected = (position,) + tuple(range(position + 1, segment.end + 1))
        return SlideInfo(segment.end, segment.end - position, affected)

    def distance_to_home(self, color: int, position: int) -> int:
        """Forward distance from a track cell to the color's home-lane entry."""
        return (self.home_lane_entry(color) - position) % self.track_length

    def step_forward(self, position: int, steps: int = 1) -> int:
        return (position + steps) % self.track_length

    # --- Occupancy ---
    def occupancy(self, pawns: Sequence[Sequence[Pawn]]) -> np.ndarray:
        """Return a (colors, track_length) array of pawn counts per track cell."""
        grid = np.zeros((len(pawns), self.track_length), dtype=np.int8)
        for color, row in enumerate(pawns):
            for pawn in row:
                if pawn.is_on_track():
                    grid[color, pawn.position] += 1
        return grid

    def pawns_at(
        self,
        pawns: Sequence[Sequence[Pawn]],
        position: int,
        *,
        exclude: tuple[int, int] | None = None,
    ) -> list[Pawn]:
        out: list[Pawn] = []
        for row in pawns:
            for pawn in row:
                if exclude is not None and (pawn.color, pawn.slot) == exclude:
                    continue
                if pawn.position == position:
                    out.append(pawn)
        return out


board = Board.from_config()
