import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

WIN_RULES = ("any_lane", "final_cell")
TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean switch; accepts 1/0 as well as true/false."""
    return os.getenv(name, str(default)).strip().lower() in TRUTHY


@dataclass(slots=True)
class Config:
    # --- Constants ---
    TRACK_LENGTH: int = 60
    HOME_LANE_LENGTH: int = 6
    NUM_COLORS: int = 4
    PAWNS_PER_COLOR: int = 4
    HAND_SIZE: int = 3
    # Any non-zero numeric card up to this value (backward cards included) leaves Start
    START_EXIT_MAX: int = 2
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 1000))

    # Track positions, Red, Blue, Yellow, Green
    TRACK_ENTRY: list[int] = field(default_factory=lambda: [2, 17, 32, 47])
    HOME_ENTRY: list[int] = field(default_factory=lambda: [0, 15, 30, 45])
    # (start, end, display color id)
    SLIDES: list[tuple[int, int, int]] = field(
        default_factory=lambda: [
            (5, 7, 0),
            (10, 12, 0),
            (20, 22, 1),
            (25, 27, 1),
            (35, 37, 2),
            (40, 42, 2),
            (50, 52, 3),
            (55, 57, 3),
        ]
    )

    # Deck: every base card appears DECK_COPIES times in a fresh pile
    DECK_COPIES: int = int(os.getenv("DECK_COPIES", 4))
    BASE_DECK: list[int | str] = field(
        default_factory=lambda: [
            0, 1, 2, 3, 4, 5, 7, 8, 10, 11, 12, -1, -4, "Sorry", "Swap", "Shuffle",
        ]
    )

    # Derived (populated in __post_init__ due to slots)
    LAST_SAFETY: int = 0

    def __post_init__(self):
        self.LAST_SAFETY = self.HOME_LANE_LENGTH - 1

        if self.TRACK_LENGTH < 4:
            raise ValueError("TRACK_LENGTH must be at least 4")
        if self.HOME_LANE_LENGTH < 1:
            raise ValueError("HOME_LANE_LENGTH must be positive")
        for name in ("TRACK_ENTRY", "HOME_ENTRY"):
            values = getattr(self, name)
            if len(values) != self.NUM_COLORS:
                raise ValueError(f"{name} needs one entry per color")
            if any(not 0 <= v < self.TRACK_LENGTH for v in values):
                raise ValueError(f"{name} entries must lie on the track")
        for start, end, _ in self.SLIDES:
            if not 0 <= start <= end < self.TRACK_LENGTH:
                raise ValueError(f"Invalid slide segment ({start}, {end})")
        if self.DECK_COPIES < 1:
            raise ValueError("DECK_COPIES must be positive")


@dataclass(slots=True)
class RulesConfig:
    win_rule: str = os.getenv("WIN_RULE", "any_lane")
    capture_own_color: bool = env_flag("CAPTURE_OWN_COLOR", True)
    frame_delay_ms: int = int(os.getenv("FRAME_DELAY_MS", 140))

    def __post_init__(self):
        if self.win_rule not in WIN_RULES:
            raise ValueError(f"WIN_RULE must be one of {WIN_RULES}")
        if self.frame_delay_ms < 0:
            raise ValueError("FRAME_DELAY_MS must not be negative")


@dataclass(slots=True)
class AIConfig:
    step: float = 1.0
    backward_step: float = 0.5
    distance_gain: float = 2.0
    slide: float = 2.0
    safety_gain: float = 15.0
    final_safety_bonus: float = 80.0
    exit_start_bonus: float = 100.0
    capture_bonus: float = 120.0
    own_landing_penalty: float = 1000.0
    threat_base: float = 120.0
    threat_slide: float = 2.0
    swap_gain: float = 3.0
    swap_opponent_gain: float = 2.0


config = Config()
rules_config = RulesConfig()
ai_config = AIConfig()
