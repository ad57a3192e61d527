from .board import Board
from .config import ai_config, config, rules_config
from .errors import GameError, InvariantViolation, SnapshotError
from .game import Game
from .pawn import Pawn
from .simulator import GameSummary, Simulator
from .state import GameState
from .types import Card, Color, EventTag, GameEvent, PawnPlace, TurnPhase

__all__ = [
    "Board",
    "Card",
    "Color",
    "config",
    "ai_config",
    "rules_config",
    "EventTag",
    "Game",
    "GameError",
    "GameEvent",
    "GameState",
    "GameSummary",
    "InvariantViolation",
    "Pawn",
    "PawnPlace",
    "Simulator",
    "SnapshotError",
    "TurnPhase",
]
