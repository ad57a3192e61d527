from .base import BaseStrategy
from .heuristic import HeuristicStrategy, compute_threat
from .random_strategy import RandomStrategy
from .registry import STRATEGY_REGISTRY, available, create
from .types import ActionKind, AIAction

__all__ = [
    "ActionKind",
    "AIAction",
    "BaseStrategy",
    "HeuristicStrategy",
    "RandomStrategy",
    "STRATEGY_REGISTRY",
    "available",
    "compute_threat",
    "create",
]
