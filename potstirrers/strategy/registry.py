from __future__ import annotations

from typing import Dict, Type

from .base import BaseStrategy
from .heuristic import HeuristicStrategy
from .random_strategy import RandomStrategy

STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    HeuristicStrategy.name: HeuristicStrategy,
    RandomStrategy.name: RandomStrategy,
}


def available() -> list[str]:
    return list(STRATEGY_REGISTRY.keys())


def create(name: str, **kwargs) -> BaseStrategy:
    """Instantiate a registered strategy by name (case-insensitive).

    Raises:
        KeyError: If the name is not registered.
    """
    key = name.strip().lower()
    if key not in STRATEGY_REGISTRY:
        raise KeyError(f"Unknown strategy '{name}'. Available: {available()}")
    return STRATEGY_REGISTRY[key](**kwargs)
