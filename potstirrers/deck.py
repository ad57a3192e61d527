from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from loguru import logger

from .config import config
from .types import Card, card_from_value


def build_deck(
    rng: random.Random,
    base: Sequence[int | str] | None = None,
    copies: int | None = None,
) -> list[Card]:
    """A freshly shuffled pile holding `copies` of every base card."""
    base = config.BASE_DECK if base is None else base
    copies = config.DECK_COPIES if copies is None else copies
    cards = [card_from_value(value) for _ in range(copies) for value in base]
    rng.shuffle(cards)
    return cards


@dataclass(slots=True)
class DrawPile:
    rng: random.Random = field(default_factory=random.Random)
    cards: list[Card] = field(default_factory=list)
    reshuffles: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if not self.cards:
            self.cards = build_deck(self.rng)

    def __len__(self) -> int:
        return len(self.cards)

    def draw(self) -> Card:
        """Top card; an exhausted pile is rebuilt from a fresh multiset first."""
        if not self.cards:
            self.cards = build_deck(self.rng)
            self.reshuffles += 1
            logger.debug(f"Draw pile exhausted, reshuffled (#{self.reshuffles})")
        return self.cards.pop(0)

    def deal(self, count: int) -> list[Card]:
        return [self.draw() for _ in range(count)]
