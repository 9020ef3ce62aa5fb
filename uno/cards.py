"""Card abstractions and deck assembly for Uno."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Iterable, Iterator


class Color(str, Enum):
    """Card colors; ``WILD`` marks an unresolved wild card."""

    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"
    BLUE = "BLUE"
    WILD = "WILD"

    @classmethod
    def concrete(cls) -> tuple["Color", ...]:
        """Return the four colors a wild card can resolve to."""

        return (cls.RED, cls.YELLOW, cls.GREEN, cls.BLUE)


class Rank(str, Enum):
    """Numeric and action ranks."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "SKIP"
    REVERSE = "REVERSE"
    DRAW_TWO = "DRAW_TWO"
    WILD = "WILD"
    WILD_DRAW_FOUR = "WILD_DRAW_FOUR"

    @classmethod
    def numeric(cls) -> tuple["Rank", ...]:
        return (
            cls.ZERO,
            cls.ONE,
            cls.TWO,
            cls.THREE,
            cls.FOUR,
            cls.FIVE,
            cls.SIX,
            cls.SEVEN,
            cls.EIGHT,
            cls.NINE,
        )

    @property
    def is_wild(self) -> bool:
        return self in WILD_RANKS


WILD_RANKS: Final[frozenset[Rank]] = frozenset({Rank.WILD, Rank.WILD_DRAW_FOUR})
COLORED_ACTION_RANKS: Final[tuple[Rank, ...]] = (Rank.SKIP, Rank.REVERSE, Rank.DRAW_TWO)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable value describing a single Uno card."""

    color: Color
    rank: Rank

    def is_playable_on(self, other: "Card") -> bool:
        """Return ``True`` when this card may be discarded onto ``other``."""

        return self.color == Color.WILD or self.color == other.color or self.rank == other.rank

    def with_color(self, color: Color) -> "Card":
        """Return a copy carrying ``color`` with the same rank."""

        return replace(self, color=color)

    def label(self) -> str:
        """Create a plain-text label, e.g. ``RED 5`` or ``WILD_DRAW_FOUR``."""

        if self.color == Color.WILD:
            return self.rank.value
        return f"{self.color.value} {self.rank.value}"

    def __str__(self) -> str:
        return self.label()


def iter_standard_deck() -> Iterator[Card]:
    """Yield the 108 cards of a standard deck in canonical order."""

    for color in Color.concrete():
        yield Card(color, Rank.ZERO)
        for _ in range(2):
            for rank in Rank.numeric()[1:]:
                yield Card(color, rank)
            for rank in COLORED_ACTION_RANKS:
                yield Card(color, rank)
    for _ in range(4):
        yield Card(Color.WILD, Rank.WILD)
        yield Card(Color.WILD, Rank.WILD_DRAW_FOUR)


def create_standard_deck() -> list[Card]:
    """Return a fresh list holding the standard composition, unshuffled."""

    return list(iter_standard_deck())


def playable_cards(cards: Iterable[Card], top: Card) -> list[Card]:
    """Return the cards from ``cards`` that may be played on ``top``."""

    return [card for card in cards if card.is_playable_on(top)]
