"""Draw and discard piles shared by every seat."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Sequence

from .cards import Card

__all__ = ["EmptyDiscard", "Supply", "SupplyExhausted"]

logger = logging.getLogger(__name__)


class SupplyExhausted(RuntimeError):
    """Raised when a draw is requested while both piles are empty."""


class EmptyDiscard(RuntimeError):
    """Raised when the discard pile is inspected before it was seeded."""


class Supply:
    """Owns every card that is not in a player's hand.

    The top of each pile is the end of its backing list. When the draw pile
    runs dry the discard pile, minus its top card, is shuffled into a new
    draw pile.
    """

    __slots__ = ("_draw_pile", "_discard_pile", "_rng", "recycle_count")

    def __init__(
        self,
        cards: Iterable[Card],
        rng: random.Random | None = None,
        *,
        shuffle: bool = True,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._draw_pile: list[Card] = list(cards)
        self._discard_pile: list[Card] = []
        self.recycle_count = 0
        if shuffle:
            self._rng.shuffle(self._draw_pile)

    @property
    def draw_count(self) -> int:
        return len(self._draw_pile)

    @property
    def discard_count(self) -> int:
        return len(self._discard_pile)

    @property
    def total_cards(self) -> int:
        return len(self._draw_pile) + len(self._discard_pile)

    def discard_view(self) -> Sequence[Card]:
        """Return a snapshot of the discard pile, bottom first."""

        return tuple(self._discard_pile)

    def draw(self) -> Card:
        """Remove and return the top card of the draw pile, recycling if needed."""

        if not self._draw_pile:
            self._recycle()
        if not self._draw_pile:
            raise SupplyExhausted("no cards left to draw")
        return self._draw_pile.pop()

    def discard(self, card: Card) -> None:
        """Push ``card`` onto the discard pile."""

        self._discard_pile.append(card)

    def peek_top(self) -> Card:
        """Return the visible discard card without removing it."""

        if not self._discard_pile:
            raise EmptyDiscard("discard pile has not been seeded")
        return self._discard_pile[-1]

    def replace_top(self, card: Card) -> None:
        """Swap the visible discard card for ``card``."""

        if self._discard_pile:
            self._discard_pile.pop()
        self._discard_pile.append(card)

    def _recycle(self) -> None:
        if len(self._discard_pile) <= 1:
            return
        top_card = self._discard_pile.pop()
        pool = self._discard_pile[:]
        self._rng.shuffle(pool)
        self._draw_pile = pool
        self._discard_pile = [top_card]
        self.recycle_count += 1
        logger.debug("Recycled %d discarded card(s) into the draw pile", len(pool))
