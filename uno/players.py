"""Seat strategies: the shared player contract plus AI and interactive variants."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Protocol, Sequence

from .cards import Card, Color, playable_cards

__all__ = [
    "AIPlayer",
    "InputSource",
    "InteractivePlayer",
    "Player",
    "StrategyContractError",
]


class StrategyContractError(RuntimeError):
    """Raised when a strategy or its input collaborator breaks its contract."""


class InputSource(Protocol):
    """External collaborator that answers decisions for an interactive seat.

    Implementations re-prompt on malformed input themselves and only hand back
    parsed values.
    """

    def choose_card(self, player_name: str, hand: Sequence[Card], top_card: Card) -> int | None:
        """Return an index into ``hand`` or ``None`` to draw."""
        ...

    def choose_color(self, player_name: str) -> Color:
        """Return one of the four concrete colors."""
        ...

    def reject(self, player_name: str, card: Card, top_card: Card) -> None:
        """Tell the user that ``card`` cannot be played on ``top_card``."""
        ...


class Player(ABC):
    """Base class for a seated player owning a hand of cards.

    Subclasses decide which card to surrender for a given top card and which
    color a wild card resolves to. The engine only touches the hand through
    ``receive`` and ``select_play``.
    """

    kind = "player"

    def __init__(self, name: str) -> None:
        self._name = name
        self._hand: list[Card] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def hand_size(self) -> int:
        return len(self._hand)

    def hand_view(self) -> tuple[Card, ...]:
        """Return a read-only snapshot of the hand."""

        return tuple(self._hand)

    def receive(self, card: Card) -> None:
        self._hand.append(card)

    def _take(self, index: int) -> Card:
        return self._hand.pop(index)

    @abstractmethod
    def select_play(self, top_card: Card) -> Card | None:
        """Remove and return a card playable on ``top_card``, or ``None`` to draw."""

    @abstractmethod
    def choose_color(self) -> Color:
        """Pick the concrete color a played wild card resolves to."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, cards={len(self._hand)})"


class AIPlayer(Player):
    """Plays a uniformly random legal card and picks wild colors at random."""

    kind = "AI"

    def __init__(self, name: str, rng: random.Random | None = None) -> None:
        super().__init__(name)
        self._rng = rng if rng is not None else random.Random()

    def select_play(self, top_card: Card) -> Card | None:
        eligible = playable_cards(self._hand, top_card)
        if not eligible:
            return None
        chosen = self._rng.choice(eligible)
        self._hand.remove(chosen)
        return chosen

    def choose_color(self) -> Color:
        return self._rng.choice(Color.concrete())


class InteractivePlayer(Player):
    """Delegates every decision to an :class:`InputSource`."""

    kind = "Human"

    def __init__(self, name: str, input_source: InputSource) -> None:
        super().__init__(name)
        self._input = input_source

    def select_play(self, top_card: Card) -> Card | None:
        while True:
            hand = self.hand_view()
            choice = self._input.choose_card(self.name, hand, top_card)
            if choice is None:
                return None
            if choice < 0 or choice >= len(hand):
                raise StrategyContractError(
                    f"input source returned index {choice} for a hand of {len(hand)} card(s)"
                )
            card = hand[choice]
            if card.is_playable_on(top_card):
                return self._take(choice)
            self._input.reject(self.name, card, top_card)

    def choose_color(self) -> Color:
        color = self._input.choose_color(self.name)
        if color not in Color.concrete():
            raise StrategyContractError(f"input source returned non-concrete color {color!r}")
        return color
