"""Runtime configuration for a single game and its seats."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from .cards import Color
from .players import AIPlayer, InputSource, InteractivePlayer, Player

__all__ = [
    "DEFAULT_CONFIG",
    "GameConfig",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "PlayerKind",
    "PlayerSpec",
    "build_players",
]

MIN_PLAYERS: Final[int] = 2
MAX_PLAYERS: Final[int] = 10


class PlayerKind(str, Enum):
    AI = "ai"
    HUMAN = "human"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Table rules that stay fixed for the lifetime of an engine."""

    hand_size: int = 7
    seed_color: Color = Color.RED
    max_turns: int | None = None

    def __post_init__(self) -> None:
        if self.hand_size < 0:
            raise ValueError("hand_size must not be negative")
        if self.seed_color not in Color.concrete():
            raise ValueError("seed_color must be a concrete color")
        if self.max_turns is not None and self.max_turns <= 0:
            raise ValueError("max_turns must be positive when set")


DEFAULT_CONFIG: Final[GameConfig] = GameConfig()


@dataclass(frozen=True, slots=True)
class PlayerSpec:
    """Name and strategy kind for one seat."""

    name: str
    kind: PlayerKind = PlayerKind.AI


def build_players(
    specs: Sequence[PlayerSpec],
    *,
    input_source: InputSource | None = None,
    rng: random.Random | None = None,
) -> list[Player]:
    """Instantiate players for ``specs`` in seating order.

    Each AI seat gets its own ``random.Random`` seeded from ``rng`` so a seeded
    table stays reproducible.
    """

    rng = rng if rng is not None else random.Random()
    players: list[Player] = []
    for spec in specs:
        if spec.kind == PlayerKind.HUMAN:
            if input_source is None:
                raise ValueError(f"seat {spec.name!r} is interactive but no input source was given")
            players.append(InteractivePlayer(spec.name, input_source))
        else:
            players.append(AIPlayer(spec.name, random.Random(rng.getrandbits(64))))
    return players
