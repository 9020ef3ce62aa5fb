"""Top-level package for the Uno turn engine."""

from . import cards, config, engine, players, scoreboard, simulate, supply

__all__ = [
    "cards",
    "config",
    "engine",
    "players",
    "scoreboard",
    "simulate",
    "supply",
]
