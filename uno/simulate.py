"""Headless harness that plays AI-only games back to back."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from . import scoreboard
from .config import GameConfig, PlayerSpec, build_players
from .engine import TurnEngine, TurnResult

__all__ = ["DEFAULT_TURN_LIMIT", "SimulationReport", "play_game", "run_simulation"]

logger = logging.getLogger(__name__)

DEFAULT_TURN_LIMIT = 2000


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Summary of a batch of simulated games."""

    names: Sequence[str]
    history: scoreboard.MatchHistory
    skipped_turns: int


def play_game(
    game_number: int,
    names: Sequence[str],
    rng: random.Random,
    config: GameConfig,
) -> tuple[scoreboard.GameSummary, int]:
    """Play one AI-only game and return its summary with the skipped-turn count."""

    players = build_players([PlayerSpec(name) for name in names], rng=rng)
    engine = TurnEngine(players, config=config, rng=random.Random(rng.getrandbits(64)))

    skipped = 0

    def _count_skips(result: TurnResult) -> None:
        nonlocal skipped
        if result.skipped:
            skipped += 1

    winner = engine.run(on_turn=_count_skips)
    winner_index = engine.players.index(winner) if winner is not None else None
    summary = scoreboard.GameSummary(
        game_number=game_number,
        winner_index=winner_index,
        turns=engine.turn_count,
        cards_left=[player.hand_size for player in engine.players],
    )
    return summary, skipped


def run_simulation(
    games: int,
    names: Sequence[str],
    *,
    seed: int | None = None,
    max_turns: int = DEFAULT_TURN_LIMIT,
    hand_size: int = 7,
) -> SimulationReport:
    """Play ``games`` AI-only games and return aggregate statistics."""

    if games <= 0:
        raise ValueError("games must be positive")

    rng = random.Random(seed)
    config = GameConfig(hand_size=hand_size, max_turns=max_turns)
    history = scoreboard.MatchHistory(num_players=len(names))
    skipped_turns = 0

    for game_number in range(1, games + 1):
        summary, skipped = play_game(game_number, names, rng, config)
        history.record(summary)
        skipped_turns += skipped
        logger.debug(
            "Game %d finished after %d turn(s); winner seat %s",
            game_number,
            summary.turns,
            summary.winner_index,
        )

    return SimulationReport(names=tuple(names), history=history, skipped_turns=skipped_turns)
