"""Turn engine: seats players, deals, and resolves one turn at a time."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Protocol, Sequence

from .cards import Card, Color, Rank, create_standard_deck
from .config import DEFAULT_CONFIG, MIN_PLAYERS, GameConfig
from .players import Player, StrategyContractError
from .supply import Supply, SupplyExhausted

__all__ = [
    "EmptyDeck",
    "GameObserver",
    "InsufficientPlayers",
    "TurnEngine",
    "TurnPhase",
    "TurnResult",
    "TurnStatus",
]

logger = logging.getLogger(__name__)


class InsufficientPlayers(ValueError):
    """Raised when an engine is built with fewer than two players."""


class EmptyDeck(ValueError):
    """Raised when an engine is built from a deck with no cards."""


class TurnPhase(str, Enum):
    """States of the turn engine."""

    DEALING = "dealing"
    AWAITING_PLAY = "awaiting_play"
    APPLYING_EFFECT = "applying_effect"
    ADVANCING_TURN = "advancing_turn"
    GAME_WON = "game_won"


class TurnStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"


class GameObserver(Protocol):
    """Read-only listener notified of plays and of the win."""

    def on_card_played(self, player: Player, card: Card) -> None: ...

    def on_game_won(self, winner: Player) -> None: ...


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of a single resolved turn."""

    player_index: int
    player_name: str
    status: TurnStatus = TurnStatus.SUCCESS
    played: Card | None = None
    drawn: Card | None = None
    chosen_color: Color | None = None
    penalized_index: int | None = None
    penalty_cards: int = 0
    won: bool = False
    cause: Exception | None = None

    @property
    def skipped(self) -> bool:
        return self.status == TurnStatus.SKIPPED


_PENALTIES = {Rank.DRAW_TWO: 2, Rank.WILD_DRAW_FOUR: 4}


class TurnEngine:
    """Runs a game of Uno for a fixed table of players.

    Construction deals ``config.hand_size`` cards to every seat, one round at
    a time, then seeds the discard pile. A wild seed card is recolored to
    ``config.seed_color`` without triggering its effect.
    """

    def __init__(
        self,
        players: Sequence[Player],
        deck: Iterable[Card] | None = None,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        supply: Supply | None = None,
    ) -> None:
        if len(players) < MIN_PLAYERS:
            raise InsufficientPlayers(
                f"at least {MIN_PLAYERS} players are required, got {len(players)}"
            )
        if supply is None:
            cards = list(deck) if deck is not None else create_standard_deck()
            if not cards:
                raise EmptyDeck("cannot start a game from an empty deck")
            supply = Supply(cards, rng)
        elif supply.total_cards == 0:
            raise EmptyDeck("cannot start a game from an empty supply")

        self._players: tuple[Player, ...] = tuple(players)
        self._supply = supply
        self._config = config
        self._observers: list[GameObserver] = []
        self._current = 0
        self._direction = 1
        self._turn_count = 0
        self._winner: Player | None = None
        self._discarded: Card | None = None
        self._phase = TurnPhase.DEALING

        self._deal()
        self._seed_discard()
        self._phase = TurnPhase.AWAITING_PLAY

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    @property
    def supply(self) -> Supply:
        return self._supply

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_player(self) -> Player:
        return self._players[self._current]

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def is_over(self) -> bool:
        return self._phase == TurnPhase.GAME_WON

    @property
    def turn_count(self) -> int:
        return self._turn_count

    @property
    def top_card(self) -> Card:
        return self._supply.peek_top()

    def next_index(self, index: int | None = None) -> int:
        """Return the seat after ``index`` (default: the current seat)."""

        start = self._current if index is None else index
        count = len(self._players)
        return (start + self._direction + count) % count

    def card_total(self) -> int:
        """Return the number of cards across both piles and every hand."""

        return self._supply.total_cards + sum(player.hand_size for player in self._players)

    def add_observer(self, observer: GameObserver) -> None:
        self._observers.append(observer)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _deal(self) -> None:
        for _ in range(self._config.hand_size):
            for player in self._players:
                player.receive(self._supply.draw())

    def _seed_discard(self) -> None:
        seed = self._supply.draw()
        if seed.color == Color.WILD:
            seed = seed.with_color(self._config.seed_color)
        self._supply.discard(seed)
        logger.debug("Seeded discard pile with %s", seed)

    # ------------------------------------------------------------------
    # Turn loop
    # ------------------------------------------------------------------
    def run(self, on_turn: Callable[[TurnResult], None] | None = None) -> Player | None:
        """Play turns until someone wins, returning the winner.

        Returns ``None`` when ``config.max_turns`` is reached first. Skipped
        turns are logged and the loop carries on.
        """

        limit = self._config.max_turns
        while not self.is_over:
            if limit is not None and self._turn_count >= limit:
                logger.info("Stopping after %d turn(s) without a winner", limit)
                return None
            result = self.play_turn()
            if result.skipped:
                logger.warning(
                    "Skipped %s's turn after an error: %s", result.player_name, result.cause
                )
            if on_turn is not None:
                on_turn(result)
        return self._winner

    def play_turn(self) -> TurnResult:
        """Resolve the current seat's turn.

        Any error other than :class:`SupplyExhausted` is contained: the turn is
        reported as skipped and the next seat becomes current. A player whose
        last card already reached the discard pile still wins.
        """

        if self.is_over:
            raise RuntimeError("game already finished")

        index = self._current
        player = self._players[index]
        self._turn_count += 1
        self._discarded = None
        try:
            result = self._resolve_turn(index, player)
        except SupplyExhausted:
            raise
        except Exception as exc:
            self._resolve_pending_wild()
            if self._discarded is not None and player.hand_size == 0:
                logger.warning("%s's last card was played despite an error: %s", player.name, exc)
                self._winner = player
                self._phase = TurnPhase.GAME_WON
                self._announce_winner(player)
                return TurnResult(
                    player_index=index,
                    player_name=player.name,
                    played=self._discarded,
                    won=True,
                    cause=exc,
                )
            self._advance(1)
            return TurnResult(
                player_index=index,
                player_name=player.name,
                status=TurnStatus.SKIPPED,
                cause=exc,
            )

        if result.won:
            self._announce_winner(player)
        return result

    def _resolve_turn(self, index: int, player: Player) -> TurnResult:
        self._phase = TurnPhase.AWAITING_PLAY
        top = self._supply.peek_top()
        played = player.select_play(top)

        if played is None:
            drawn = self._supply.draw()
            player.receive(drawn)
            self._advance(1)
            return TurnResult(player_index=index, player_name=player.name, drawn=drawn)

        if not played.is_playable_on(top):
            player.receive(played)
            raise StrategyContractError(f"{player.name} tried to play {played} on {top}")

        self._supply.discard(played)
        self._discarded = played
        self._notify_card_played(player, played)

        self._phase = TurnPhase.APPLYING_EFFECT
        advances, chosen_color, penalized = self._apply_effect(played, player)

        result = TurnResult(
            player_index=index,
            player_name=player.name,
            played=played,
            chosen_color=chosen_color,
            penalized_index=penalized,
            penalty_cards=_PENALTIES.get(played.rank, 0),
            won=player.hand_size == 0,
        )
        if result.won:
            self._winner = player
            self._phase = TurnPhase.GAME_WON
            return result

        self._advance(advances)
        return result

    def _apply_effect(self, card: Card, player: Player) -> tuple[int, Color | None, int | None]:
        """Apply ``card``'s effect and return (seat advances, color, penalized seat)."""

        rank = card.rank
        if rank == Rank.REVERSE:
            self._direction = -self._direction
            return 1, None, None
        if rank == Rank.SKIP:
            return 2, None, None
        if rank == Rank.DRAW_TWO:
            victim = self._penalize(Rank.DRAW_TWO)
            return 2, None, victim
        if rank.is_wild:
            color = self._resolve_wild(card, player)
            if rank == Rank.WILD_DRAW_FOUR:
                return 2, color, self._penalize(rank)
            return 1, color, None
        return 1, None, None

    def _penalize(self, rank: Rank) -> int:
        victim_index = self.next_index()
        victim = self._players[victim_index]
        for _ in range(_PENALTIES[rank]):
            victim.receive(self._supply.draw())
        return victim_index

    def _resolve_wild(self, card: Card, player: Player) -> Color:
        color = player.choose_color()
        if color not in Color.concrete():
            raise StrategyContractError(f"{player.name} chose non-concrete color {color!r}")
        self._supply.replace_top(card.with_color(color))
        return color

    def _resolve_pending_wild(self) -> None:
        """Give an unresolved wild on top of the pile the configured default color."""

        if not self._supply.discard_count:
            return
        top = self._supply.peek_top()
        if top.color == Color.WILD:
            self._supply.replace_top(top.with_color(self._config.seed_color))
            logger.debug("Resolved abandoned %s to %s", top.rank.value, self._config.seed_color.value)

    def _advance(self, steps: int) -> None:
        self._phase = TurnPhase.ADVANCING_TURN
        for _ in range(steps):
            self._current = self.next_index()
        self._phase = TurnPhase.AWAITING_PLAY

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def _notify_card_played(self, player: Player, card: Card) -> None:
        for observer in self._observers:
            try:
                observer.on_card_played(player, card)
            except Exception:
                logger.exception("Observer %r failed while reporting a play", observer)

    def _announce_winner(self, winner: Player) -> None:
        logger.info("%s wins after %d turn(s)", winner.name, self._turn_count)
        for observer in self._observers:
            try:
                observer.on_game_won(winner)
            except Exception:
                logger.exception("Observer %r failed while announcing the winner", observer)
