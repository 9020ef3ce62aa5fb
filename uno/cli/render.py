"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Color, Rank
from ..engine import TurnEngine
from .views import TableView

_COLOR_STYLES = {
    Color.RED: "red",
    Color.YELLOW: "yellow",
    Color.GREEN: "green",
    Color.BLUE: "blue",
    Color.WILD: "magenta",
}

_RANK_LABELS = {
    Rank.SKIP: "Skip",
    Rank.REVERSE: "Reverse",
    Rank.DRAW_TWO: "+2",
    Rank.WILD: "Wild",
    Rank.WILD_DRAW_FOUR: "Wild +4",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    style = _COLOR_STYLES[card.color]
    rank = _RANK_LABELS.get(card.rank, card.rank.value)
    if card.color == Color.WILD:
        return f"[bold {style}]{rank}[/bold {style}]"
    return f"[{style}]{card.color.value.title()} {rank}[/{style}]"


def format_hand(cards: Sequence[Card], *, numbered: bool = False) -> str:
    """Return the hand as a single line of card labels."""

    if not cards:
        return "—"
    if numbered:
        return "  ".join(f"[bold][{idx}][/bold] {format_card(card)}" for idx, card in enumerate(cards))
    return "  ".join(format_card(card) for card in cards)


def render_table(
    engine: TurnEngine,
    *,
    reveal_players: Iterable[int] | None = None,
    title: str = "Uno",
) -> RenderableType:
    """Return a Rich panel describing the seats and piles."""

    view = TableView(
        engine=engine,
        reveal_players=set(reveal_players or set()),
        card_formatter=format_card,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
