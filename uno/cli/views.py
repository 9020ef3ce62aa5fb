"""Composable view primitives for the Uno CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Set

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..engine import TurnEngine


@dataclass(slots=True)
class TableView:
    """Renderable summarising seats, hands and piles."""

    engine: TurnEngine
    reveal_players: Set[int]
    card_formatter: Callable[[Card], str]

    def _hand_markup(self, cards: tuple[Card, ...], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} cards"
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _metadata_panel(self) -> Panel:
        engine = self.engine
        supply = engine.supply
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Turn[/cyan]: {engine.turn_count}")
        grid.add_row(f"[cyan]Direction[/cyan]: {'forward' if engine.direction > 0 else 'backward'}")
        grid.add_row(f"[cyan]Deck[/cyan]: {supply.draw_count} card(s)")
        if supply.discard_count:
            top_card = self.card_formatter(engine.top_card)
            grid.add_row(f"[cyan]Discard[/cyan]: {top_card} ({supply.discard_count} card(s))")
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        return Panel(grid, title="Piles", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Seat", justify="left", style="bold")
        table.add_column("Player", justify="left")
        table.add_column("Role", justify="left")
        table.add_column("Hand", justify="left")

        winner = self.engine.winner
        for idx, player in enumerate(self.engine.players):
            name = player.name
            if winner is player:
                name = f"[bold green]{name}[/bold green]"
            elif idx == self.engine.current_index:
                name = f"[bold yellow]{name}[/bold yellow]"
            hand_display = self._hand_markup(player.hand_view(), idx in self.reveal_players)
            table.add_row(f"P{idx}", name, player.kind, hand_display)

        return Group(table, self._metadata_panel())
