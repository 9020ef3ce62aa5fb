"""Typer entry-point wiring for the Uno CLI."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, TextIO

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from .. import simulate as simulation
from ..cards import Card, Color
from ..config import MAX_PLAYERS, MIN_PLAYERS, GameConfig, PlayerKind, PlayerSpec, build_players
from ..engine import EmptyDeck, InsufficientPlayers, TurnEngine, TurnResult
from ..players import Player
from ..supply import SupplyExhausted
from .render import format_card, format_hand, render_table

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

DRAW_CHOICE = -1


class ConsoleInputSource:
    """Answers interactive decisions by prompting on the console."""

    def __init__(self, console: Console, stream: TextIO | None = None) -> None:
        self._console = console
        self._stream = stream

    def choose_card(self, player_name: str, hand: Sequence[Card], top_card: Card) -> int | None:
        self._console.print(f"\n[yellow]{player_name}[/yellow], it's your turn.")
        self._console.print(f"Top card: {format_card(top_card)}")
        self._console.print(f"Your hand: {format_hand(hand, numbered=True)}")
        while True:
            choice = IntPrompt.ask(
                f"Card to play ({DRAW_CHOICE} to draw)",
                console=self._console,
                stream=self._stream,
            )
            if choice == DRAW_CHOICE:
                return None
            if 0 <= choice < len(hand):
                return choice
            self._console.print(f"[red]Enter a number between 0 and {len(hand) - 1}, or {DRAW_CHOICE}.[/red]")

    def choose_color(self, player_name: str) -> Color:
        answer = Prompt.ask(
            f"{player_name}, choose a color",
            choices=[color.value for color in Color.concrete()],
            case_sensitive=False,
            console=self._console,
            stream=self._stream,
        )
        return Color(answer.strip().upper())

    def reject(self, player_name: str, card: Card, top_card: Card) -> None:
        self._console.print(f"[red]{format_card(card)} cannot be played on {format_card(top_card)}.[/red]")


class ConsoleObserver:
    """Prints plays and the winner as they happen."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def on_card_played(self, player: Player, card: Card) -> None:
        self._console.print(f"[cyan]{player.name}[/cyan] played {format_card(card)}")

    def on_game_won(self, winner: Player) -> None:
        self._console.print(f"\n[bold green]{winner.name} wins the game![/bold green]")


class TurnReporter:
    """Describes the parts of a turn that observers are not told about."""

    def __init__(self, console: Console, engine: TurnEngine, *, show_hands: bool = False) -> None:
        self._console = console
        self._engine = engine
        self._show_hands = show_hands

    def before_turn(self) -> None:
        player = self._engine.current_player
        self._console.rule(f"Turn {self._engine.turn_count + 1}: {player.name}")
        self._console.print(f"Top card: {format_card(self._engine.top_card)}")
        if self._show_hands:
            self._console.print(f"Hand: {format_hand(player.hand_view(), numbered=True)}")

    def __call__(self, result: TurnResult) -> None:
        players = self._engine.players
        if result.skipped:
            self._console.print(
                f"[red]{result.player_name}'s turn was skipped: {result.cause}[/red]"
            )
        elif result.drawn is not None:
            self._console.print(f"[cyan]{result.player_name}[/cyan] drew {format_card(result.drawn)}")
            if self._show_hands:
                hand = players[result.player_index].hand_view()
                self._console.print(f"Updated hand: {format_hand(hand)}")
        if result.chosen_color is not None:
            self._console.print(f"Color changed to [bold]{result.chosen_color.value}[/bold]")
        if result.penalized_index is not None:
            victim = players[result.penalized_index]
            self._console.print(f"[magenta]{victim.name}[/magenta] draws {result.penalty_cards} card(s)")
        if not self._engine.is_over:
            self.before_turn()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _seat_specs(players: int, humans: int, names: Sequence[str]) -> list[PlayerSpec]:
    specs: list[PlayerSpec] = []
    for idx in range(players):
        if idx < humans:
            name = names[idx] if idx < len(names) else f"Player_{idx + 1}"
            specs.append(PlayerSpec(name, PlayerKind.HUMAN))
        else:
            name = names[idx] if idx < len(names) else f"AI_Player_{idx + 1}"
            specs.append(PlayerSpec(name, PlayerKind.AI))
    return specs


@app.command()
def play(
    players: int = typer.Option(4, min=MIN_PLAYERS, max=MAX_PLAYERS, help="Number of seated players."),
    humans: int = typer.Option(1, min=0, help="Human-controlled seats starting from P0 (0 simulates)."),
    name: Optional[List[str]] = typer.Option(None, "--name", help="Seat name, repeat once per seat."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each player."),
    show_hands: bool = typer.Option(
        False,
        "--show-hands",
        help="Print the active player's hand every turn.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Play a single game at the terminal."""

    if humans > players:
        raise typer.BadParameter("Humans cannot exceed the total number of players.")
    _configure_logging(verbose)

    rng = random.Random(seed)
    specs = _seat_specs(players, humans, name or [])
    seated = build_players(specs, input_source=ConsoleInputSource(console), rng=rng)

    try:
        engine = TurnEngine(seated, config=GameConfig(hand_size=hand_size), rng=rng)
    except (InsufficientPlayers, EmptyDeck, SupplyExhausted) as exc:
        console.print(f"[bold red]Cannot start the game:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    engine.add_observer(ConsoleObserver(console))
    reporter = TurnReporter(console, engine, show_hands=show_hands or humans == 0)

    console.print(render_table(engine, reveal_players=range(humans)))
    reporter.before_turn()
    try:
        engine.run(on_turn=reporter)
    except SupplyExhausted as exc:
        console.print(f"[bold red]Game aborted:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(render_table(engine, reveal_players=range(players), title="Final Table"))


@app.command("simulate")
def simulate_cli(
    games: int = typer.Option(10, min=1, help="Number of AI-only games to play."),
    players: int = typer.Option(4, min=MIN_PLAYERS, max=MAX_PLAYERS, help="Number of seated players."),
    seed: Optional[int] = typer.Option(None, help="Random seed for the whole batch."),
    max_turns: int = typer.Option(
        simulation.DEFAULT_TURN_LIMIT, min=1, help="Turn limit before a game is abandoned."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run a batch of AI-only games and print a summary."""

    _configure_logging(verbose)
    names = [f"AI_Player_{idx + 1}" for idx in range(players)]
    try:
        report = simulation.run_simulation(games, names, seed=seed, max_turns=max_turns)
    except SupplyExhausted as exc:
        console.print(f"[bold red]Simulation aborted:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    history = report.history
    table = Table(title="Simulation Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Cards left", justify="right")

    best = max((total.wins for total in history.totals()), default=0)
    for total in history.totals():
        label = report.names[total.player_index]
        wins = str(total.wins)
        if total.wins == best and best > 0:
            label = f"[bold blue]{label}[/bold blue]"
            wins = f"[bold blue]{wins}[/bold blue]"
        table.add_row(label, wins, f"{total.wins / len(history.games):.0%}", str(total.cards_left))

    console.print(table)
    console.print(
        f"[cyan]{len(history.games)} game(s) simulated, "
        f"{history.average_turns():.1f} turn(s) on average.[/cyan]"
    )
    if history.unfinished:
        console.print(f"[yellow]{history.unfinished} game(s) hit the turn limit.[/yellow]")
    if report.skipped_turns:
        console.print(f"[red]{report.skipped_turns} turn(s) were skipped after errors.[/red]")


def main() -> None:
    """Entry-point for ``python -m uno.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
