from __future__ import annotations

import io

import pytest
from rich.console import Console
from typer.testing import CliRunner

from uno.cards import Card, Color, Rank
from uno.cli import main as cli_main
from uno.cli.main import ConsoleInputSource, _seat_specs, app
from uno.cli.render import format_card, format_hand
from uno.config import PlayerKind
from uno.engine import TurnEngine
from uno.supply import Supply

runner = CliRunner()

HAND = (Card(Color.RED, Rank.ONE), Card(Color.WILD, Rank.WILD))
TOP = Card(Color.BLUE, Rank.ONE)


def _input_source(answers: str) -> tuple[ConsoleInputSource, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=120)
    return ConsoleInputSource(console, stream=io.StringIO(answers)), output


def test_console_input_reprompts_out_of_range_index() -> None:
    source, output = _input_source("7\n1\n")

    assert source.choose_card("alice", HAND, TOP) == 1
    assert "between 0 and 1" in output.getvalue()


def test_console_input_draw_signal() -> None:
    source, _ = _input_source("-1\n")

    assert source.choose_card("alice", HAND, TOP) is None


def test_console_input_color_choice() -> None:
    source, _ = _input_source("PURPLE\nGREEN\n")

    assert source.choose_color("alice") == Color.GREEN


def test_seat_specs_seat_humans_first() -> None:
    specs = _seat_specs(3, 1, ["alice"])

    assert [spec.kind for spec in specs] == [PlayerKind.HUMAN, PlayerKind.AI, PlayerKind.AI]
    assert [spec.name for spec in specs] == ["alice", "AI_Player_2", "AI_Player_3"]


def test_format_card_markup() -> None:
    assert format_card(Card(Color.RED, Rank.DRAW_TWO)) == "[red]Red +2[/red]"
    assert "Wild +4" in format_card(Card(Color.WILD, Rank.WILD_DRAW_FOUR))
    assert format_hand(()) == "—"
    assert "[1]" in format_hand(HAND, numbered=True)


def test_simulate_command_prints_summary() -> None:
    result = runner.invoke(app, ["simulate", "--games", "2", "--players", "3", "--seed", "5"])

    assert result.exit_code == 0, result.output
    assert "Simulation Summary" in result.output
    assert "2 game(s) simulated" in result.output


def test_play_command_auto_plays_without_humans() -> None:
    result = runner.invoke(app, ["play", "--players", "2", "--humans", "0", "--seed", "3"])

    assert result.exit_code == 0, result.output
    assert "wins the game" in result.output


def test_play_command_rejects_too_many_humans() -> None:
    result = runner.invoke(app, ["play", "--players", "2", "--humans", "3"])

    assert result.exit_code != 0


def test_play_command_with_a_human_seat(monkeypatch: pytest.MonkeyPatch) -> None:
    # Deal order: human, AI, human, AI, then the seed card, then the draw pile.
    dealt = [
        Card(Color.RED, Rank.ONE),
        Card(Color.BLUE, Rank.SEVEN),
        Card(Color.WILD, Rank.WILD),
        Card(Color.BLUE, Rank.EIGHT),
        Card(Color.GREEN, Rank.THREE),
    ] + [Card(Color.YELLOW, Rank.NINE)] * 5

    def stacked_engine(players, *, config, rng):
        return TurnEngine(players, supply=Supply(list(reversed(dealt)), shuffle=False), config=config)

    monkeypatch.setattr(cli_main, "TurnEngine", stacked_engine)
    answers = "\n".join(["0", "5", "1", "PURPLE", "BLUE", "-1"]) + "\n"

    result = runner.invoke(
        app,
        ["play", "--players", "2", "--humans", "1", "--name", "alice", "--hand-size", "2"],
        input=answers,
    )

    assert result.exit_code == 0, result.output
    assert "cannot be played on" in result.output
    assert "between 0 and 1" in result.output
    assert "Color changed to BLUE" in result.output
    assert "alice drew" in result.output
    assert "AI_Player_2 wins the game" in result.output
