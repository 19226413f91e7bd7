from __future__ import annotations

import random

import pytest
from rich.console import Console
from typer.testing import CliRunner

from shapelogic.cards import generate_deck
from shapelogic.cli.main import app
from shapelogic.cli.render import format_card, render_session
from shapelogic.session import GameSession, SessionSettings
from shapelogic.variants import Variant, get_config

runner = CliRunner()


@pytest.mark.parametrize(
    ("variant", "title"),
    [
        ("classic", "Classic Set"),
        ("extended", "Set-243"),
        ("four_state", "Four State Set"),
        ("projective", "Projective Set"),
    ],
)
def test_rules_command(variant: str, title: str) -> None:
    result = runner.invoke(app, ["rules", "--variant", variant])

    assert result.exit_code == 0, result.output
    assert title in result.output


def test_deck_command_lists_cards() -> None:
    result = runner.invoke(app, ["deck", "--variant", "projective", "--limit", "3"])

    assert result.exit_code == 0, result.output
    assert "63 cards" in result.output
    assert "red orange" in result.output


def test_show_command_prints_status() -> None:
    result = runner.invoke(app, ["show", "--variant", "four_state", "--seed", "3"])

    assert result.exit_code == 0, result.output
    assert "Draw pile" in result.output
    assert "Four State Set" in result.output


def test_simulate_command_reports_games() -> None:
    result = runner.invoke(
        app,
        ["simulate", "--variant", "classic", "--variant", "projective", "--games", "2"],
    )

    assert result.exit_code == 0, result.output
    assert "4 game(s) simulated" in result.output


def test_verify_projective_command() -> None:
    result = runner.invoke(app, ["verify-projective", "--samples", "200"])

    assert result.exit_code == 0, result.output
    assert "0 of 200" in result.output


def test_invalid_log_level_is_rejected() -> None:
    result = runner.invoke(app, ["--log-level", "LOUD", "rules"])

    assert result.exit_code != 0


def test_format_card_per_variant() -> None:
    classic = get_config(Variant.CLASSIC)
    extended = get_config(Variant.EXTENDED)
    projective = get_config(Variant.PROJECTIVE)

    assert format_card(generate_deck(classic)[0], classic) == "[red]◆[/red]"
    assert format_card(generate_deck(extended)[0], extended) == "[red]\\[◆][/red]"
    assert format_card(generate_deck(projective)[0], projective).startswith("[red]●[/red]")


def test_render_session_marks_last_card() -> None:
    session = GameSession(
        Variant.PROJECTIVE,
        rng=random.Random(5),
        settings=SessionSettings(mark_last_card=True),
    )
    session.tables.state.last_dealt = session.table_cards[0]
    console = Console(record=True, width=120)

    console.print(render_session(session, columns=3))

    text = console.export_text()
    assert " 1*" in text
    assert "Projective Set" in text
