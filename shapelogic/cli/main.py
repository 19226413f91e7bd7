"""Typer entry-point wiring for the shapelogic CLI."""

from __future__ import annotations

import logging
import random

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .. import benchmark, rulebook, scoreboard
from ..cards import generate_deck
from ..session import GameSession, SessionSettings
from ..variants import Variant, get_config
from .render import format_card, render_session
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _configure_logging(level: str) -> None:
    name = level.upper()
    if name not in LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=getattr(logging, name),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _render_history(history: scoreboard.SessionHistory) -> Table:
    """Return a Rich table describing the recorded games per variant."""

    table = Table(title="Autoplay Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Variant", justify="left")
    table.add_column("Games", justify="right")
    table.add_column("Completed", justify="right")
    table.add_column("Groups", justify="right")
    table.add_column("Cards", justify="right")
    table.add_column("Best score", justify="right")
    for totals in history.totals():
        table.add_row(
            get_config(totals.variant).title,
            str(totals.games),
            str(totals.completed),
            str(totals.groups_found),
            str(totals.cards_collected),
            str(totals.best_score),
        )
    return table


def _render_rules(variant: Variant) -> Panel:
    rules = rulebook.rules_for(variant)
    grid = Table.grid(padding=(0, 1))
    grid.add_column(justify="left")
    grid.add_row(f"[bold]Objective[/bold]: {rules.objective}")
    grid.add_row(f"[bold]Setup[/bold]: {rules.setup}")
    grid.add_row("[bold]How to play[/bold]:")
    for line in rules.how_to_play:
        grid.add_row(f"  • {line}")
    grid.add_row(f"[bold]Scoring[/bold]: {rules.scoring}")
    grid.add_row("[bold]Examples[/bold]:")
    for line in rules.examples:
        grid.add_row(f"  • {line}")
    return Panel(grid, title=rules.title, border_style="cyan", box=box.ROUNDED)


@app.callback()
def main_callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging verbosity."),
) -> None:
    """Pattern-matching card games in the terminal."""

    _configure_logging(log_level)


@app.command()
def play(
    variant: Variant = typer.Option(Variant.CLASSIC, help="Game variant to play."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    mark_last_card: bool = typer.Option(
        False,
        "--mark-last-card/--no-mark-last-card",
        help="Highlight the final card dealt from the draw pile.",
    ),
) -> None:
    """Play interactively in a Textual interface."""

    run_textual_app(variant=variant, seed=seed, mark_last_card=mark_last_card)


@app.command()
def show(
    variant: Variant = typer.Option(Variant.CLASSIC, help="Game variant to deal."),
    seed: int = typer.Option(0, help="Random seed for the deal."),
    columns: int = typer.Option(4, min=1, help="Cards per row."),
) -> None:
    """Deal a fresh game and print the opening table."""

    session = GameSession(variant, rng=random.Random(seed), settings=SessionSettings(seed=seed))
    console.print(render_session(session, columns=columns))


@app.command()
def simulate(
    variant: list[Variant] = typer.Option(
        [Variant.CLASSIC], "--variant", help="Variant(s) to self-play; repeat the option for several."
    ),
    games: int = typer.Option(10, min=1, help="Games per variant."),
    seed: int = typer.Option(123, help="Random seed for the run."),
) -> None:
    """Self-play complete games and report group counts."""

    history = scoreboard.SessionHistory()
    violations = 0
    for offset, tag in enumerate(variant):
        report = benchmark.run_autoplay(tag, games=games, seed=seed + offset)
        violations += report.invariant_violations
        for summary in report.history.games:
            history.record(
                scoreboard.GameSummary(
                    game_number=history.next_game_number(),
                    variant=summary.variant,
                    groups_found=summary.groups_found,
                    cards_collected=summary.cards_collected,
                    score=summary.score,
                    completed=summary.completed,
                )
            )

    console.print(_render_history(history))
    if violations:
        console.print(f"[bold red]{violations} invariant violation(s) detected.[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[cyan]{len(history.games)} game(s) simulated.[/cyan]")


@app.command()
def rules(
    variant: Variant = typer.Option(Variant.CLASSIC, help="Variant whose rules to print."),
) -> None:
    """Print the rules of a variant."""

    console.print(_render_rules(variant))


@app.command()
def deck(
    variant: Variant = typer.Option(Variant.CLASSIC, help="Variant whose deck to list."),
    limit: int = typer.Option(0, min=0, help="Only list the first N cards (0 lists all)."),
) -> None:
    """List the canonical deck of a variant."""

    config = get_config(variant)
    cards = generate_deck(config)
    shown = cards[:limit] if limit else cards

    table = Table(title=f"{config.title} deck ({len(cards)} cards)", box=box.SIMPLE)
    table.add_column("Id", justify="right")
    table.add_column("Code", justify="left")
    table.add_column("Card", justify="left")
    table.add_column("Features", justify="left")
    for card in shown:
        table.add_row(str(card.id), card.code, format_card(card, config), card.describe(config))
    console.print(table)


@app.command("verify-projective")
def verify_projective(
    samples: int = typer.Option(10_000, min=1, help="Number of random tables to draw."),
    table_size: int = typer.Option(7, min=1, max=63, help="Cards per sampled table."),
    seed: int = typer.Option(7, help="Random seed for sampling."),
) -> None:
    """Check that random projective tables always contain a group."""

    report = benchmark.sample_projective_tables(
        samples, random.Random(seed), table_size=table_size
    )
    style = "green" if report.tables_without_group == 0 else "red"
    console.print(
        f"[{style}]{report.tables_without_group}[/{style}] of {report.samples} "
        f"{report.table_size}-card table(s) without a group (max GF(2) rank {report.max_rank})."
    )


def main() -> None:
    """Entry-point for ``python -m shapelogic.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
