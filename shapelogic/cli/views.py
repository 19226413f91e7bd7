"""Composable view primitives for the shapelogic CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import groups
from ..cards import Card
from ..session import GameSession


@dataclass(slots=True)
class SessionView:
    """Renderable summarising the table of a game session."""

    session: GameSession
    card_formatter: Callable[[Card], str]
    columns: int = 4
    show_group_count: bool = True

    def _card_cell(self, position: int, card: Card) -> str:
        label = self.card_formatter(card)
        marker = f"[bold]{position:>2}[/bold]"
        if self.session.selection.is_selected(card):
            label = f"[reverse]{label}[/reverse]"
        if self.session.is_last_card(card):
            marker = f"[bold yellow]{position:>2}*[/bold yellow]"
        return f"{marker} {label}"

    def _card_grid(self) -> RenderableType:
        cards = self.session.table_cards
        if not cards:
            return Text.from_markup("[dim]Table is empty[/dim]")
        columns = max(1, self.columns)
        grid = Table.grid(expand=True, padding=(0, 2))
        for _ in range(columns):
            grid.add_column(justify="left")
        cells = [self._card_cell(idx, card) for idx, card in enumerate(cards, start=1)]
        for start in range(0, len(cells), columns):
            row = cells[start : start + columns]
            row += [""] * (columns - len(row))
            grid.add_row(*row)
        return grid

    def _metadata_panel(self) -> Panel:
        session = self.session
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Draw pile[/cyan]: {session.draw_pile_count} card(s)")
        grid.add_row(f"[cyan]Table[/cyan]: {len(session.table_cards)} card(s)")
        grid.add_row(f"[cyan]Score[/cyan]: {session.score}")
        if self.show_group_count:
            count = groups.count_groups(session.table_cards, session.config)
            grid.add_row(f"[cyan]Groups visible[/cyan]: {count}")
        if session.is_over:
            grid.add_row("[bold green]Game over[/bold green]")
        return Panel(grid, title="Status", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        return Group(self._card_grid(), self._metadata_panel())
