"""Textual-powered interactive shapelogic interface."""

from __future__ import annotations

import random
from typing import Callable

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from ... import scoreboard
from ...selection import SelectionEvent
from ...session import GameSession, SessionSettings
from ...variants import Variant, get_config
from ..render import format_card, format_group, render_session

MAX_EVENT_LINES = 18


class EventLog(Static):
    """Simple rolling log rendered inside a panel."""

    lines: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._refresh()

    def add(self, message: str) -> None:
        log = list(self.lines)
        log.append(message)
        self.lines = tuple(log[-MAX_EVENT_LINES:])

    def watch_lines(self, value: tuple[str, ...]) -> None:
        self._refresh(value)

    def _refresh(self, lines: tuple[str, ...] | None = None) -> None:
        content = Table.grid(padding=(0, 1))
        content.expand = True
        content.add_column(justify="left")
        rows = lines if lines is not None else self.lines
        if rows:
            for line in rows:
                content.add_row(Text.from_markup(line))
        else:
            content.add_row(Text.from_markup("[dim]Event log will appear here[/dim]"))
        self.update(Panel(content, title="Events", border_style="magenta"))


class InfoPanel(Static):
    """Reusable wrapper that expects ``update_panel`` calls with Rich renderables."""

    def update_panel(self, title: str, body) -> None:
        self.update(Panel(body, title=title, border_style="cyan"))


class ScorePanel(Static):
    """Displays totals for the games played in this sitting."""

    def update_scores(self, history: scoreboard.SessionHistory) -> None:
        table = Table(box=box.SIMPLE_HEAVY, expand=True)
        table.add_column("Variant", justify="left")
        table.add_column("Games", justify="right")
        table.add_column("Groups", justify="right")
        table.add_column("Best", justify="right")
        totals = history.totals()
        for entry in totals:
            table.add_row(
                get_config(entry.variant).title,
                str(entry.games),
                str(entry.groups_found),
                str(entry.best_score),
            )
        if not totals:
            table.add_row(Text.from_markup("[dim]No finished games yet[/dim]"), "-", "-", "-")
        self.update(Panel(table, title="Totals", border_style="bright_blue"))


class StatusStrip(Static):
    """Single line status helper; flashes green for perfect groups."""

    message: reactive[str] = reactive("", init=False)
    flashing: reactive[bool] = reactive(False, init=False)

    def watch_message(self, value: str) -> None:
        self._redraw()

    def watch_flashing(self, value: bool) -> None:
        self._redraw()

    def _redraw(self) -> None:
        border = "bright_green" if self.flashing else "green"
        text = self.message or "[dim]Ready[/dim]"
        if self.flashing:
            text = f"[bold reverse bright_green] PERFECT [/bold reverse bright_green] {text}"
        self.update(Panel(Text.from_markup(text), border_style=border))


class CardPalette(OptionList):
    """Selectable list of the cards on the table."""

    class Toggle(Message):
        def __init__(self, card_id: int) -> None:
            super().__init__()
            self.card_id = card_id

    def show_session(self, session: GameSession) -> None:
        previous = self.highlighted
        self.clear_options()
        options = []
        for idx, card in enumerate(session.table_cards, start=1):
            label = format_card(card, session.config)
            if session.selection.is_selected(card):
                label = f"[reverse]{label}[/reverse]"
            marker = "*" if session.is_last_card(card) else " "
            prompt = Text.from_markup(f"[bold]{idx:>2}[/bold]{marker} {label}  [dim]{card.code}[/dim]")
            options.append(Option(prompt, id=str(card.id)))
        self.add_options(options)
        if options:
            self.highlighted = min(previous or 0, len(options) - 1)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:  # pragma: no cover - Textual glue
        event.stop()
        option_id = event.option.id
        if option_id is None:
            return
        self.post_message(self.Toggle(int(option_id)))


class _TimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class _AppScheduler:
    """Scheduler backed by Textual timers that refreshes the UI after each callback."""

    def __init__(self, app: "ShapelogicTextualApp") -> None:
        self.app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        def _fire() -> None:
            callback()
            self.app.sync_flash()

        return _TimerHandle(self.app.set_timer(delay, _fire))


class _EventFeedback:
    """Feedback sink that writes to the event log."""

    def __init__(self, app: "ShapelogicTextualApp") -> None:
        self.app = app

    def on_card_selected(self) -> None:
        pass

    def on_valid_group(self) -> None:
        self.app.log_event("[bold green]Valid group![/bold green]")

    def on_invalid_group(self) -> None:
        self.app.log_event("[red]Not a group[/red]")
        self.app.bell()

    def on_perfect_group(self) -> None:
        self.app.log_event("[bold bright_green]Perfect group![/bold bright_green]")


class ShapelogicTextualApp(App):
    """Textual UI for one shapelogic variant."""

    CSS = """
    Screen {
        layout: vertical;
        height: 100%;
    }

    #main {
        layout: horizontal;
        height: 1fr;
        width: 1fr;
    }

    #left, #right {
        layout: vertical;
        width: 1fr;
        height: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }

    CardPalette {
        border: heavy $accent;
        height: 1fr;
        min-height: 8;
    }

    StatusStrip, InfoPanel, EventLog, ScorePanel {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit"),
        Binding("n", "new_game", "New game"),
        Binding("m", "more_cards", "More cards"),
    ]

    def __init__(self, *, variant: Variant, seed: int | None, mark_last_card: bool) -> None:
        super().__init__()
        if seed is None:
            seed = random.SystemRandom().randrange(0, 2**63)
        self.seed = seed
        self.history = scoreboard.SessionHistory()
        self.session = GameSession(
            variant,
            rng=random.Random(seed),
            scheduler=_AppScheduler(self),
            feedback=_EventFeedback(self),
            settings=SessionSettings(mark_last_card=mark_last_card, seed=seed),
            start=False,
        )

        # Widgets initialised in compose
        self.status_strip: StatusStrip | None = None
        self.table_panel: InfoPanel | None = None
        self.palette: CardPalette | None = None
        self.event_log: EventLog | None = None
        self.score_panel: ScorePanel | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_strip = StatusStrip(id="status")
        yield self.status_strip

        self.table_panel = InfoPanel(id="table")
        self.table_panel.update_panel("Table", Text.from_markup("[dim]Dealing…[/dim]"))
        self.palette = CardPalette(id="cards")
        left = Vertical(self.table_panel, self.palette, id="left")

        self.event_log = EventLog(id="events")
        self.score_panel = ScorePanel(id="scores")
        self.score_panel.update_scores(self.history)
        right = Vertical(self.event_log, self.score_panel, id="right")

        yield Horizontal(left, right, id="main")
        yield Footer()

    def on_mount(self) -> None:
        self._start_game()

    def log_event(self, message: str) -> None:
        if self.event_log:
            self.event_log.add(message)

    def sync_flash(self) -> None:
        if self.status_strip:
            self.status_strip.flashing = self.session.perfect_group_flag

    def _record_game(self) -> None:
        if self.session.games_started == 0:
            return
        self.history.record(scoreboard.summarize(self.session, self.history.next_game_number()))
        if self.score_panel:
            self.score_panel.update_scores(self.history)

    def _start_game(self) -> None:
        self.session.new_game()
        self.log_event(
            f"[bold cyan]New {self.session.config.title} game[/bold cyan] (seed {self.seed})"
        )
        self._refresh_ui()
        if self.palette:
            self.palette.focus()

    def action_new_game(self) -> None:
        self._record_game()
        self._start_game()

    def action_more_cards(self) -> None:
        dealt = self.session.request_more_cards()
        if dealt:
            self.log_event(f"Dealt {dealt} more card(s)")
        else:
            self.log_event("[dim]No more cards to deal[/dim]")
        self._refresh_ui()

    @on(CardPalette.Toggle)
    def _on_toggle(self, message: CardPalette.Toggle) -> None:
        message.stop()
        result = self.session.select_card(message.card_id)
        if result.event is SelectionEvent.COMMITTED:
            self.log_event(f"Collected {format_group(result.group, self.session.config)}")
        elif result.event is SelectionEvent.REJECTED:
            self.log_event(f"Rejected {format_group(result.group, self.session.config)}")
        self._refresh_ui()

    def _refresh_ui(self) -> None:
        session = self.session
        if self.table_panel:
            self.table_panel.update(render_session(session, columns=4))
        if self.palette:
            self.palette.show_session(session)
        if session.is_over:
            self._set_status(
                f"[green]Game over[/green] with score {session.score}. "
                "Press [bold]N[/bold] for a new game or [bold]Q[/bold] to quit."
            )
        else:
            selected = len(session.selected_card_ids)
            self._set_status(
                f"Score {session.score} • {session.draw_pile_count} in draw pile • {selected} selected"
            )
        self.sync_flash()
        self.title = f"shapelogic • {session.config.title}"

    def _set_status(self, message: str) -> None:
        if self.status_strip:
            self.status_strip.message = message


def run_textual_app(*, variant: Variant, seed: int | None, mark_last_card: bool) -> None:
    """Launch the Textual UI."""

    app = ShapelogicTextualApp(variant=variant, seed=seed, mark_last_card=mark_last_card)
    app.run()
