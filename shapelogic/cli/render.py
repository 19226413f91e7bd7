"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card
from ..session import GameSession
from ..variants import Variant, VariantConfig
from .views import SessionView

_CLASSIC_COLORS = ("red", "green", "magenta")
_FOUR_COLORS = ("red", "green", "blue", "yellow")
_DOT_COLORS = ("red", "dark_orange", "yellow", "green", "blue", "purple")

# shape x shading glyphs: solid, striped, open
_CLASSIC_GLYPHS = (
    ("◆", "◈", "◇"),
    ("≋", "≈", "∼"),
    ("●", "◉", "○"),
)
_FOUR_GLYPHS = ("●", "■", "▲", "◆")
_BORDERS = (("[", "]"), ("{", "}"), ("(", ")"))


def _classic_body(card: Card) -> tuple[str, str]:
    number, shape, color, shading = card.features[:4]
    glyph = _CLASSIC_GLYPHS[shape][shading]
    return glyph * (number + 1), _CLASSIC_COLORS[color]


def format_card(card: Card, config: VariantConfig) -> str:
    """Return a Rich-rendered label for ``card``."""

    if config.variant is Variant.PROJECTIVE:
        dots = []
        for color, present in zip(_DOT_COLORS, card.present):
            dots.append(f"[{color}]●[/{color}]" if present else "[dim]·[/dim]")
        return "".join(dots)
    if config.variant is Variant.FOUR_STATE:
        color, shape, number = card.features
        style = _FOUR_COLORS[color]
        return f"[{style}]{_FOUR_GLYPHS[shape] * (number + 1)}[/{style}]"
    body, style = _classic_body(card)
    if config.variant is Variant.EXTENDED:
        left, right = _BORDERS[card.features[4]]
        body = f"{left}{body}{right}"
    # Literal "[" must be escaped for Rich markup.
    body = body.replace("[", "\\[")
    return f"[{style}]{body}[/{style}]"


def format_group(cards: Iterable[Card], config: VariantConfig) -> str:
    return "  ".join(format_card(card, config) for card in cards)


def render_session(
    session: GameSession,
    *,
    title: str | None = None,
    columns: int = 4,
) -> RenderableType:
    """Return a Rich panel describing the table of ``session``."""

    view = SessionView(
        session=session,
        card_formatter=lambda card: format_card(card, session.config),
        columns=columns,
    )
    return Panel(
        view.render(),
        title=title or session.config.title,
        padding=(0, 1),
        border_style="cyan",
    )
