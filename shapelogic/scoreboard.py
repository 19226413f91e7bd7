"""Helpers for tracking results across the games of one sitting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .variants import Variant

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .session import GameSession

__all__ = ["GameSummary", "VariantTotals", "SessionHistory", "summarize"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Statistics captured when a game ends or is abandoned."""

    game_number: int
    variant: Variant
    groups_found: int
    cards_collected: int
    score: int
    completed: bool


@dataclass(frozen=True, slots=True)
class VariantTotals:
    """Aggregate totals for one variant across all recorded games."""

    variant: Variant
    games: int
    completed: int
    groups_found: int
    cards_collected: int
    best_score: int


def summarize(session: "GameSession", game_number: int) -> GameSummary:
    """Capture the current state of ``session`` as a ``GameSummary``."""

    return GameSummary(
        game_number=game_number,
        variant=session.variant,
        groups_found=session.groups_found,
        cards_collected=len(session.collected_cards),
        score=session.score,
        completed=session.is_over,
    )


@dataclass(slots=True)
class SessionHistory:
    """Mutable tracker that accumulates game summaries."""

    games: list[GameSummary] = field(default_factory=list)

    def record(self, summary: GameSummary) -> None:
        """Record ``summary``; game numbers must be unique."""

        if any(existing.game_number == summary.game_number for existing in self.games):
            raise ValueError(f"game {summary.game_number} already recorded")
        if summary.groups_found < 0 or summary.cards_collected < 0:
            raise ValueError("counts must be non-negative")
        self.games.append(summary)

    def next_game_number(self) -> int:
        return max((game.game_number for game in self.games), default=0) + 1

    def totals(self) -> list[VariantTotals]:
        """Return per-variant totals in ``Variant`` declaration order."""

        results: list[VariantTotals] = []
        for variant in Variant:
            games = [game for game in self.games if game.variant is variant]
            if not games:
                continue
            results.append(
                VariantTotals(
                    variant=variant,
                    games=len(games),
                    completed=sum(1 for game in games if game.completed),
                    groups_found=sum(game.groups_found for game in games),
                    cards_collected=sum(game.cards_collected for game in games),
                    best_score=max(game.score for game in games),
                )
            )
        return results
