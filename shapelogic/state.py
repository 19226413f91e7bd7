"""Mutable per-session partition of the deck."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence

from .cards import Card


@dataclass(slots=True)
class TableState:
    """Draw pile, table and collected cards of one game.

    The draw pile is consumed from its end. ``groups_removed`` counts committed
    groups and ``last_dealt`` remembers the final card moved off the draw pile.
    """

    draw_pile: List[Card] = field(default_factory=list)
    table: List[Card] = field(default_factory=list)
    collected: List[Card] = field(default_factory=list)
    groups_removed: int = 0
    last_dealt: Card | None = None

    def copy(self) -> "TableState":
        """Return a shallow copy of the partition."""

        return TableState(
            draw_pile=list(self.draw_pile),
            table=list(self.table),
            collected=list(self.collected),
            groups_removed=self.groups_removed,
            last_dealt=self.last_dealt,
        )

    def partitions(self, deck: Sequence[Card]) -> bool:
        """Return ``True`` when the three zones hold every deck card exactly once."""

        seen = Counter(self.draw_pile)
        seen.update(self.table)
        seen.update(self.collected)
        if any(count != 1 for count in seen.values()):
            return False
        return set(seen) == set(deck) and len(seen) == len(deck)


def new_table_state(deck_cards: Sequence[Card]) -> TableState:
    """Return a fresh state whose draw pile is ``deck_cards`` in the given order."""

    return TableState(draw_pile=list(deck_cards))
