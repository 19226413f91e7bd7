"""Table maintenance: dealing, group search and invariant restoration."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, Sequence

from . import groups
from .cards import Card, format_cards
from .state import TableState, new_table_state
from .variants import TablePolicy, VariantConfig

logger = logging.getLogger(__name__)

__all__ = ["RandomSource", "TableManager"]


class RandomSource(Protocol):
    """Injected randomness: in-place shuffles and bounded integers."""

    def shuffle(self, x: list[Any]) -> None:  # pragma: no cover - protocol only
        ...

    def randrange(self, stop: int) -> int:  # pragma: no cover - protocol only
        ...


class TableManager:
    """Owns the draw pile / table / collected partition of one game.

    Every operation either completes or leaves the partition untouched; an
    exhausted draw pile turns deals into partial deals or no-ops.
    """

    def __init__(
        self,
        config: VariantConfig,
        rng: RandomSource,
        state: TableState | None = None,
    ) -> None:
        self.config = config
        self.rng = rng
        self.state = state if state is not None else TableState()

    def reset(self, deck: Sequence[Card]) -> None:
        """Shuffle ``deck`` into a fresh draw pile with an empty table."""

        draw_pile = list(deck)
        self.rng.shuffle(draw_pile)
        self.state = new_table_state(draw_pile)

    @property
    def table(self) -> list[Card]:
        return self.state.table

    @property
    def draw_pile(self) -> list[Card]:
        return self.state.draw_pile

    def contains(self, card: Card) -> bool:
        return card in self.state.table

    def _place(self, card: Card) -> None:
        table = self.state.table
        if self.config.shuffle_insert:
            table.insert(self.rng.randrange(len(table) + 1), card)
        else:
            table.append(card)

    def deal_batch(self, count: int) -> list[Card]:
        """Move up to ``count`` cards from the end of the draw pile to the table."""

        draw_pile = self.state.draw_pile
        dealt: list[Card] = []
        while len(dealt) < count and draw_pile:
            card = draw_pile.pop()
            self._place(card)
            dealt.append(card)
        if dealt and not draw_pile:
            self.state.last_dealt = dealt[-1]
        if dealt:
            logger.debug(
                "dealt %s (%d left in draw pile)", format_cards(dealt), len(draw_pile)
            )
        return dealt

    def find_group(self) -> tuple[Card, ...] | None:
        return groups.find_group(self.state.table, self.config)

    def has_valid_group(self) -> bool:
        return self.find_group() is not None

    def ensure_invariant(self) -> int:
        """Deal until the table holds the floor and a valid group, or the pile runs out.

        Returns the number of cards dealt. Each loop iteration shrinks the draw
        pile, so both phases terminate.
        """

        if not self.config.is_fixed_size:
            return 0
        batch = self.config.deal_size
        dealt = 0
        while len(self.state.table) < self.config.table_floor and self.state.draw_pile:
            dealt += len(self.deal_batch(batch))
        while self.state.draw_pile and not self.has_valid_group():
            dealt += len(self.deal_batch(batch))
        logger.debug(
            "invariant restored: table=%d draw=%d dealt=%d",
            len(self.state.table),
            len(self.state.draw_pile),
            dealt,
        )
        return dealt

    def maintain_fixed_size(self, target: int | None = None) -> int:
        """Refill one card at a time until the table holds ``target`` cards."""

        if target is None:
            target = self.config.table_target
        dealt = 0
        while len(self.state.table) < target and self.state.draw_pile:
            dealt += len(self.deal_batch(1))
        return dealt

    def restore(self) -> int:
        """Apply the variant's refill policy after the table changed."""

        if self.config.table_policy is TablePolicy.FIXED_SIZE:
            return self.maintain_fixed_size()
        return self.ensure_invariant()

    def remove_group(self, cards: Iterable[Card]) -> bool:
        """Move ``cards`` from the table to the collected pile.

        Returns ``False`` without touching the table when any card is missing or
        repeated.
        """

        group = list(cards)
        members = set(group)
        if not group or len(members) != len(group):
            return False
        table = self.state.table
        if any(card not in table for card in group):
            return False
        self.state.table = [card for card in table if card not in members]
        self.state.collected.extend(group)
        self.state.groups_removed += 1
        logger.debug("removed group %s", format_cards(group))
        return True
