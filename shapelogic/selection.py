"""Selection state machine that turns card taps into group commits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from . import groups
from .cards import Card
from .table import TableManager

logger = logging.getLogger(__name__)

__all__ = ["SelectionPhase", "SelectionEvent", "ToggleResult", "SelectionController"]


class SelectionPhase(str, Enum):
    """Phases of an in-progress selection."""

    IDLE = "idle"
    SELECTING = "selecting"
    EVALUATING = "evaluating"


class SelectionEvent(str, Enum):
    """What a single toggle did."""

    IGNORED = "ignored"
    SELECTED = "selected"
    DESELECTED = "deselected"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Outcome of ``SelectionController.toggle``."""

    event: SelectionEvent
    group: tuple[Card, ...] = ()
    perfect: bool = False

    @property
    def committed(self) -> bool:
        return self.event is SelectionEvent.COMMITTED


class SelectionController:
    """Accumulates selected table cards and evaluates them as a group.

    Fixed-size variants evaluate once the selection reaches the group size and
    clear it either way. The projective variant re-evaluates after every add
    from the minimum group size on and keeps an invalid selection.
    """

    def __init__(self, table: TableManager) -> None:
        self.table = table
        self.config = table.config
        self._selected: dict[Card, None] = {}
        self._phase = SelectionPhase.IDLE

    @property
    def phase(self) -> SelectionPhase:
        return self._phase

    @property
    def selected(self) -> tuple[Card, ...]:
        """Selected cards in the order they were picked."""

        return tuple(self._selected)

    def is_selected(self, card: Card) -> bool:
        return card in self._selected

    def clear(self) -> None:
        self._selected.clear()
        self._phase = SelectionPhase.IDLE

    def prune(self) -> None:
        """Drop selected cards that are no longer on the table."""

        for card in [card for card in self._selected if not self.table.contains(card)]:
            del self._selected[card]
        self._sync_phase()

    def _sync_phase(self) -> None:
        self._phase = SelectionPhase.SELECTING if self._selected else SelectionPhase.IDLE

    def toggle(self, card: Card) -> ToggleResult:
        """Select or deselect ``card`` and evaluate the selection when due."""

        if not self.table.contains(card):
            return ToggleResult(SelectionEvent.IGNORED)
        if card in self._selected:
            del self._selected[card]
            self._sync_phase()
            return ToggleResult(SelectionEvent.DESELECTED)

        cap = self.config.selection_cap
        if cap is not None and len(self._selected) >= cap:
            return ToggleResult(SelectionEvent.IGNORED)
        self._selected[card] = None
        self._sync_phase()

        if self.config.is_fixed_size:
            if len(self._selected) == cap:
                return self._evaluate_fixed()
            return ToggleResult(SelectionEvent.SELECTED)
        if len(self._selected) >= self.config.min_group_size:
            return self._evaluate_incremental()
        return ToggleResult(SelectionEvent.SELECTED)

    def _evaluate_fixed(self) -> ToggleResult:
        self._phase = SelectionPhase.EVALUATING
        cards = self.selected
        if groups.is_valid_group(cards, self.config):
            result = self._commit(cards)
        else:
            logger.debug("rejected %s", " ".join(card.code for card in cards))
            result = ToggleResult(SelectionEvent.REJECTED, group=cards)
        self.clear()
        return result

    def _evaluate_incremental(self) -> ToggleResult:
        self._phase = SelectionPhase.EVALUATING
        cards = self.selected
        if groups.is_valid_group(cards, self.config):
            result = self._commit(cards)
            self.clear()
            return result
        self._sync_phase()
        return ToggleResult(SelectionEvent.SELECTED)

    def _commit(self, cards: tuple[Card, ...]) -> ToggleResult:
        perfect = self.config.tracks_perfect_groups and groups.is_perfect_group(
            cards, self.config
        )
        if not self.table.remove_group(cards):
            return ToggleResult(SelectionEvent.REJECTED, group=cards)
        self.table.restore()
        return ToggleResult(SelectionEvent.COMMITTED, group=cards, perfect=perfect)
