"""Game session binding deck, table, selection and feedback for one variant."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .cards import Card, generate_deck
from .feedback import FeedbackSink, NullFeedback
from .scheduling import ManualScheduler, Scheduler, TransientFlag
from .selection import SelectionController, SelectionEvent, ToggleResult
from .table import RandomSource, TableManager
from .variants import ScoringRule, TablePolicy, Variant, VariantConfig, get_config

logger = logging.getLogger(__name__)

__all__ = ["SessionSettings", "GameSession"]


@dataclass(slots=True)
class SessionSettings:
    """Per-session knobs that are not part of a variant's rules."""

    perfect_flash_seconds: float = 0.2
    mark_last_card: bool = False
    seed: int | None = None


class GameSession:
    """One active game: the public surface consumed by the UI.

    All calls are synchronous and expected to be serialised by the caller.
    Randomness, timers and feedback are injected; without a scheduler the
    session uses a ``ManualScheduler``, so the perfect-group flag only resets
    when that scheduler is advanced.
    """

    def __init__(
        self,
        variant: Variant | str | VariantConfig = Variant.CLASSIC,
        *,
        rng: RandomSource | None = None,
        scheduler: Scheduler | None = None,
        feedback: FeedbackSink | None = None,
        settings: SessionSettings | None = None,
        start: bool = True,
    ) -> None:
        self.settings = settings if settings is not None else SessionSettings()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.settings.seed)
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.feedback: FeedbackSink = feedback if feedback is not None else NullFeedback()
        self._perfect = TransientFlag(self.scheduler, self.settings.perfect_flash_seconds)
        self.games_started = 0
        self._bind(get_config(variant))
        if start:
            self.new_game()

    def _bind(self, config: VariantConfig) -> None:
        self.config = config
        self.tables = TableManager(config, self.rng)
        self.selection = SelectionController(self.tables)

    # -- lifecycle -----------------------------------------------------------------

    def new_game(self, variant: Variant | str | VariantConfig | None = None) -> None:
        """Shuffle a fresh deck, reset every zone and run the initial deal."""

        if variant is not None:
            self._bind(get_config(variant))
        self.tables.reset(generate_deck(self.config))
        self.selection.clear()
        self._perfect.cancel()
        self.tables.restore()
        self.games_started += 1
        logger.debug(
            "new %s game: table=%d draw=%d",
            self.config.variant.value,
            len(self.tables.table),
            len(self.tables.draw_pile),
        )

    # -- player actions ------------------------------------------------------------

    def _table_card(self, card_id: int) -> Card | None:
        for card in self.tables.table:
            if card.id == card_id:
                return card
        return None

    def select_card(self, card_id: int) -> ToggleResult:
        """Toggle the table card with ``card_id``; unknown ids are ignored."""

        card = self._table_card(card_id)
        if card is None:
            return ToggleResult(SelectionEvent.IGNORED)
        self.feedback.on_card_selected()
        result = self.selection.toggle(card)
        if result.event is SelectionEvent.COMMITTED:
            self.feedback.on_valid_group()
            if result.perfect:
                self._perfect.trigger()
                self.feedback.on_perfect_group()
            logger.debug("committed group, score=%d", self.score)
        elif result.event is SelectionEvent.REJECTED:
            self.feedback.on_invalid_group()
        return result

    def request_more_cards(self) -> int:
        """Deal one extra batch on request; returns the number of cards dealt."""

        if self.config.table_policy is not TablePolicy.REPLENISH:
            return 0
        if not self.tables.draw_pile:
            return 0
        dealt = self.tables.deal_batch(self.config.deal_size)
        self.selection.prune()
        return len(dealt)

    # -- read-only views -------------------------------------------------------------

    @property
    def variant(self) -> Variant:
        return self.config.variant

    @property
    def deck(self) -> tuple[Card, ...]:
        return generate_deck(self.config)

    @property
    def draw_pile_count(self) -> int:
        return len(self.tables.draw_pile)

    @property
    def table_cards(self) -> tuple[Card, ...]:
        return tuple(self.tables.table)

    @property
    def selected_cards(self) -> tuple[Card, ...]:
        return self.selection.selected

    @property
    def selected_card_ids(self) -> tuple[int, ...]:
        return tuple(card.id for card in self.selection.selected)

    @property
    def collected_cards(self) -> tuple[Card, ...]:
        return tuple(self.tables.state.collected)

    @property
    def groups_found(self) -> int:
        return self.tables.state.groups_removed

    @property
    def score(self) -> int:
        if self.config.scoring is ScoringRule.CARDS:
            return len(self.tables.state.collected)
        return self.tables.state.groups_removed

    @property
    def is_over(self) -> bool:
        if self.tables.draw_pile:
            return False
        if self.config.table_policy is TablePolicy.FIXED_SIZE:
            return not self.tables.table
        return not self.tables.has_valid_group()

    @property
    def perfect_group_flag(self) -> bool:
        return self.config.tracks_perfect_groups and self._perfect.value

    def is_last_card(self, card: Card) -> bool:
        """Return ``True`` for the final card dealt when the marker is enabled."""

        return self.settings.mark_last_card and self.tables.state.last_dealt == card

    def check_partition(self) -> bool:
        """Return ``True`` when zones partition the deck and selection is on the table."""

        if not self.tables.state.partitions(self.deck):
            return False
        table = set(self.tables.table)
        return all(card in table for card in self.selection.selected)
