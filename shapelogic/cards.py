"""Card value objects and deterministic deck generation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

from . import encoding
from .variants import Variant, VariantConfig, get_config


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable card: canonical identifier plus its feature vector."""

    id: int
    features: tuple[int, ...]

    @property
    def present(self) -> tuple[bool, ...]:
        """Presence flags, meaningful for projective cards."""

        return tuple(bool(value) for value in self.features)

    @property
    def code(self) -> str:
        """Compact label such as ``0120`` used in logs and the CLI."""

        return "".join(str(value) for value in self.features)

    def describe(self, config: VariantConfig) -> str:
        """Return a human readable description using the variant's value names."""

        if not config.is_fixed_size:
            colours = [
                name for name, flag in zip(config.feature_names, self.present) if flag
            ]
            return " ".join(colours)
        return " ".join(
            config.value_names[index][value] for index, value in enumerate(self.features)
        )


@lru_cache(maxsize=None)
def _deck_for(config: VariantConfig) -> tuple[Card, ...]:
    return tuple(
        Card(id=card_identifier, features=features)
        for card_identifier, features in enumerate(encoding.iter_feature_vectors(config))
    )


def generate_deck(variant: Variant | str | VariantConfig) -> tuple[Card, ...]:
    """Return every card of ``variant`` exactly once in canonical order.

    The deck is built once per variant and shared; cards are immutable, so
    sessions only ever reorder references to them.
    """

    return _deck_for(get_config(variant))


def card_by_id(variant: Variant | str | VariantConfig, card_identifier: int) -> Card | None:
    """Return the card with ``card_identifier`` or ``None`` when out of range."""

    deck = generate_deck(variant)
    if 0 <= card_identifier < len(deck):
        return deck[card_identifier]
    return None


def format_cards(cards: Sequence[Card]) -> str:
    return " ".join(card.code for card in cards)
