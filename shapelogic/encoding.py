"""Card identifier encoding utilities for shapelogic decks."""

from __future__ import annotations

import itertools
from functools import lru_cache
from typing import Iterable, Iterator, Sequence

import numpy as np

from .variants import PredicateKind, VariantConfig

FeatureVector = tuple[int, ...]


def _validate_features(features: Sequence[int], config: VariantConfig) -> None:
    if len(features) != config.feature_count:
        raise ValueError(
            f"expected {config.feature_count} features, got {len(features)}"
        )
    for value in features:
        if not 0 <= value < config.alphabet_size:
            raise ValueError(f"feature value {value} out of range")


def _validate_card_identifier(card_identifier: int, config: VariantConfig) -> None:
    if card_identifier < 0 or card_identifier >= config.deck_size:
        raise ValueError(f"card identifier {card_identifier} out of range")


def encode_features(features: Sequence[int], config: VariantConfig) -> int:
    """Encode a feature vector into its canonical card identifier.

    Fixed-alphabet decks use a mixed-radix number with feature 0 as the most
    significant digit, matching lexicographic deck order. Projective cards use
    their presence bit mask minus one, since the all-absent card does not exist.
    """

    _validate_features(features, config)
    if config.predicate is PredicateKind.PARITY:
        mask = parity_mask(features)
        if mask == 0:
            raise ValueError("projective cards need at least one present feature")
        return mask - 1
    identifier = 0
    for value in features:
        identifier = identifier * config.alphabet_size + value
    return identifier


def decode_id(card_identifier: int, config: VariantConfig) -> FeatureVector:
    """Decode a card identifier into its feature vector."""

    _validate_card_identifier(card_identifier, config)
    if config.predicate is PredicateKind.PARITY:
        mask = card_identifier + 1
        return tuple((mask >> bit) & 1 for bit in range(config.feature_count))
    digits: list[int] = []
    remainder = card_identifier
    for _ in range(config.feature_count):
        remainder, digit = divmod(remainder, config.alphabet_size)
        digits.append(digit)
    return tuple(reversed(digits))


def parity_mask(features: Iterable[int]) -> int:
    """Return the presence bit mask for a projective feature vector."""

    mask = 0
    for bit, value in enumerate(features):
        if value:
            mask |= 1 << bit
    return mask


def iter_feature_vectors(config: VariantConfig) -> Iterator[FeatureVector]:
    """Yield every feature vector of the deck in canonical order."""

    if config.predicate is PredicateKind.PARITY:
        for card_identifier in range(config.deck_size):
            yield decode_id(card_identifier, config)
        return
    yield from itertools.product(range(config.alphabet_size), repeat=config.feature_count)


@lru_cache(maxsize=None)
def feature_matrix(config: VariantConfig) -> np.ndarray:
    """Return a read-only ``(deck_size, feature_count)`` matrix indexed by card id."""

    matrix = np.array(list(iter_feature_vectors(config)), dtype=np.int8)
    matrix.setflags(write=False)
    return matrix


def rows_for(card_identifiers: Sequence[int], config: VariantConfig) -> np.ndarray:
    """Return the feature rows for ``card_identifiers`` as a contiguous array."""

    matrix = feature_matrix(config)
    return np.ascontiguousarray(matrix[np.asarray(card_identifiers, dtype=np.int64)])


def masks_for(card_identifiers: Sequence[int]) -> np.ndarray:
    """Return projective bit masks for ``card_identifiers``."""

    return np.asarray(card_identifiers, dtype=np.int64) + 1
