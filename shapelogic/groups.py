"""Group validity predicates and brute-force group search."""

from __future__ import annotations

import itertools
from typing import Callable, Sequence

import numpy as np
from numba import njit

from . import encoding
from .cards import Card
from .variants import PredicateKind, Variant, VariantConfig, get_config

__all__ = [
    "feature_is_consistent",
    "is_valid_group",
    "is_perfect_group",
    "predicate_for",
    "find_group",
    "has_valid_group",
    "count_groups",
]

# Parity search enumerates subsets, so it only looks at a bounded prefix of the
# table. Seven distinct cards already guarantee an even-parity subset.
PARITY_SEARCH_WINDOW = 20


@njit(cache=True)
def _find_mod_sum_triple(rows: np.ndarray, modulus: int) -> tuple[int, int, int]:
    n = rows.shape[0]
    features = rows.shape[1]
    for i in range(n - 2):
        for j in range(i + 1, n - 1):
            for k in range(j + 1, n):
                valid = True
                for col in range(features):
                    if (rows[i, col] + rows[j, col] + rows[k, col]) % modulus != 0:
                        valid = False
                        break
                if valid:
                    return i, j, k
    return -1, -1, -1


@njit(cache=True)
def _find_same_or_distinct_quad(rows: np.ndarray) -> tuple[int, int, int, int]:
    n = rows.shape[0]
    features = rows.shape[1]
    for a in range(n - 3):
        for b in range(a + 1, n - 2):
            for c in range(b + 1, n - 1):
                for d in range(c + 1, n):
                    valid = True
                    for col in range(features):
                        w = rows[a, col]
                        x = rows[b, col]
                        y = rows[c, col]
                        z = rows[d, col]
                        same = w == x and x == y and y == z
                        distinct = (
                            w != x and w != y and w != z and x != y and x != z and y != z
                        )
                        if not (same or distinct):
                            valid = False
                            break
                    if valid:
                        return a, b, c, d
    return -1, -1, -1, -1


@njit(cache=True)
def _find_parity_subset(masks: np.ndarray, min_size: int) -> int:
    n = masks.shape[0]
    best = 0
    best_size = n + 1
    for subset in range(1, 1 << n):
        size = 0
        acc = 0
        for bit in range(n):
            if (subset >> bit) & 1:
                size += 1
                acc ^= masks[bit]
        if acc == 0 and size >= min_size and size < best_size:
            best = subset
            best_size = size
            if size == min_size:
                break
    return best


def feature_is_consistent(values: Sequence[int]) -> bool:
    """Return ``True`` when ``values`` are all equal or pairwise distinct."""

    distinct = len(set(values))
    return distinct == 1 or distinct == len(values)


def _mod_sum_valid(vectors: Sequence[tuple[int, ...]], config: VariantConfig) -> bool:
    if len(vectors) != config.group_size:
        return False
    return all(sum(column) % config.alphabet_size == 0 for column in zip(*vectors))


def _same_or_distinct_valid(vectors: Sequence[tuple[int, ...]], config: VariantConfig) -> bool:
    if len(vectors) != config.group_size:
        return False
    return all(feature_is_consistent(column) for column in zip(*vectors))


def _parity_valid(vectors: Sequence[tuple[int, ...]]) -> bool:
    if not vectors:
        return False
    return all(sum(column) % 2 == 0 for column in zip(*vectors))


def is_valid_group(cards: Sequence[Card], variant: Variant | str | VariantConfig) -> bool:
    """Decide whether ``cards`` form a valid group under the variant's algebra.

    Inputs below the required size are simply invalid; this never raises for
    short or oversized selections.
    """

    config = get_config(variant)
    vectors = [card.features for card in cards]
    if config.predicate is PredicateKind.MOD_SUM:
        return _mod_sum_valid(vectors, config)
    if config.predicate is PredicateKind.SAME_OR_DISTINCT:
        return _same_or_distinct_valid(vectors, config)
    return _parity_valid(vectors)


def is_perfect_group(cards: Sequence[Card], variant: Variant | str | VariantConfig) -> bool:
    """Return ``True`` for a valid group whose every feature is pairwise distinct."""

    if not is_valid_group(cards, variant):
        return False
    size = len(cards)
    return all(len(set(column)) == size for column in zip(*(card.features for card in cards)))


def predicate_for(variant: Variant | str | VariantConfig) -> Callable[[Sequence[Card]], bool]:
    """Return ``is_valid_group`` bound to ``variant``."""

    config = get_config(variant)

    def _predicate(cards: Sequence[Card]) -> bool:
        return is_valid_group(cards, config)

    return _predicate


def find_group(
    cards: Sequence[Card], variant: Variant | str | VariantConfig
) -> tuple[Card, ...] | None:
    """Return one valid group contained in ``cards`` or ``None``.

    Fixed-size variants test every subset of the group size. The projective
    variant tests subset sizes in increasing order starting at the minimum
    group size, so the smallest group is returned.
    """

    config = get_config(variant)
    if config.predicate is PredicateKind.PARITY:
        window = list(cards[:PARITY_SEARCH_WINDOW])
        if len(window) < config.min_group_size:
            return None
        masks = encoding.masks_for([card.id for card in window])
        subset = int(_find_parity_subset(masks, config.min_group_size))
        if subset == 0:
            return None
        return tuple(card for bit, card in enumerate(window) if (subset >> bit) & 1)

    size = config.group_size or 0
    if len(cards) < size:
        return None
    rows = encoding.rows_for([card.id for card in cards], config).astype(np.int64)
    if config.predicate is PredicateKind.MOD_SUM:
        indices = _find_mod_sum_triple(rows, config.alphabet_size)
    else:
        indices = _find_same_or_distinct_quad(rows)
    if indices[0] < 0:
        return None
    return tuple(cards[int(index)] for index in indices)


def has_valid_group(cards: Sequence[Card], variant: Variant | str | VariantConfig) -> bool:
    return find_group(cards, variant) is not None


def count_groups(cards: Sequence[Card], variant: Variant | str | VariantConfig) -> int:
    """Count every valid group among ``cards`` (debug and CLI statistics)."""

    config = get_config(variant)
    if config.is_fixed_size:
        return sum(
            1
            for combo in itertools.combinations(cards, config.group_size or 0)
            if is_valid_group(combo, config)
        )
    total = 0
    for size in range(config.min_group_size, len(cards) + 1):
        total += sum(
            1 for combo in itertools.combinations(cards, size) if is_valid_group(combo, config)
        )
    return total
