from __future__ import annotations

import numpy as np
import pytest

from shapelogic import encoding
from shapelogic.cards import card_by_id, generate_deck
from shapelogic.variants import Variant, get_config


@pytest.mark.parametrize(
    ("variant", "expected"),
    [
        (Variant.CLASSIC, 81),
        (Variant.EXTENDED, 243),
        (Variant.FOUR_STATE, 64),
        (Variant.PROJECTIVE, 63),
    ],
)
def test_deck_has_expected_size_and_unique_cards(variant: Variant, expected: int) -> None:
    deck = generate_deck(variant)
    config = get_config(variant)

    assert len(deck) == expected == config.deck_size
    assert len({card.features for card in deck}) == expected
    assert [card.id for card in deck] == list(range(expected))
    for card in deck:
        assert len(card.features) == config.feature_count
        assert all(0 <= value < config.alphabet_size for value in card.features)


def test_deck_order_is_lexicographic_for_fixed_variants() -> None:
    deck = generate_deck(Variant.CLASSIC)

    assert deck[0].features == (0, 0, 0, 0)
    assert deck[1].features == (0, 0, 0, 1)
    assert deck[27].features == (1, 0, 0, 0)
    assert deck[-1].features == (2, 2, 2, 2)
    assert [card.features for card in deck] == sorted(card.features for card in deck)


def test_projective_deck_excludes_all_absent_card() -> None:
    deck = generate_deck(Variant.PROJECTIVE)

    assert all(any(card.features) for card in deck)
    assert deck[0].present == (True, False, False, False, False, False)
    assert deck[-1].present == (True,) * 6


def test_deck_is_generated_once_per_variant() -> None:
    assert generate_deck(Variant.FOUR_STATE) is generate_deck("four_state")


@pytest.mark.parametrize("variant", list(Variant))
def test_card_ids_follow_encoding(variant: Variant) -> None:
    config = get_config(variant)
    for card in generate_deck(variant):
        assert encoding.encode_features(card.features, config) == card.id
        assert encoding.decode_id(card.id, config) == card.features


def test_feature_matrix_matches_deck() -> None:
    config = get_config(Variant.EXTENDED)
    matrix = encoding.feature_matrix(config)

    assert matrix.shape == (243, 5)
    assert matrix.dtype == np.int8
    assert tuple(int(v) for v in matrix[121]) == generate_deck(config)[121].features
    with pytest.raises(ValueError):
        matrix[0, 0] = 1


def test_encoding_rejects_out_of_range_values() -> None:
    config = get_config(Variant.CLASSIC)

    with pytest.raises(ValueError):
        encoding.encode_features((0, 0, 0, 3), config)
    with pytest.raises(ValueError):
        encoding.decode_id(81, config)
    with pytest.raises(ValueError):
        encoding.encode_features((0,) * 6, get_config(Variant.PROJECTIVE))


def test_card_by_id_returns_none_outside_deck() -> None:
    assert card_by_id(Variant.CLASSIC, 80) is not None
    assert card_by_id(Variant.CLASSIC, 81) is None
    assert card_by_id(Variant.CLASSIC, -1) is None


def test_describe_uses_value_names() -> None:
    classic = get_config(Variant.CLASSIC)
    projective = get_config(Variant.PROJECTIVE)

    assert generate_deck(classic)[0].describe(classic) == "one diamond red solid"
    assert generate_deck(projective)[2].describe(projective) == "red orange"


def test_unknown_variant_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        get_config("hexagonal")
