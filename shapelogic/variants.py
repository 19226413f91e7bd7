"""Variant configuration shared by every engine component."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

__all__ = [
    "Variant",
    "PredicateKind",
    "TablePolicy",
    "ScoringRule",
    "VariantConfig",
    "VARIANT_CONFIGS",
    "get_config",
]


class Variant(str, Enum):
    """Tag selecting one of the supported game variants."""

    CLASSIC = "classic"
    EXTENDED = "extended"
    FOUR_STATE = "four_state"
    PROJECTIVE = "projective"


class PredicateKind(str, Enum):
    """Family of validity predicates a variant uses."""

    MOD_SUM = "mod_sum"
    SAME_OR_DISTINCT = "same_or_distinct"
    PARITY = "parity"


class TablePolicy(str, Enum):
    """How the table is refilled after a group leaves it."""

    REPLENISH = "replenish"
    FIXED_SIZE = "fixed_size"


class ScoringRule(str, Enum):
    """What the score counts."""

    GROUPS = "groups"
    CARDS = "cards"


@dataclass(frozen=True, slots=True)
class VariantConfig:
    """Parameters that turn the generic engine into one concrete variant."""

    variant: Variant
    title: str
    alphabet_size: int
    feature_count: int
    group_size: int | None
    predicate: PredicateKind
    table_policy: TablePolicy
    scoring: ScoringRule
    feature_names: tuple[str, ...]
    value_names: tuple[tuple[str, ...], ...]
    table_floor: int = 12
    table_target: int = 7
    min_group_size: int = 3
    shuffle_insert: bool = False
    tracks_perfect_groups: bool = False

    @property
    def is_fixed_size(self) -> bool:
        """Return ``True`` when every group has exactly ``group_size`` cards."""

        return self.group_size is not None

    @property
    def deck_size(self) -> int:
        if self.predicate is PredicateKind.PARITY:
            return 2**self.feature_count - 1
        return self.alphabet_size**self.feature_count

    @property
    def deal_size(self) -> int:
        """Number of cards moved by one ``deal_batch`` call."""

        return self.group_size if self.group_size is not None else 1

    @property
    def selection_cap(self) -> int | None:
        return self.group_size


_CLASSIC_VALUES: Final[tuple[tuple[str, ...], ...]] = (
    ("one", "two", "three"),
    ("diamond", "squiggle", "oval"),
    ("red", "green", "purple"),
    ("solid", "striped", "open"),
)

VARIANT_CONFIGS: Final[dict[Variant, VariantConfig]] = {
    Variant.CLASSIC: VariantConfig(
        variant=Variant.CLASSIC,
        title="Classic Set",
        alphabet_size=3,
        feature_count=4,
        group_size=3,
        predicate=PredicateKind.MOD_SUM,
        table_policy=TablePolicy.REPLENISH,
        scoring=ScoringRule.GROUPS,
        feature_names=("number", "shape", "color", "shading"),
        value_names=_CLASSIC_VALUES,
    ),
    Variant.EXTENDED: VariantConfig(
        variant=Variant.EXTENDED,
        title="Set-243",
        alphabet_size=3,
        feature_count=5,
        group_size=3,
        predicate=PredicateKind.MOD_SUM,
        table_policy=TablePolicy.REPLENISH,
        scoring=ScoringRule.GROUPS,
        feature_names=("number", "shape", "color", "shading", "border"),
        value_names=_CLASSIC_VALUES + (("solid", "dashed", "dotted"),),
        shuffle_insert=True,
        tracks_perfect_groups=True,
    ),
    Variant.FOUR_STATE: VariantConfig(
        variant=Variant.FOUR_STATE,
        title="Four State Set",
        alphabet_size=4,
        feature_count=3,
        group_size=4,
        predicate=PredicateKind.SAME_OR_DISTINCT,
        table_policy=TablePolicy.REPLENISH,
        scoring=ScoringRule.GROUPS,
        feature_names=("color", "shape", "number"),
        value_names=(
            ("red", "green", "blue", "yellow"),
            ("circle", "square", "triangle", "diamond"),
            ("one", "two", "three", "four"),
        ),
    ),
    Variant.PROJECTIVE: VariantConfig(
        variant=Variant.PROJECTIVE,
        title="Projective Set",
        alphabet_size=2,
        feature_count=6,
        group_size=None,
        predicate=PredicateKind.PARITY,
        table_policy=TablePolicy.FIXED_SIZE,
        scoring=ScoringRule.CARDS,
        feature_names=("red", "orange", "yellow", "green", "blue", "purple"),
        value_names=tuple(("absent", "present") for _ in range(6)),
    ),
}


def get_config(variant: Variant | str | VariantConfig) -> VariantConfig:
    """Return the configuration for ``variant``.

    Accepts a ``Variant`` member, its string value (``"four_state"``) or an
    already resolved ``VariantConfig``.
    """

    if isinstance(variant, VariantConfig):
        return variant
    try:
        tag = Variant(variant)
    except ValueError as exc:
        choices = ", ".join(member.value for member in Variant)
        raise ValueError(f"unknown variant '{variant}' (expected one of: {choices})") from exc
    return VARIANT_CONFIGS[tag]
