"""Player-facing rules text for each variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .variants import Variant, VariantConfig, get_config


@dataclass(frozen=True, slots=True)
class VariantRules:
    title: str
    objective: str
    setup: str
    how_to_play: tuple[str, ...]
    scoring: str
    examples: tuple[str, ...]


RULEBOOK: Final[dict[Variant, VariantRules]] = {
    Variant.CLASSIC: VariantRules(
        title="Classic Set",
        objective=(
            "Find sets of three cards where each feature is either all the same "
            "or all different across the cards."
        ),
        setup=(
            "Game starts with 12 cards dealt from a deck of 81 cards. Each card has "
            "four features (number, shape, color and shading) with three possible values each."
        ),
        how_to_play=(
            "Select three cards that form a valid set.",
            "For each feature, all cards must share the value or all must differ.",
            "When a set is found, cards are removed and replaced.",
            "Request additional cards if no sets are visible.",
        ),
        scoring="One point for each set found. Game ends when all sets are collected.",
        examples=(
            "Valid: three red solid ovals with one, two and three shapes.",
            "Valid: one red diamond, two green squiggles, three purple ovals, all shadings different.",
            "Invalid: two red diamonds and one green diamond.",
        ),
    ),
    Variant.EXTENDED: VariantRules(
        title="Set-243",
        objective=(
            "Find sets of three cards following classic rules, now with an "
            "additional border feature."
        ),
        setup=(
            "Game starts with 12 cards dealt from a deck of 243 cards. Each card has "
            "five features (number, shape, color, shading and border style)."
        ),
        how_to_play=(
            "Follow classic rules with the fifth border feature.",
            "Perfect sets, where all five features differ, are celebrated with a flash.",
            "Border styles can be solid, dashed or dotted.",
        ),
        scoring="One point for each set found. Perfect sets are worth the same.",
        examples=(
            "Valid: three cards identical except for their borders.",
            "Perfect: all five features are different across the three cards.",
            "Invalid: two solid borders and one dashed.",
        ),
    ),
    Variant.FOUR_STATE: VariantRules(
        title="Four State Set",
        objective=(
            "Find sets of four cards where each feature is all the same or all different."
        ),
        setup="Game starts with 12 cards dealt from a deck of 64.",
        how_to_play=(
            "Select four cards that form a valid set.",
            "For each feature (color, shape, number) the four values are equal or all four differ.",
            "When a set is found, cards are removed and replaced.",
            "Request additional cards if no sets are visible.",
        ),
        scoring="One point for each set found. Game ends when all sets are collected.",
        examples=(
            "Valid: four red circles showing one, two, three and four shapes.",
            "Invalid: three cards showing one shape and a fourth showing two.",
        ),
    ),
    Variant.PROJECTIVE: VariantRules(
        title="Projective Set",
        objective=(
            "Find sets where each color appears an even number of times across the "
            "selected cards."
        ),
        setup=(
            "Game starts with 7 cards dealt from a deck of 63 cards. Each card shows a "
            "unique combination of colored dots."
        ),
        how_to_play=(
            "Select any number of cards, typically three to seven.",
            "Cards form a set when each color appears an even number of times.",
            "A set is removed as soon as the selection forms one.",
            "New cards are dealt to keep seven cards on the table when possible.",
        ),
        scoring="Score is the total number of cards collected, not the number of sets.",
        examples=(
            "Valid: three cards where red appears twice and blue twice.",
            "Valid: four cards where each color appears exactly twice.",
            "Invalid: three cards where red appears three times.",
        ),
    ),
}


def rules_for(variant: Variant | str | VariantConfig) -> VariantRules:
    return RULEBOOK[get_config(variant).variant]
