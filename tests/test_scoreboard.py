from __future__ import annotations

import random

import pytest

from shapelogic import scoreboard
from shapelogic.session import GameSession
from shapelogic.variants import Variant


def _summary(number: int, variant: Variant, groups_found: int, score: int, completed: bool = True):
    return scoreboard.GameSummary(
        game_number=number,
        variant=variant,
        groups_found=groups_found,
        cards_collected=groups_found * 3,
        score=score,
        completed=completed,
    )


def test_history_totals_per_variant() -> None:
    history = scoreboard.SessionHistory()
    history.record(_summary(1, Variant.PROJECTIVE, 4, 15))
    history.record(_summary(2, Variant.CLASSIC, 20, 20))
    history.record(_summary(3, Variant.CLASSIC, 25, 25, completed=False))

    totals = history.totals()

    assert [entry.variant for entry in totals] == [Variant.CLASSIC, Variant.PROJECTIVE]
    classic = totals[0]
    assert classic.games == 2
    assert classic.completed == 1
    assert classic.groups_found == 45
    assert classic.cards_collected == 135
    assert classic.best_score == 25
    assert history.next_game_number() == 4


def test_history_rejects_duplicates_and_negative_counts() -> None:
    history = scoreboard.SessionHistory()
    history.record(_summary(1, Variant.CLASSIC, 1, 1))

    with pytest.raises(ValueError):
        history.record(_summary(1, Variant.CLASSIC, 2, 2))
    with pytest.raises(ValueError):
        history.record(_summary(2, Variant.CLASSIC, -1, 0))


def test_summarize_captures_session() -> None:
    session = GameSession(Variant.PROJECTIVE, rng=random.Random(3))

    summary = scoreboard.summarize(session, 7)

    assert summary.game_number == 7
    assert summary.variant is Variant.PROJECTIVE
    assert summary.score == 0
    assert summary.cards_collected == 0
    assert not summary.completed
