from __future__ import annotations

import random

import pytest

from shapelogic import groups
from shapelogic.cards import generate_deck
from shapelogic.scheduling import ManualScheduler
from shapelogic.selection import SelectionEvent
from shapelogic.session import GameSession, SessionSettings
from shapelogic.state import TableState
from shapelogic.variants import Variant


class StackedDeck:
    """Random source that moves the given card ids to the top of the draw pile."""

    def __init__(self, top_ids: list[int]) -> None:
        self.top_ids = list(top_ids)

    def shuffle(self, x: list) -> None:
        top = [card for card in x if card.id in self.top_ids]
        rest = [card for card in x if card.id not in self.top_ids]
        x[:] = rest + top

    def randrange(self, stop: int) -> int:
        return 0


class RecordingFeedback:
    def __init__(self) -> None:
        self.events: list[str] = []

    def on_card_selected(self) -> None:
        self.events.append("selected")

    def on_valid_group(self) -> None:
        self.events.append("valid")

    def on_invalid_group(self) -> None:
        self.events.append("invalid")

    def on_perfect_group(self) -> None:
        self.events.append("perfect")


def _commit_any(session: GameSession) -> bool:
    group = groups.find_group(session.table_cards, session.config)
    if group is None:
        return False
    results = [session.select_card(card.id) for card in group]
    return results[-1].committed


def test_classic_scenario_commits_group() -> None:
    feedback = RecordingFeedback()
    session = GameSession(Variant.CLASSIC, rng=StackedDeck([0, 27, 54]), feedback=feedback)
    assert {0, 27, 54} <= {card.id for card in session.table_cards}
    assert len(session.table_cards) == 12

    session.select_card(0)
    session.select_card(27)
    result = session.select_card(54)

    assert result.event is SelectionEvent.COMMITTED
    assert session.score == 1
    assert session.groups_found == 1
    assert [card.id for card in session.collected_cards] == [0, 27, 54]
    assert len(session.table_cards) >= 12
    assert groups.has_valid_group(session.table_cards, Variant.CLASSIC)
    assert session.selected_card_ids == ()
    assert feedback.events == ["selected", "selected", "selected", "valid"]
    assert session.check_partition()


def test_four_state_scenarios() -> None:
    feedback = RecordingFeedback()
    session = GameSession(Variant.FOUR_STATE, rng=StackedDeck([0, 1, 2, 3]), feedback=feedback)

    for card_id in (0, 1, 2, 63):
        result = session.select_card(card_id)
    assert result.event is SelectionEvent.REJECTED
    assert session.score == 0
    assert feedback.events[-1] == "invalid"

    for card_id in (0, 1, 2, 3):
        result = session.select_card(card_id)
    assert result.committed
    assert session.score == 1
    assert len(session.table_cards) >= 12


def test_projective_scenario_scores_cards() -> None:
    session = GameSession(Variant.PROJECTIVE, rng=StackedDeck([0, 1, 2]))
    assert len(session.table_cards) == 7

    for card_id in (0, 1, 2):
        result = session.select_card(card_id)

    assert result.committed
    assert session.score == 3
    assert session.groups_found == 1
    assert len(session.table_cards) == 7
    assert session.selected_card_ids == ()
    assert session.draw_pile_count == 63 - 10


def test_perfect_group_flag_flashes() -> None:
    scheduler = ManualScheduler()
    feedback = RecordingFeedback()
    session = GameSession(
        Variant.EXTENDED,
        rng=StackedDeck([0, 121, 242]),
        scheduler=scheduler,
        feedback=feedback,
    )

    for card_id in (0, 121, 242):
        result = session.select_card(card_id)

    assert result.committed and result.perfect
    assert feedback.events[-2:] == ["valid", "perfect"]
    assert session.perfect_group_flag
    scheduler.advance(0.1)
    assert session.perfect_group_flag
    scheduler.advance(0.15)
    assert not session.perfect_group_flag


def test_perfect_flag_only_applies_to_extended() -> None:
    session = GameSession(Variant.CLASSIC, rng=StackedDeck([0, 40, 80]))

    for card_id in (0, 40, 80):
        result = session.select_card(card_id)

    assert result.committed
    assert not result.perfect
    assert not session.perfect_group_flag


def test_unknown_and_off_table_ids_are_ignored() -> None:
    feedback = RecordingFeedback()
    session = GameSession(Variant.CLASSIC, rng=random.Random(2), feedback=feedback)
    off_table = session.tables.draw_pile[0].id

    assert session.select_card(999).event is SelectionEvent.IGNORED
    assert session.select_card(-1).event is SelectionEvent.IGNORED
    assert session.select_card(off_table).event is SelectionEvent.IGNORED
    assert feedback.events == []


def test_request_more_cards_deals_one_batch() -> None:
    session = GameSession(Variant.CLASSIC, rng=random.Random(6))
    before = len(session.table_cards)
    selected = session.table_cards[0]
    session.select_card(selected.id)

    assert session.request_more_cards() == 3
    assert len(session.table_cards) == before + 3
    assert session.selected_cards == (selected,)


def test_request_more_cards_is_noop_for_projective_and_empty_pile() -> None:
    projective = GameSession(Variant.PROJECTIVE, rng=random.Random(6))
    assert projective.request_more_cards() == 0
    assert len(projective.table_cards) == 7

    classic = GameSession(Variant.CLASSIC, rng=random.Random(6))
    classic.tables.state.draw_pile.clear()
    assert classic.request_more_cards() == 0


def test_is_over_for_replenishing_variant() -> None:
    session = GameSession(Variant.CLASSIC, start=False)
    binary = [card for card in session.deck if all(v < 2 for v in card.features)]
    session.tables.state = TableState(table=list(binary[:12]))
    assert session.is_over

    session.tables.state = TableState(draw_pile=[session.deck[80]], table=list(binary[:12]))
    assert not session.is_over

    session.tables.state = TableState(table=list(session.deck[:12]))
    assert not session.is_over


def test_is_over_for_projective() -> None:
    session = GameSession(Variant.PROJECTIVE, start=False)
    deck = session.deck
    session.tables.state = TableState(table=[])
    assert session.is_over

    session.tables.state = TableState(table=[deck[0], deck[1], deck[2]])
    assert not session.is_over


def test_projective_game_clears_entire_deck() -> None:
    session = GameSession(Variant.PROJECTIVE, rng=random.Random(12))
    for _ in range(100):
        if session.is_over:
            break
        assert _commit_any(session)
    assert session.is_over
    assert session.score == 63
    assert session.table_cards == ()


def test_new_game_resets_zones_and_can_switch_variant() -> None:
    session = GameSession(Variant.CLASSIC, rng=random.Random(1))
    _commit_any(session)
    assert session.games_started == 1

    session.new_game(Variant.PROJECTIVE)

    assert session.variant is Variant.PROJECTIVE
    assert session.games_started == 2
    assert session.score == 0
    assert len(session.table_cards) == 7
    assert session.selected_cards == ()
    assert session.check_partition()


def test_seeded_sessions_deal_identically() -> None:
    first = GameSession(Variant.EXTENDED, settings=SessionSettings(seed=5))
    second = GameSession(Variant.EXTENDED, settings=SessionSettings(seed=5))

    assert first.table_cards == second.table_cards


def test_last_card_marker() -> None:
    session = GameSession(
        Variant.PROJECTIVE,
        rng=random.Random(9),
        settings=SessionSettings(mark_last_card=True),
    )
    while session.draw_pile_count:
        assert _commit_any(session)

    last = session.tables.state.last_dealt
    assert last is not None
    assert session.is_last_card(last)
    session.settings.mark_last_card = False
    assert not session.is_last_card(last)


@pytest.mark.parametrize("variant", list(Variant))
def test_random_actions_preserve_partition(variant: Variant) -> None:
    rng = random.Random(21)
    session = GameSession(variant, rng=random.Random(22))
    deck_ids = [card.id for card in generate_deck(variant)]
    for _ in range(400):
        roll = rng.random()
        if roll < 0.05:
            session.request_more_cards()
        elif roll < 0.25:
            _commit_any(session)
        else:
            session.select_card(rng.choice(deck_ids))
        assert session.check_partition()
        assert session.score >= 0
