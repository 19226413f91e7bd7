"""Self-play harness for exercising the engine end to end."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import groups, scoreboard
from .cards import Card, generate_deck
from .session import GameSession, SessionSettings
from .variants import TablePolicy, Variant, VariantConfig, get_config

logger = logging.getLogger(__name__)

__all__ = [
    "AutoplayReport",
    "ProjectiveSampleReport",
    "run_autoplay",
    "table_invariant_holds",
    "gf2_rank",
    "sample_projective_tables",
]

DEFAULT_STEP_LIMIT = 10_000


@dataclass(frozen=True, slots=True)
class AutoplayReport:
    """Summary of a batch of self-played games."""

    history: scoreboard.SessionHistory
    steps: int
    manual_deals: int
    invariant_violations: int


@dataclass(frozen=True, slots=True)
class ProjectiveSampleReport:
    """Outcome of sampling random projective tables."""

    samples: int
    table_size: int
    tables_without_group: int
    max_rank: int


def table_invariant_holds(session: GameSession) -> bool:
    """Return ``True`` when the refill invariants of the session's variant hold."""

    config = session.config
    if not session.draw_pile_count:
        return True
    table = session.table_cards
    if config.table_policy is TablePolicy.FIXED_SIZE:
        return len(table) == config.table_target
    return len(table) >= config.table_floor and groups.has_valid_group(table, config)


def _play_game(session: GameSession, step_limit: int) -> tuple[int, int, int]:
    steps = 0
    deals = 0
    violations = 0
    for _ in range(step_limit):
        if session.is_over:
            break
        group = groups.find_group(session.table_cards, session.config)
        if group is None:
            if session.request_more_cards() == 0:
                break
            deals += 1
        else:
            # The search returns a minimal group, so the commit happens on its last card.
            for card in group:
                session.select_card(card.id)
        steps += 1
        if not session.check_partition() or not table_invariant_holds(session):
            violations += 1
            logger.warning("invariant violated after step %d", steps)
    return steps, deals, violations


def run_autoplay(
    variant: Variant | str | VariantConfig,
    *,
    games: int = 10,
    seed: int = 0,
    step_limit: int = DEFAULT_STEP_LIMIT,
) -> AutoplayReport:
    """Play ``games`` complete games by always committing the first group found."""

    if games <= 0:
        raise ValueError("games must be positive")
    config = get_config(variant)
    rng = random.Random(seed)
    session = GameSession(config, rng=rng, settings=SessionSettings(seed=seed), start=False)
    history = scoreboard.SessionHistory()
    total_steps = 0
    total_deals = 0
    total_violations = 0

    for _ in range(games):
        session.new_game()
        steps, deals, violations = _play_game(session, step_limit)
        total_steps += steps
        total_deals += deals
        total_violations += violations
        history.record(scoreboard.summarize(session, history.next_game_number()))

    logger.info(
        "autoplay %s: %d game(s), %d step(s), %d violation(s)",
        config.variant.value,
        games,
        total_steps,
        total_violations,
    )
    return AutoplayReport(
        history=history,
        steps=total_steps,
        manual_deals=total_deals,
        invariant_violations=total_violations,
    )


def gf2_rank(masks: Iterable[int]) -> int:
    """Return the rank of ``masks`` viewed as vectors over GF(2)."""

    basis: list[int] = []
    for mask in masks:
        for vector in basis:
            mask = min(mask, mask ^ vector)
        if mask:
            basis.append(mask)
            basis.sort(reverse=True)
    return len(basis)


def sample_projective_tables(
    samples: int,
    rng: random.Random,
    *,
    table_size: int = 7,
) -> ProjectiveSampleReport:
    """Draw random projective tables and count those without an even-parity subset.

    Seven distinct non-zero vectors of GF(2)^6 are always linearly dependent, so
    with the default table size the expected count is zero.
    """

    deck: Sequence[Card] = generate_deck(Variant.PROJECTIVE)
    if not 0 < table_size <= len(deck):
        raise ValueError("table_size must be between 1 and the deck size")
    config = get_config(Variant.PROJECTIVE)
    missing = 0
    max_rank = 0
    for _ in range(samples):
        table = rng.sample(list(deck), table_size)
        max_rank = max(max_rank, gf2_rank(card.id + 1 for card in table))
        if not groups.has_valid_group(table, config):
            missing += 1
    return ProjectiveSampleReport(
        samples=samples,
        table_size=table_size,
        tables_without_group=missing,
        max_rank=max_rank,
    )
