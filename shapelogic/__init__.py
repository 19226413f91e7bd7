"""Top-level package for the shapelogic rules engine."""

from . import cards, encoding, groups, selection, session, state, table, variants
from .session import GameSession, SessionSettings
from .variants import Variant

__all__ = [
    "cards",
    "encoding",
    "groups",
    "selection",
    "session",
    "state",
    "table",
    "variants",
    "GameSession",
    "SessionSettings",
    "Variant",
]
