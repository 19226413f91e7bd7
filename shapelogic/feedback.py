"""Notification sinks for selection and group feedback."""

from __future__ import annotations

import logging
from typing import Protocol

__all__ = ["FeedbackSink", "NullFeedback", "LoggingFeedback"]


class FeedbackSink(Protocol):
    """Side-effect-only observer of player actions.

    Implementations must not call back into the session.
    """

    def on_card_selected(self) -> None:  # pragma: no cover - protocol only
        ...

    def on_valid_group(self) -> None:  # pragma: no cover - protocol only
        ...

    def on_invalid_group(self) -> None:  # pragma: no cover - protocol only
        ...

    def on_perfect_group(self) -> None:  # pragma: no cover - protocol only
        ...


class NullFeedback:
    """Sink that ignores every notification."""

    def on_card_selected(self) -> None:
        pass

    def on_valid_group(self) -> None:
        pass

    def on_invalid_group(self) -> None:
        pass

    def on_perfect_group(self) -> None:
        pass


class LoggingFeedback:
    """Sink that records notifications on a logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def on_card_selected(self) -> None:
        self.logger.log(logging.DEBUG, "card selected")

    def on_valid_group(self) -> None:
        self.logger.log(self.level, "valid group")

    def on_invalid_group(self) -> None:
        self.logger.log(self.level, "invalid group")

    def on_perfect_group(self) -> None:
        self.logger.log(self.level, "perfect group")
