"""Cooperative scheduling for short-lived UI flags."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol

__all__ = ["TimerHandle", "Scheduler", "ManualScheduler", "TransientFlag"]


class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - protocol only
        ...


class Scheduler(Protocol):
    """Anything with ``call_later``; ``asyncio`` event loops qualify."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> TimerHandle:  # pragma: no cover - protocol only
        ...


@dataclass(slots=True)
class _ManualTimer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class ManualScheduler:
    """Deterministic scheduler driven by explicit ``advance`` calls."""

    now: float = 0.0
    _queue: list[tuple[float, int, _ManualTimer]] = field(default_factory=list, repr=False)
    _counter: itertools.count = field(default_factory=itertools.count, repr=False)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualTimer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = _ManualTimer(due=self.now + delay, callback=callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every due timer; return how many fired."""

        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self.now = target
        return fired


class TransientFlag:
    """Boolean that switches itself off ``duration`` seconds after ``trigger``.

    A new trigger cancels the pending reset, so the flag always stays up for a
    full ``duration`` after the latest trigger.
    """

    def __init__(self, scheduler: Scheduler, duration: float) -> None:
        if duration < 0:
            raise ValueError("duration must be non-negative")
        self.scheduler = scheduler
        self.duration = duration
        self.value = False
        self._handle: TimerHandle | None = None

    def trigger(self) -> None:
        self.cancel()
        self.value = True
        self._handle = self.scheduler.call_later(self.duration, self._reset)

    def cancel(self) -> None:
        """Drop any pending reset and lower the flag."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.value = False

    def _reset(self) -> None:
        self._handle = None
        self.value = False

    def __bool__(self) -> bool:
        return self.value
