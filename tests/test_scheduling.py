from __future__ import annotations

import logging

import pytest

from shapelogic.feedback import LoggingFeedback, NullFeedback
from shapelogic.scheduling import ManualScheduler, TransientFlag


def test_manual_scheduler_fires_due_callbacks_in_order() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.call_later(0.3, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))

    assert scheduler.advance(0.2) == 1
    assert fired == ["early"]
    assert scheduler.pending == 1
    assert scheduler.advance(0.2) == 1
    assert fired == ["early", "late"]
    assert scheduler.now == pytest.approx(0.4)


def test_cancelled_timer_does_not_fire() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    handle = scheduler.call_later(0.1, lambda: fired.append(1))

    handle.cancel()

    assert scheduler.pending == 0
    assert scheduler.advance(1.0) == 0
    assert fired == []


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        ManualScheduler().call_later(-0.1, lambda: None)


def test_transient_flag_resets_after_duration() -> None:
    scheduler = ManualScheduler()
    flag = TransientFlag(scheduler, 0.2)

    flag.trigger()
    assert flag
    scheduler.advance(0.19)
    assert flag
    scheduler.advance(0.05)
    assert not flag


def test_retrigger_extends_the_flash() -> None:
    scheduler = ManualScheduler()
    flag = TransientFlag(scheduler, 0.2)

    flag.trigger()
    scheduler.advance(0.15)
    flag.trigger()
    scheduler.advance(0.1)

    assert flag.value
    assert scheduler.pending == 1
    scheduler.advance(0.2)
    assert not flag.value


def test_cancel_lowers_flag_and_drops_timer() -> None:
    scheduler = ManualScheduler()
    flag = TransientFlag(scheduler, 0.2)
    flag.trigger()

    flag.cancel()

    assert not flag
    assert scheduler.pending == 0


def test_feedback_sinks(caplog: pytest.LogCaptureFixture) -> None:
    NullFeedback().on_invalid_group()
    sink = LoggingFeedback(logging.getLogger("shapelogic.test"))

    with caplog.at_level(logging.INFO, logger="shapelogic.test"):
        sink.on_card_selected()
        sink.on_valid_group()
        sink.on_perfect_group()

    assert [record.getMessage() for record in caplog.records] == [
        "valid group",
        "perfect group",
    ]
