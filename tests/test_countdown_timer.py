import pytest

from epsilora_quiz.core.countdown_timer import CountdownTimer


def _timer(scheduler, duration=3):
    events = {"expired": 0, "ticks": []}

    def on_expired():
        events["expired"] += 1

    timer = CountdownTimer(scheduler, duration, on_expired=on_expired, on_tick=events["ticks"].append)
    return timer, events


def test_counts_down_and_expires_once(scheduler):
    timer, events = _timer(scheduler)
    timer.start()
    assert timer.is_active()
    assert timer.remaining_seconds == 3

    scheduler.advance(10)

    assert events["ticks"] == [2, 1, 0]
    assert events["expired"] == 1
    assert not timer.is_active()
    assert timer.has_fired()
    assert scheduler.pending() == 0


def test_stop_discards_pending_tick(scheduler):
    timer, events = _timer(scheduler)
    timer.start()
    scheduler.advance(1)
    timer.stop()
    scheduler.advance(10)

    assert events["ticks"] == [2]
    assert events["expired"] == 0
    assert timer.remaining_seconds == 2
    assert not timer.has_fired()


def test_stop_is_noop_when_inactive(scheduler):
    timer, _ = _timer(scheduler)
    timer.stop()
    assert not timer.is_active()


def test_restart_rearms_full_duration(scheduler):
    timer, events = _timer(scheduler)
    timer.start()
    scheduler.advance(2)
    timer.start()
    assert timer.remaining_seconds == 3

    scheduler.advance(2)
    assert events["expired"] == 0
    scheduler.advance(1)
    assert events["expired"] == 1


def test_rejects_duration_below_one_second(scheduler):
    with pytest.raises(ValueError):
        CountdownTimer(scheduler, 0, on_expired=lambda: None)
