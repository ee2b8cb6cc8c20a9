import pytest

from src.core.scheduler import ManualScheduler, ScheduledCall, Scheduler


def test_nothing_fires_before_due(scheduler):
    fired = []
    scheduler.call_later(100, lambda: fired.append("a"))
    scheduler.advance(99)
    assert fired == []
    scheduler.advance(1)
    assert fired == ["a"]


def test_due_order_then_schedule_order(scheduler):
    fired = []
    scheduler.call_later(200, lambda: fired.append("late"))
    scheduler.call_later(100, lambda: fired.append("first"))
    scheduler.call_later(100, lambda: fired.append("second"))
    assert scheduler.advance(500) == 3
    assert fired == ["first", "second", "late"]


def test_cancel_prevents_call(scheduler):
    fired = []
    call = scheduler.call_later(100, lambda: fired.append("x"))
    assert call.active
    assert call.cancel()
    assert call.cancelled
    assert not call.cancel()
    scheduler.advance(1000)
    assert fired == []
    assert scheduler.pending == 0


def test_cancel_after_run_is_noop(scheduler):
    call = scheduler.call_later(10, lambda: None)
    scheduler.advance(10)
    assert call.done
    assert not call.cancel()
    assert not call.cancelled


def test_timer_owned_call_has_no_due_time():
    fired, released = [], []
    call = ScheduledCall(lambda: fired.append(1), None, on_cancel=lambda: released.append(1))
    assert call.due_ms is None
    call.run()
    call.run()
    assert fired == [1]
    assert not call.cancel()
    assert released == []


def test_cancel_runs_release_hook_once():
    released = []
    call = ScheduledCall(lambda: None, None, on_cancel=lambda: released.append(1))
    assert call.cancel()
    assert not call.cancel()
    call.run()
    assert released == [1]
    assert not call.done


def test_manual_calls_carry_absolute_due_time():
    scheduler = ManualScheduler(start_ms=1000)
    call = scheduler.call_later(250, lambda: None)
    assert call.due_ms == 1250


def test_base_scheduler_has_no_clock():
    with pytest.raises(NotImplementedError):
        Scheduler().call_later(10, lambda: None)


def test_callback_can_schedule_follow_up():
    scheduler = ManualScheduler()
    fired = []

    def first():
        fired.append(scheduler.now_ms)
        scheduler.call_later(50, lambda: fired.append(scheduler.now_ms))

    scheduler.call_later(100, first)
    scheduler.advance(1000)
    assert fired == [100, 150]
    assert scheduler.now_ms == 1000


def test_clock_never_goes_backwards():
    scheduler = ManualScheduler(start_ms=500)
    scheduler.advance_to(100)
    assert scheduler.now_ms == 500
