"""
Virtual Timer Queue Tests

To run:
    pytest tests/strobe/implementations/test_virtual_timer.py -v
"""

import pytest

from strobe.implementations.virtual_timer import VirtualTimerQueue


@pytest.mark.unit
def test_nothing_runs_until_time_advances(virtual_timers):
    fired = []
    virtual_timers.call_later(1.0, lambda: fired.append("a"))

    assert virtual_timers.advance(0.5) == 0
    assert fired == []

    assert virtual_timers.advance(0.5) == 1
    assert fired == ["a"]
    assert virtual_timers.now() == 1.0


@pytest.mark.unit
def test_callbacks_run_in_deadline_order(virtual_timers):
    fired = []
    virtual_timers.call_later(2.0, lambda: fired.append("late"))
    virtual_timers.call_later(1.0, lambda: fired.append("early"))
    virtual_timers.call_later(1.0, lambda: fired.append("early-second"))

    virtual_timers.advance(5.0)

    assert fired == ["early", "early-second", "late"]


@pytest.mark.unit
def test_clock_jumps_to_each_deadline(virtual_timers):
    seen = []
    virtual_timers.call_later(0.3, lambda: seen.append(virtual_timers.now()))
    virtual_timers.call_later(0.7, lambda: seen.append(virtual_timers.now()))

    virtual_timers.advance(1.0)

    assert seen == [0.3, 0.7]
    assert virtual_timers.now() == 1.0


@pytest.mark.unit
def test_callbacks_scheduled_during_advance_also_fire(virtual_timers):
    fired = []

    def chain():
        fired.append(virtual_timers.now())
        if len(fired) < 3:
            virtual_timers.call_later(1.0, chain)

    virtual_timers.call_later(1.0, chain)
    virtual_timers.advance(10.0)

    assert fired == [1.0, 2.0, 3.0]


@pytest.mark.unit
def test_cancel(virtual_timers):
    fired = []
    handle = virtual_timers.call_later(1.0, lambda: fired.append("x"))

    virtual_timers.cancel(handle)
    virtual_timers.cancel(handle)

    assert virtual_timers.pending_count() == 0
    virtual_timers.advance(2.0)
    assert fired == []


@pytest.mark.unit
def test_call_soon_runs_on_zero_advance(virtual_timers):
    fired = []
    virtual_timers.call_soon(lambda: fired.append("now"))

    virtual_timers.advance(0)

    assert fired == ["now"]


@pytest.mark.unit
def test_negative_advance_rejected(virtual_timers):
    with pytest.raises(ValueError):
        virtual_timers.advance(-1.0)


@pytest.mark.unit
def test_callback_error_does_not_break_timeline(virtual_timers):
    fired = []

    def broken():
        raise RuntimeError("boom")

    virtual_timers.call_later(1.0, broken)
    virtual_timers.call_later(2.0, lambda: fired.append("after"))

    virtual_timers.advance(3.0)

    assert fired == ["after"]
    assert virtual_timers.fired_count == 1


@pytest.mark.unit
def test_run_until_idle(virtual_timers):
    virtual_timers.call_later(4.0, lambda: None)

    assert virtual_timers.run_until_idle() is True
    assert virtual_timers.now() == 4.0


@pytest.mark.unit
def test_run_until_idle_gives_up_on_endless_chains():
    timers = VirtualTimerQueue()

    def forever():
        timers.call_later(1.0, forever)

    timers.call_later(1.0, forever)

    assert timers.run_until_idle(max_time=10.0) is False
    assert timers.now() == 10.0


@pytest.mark.unit
def test_run_sync_runs_inline(virtual_timers):
    assert virtual_timers.run_sync(lambda a, b=0: a + b, 2, b=3) == 5


@pytest.mark.unit
def test_shutdown_drops_everything(virtual_timers):
    fired = []
    virtual_timers.call_later(1.0, lambda: fired.append("x"))

    virtual_timers.shutdown()
    handle = virtual_timers.call_later(1.0, lambda: fired.append("y"))
    virtual_timers.advance(5.0)

    assert fired == []
    assert handle.cancelled is True
    assert virtual_timers.next_deadline() is None
