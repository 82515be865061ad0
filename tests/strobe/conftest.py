"""
Test Configuration and Fixtures

Shared pytest fixtures for the strobe tests. Everything runs on a
VirtualTimerQueue, and the mock torch stamps its calls with the virtual clock,
so timing assertions are exact and tests never sleep.
"""

import pytest

from hardware.controllers.torch_controller import TorchController
from hardware.implementations.mock_torch import MockTorch
from strobe.controllers.strobe_scheduler import StrobeScheduler
from strobe.implementations.virtual_timer import VirtualTimerQueue


@pytest.fixture
def virtual_timers():
    """Provide a virtual timeline starting at t=0."""
    timers = VirtualTimerQueue()
    yield timers
    timers.shutdown()


@pytest.fixture
def clocked_torch(virtual_timers):
    """Mock torch whose call timestamps come from the virtual clock."""
    return MockTorch(clock=virtual_timers.now)


@pytest.fixture
def torch_controller(clocked_torch):
    controller = TorchController(torch=clocked_torch, brightness=1.0)
    yield controller
    controller.cleanup()


@pytest.fixture
def scheduler(torch_controller, virtual_timers):
    """Scheduler that plays SOS once."""
    return StrobeScheduler(torch_controller, virtual_timers, repeat_sos=False)


@pytest.fixture
def looping_scheduler(torch_controller, virtual_timers):
    """Scheduler that repeats SOS until stopped."""
    return StrobeScheduler(torch_controller, virtual_timers, repeat_sos=True)


@pytest.fixture
def callback_tracker():
    """
    Track callback invocations.

    Usage:
        scheduler.register_callback("on_state_change", callback_tracker.record)
        assert callback_tracker.calls == [...]
    """

    class CallbackTracker:
        def __init__(self):
            self.calls = []

        def record(self, *args):
            self.calls.append(args)

        def reset(self):
            self.calls = []

    return CallbackTracker()
