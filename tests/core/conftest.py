"""
Test Configuration and Fixtures

Shared pytest fixtures for the app state tests: a fully wired AppState on a
virtual timeline with a mock torch and a throwaway preferences file.
"""

import pytest

from core.app_state import AppState
from core.preferences import PreferenceStore
from hardware.controllers.torch_controller import TorchController
from hardware.implementations.mock_torch import MockTorch
from strobe.controllers.strobe_scheduler import StrobeScheduler
from strobe.implementations.virtual_timer import VirtualTimerQueue


@pytest.fixture
def virtual_timers():
    timers = VirtualTimerQueue()
    yield timers
    timers.shutdown()


@pytest.fixture
def clocked_torch(virtual_timers):
    return MockTorch(clock=virtual_timers.now)


@pytest.fixture
def preferences_path(tmp_path):
    return tmp_path / "flashy" / "preferences.json"


@pytest.fixture
def preferences(preferences_path):
    return PreferenceStore(preferences_path)


@pytest.fixture
def make_app(virtual_timers, preferences):
    """
    Build an AppState around a given torch backend.

    Usage:
        app = make_app(MockTorch(available=False))
    """

    def factory(torch, **kwargs):
        controller = TorchController(torch=torch, brightness=1.0)
        scheduler = StrobeScheduler(controller, virtual_timers, repeat_sos=False)
        kwargs.setdefault("brightness", 1.0)
        kwargs.setdefault("strobe_speed", 1.0)
        kwargs.setdefault("strobe_pattern", "constant")
        return AppState(controller, scheduler, preferences, **kwargs)

    return factory


@pytest.fixture
def app(make_app, clocked_torch):
    return make_app(clocked_torch)
