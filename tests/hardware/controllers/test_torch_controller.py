"""
Torch Controller Tests

Tests for the single owner of the torch state.

To run:
    pytest tests/hardware/controllers/test_torch_controller.py -v
"""

import pytest

from hardware.controllers.torch_controller import TorchController, TorchState
from hardware.implementations.mock_torch import MockTorch
from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchUnavailableError,
)


# =============================================================================
# ON / OFF
# =============================================================================

@pytest.mark.unit
def test_controller_starts_off(torch_controller):
    assert torch_controller.is_on is False
    assert torch_controller.brightness == 1.0
    assert torch_controller.get_state() == TorchState(on=False, brightness=1.0)


@pytest.mark.unit
def test_turn_on_and_off(torch_controller, mock_torch):
    assert torch_controller.turn_on() is True
    assert mock_torch.on is True

    assert torch_controller.turn_off() is True
    assert mock_torch.on is False
    assert [(call.on, call.brightness) for call in mock_torch.history] == [
        (True, 1.0),
        (False, 1.0),
    ]


@pytest.mark.unit
def test_repeated_state_is_noop(torch_controller, mock_torch):
    """Requesting the current state again does not touch the hardware."""
    torch_controller.turn_on(0.5)
    torch_controller.turn_on(0.5)
    torch_controller.set_torch(True)

    assert len(mock_torch.history) == 1


@pytest.mark.unit
def test_turn_off_while_off_makes_no_hardware_call(torch_controller, mock_torch):
    assert torch_controller.turn_off() is True
    assert torch_controller.set_torch(False, 0.3) is True

    assert mock_torch.history == []
    # Level is still remembered for the next turn-on
    assert torch_controller.brightness == 0.3


# =============================================================================
# BRIGHTNESS
# =============================================================================

@pytest.mark.unit
def test_set_brightness_while_on_updates_live(torch_controller, mock_torch):
    """Brightness changes while lit never switch the torch off."""
    torch_controller.turn_on()
    torch_controller.set_brightness(0.4)

    assert torch_controller.is_on is True
    assert mock_torch.brightness == 0.4
    assert [call.on for call in mock_torch.history] == [True, True]


@pytest.mark.unit
def test_set_brightness_while_off_applies_on_next_turn_on(torch_controller, mock_torch):
    torch_controller.set_brightness(0.4)
    assert mock_torch.history == []

    torch_controller.turn_on()
    assert mock_torch.history[-1].brightness == 0.4


@pytest.mark.unit
@pytest.mark.parametrize("bad_level", [0.0, -0.1, 1.5])
def test_invalid_brightness_rejected(torch_controller, bad_level):
    with pytest.raises(ValueError):
        torch_controller.set_torch(True, bad_level)

    assert torch_controller.is_on is False


@pytest.mark.unit
def test_invalid_initial_brightness_rejected(mock_torch):
    with pytest.raises(ValueError):
        TorchController(torch=mock_torch, brightness=2.0)


# =============================================================================
# FAILURES
# =============================================================================

@pytest.mark.unit
def test_hardware_failure_reported_not_raised(torch_controller, mock_torch):
    """A refused write returns False and keeps the previous state."""
    mock_torch.fail_next()

    assert torch_controller.turn_on() is False
    assert torch_controller.is_on is False
    assert isinstance(torch_controller.last_error, TorchConfigurationError)
    assert torch_controller.failure_count == 1

    # Next request retries and clears the error
    assert torch_controller.turn_on() is True
    assert torch_controller.is_on is True
    assert torch_controller.last_error is None


@pytest.mark.unit
def test_unavailable_torch_is_noop(unavailable_torch):
    controller = TorchController(torch=unavailable_torch)

    assert controller.is_available() is False
    assert controller.turn_on() is False
    assert controller.set_brightness(0.5) is True  # Off stays off
    assert controller.turn_on() is False

    assert controller.is_on is False
    assert isinstance(controller.last_error, TorchUnavailableError)
    assert controller.failure_count == 2


@pytest.mark.unit
def test_torch_coming_back(unavailable_torch):
    controller = TorchController(torch=unavailable_torch)
    assert controller.turn_on() is False

    unavailable_torch.set_available(True)

    assert controller.turn_on() is True
    assert controller.last_error is None


# =============================================================================
# LIFECYCLE
# =============================================================================

@pytest.mark.unit
def test_cleanup_switches_off_and_releases(mock_torch):
    controller = TorchController(torch=mock_torch)
    controller.turn_on()

    controller.cleanup()
    controller.cleanup()  # Idempotent

    assert mock_torch.on is False
    assert mock_torch.cleaned_up is True
    assert [call.on for call in mock_torch.history] == [True, False]


@pytest.mark.unit
def test_context_manager(mock_torch):
    with TorchController(torch=mock_torch) as controller:
        controller.turn_on()

    assert mock_torch.on is False
    assert mock_torch.cleaned_up is True


@pytest.mark.unit
def test_get_status(torch_controller):
    torch_controller.turn_on(0.6)

    status = torch_controller.get_status()

    assert status["on"] is True
    assert status["brightness"] == 0.6
    assert status["available"] is True
    assert status["backend"] == "MockTorch"
    assert status["last_error"] is None


@pytest.mark.unit
def test_default_backend_from_factory(monkeypatch):
    """Without an explicit torch the controller asks the factory."""
    created = MockTorch()
    monkeypatch.setattr(
        "hardware.controllers.torch_controller.create_torch",
        lambda: created,
    )

    controller = TorchController()

    assert controller.torch is created


@pytest.mark.unit
def test_refused_off_is_retried(torch_controller, mock_torch):
    """After a failed off the mirror says off, but the next write is not skipped."""
    torch_controller.turn_on()
    mock_torch.fail_next()

    assert torch_controller.turn_off() is False
    assert torch_controller.is_on is False
    assert mock_torch.on is True
    assert torch_controller.get_status()["needs_sync"] is True

    assert torch_controller.turn_off() is True
    assert mock_torch.on is False
    assert torch_controller.get_status()["needs_sync"] is False


@pytest.mark.unit
def test_refused_off_then_on_reaches_hardware(torch_controller, mock_torch):
    torch_controller.turn_on()
    mock_torch.fail_next()
    torch_controller.turn_off()

    assert torch_controller.turn_on() is True
    assert [call.on for call in mock_torch.history] == [True, True]
