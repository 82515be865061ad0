"""
Test Configuration and Fixtures

Shared pytest fixtures for the hardware tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/hardware/
"""

import pytest

from hardware.controllers.torch_controller import TorchController
from hardware.implementations.mock_torch import MockTorch


# =============================================================================
# TORCH FIXTURES
# =============================================================================

@pytest.fixture
def mock_torch():
    """
    Provide a fresh MockTorch instance for each test.

    Usage in test:
        def test_something(mock_torch):
            mock_torch.set_torch(True, 0.5)
    """
    torch = MockTorch()
    yield torch
    torch.cleanup()


@pytest.fixture
def unavailable_torch():
    """Provide a MockTorch that behaves like a device without a torch."""
    return MockTorch(available=False)


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def torch_controller(mock_torch):
    """
    Provide TorchController with mock torch at full brightness.

    Automatically cleans up after test.
    """
    controller = TorchController(torch=mock_torch, brightness=1.0)
    yield controller
    controller.cleanup()


@pytest.fixture
def sysfs_led(tmp_path):
    """
    Provide a fake LED class device directory.

    Layout mirrors /sys/class/leds/<name>/:
        brightness      "0"
        max_brightness  "255"
    """
    led_dir = tmp_path / "leds" / "white:flash"
    led_dir.mkdir(parents=True)
    (led_dir / "brightness").write_text("0\n")
    (led_dir / "max_brightness").write_text("255\n")
    return led_dir
