"""
Hardware Module

Torch hardware abstraction with automatic detection and graceful fallback
between real hardware and a mock implementation for testing.

Public API:
    - HardwareFactory: Factory for creating torch backends
    - create_torch: Quick torch creation with auto-detection
    - TorchInterface: Torch contract
    - TorchController: High-level torch controller (state, idempotence, errors)
    - TorchError, TorchUnavailableError, TorchConfigurationError

Usage:
    from hardware import TorchController, create_torch

    # Auto-detects real vs mock hardware
    torch = TorchController(create_torch())
    torch.turn_on(brightness=0.5)
"""

from hardware.controllers.torch_controller import TorchController, TorchState
from hardware.factory import HardwareFactory, create_torch
from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchError,
    TorchInterface,
    TorchUnavailableError,
)

__all__ = [
    "HardwareFactory",
    "TorchConfigurationError",
    "TorchController",
    "TorchError",
    "TorchInterface",
    "TorchState",
    "TorchUnavailableError",
    "create_torch",
]
