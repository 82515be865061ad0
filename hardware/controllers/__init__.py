"""
Controllers Package

High-level hardware controllers for the flashlight.
"""

from hardware.controllers.torch_controller import TorchController, TorchState

# Public API (sorted alphabetically)
__all__ = [
    "TorchController",
    "TorchState",
]
