"""
Hardware Interfaces Package

Exposes abstract interfaces that define contracts for hardware components.
"""

from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchError,
    TorchInterface,
    TorchUnavailableError,
)

# Public API (sorted alphabetically)
__all__ = [
    "TorchConfigurationError",
    "TorchError",
    "TorchInterface",
    "TorchUnavailableError",
]
