"""
Hardware Implementations Package

Exposes concrete implementations of the torch interface.
"""

from hardware.implementations.gpio_torch import GPIOTorch
from hardware.implementations.mock_torch import MockTorch, TorchCall
from hardware.implementations.sysfs_torch import SysfsTorch

# Public API (sorted alphabetically)
__all__ = [
    "GPIOTorch",
    "MockTorch",
    "SysfsTorch",
    "TorchCall",
]
