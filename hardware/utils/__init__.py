"""
Hardware Utilities Package

Exposes shared utility functions for torch operations.

Public API:
    - brightness_to_level: Scale a (0, 1] brightness to an integer level
    - safe_torch_cleanup: Torch cleanup with error handling
    - validate_brightness: Check brightness against the (0, 1] contract

Usage:
    from hardware.utils import validate_brightness

    level = validate_brightness(0.5)
"""

from hardware.utils.torch_utils import (
    brightness_to_level,
    safe_torch_cleanup,
    validate_brightness,
)

# Public API (sorted alphabetically)
__all__ = [
    "brightness_to_level",
    "safe_torch_cleanup",
    "validate_brightness",
]
