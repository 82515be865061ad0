"""
Torch Utilities

Shared helper functions used by the torch backends and the torch controller.
"""

import logging
from typing import Optional

from hardware.constants import MAX_BRIGHTNESS
from hardware.interfaces.torch_interface import TorchInterface


def validate_brightness(brightness: float) -> float:
    """
    Check a brightness value against the hardware contract (0, 1].

    Args:
        brightness: Requested brightness level

    Returns:
        The brightness as a float

    Raises:
        ValueError: If brightness is outside (0, 1]

    Example:
        level = validate_brightness(0.5)
    """
    value = float(brightness)
    if not 0.0 < value <= MAX_BRIGHTNESS:
        raise ValueError(
            f"Brightness must be in (0, {MAX_BRIGHTNESS}], got {brightness}",
        )
    return value


def brightness_to_level(brightness: float, max_level: int) -> int:
    """
    Scale a brightness in (0, 1] to an integer hardware level.

    Any non-zero brightness maps to at least level 1 so that a dim
    request never turns the torch off.

    Args:
        brightness: Brightness level in (0, 1]
        max_level: Hardware maximum (e.g. sysfs max_brightness)

    Returns:
        Integer level in [1, max_level]

    Example:
        brightness_to_level(0.5, 255)  # 128
    """
    level = int(round(brightness * max_level))
    return max(1, min(max_level, level))


def safe_torch_cleanup(
    torch: Optional[TorchInterface],
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Clean up a torch backend without ever raising.

    Args:
        torch: Torch backend to clean up, or None
        logger: Optional logger for error messages
    """
    if torch is None:
        return

    try:
        torch.cleanup()
    except Exception as e:
        if logger:
            logger.error(f"Error during torch cleanup: {e}")
