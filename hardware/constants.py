"""
Hardware Constants

This file centralizes the magic numbers and file names used by the torch
backends and the torch controller, so hardware behavior can be adjusted in
one place.
"""

from config.settings import (
    TORCH_GPIO_PIN,
    TORCH_PWM_FREQUENCY,
    TORCH_SYSFS_LED,
    TORCH_SYSFS_ROOT,
)

# =============================================================================
# BRIGHTNESS LIMITS
# =============================================================================
# The hardware contract accepts any brightness in (0, 1].
# The user-facing slider is narrower: [0.1, 1.0].

MAX_BRIGHTNESS = 1.0

# Lowest level the brightness slider offers
MIN_USER_BRIGHTNESS = 0.1


# =============================================================================
# SYSFS LED CLASS DEVICE
# =============================================================================
# Linux exposes flash LEDs under /sys/class/leds/<name>/
#   brightness      - write 0 (off) .. max_brightness
#   max_brightness  - read-only upper bound

SYSFS_BRIGHTNESS_FILE = "brightness"
SYSFS_MAX_BRIGHTNESS_FILE = "max_brightness"


# =============================================================================
# GPIO PWM TORCH
# =============================================================================

# RPi.GPIO duty cycle range is 0.0 .. 100.0 percent
PWM_DUTY_CYCLE_MAX = 100.0


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

MOCK_LOG_PREFIX = "[MOCK]"

__all__ = [
    "MAX_BRIGHTNESS",
    "MIN_USER_BRIGHTNESS",
    "MOCK_LOG_PREFIX",
    "PWM_DUTY_CYCLE_MAX",
    "SYSFS_BRIGHTNESS_FILE",
    "SYSFS_MAX_BRIGHTNESS_FILE",
    "TORCH_GPIO_PIN",
    "TORCH_PWM_FREQUENCY",
    "TORCH_SYSFS_LED",
    "TORCH_SYSFS_ROOT",
]
