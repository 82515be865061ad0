"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific values (LED device names, GPIO pins) should be in .env
- Import these settings in modules: from config.settings import TORCH_BACKEND
- Fixed timing values for the strobe patterns live in strobe/constants.py
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# TORCH HARDWARE CONFIGURATION
# =============================================================================

# Which real backend the factory tries first: "sysfs" or "gpio"
TORCH_BACKEND = os.getenv("TORCH_BACKEND", "sysfs")

# Linux LED class device (name under /sys/class/leds or absolute path)
TORCH_SYSFS_LED = os.getenv("TORCH_SYSFS_LED", "white:flash")
TORCH_SYSFS_ROOT = Path(os.getenv("TORCH_SYSFS_ROOT", "/sys/class/leds"))

# GPIO torch (BCM numbering) driven with software PWM
TORCH_GPIO_PIN = int(os.getenv("TORCH_GPIO_PIN", "18"))
TORCH_PWM_FREQUENCY = int(os.getenv("TORCH_PWM_FREQUENCY", "1000"))  # Hz

# =============================================================================
# LIGHT & STROBE DEFAULTS
# =============================================================================

DEFAULT_BRIGHTNESS = float(os.getenv("DEFAULT_BRIGHTNESS", "1.0"))  # 0.1 to 1.0
DEFAULT_STROBE_SPEED = float(os.getenv("DEFAULT_STROBE_SPEED", "1.0"))  # 0.5 to 5.0
DEFAULT_STROBE_PATTERN = os.getenv("DEFAULT_STROBE_PATTERN", "constant")

# SOS plays its 9-flash sequence once unless this is enabled
SOS_REPEAT = _env_bool("SOS_REPEAT", "false")

# =============================================================================
# PREFERENCES
# =============================================================================

PREFERENCES_FILE = Path(
    os.getenv("PREFERENCES_FILE", str(Path.home() / ".flashy" / "preferences.json")),
)
PREF_SELECTED_COLOR_INDEX = "selectedColorIndex"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("LOG_DIR", "/var/log/flashy")
LOG_FILE = "flashy.log"
LOG_FALLBACK_DIR = "logs"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_BACKUP_COUNT = 7  # Days of rotated logs to keep
