"""
Sysfs Torch Implementation

Concrete implementation of TorchInterface for Linux devices that expose their
flash LED through the LED class interface (/sys/class/leds/<name>/).
Phones running mainline Linux (PinePhone, Librem 5) and many single-board
computers expose the torch this way.

Writing an integer to `brightness` sets the level; 0 switches the LED off.
`max_brightness` gives the upper bound for that LED.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from hardware.constants import (
    SYSFS_BRIGHTNESS_FILE,
    SYSFS_MAX_BRIGHTNESS_FILE,
    TORCH_SYSFS_LED,
    TORCH_SYSFS_ROOT,
)
from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchInterface,
    TorchUnavailableError,
)
from hardware.utils.torch_utils import brightness_to_level


class SysfsTorch(TorchInterface):
    """
    Torch backed by a Linux LED class device.

    Usage:
        torch = SysfsTorch("white:flash")
        torch.set_torch(True, 0.5)
    """

    def __init__(
        self,
        led: Union[str, Path] = TORCH_SYSFS_LED,
        sysfs_root: Path = TORCH_SYSFS_ROOT,
    ):
        """
        Initialize sysfs torch.

        Args:
            led: LED name under sysfs_root, or an absolute device directory
            sysfs_root: Directory holding LED class devices

        Raises:
            TorchUnavailableError: If the LED device doesn't exist or
                max_brightness can't be read
        """
        self.logger = logging.getLogger(__name__)

        led_path = Path(led)
        self.device_path = led_path if led_path.is_absolute() else sysfs_root / led_path
        self._brightness_file = self.device_path / SYSFS_BRIGHTNESS_FILE

        if not self._brightness_file.exists():
            raise TorchUnavailableError(
                f"No LED class device at {self.device_path}",
            )

        try:
            max_text = (self.device_path / SYSFS_MAX_BRIGHTNESS_FILE).read_text()
            self.max_level = int(max_text.strip())
        except (OSError, ValueError) as e:
            raise TorchUnavailableError(
                f"Cannot read max_brightness for {self.device_path}: {e}",
            ) from e

        if self.max_level <= 0:
            raise TorchUnavailableError(
                f"LED {self.device_path} reports max_brightness {self.max_level}",
            )

        self._last_level: Optional[int] = None

        self.logger.info(
            f"Sysfs torch initialized ({self.device_path}, max={self.max_level})",
        )

    def set_torch(self, on: bool, brightness: float) -> None:
        """Write the scaled brightness level to sysfs"""
        level = brightness_to_level(brightness, self.max_level) if on else 0

        try:
            self._brightness_file.write_text(f"{level}\n")
        except FileNotFoundError as e:
            raise TorchUnavailableError(
                f"LED device disappeared: {self.device_path}",
            ) from e
        except OSError as e:
            raise TorchConfigurationError(
                f"Failed to write brightness {level} to {self._brightness_file}: {e}",
            ) from e

        self._last_level = level

    def is_available(self) -> bool:
        return self._brightness_file.exists()

    def cleanup(self) -> None:
        """Switch the LED off. Never raises."""
        try:
            if self._last_level:
                self._brightness_file.write_text("0\n")
                self._last_level = 0
            self.logger.info(f"Sysfs torch cleaned up ({self.device_path})")
        except OSError as e:
            self.logger.error(f"Error during sysfs torch cleanup: {e}")
