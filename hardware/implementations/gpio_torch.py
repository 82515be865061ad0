"""
GPIO Torch Implementation

Concrete implementation of TorchInterface for an LED driven from a Raspberry Pi
GPIO pin. Brightness is produced with RPi.GPIO software PWM: the duty cycle is
the brightness fraction of PWM_DUTY_CYCLE_MAX.

This wraps the RPi.GPIO library to match our interface, so only this file
knows about RPi.GPIO.
"""

import logging
from typing import Any, Optional

try:
    from RPi import GPIO

    GPIO_AVAILABLE = True
except (ImportError, RuntimeError):
    # RuntimeError: RPi.GPIO refuses to import on non-Pi machines
    GPIO_AVAILABLE = False

from hardware.constants import (
    PWM_DUTY_CYCLE_MAX,
    TORCH_GPIO_PIN,
    TORCH_PWM_FREQUENCY,
)
from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchInterface,
    TorchUnavailableError,
)


class GPIOTorch(TorchInterface):
    """
    Raspberry Pi GPIO torch using RPi.GPIO PWM.

    Usage:
        torch = GPIOTorch(pin=18)
        torch.set_torch(True, 0.25)  # 25% duty cycle
    """

    def __init__(
        self,
        pin: int = TORCH_GPIO_PIN,
        frequency: int = TORCH_PWM_FREQUENCY,
    ):
        """
        Initialize GPIO torch.

        Args:
            pin: GPIO pin number (BCM numbering)
            frequency: PWM frequency in Hz

        Raises:
            TorchUnavailableError: If RPi.GPIO is missing or setup fails
        """
        self.logger = logging.getLogger(__name__)
        self.pin = pin
        self.frequency = frequency
        self._pwm: Optional[Any] = None

        if not GPIO_AVAILABLE:
            raise TorchUnavailableError(
                "RPi.GPIO library not available. Install with: pip install RPi.GPIO",
            )

        try:
            GPIO.setmode(GPIO.BCM)
            GPIO.setwarnings(False)
            GPIO.setup(pin, GPIO.OUT, initial=GPIO.LOW)
            self._pwm = GPIO.PWM(pin, frequency)
            self._pwm.start(0)
            self.logger.info(
                f"GPIO torch initialized (pin {pin}, PWM {frequency}Hz)",
            )
        except Exception as e:
            raise TorchUnavailableError(
                f"Failed to initialize GPIO torch on pin {pin}: {e}",
            ) from e

    def set_torch(self, on: bool, brightness: float) -> None:
        """Set PWM duty cycle (0 when off)"""
        if self._pwm is None:
            raise TorchUnavailableError("GPIO torch already cleaned up")

        duty_cycle = brightness * PWM_DUTY_CYCLE_MAX if on else 0.0

        try:
            self._pwm.ChangeDutyCycle(duty_cycle)
            # Don't log every write - too verbose for strobing
        except Exception as e:
            raise TorchConfigurationError(
                f"Failed to set duty cycle {duty_cycle:.1f}% on pin {self.pin}: {e}",
            ) from e

    def is_available(self) -> bool:
        return GPIO_AVAILABLE and self._pwm is not None

    def cleanup(self) -> None:
        """Stop PWM and release the pin. Never raises."""
        if self._pwm is None:
            return

        try:
            self._pwm.stop()
            GPIO.cleanup([self.pin])
            self.logger.info(f"GPIO torch cleaned up (pin {self.pin})")
        except Exception as e:
            self.logger.error(f"Error during GPIO torch cleanup: {e}")
        finally:
            self._pwm = None

    def __del__(self):
        """Destructor - ensure cleanup even if not explicitly called"""
        self.cleanup()
