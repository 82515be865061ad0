"""
Torch Controller

Owns the single TorchState of the app and mirrors it to the torch hardware.
Both the strobe scheduler and direct user toggles write the torch through
this controller.

Behavior:
- Hardware errors are caught here, logged, and reported as a False return.
  They never propagate to the caller.
- Repeating the current on/off + brightness is a no-op (no hardware call).
- All writes are serialized with a lock.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config.settings import DEFAULT_BRIGHTNESS
from hardware.factory import create_torch
from hardware.interfaces.torch_interface import (
    TorchError,
    TorchInterface,
    TorchUnavailableError,
)
from hardware.utils.torch_utils import safe_torch_cleanup, validate_brightness


@dataclass(frozen=True)
class TorchState:
    """Torch on/off plus brightness level, as last written to hardware."""

    on: bool = False
    brightness: float = DEFAULT_BRIGHTNESS


class TorchController:
    """
    Manages the device torch.

    Usage:
        with TorchController() as torch:
            torch.turn_on()
            torch.set_brightness(0.4)
            torch.turn_off()
    """

    def __init__(
        self,
        torch: Optional[TorchInterface] = None,
        brightness: float = DEFAULT_BRIGHTNESS,
    ):
        """
        Initialize torch controller.

        Args:
            torch: Torch backend to use, or None to auto-create via factory.
                   Passing a torch is useful for testing with MockTorch.
            brightness: Initial brightness used by turn_on()
        """
        self.logger = logging.getLogger(__name__)

        self.torch = torch or create_torch()

        self._state = TorchState(on=False, brightness=validate_brightness(brightness))
        self._lock = threading.RLock()

        self.last_error: Optional[TorchError] = None
        self.failure_count = 0
        self._unavailable_logged = False
        self._cleaned_up = False

        # Set when a write failed and the hardware may differ from _state
        self._needs_sync = False

        self.logger.info(
            f"Torch Controller initialized "
            f"(backend: {type(self.torch).__name__}, "
            f"available: {self.torch.is_available()})",
        )

    def is_available(self) -> bool:
        """Check if the torch backend reports a usable torch."""
        try:
            return self.torch.is_available()
        except Exception as e:
            self.logger.error(f"Error checking torch availability: {e}")
            return False

    def get_state(self) -> TorchState:
        """Get the torch state as last written to hardware."""
        return self._state

    @property
    def is_on(self) -> bool:
        return self._state.on

    @property
    def brightness(self) -> float:
        return self._state.brightness

    def set_torch(self, on: bool, brightness: Optional[float] = None) -> bool:
        """
        Request a torch state change.

        Args:
            on: True to light the torch, False to switch it off
            brightness: Level in (0, 1], or None to keep the current level

        Returns:
            True if the torch is now in the requested state,
            False if the hardware refused or is unavailable

        Raises:
            ValueError: If brightness is outside (0, 1]

        Example:
            if not torch.set_torch(True, 0.8):
                print(f"Torch failed: {torch.last_error}")
        """
        with self._lock:
            level = (
                self._state.brightness
                if brightness is None
                else validate_brightness(brightness)
            )
            requested = TorchState(on=on, brightness=level)

            if requested == self._state and not self._needs_sync:
                return True

            # Off stays off: only remember the new level
            if not on and not self._state.on and not self._needs_sync:
                self._state = requested
                return True

            if not self.is_available():
                return self._fail(
                    TorchUnavailableError("No torch available on this device"),
                    requested,
                )

            try:
                self.torch.set_torch(on, level)
            except TorchError as e:
                return self._fail(e, requested)

            self._state = requested
            self._needs_sync = False
            self.last_error = None
            self._unavailable_logged = False
            self.logger.debug(
                f"Torch {'ON' if on else 'OFF'}"
                + (f" (brightness {level:.2f})" if on else ""),
            )
            return True

    def turn_on(self, brightness: Optional[float] = None) -> bool:
        """Switch the torch on at the given or current brightness."""
        return self.set_torch(True, brightness)

    def turn_off(self) -> bool:
        """Switch the torch off. Redundant calls are no-ops."""
        return self.set_torch(False)

    def set_brightness(self, brightness: float) -> bool:
        """
        Change brightness without toggling on/off.

        Updates the hardware immediately when the torch is on; otherwise the
        level is stored and used by the next turn_on().
        """
        with self._lock:
            return self.set_torch(self._state.on, brightness)

    def _fail(self, error: TorchError, requested: TorchState) -> bool:
        self._record_failure(error)

        if not requested.on:
            # A refused "off" still counts as off; the next write goes to hardware
            self._state = requested
            self._needs_sync = True
        return False

    def _record_failure(self, error: TorchError) -> None:
        self.last_error = error
        self.failure_count += 1

        if isinstance(error, TorchUnavailableError):
            # Log once per outage, every control is a no-op until it returns
            if not self._unavailable_logged:
                self.logger.warning(f"Torch unavailable: {error}")
                self._unavailable_logged = True
            return

        self.logger.warning(f"Torch configuration failed: {error}")

    def get_status(self) -> Dict[str, Any]:
        """
        Get current torch controller status.

        Returns:
            Dictionary with current state information
        """
        return {
            "on": self._state.on,
            "brightness": self._state.brightness,
            "available": self.is_available(),
            "backend": type(self.torch).__name__,
            "failure_count": self.failure_count,
            "needs_sync": self._needs_sync,
            "last_error": str(self.last_error) if self.last_error else None,
        }

    def cleanup(self) -> None:
        """
        Switch the torch off and release the backend.

        Safe to call multiple times - idempotent.
        """
        if self._cleaned_up:
            return

        self.logger.info("Cleaning up Torch Controller")
        self.turn_off()
        safe_torch_cleanup(self.torch, self.logger)
        self._cleaned_up = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
        return False
