"""
Mock Torch Implementation

Simulated torch for development and testing without torch hardware.
Keeps the on/off and brightness state in memory and records every call,
so tests can assert on exact call sequences and their timing.

This is a "Test Double" (specifically, a "Fake" - it has working logic but no
real hardware).
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from hardware.constants import MOCK_LOG_PREFIX
from hardware.interfaces.torch_interface import (
    TorchConfigurationError,
    TorchError,
    TorchInterface,
    TorchUnavailableError,
)


@dataclass(frozen=True)
class TorchCall:
    """One recorded set_torch() call."""

    on: bool
    brightness: float
    timestamp: float


class MockTorch(TorchInterface):
    """
    Simulated torch that mimics a device flash LED.

    Usage:
        torch = MockTorch()
        torch.set_torch(True, 0.5)
        assert torch.on is True

        # Timestamps from a virtual clock
        torch = MockTorch(clock=timer_queue.now)
    """

    def __init__(
        self,
        available: bool = True,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize mock torch.

        Args:
            available: False simulates a device without a torch
            clock: Time source for call timestamps (default: time.monotonic)
        """
        self.logger = logging.getLogger(__name__)
        self._available = available
        self._clock = clock or time.monotonic

        self.on = False
        self.brightness = 0.0

        # Every successful call, in order
        self.history: list[TorchCall] = []

        # Errors queued by fail_next(), raised one per call
        self._pending_failures: list[TorchError] = []

        self.cleaned_up = False

        self.logger.info(
            f"Mock torch initialized (available: {available})",
        )

    def set_torch(self, on: bool, brightness: float) -> None:
        """Set simulated torch state"""
        if not self._available:
            raise TorchUnavailableError("Mock torch configured as unavailable")

        if self._pending_failures:
            raise self._pending_failures.pop(0)

        self.on = on
        self.brightness = brightness if on else 0.0
        self.history.append(TorchCall(on, brightness, self._clock()))

        self.logger.debug(
            f"{MOCK_LOG_PREFIX} Torch {'ON' if on else 'OFF'}"
            + (f" at {brightness:.2f}" if on else ""),
        )

    def is_available(self) -> bool:
        return self._available

    def cleanup(self) -> None:
        """Switch off and mark cleaned up"""
        self.on = False
        self.brightness = 0.0
        self.cleaned_up = True
        self.logger.info(f"{MOCK_LOG_PREFIX} Torch cleaned up")

    # =========================================================================
    # TESTING HELPER METHODS (not part of TorchInterface)
    # =========================================================================

    def set_available(self, available: bool) -> None:
        """Simulate the torch disappearing or coming back."""
        self._available = available

    def fail_next(
        self,
        count: int = 1,
        error: Optional[TorchError] = None,
    ) -> None:
        """
        Make the next set_torch() calls fail.

        Args:
            count: Number of calls that should fail
            error: Error to raise (default: TorchConfigurationError)

        Example:
            torch.fail_next()  # Simulate thermal throttling once
        """
        for _ in range(count):
            self._pending_failures.append(
                error or TorchConfigurationError("Simulated configuration failure"),
            )

    def get_transitions(self) -> list[tuple[float, bool]]:
        """
        Get (timestamp, on) for every recorded call.

        Returns:
            List of (timestamp, on) tuples in call order
        """
        return [(call.timestamp, call.on) for call in self.history]

    def clear_history(self) -> None:
        self.history.clear()
