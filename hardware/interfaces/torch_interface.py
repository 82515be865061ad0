"""
Torch Interface - Abstract Hardware Layer

This defines the contract (interface) that any torch implementation must follow.
Controllers depend on this abstraction, never on a concrete backend, so a real
LED device, a GPIO pin, or a simulated torch can be swapped freely.

A torch is the device's flash LED used as a continuous light source. It has
two properties: on/off and a brightness level in (0, 1].
"""

from abc import ABC, abstractmethod


class TorchInterface(ABC):
    """
    Abstract base class for torch operations.

    Any class that inherits from this MUST implement all @abstractmethod methods.
    """

    @abstractmethod
    def set_torch(self, on: bool, brightness: float) -> None:
        """
        Change the physical torch state.

        Args:
            on: True to light the torch, False to switch it off
            brightness: Brightness level in (0, 1]. Ignored when on is False.

        Raises:
            TorchUnavailableError: If the device has no usable torch
            TorchConfigurationError: If the platform rejects the change
                (thermal throttling, device busy, permission denied)
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if a torch is actually present.

        Returns:
            True if set_torch() can be expected to work
        """

    @abstractmethod
    def cleanup(self) -> None:
        """
        Switch the torch off and release hardware resources.
        Must never raise.
        """


class TorchError(Exception):
    """Base exception for torch hardware errors."""


class TorchUnavailableError(TorchError):
    """No torch capability exists on this device."""


class TorchConfigurationError(TorchError):
    """The platform rejected a torch state change (transient)."""
