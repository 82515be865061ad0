"""
Hardware Factory

Factory pattern for creating torch implementations.
Automatically selects a real or mock torch based on availability.

Controllers never construct backends themselves; they receive a
TorchInterface from here (or from a test).
"""

import logging
from typing import Literal, Optional

from config.settings import TORCH_BACKEND
from hardware.implementations.gpio_torch import GPIOTorch
from hardware.implementations.mock_torch import MockTorch
from hardware.implementations.sysfs_torch import SysfsTorch
from hardware.interfaces.torch_interface import TorchInterface

# Type aliases for better type hints
HardwareMode = Literal["auto", "real", "mock"]
TorchBackend = Literal["sysfs", "gpio"]

_BACKENDS = {
    "sysfs": SysfsTorch,
    "gpio": GPIOTorch,
}


class HardwareFactory:
    """
    Factory for creating torch implementations.

    Usage:
        # Auto-detect (uses real hardware if available, mock otherwise)
        torch = HardwareFactory.create_torch()

        # Force mock mode (useful for testing)
        torch = HardwareFactory.create_torch(mode="mock")

        # Force real hardware (raises error if not available)
        torch = HardwareFactory.create_torch(mode="real", backend="gpio")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def _create_backend(cls, backend: TorchBackend) -> TorchInterface:
        if backend not in _BACKENDS:
            raise ValueError(
                f"Unknown torch backend: {backend} "
                f"(expected one of {sorted(_BACKENDS)})",
            )
        return _BACKENDS[backend]()

    @classmethod
    def create_torch(
        cls,
        mode: HardwareMode = "auto",
        backend: Optional[TorchBackend] = None,
    ) -> TorchInterface:
        """
        Create a torch interface instance.

        Args:
            mode: "auto" (detect), "real" (force real hardware),
                  "mock" (force simulation)
            backend: Real backend to use, "sysfs" or "gpio"
                     (default: TORCH_BACKEND setting)

        Returns:
            TorchInterface implementation

        Raises:
            RuntimeError: If mode="real" but the torch is not available
            ValueError: If backend is unknown

        Example:
            torch = HardwareFactory.create_torch()
            torch = HardwareFactory.create_torch(mode="mock")
        """
        backend = backend or TORCH_BACKEND

        if mode == "mock":
            cls._logger.info("Creating Mock torch (forced)")
            return MockTorch()

        if mode == "real":
            try:
                torch = cls._create_backend(backend)
                cls._logger.info(f"Creating {backend} torch (forced)")
                return torch
            except ValueError:
                raise
            except Exception as e:
                raise RuntimeError(
                    f"Real {backend} torch requested but not available: {e}",
                ) from e

        # mode == "auto" - try real first, fall back to mock
        try:
            torch = cls._create_backend(backend)
            cls._logger.info(f"Creating {backend} torch (auto-detected)")
            return torch
        except ValueError:
            raise
        except Exception as e:
            cls._logger.warning(
                f"Real {backend} torch not available ({e}), using Mock torch",
            )
            return MockTorch()

    @classmethod
    def is_real_hardware_available(cls) -> dict[str, bool]:
        """
        Check which real torch backends are available.

        Useful for diagnostics and configuration display.

        Returns:
            Dictionary with availability status:
            {
                'sysfs': True/False,
                'gpio': True/False
            }
        """
        status = {name: False for name in _BACKENDS}

        for name in _BACKENDS:
            try:
                torch = cls._create_backend(name)
            except Exception:
                continue
            status[name] = torch.is_available()
            torch.cleanup()

        return status


def create_torch(force_mock: bool = False) -> TorchInterface:
    """
    Quick torch creation with simple mock override.

    Args:
        force_mock: If True, always use mock (good for testing)

    Returns:
        Torch interface

    Example:
        torch = create_torch()
        torch = create_torch(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return HardwareFactory.create_torch(mode=mode)
