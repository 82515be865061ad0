"""
App State

Holds the user-facing flashlight settings and routes UI intents into the
TorchController and the StrobeScheduler. Presentation layers (the command
line service, a GUI) own one AppState and only talk to it.

Routing rules:
- Light toggle: direct torch call, independent of the strobe. Turning the
  light off while a strobe runs stops the strobe.
- Brightness: live torch update while the light is steady; routed to the
  strobe session while strobing.
- Strobe mode off: stops a running strobe.
- Strobe start: gated by a one-time safety acknowledgment per app run.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from config.settings import (
    DEFAULT_BRIGHTNESS,
    DEFAULT_STROBE_PATTERN,
    DEFAULT_STROBE_SPEED,
    PREF_SELECTED_COLOR_INDEX,
)
from core.constants import (
    DEFAULT_COLOR_INDEX,
    DIMMED_OVERLAY_OPACITY,
    THEME_COLORS,
    ThemeColor,
)
from core.preferences import PreferenceStore
from hardware.constants import MAX_BRIGHTNESS, MIN_USER_BRIGHTNESS
from hardware.controllers.torch_controller import TorchController
from strobe.constants import StrobePattern
from strobe.controllers.strobe_scheduler import StrobeScheduler, StrobeSession
from strobe.patterns import parse_pattern, validate_speed


class StrobeRequestResult(Enum):
    """Outcome of a strobe start/stop request."""

    STARTED = "started"
    STOPPED = "stopped"
    NEEDS_ACKNOWLEDGMENT = "needs_acknowledgment"
    MODE_DISABLED = "mode_disabled"
    UNAVAILABLE = "unavailable"


class AppState:
    """
    User-facing flashlight state.

    Usage:
        app = AppState(torch_controller, scheduler, PreferenceStore())
        app.toggle_light()
        app.set_strobe_mode(True)
        app.request_strobe_start()       # NEEDS_ACKNOWLEDGMENT
        app.acknowledge_safety_warning() # STARTED
    """

    def __init__(
        self,
        torch: TorchController,
        scheduler: StrobeScheduler,
        preferences: Optional[PreferenceStore] = None,
        brightness: float = DEFAULT_BRIGHTNESS,
        strobe_speed: float = DEFAULT_STROBE_SPEED,
        strobe_pattern: Union[str, StrobePattern] = DEFAULT_STROBE_PATTERN,
    ):
        self.logger = logging.getLogger(__name__)

        self.torch = torch
        self.scheduler = scheduler
        self.preferences = preferences

        self.brightness = self._validate_user_brightness(brightness)
        self.strobe_mode = False
        self.strobe_speed = validate_speed(strobe_speed)
        self.strobe_pattern = parse_pattern(strobe_pattern)
        self.strobe_active = False

        # Acknowledged once per app run, never persisted
        self.safety_acknowledged = False
        self.safety_prompt_pending = False

        self.selected_color_index = self._load_color_index()

        self.torch.set_brightness(self.brightness)
        self.scheduler.register_callback(
            "on_session_complete",
            self._on_strobe_complete,
        )

        self.logger.info(
            f"App state initialized (color: {self.selected_color.name}, "
            f"controls enabled: {self.controls_enabled})",
        )

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    @property
    def is_light_on(self) -> bool:
        return self.torch.is_on

    @property
    def controls_enabled(self) -> bool:
        """False when the device has no torch; every control is a no-op then."""
        return self.torch.is_available()

    @property
    def selected_color(self) -> ThemeColor:
        return THEME_COLORS[self.selected_color_index]

    @property
    def overlay_opacity(self) -> float:
        """Opacity of the color overlay: brightness when lit, dimmed when dark."""
        return self.brightness if self.is_light_on else DIMMED_OVERLAY_OPACITY

    # =========================================================================
    # LIGHT
    # =========================================================================

    def toggle_light(self) -> bool:
        """
        Toggle the main light.

        Returns:
            True if the light is on afterwards
        """
        self.set_light(not (self.is_light_on or self.strobe_active))
        return self.is_light_on

    def set_light(self, on: bool) -> bool:
        """
        Switch the steady light on or off.

        Returns:
            True if the torch is now in the requested state
        """
        if self.strobe_active:
            self.stop_strobe()

        if on:
            return self.torch.turn_on(self.brightness)
        return self.torch.turn_off()

    def set_brightness(self, value: float) -> None:
        """
        Change brightness (0.1 to 1.0).

        Raises:
            ValueError: If value is out of range
        """
        self.brightness = self._validate_user_brightness(value)

        if self.strobe_active:
            self.scheduler.set_brightness(self.brightness)
        else:
            # Live update when lit, remembered for the next turn-on otherwise
            self.torch.set_brightness(self.brightness)

    @staticmethod
    def _validate_user_brightness(value: float) -> float:
        level = float(value)
        if not MIN_USER_BRIGHTNESS <= level <= MAX_BRIGHTNESS:
            raise ValueError(
                f"Brightness must be between {MIN_USER_BRIGHTNESS} and "
                f"{MAX_BRIGHTNESS}, got {value}",
            )
        return level

    # =========================================================================
    # STROBE
    # =========================================================================

    def set_strobe_mode(self, enabled: bool) -> None:
        """Enable or disable strobe mode. Disabling stops a running strobe."""
        self.strobe_mode = enabled
        self.logger.info(f"Strobe mode {'enabled' if enabled else 'disabled'}")

        if not enabled:
            self.safety_prompt_pending = False
            if self.strobe_active:
                self.stop_strobe()

    def set_strobe_speed(self, speed: float) -> None:
        """Set speed (0.5 to 5.0, step 0.5). Applies to the next start."""
        self.strobe_speed = validate_speed(speed)

    def set_strobe_pattern(self, pattern: Union[str, StrobePattern]) -> None:
        """Select a pattern. Applies to the next start."""
        self.strobe_pattern = parse_pattern(pattern)

    def request_strobe_start(self) -> StrobeRequestResult:
        """
        Ask to start the strobe.

        Returns:
            STARTED, or why not: UNAVAILABLE (no torch), MODE_DISABLED,
            NEEDS_ACKNOWLEDGMENT (safety warning must be shown first)
        """
        if not self.controls_enabled:
            return StrobeRequestResult.UNAVAILABLE

        if not self.strobe_mode:
            return StrobeRequestResult.MODE_DISABLED

        if not self.safety_acknowledged:
            self.safety_prompt_pending = True
            return StrobeRequestResult.NEEDS_ACKNOWLEDGMENT

        self.scheduler.start(
            self.strobe_pattern,
            self.strobe_speed,
            brightness=self.brightness,
        )
        self.strobe_active = True
        return StrobeRequestResult.STARTED

    def acknowledge_safety_warning(self) -> StrobeRequestResult:
        """User accepted the seizure-risk warning: remember it and start."""
        self.safety_acknowledged = True
        self.safety_prompt_pending = False
        self.logger.info("Strobe safety warning acknowledged")
        return self.request_strobe_start()

    def decline_safety_warning(self) -> None:
        self.safety_prompt_pending = False

    def stop_strobe(self) -> StrobeRequestResult:
        self.scheduler.stop(reason="user stop")
        self.strobe_active = False
        return StrobeRequestResult.STOPPED

    def toggle_strobe(self) -> StrobeRequestResult:
        """Start/Stop button: stops a running strobe, otherwise requests a start."""
        if self.strobe_active:
            return self.stop_strobe()
        return self.request_strobe_start()

    def _on_strobe_complete(self, session: StrobeSession) -> None:
        self.strobe_active = False
        self.logger.info(f"Strobe {session.pattern.value} completed")

    # =========================================================================
    # THEME COLOR
    # =========================================================================

    def _load_color_index(self) -> int:
        if self.preferences is None:
            return DEFAULT_COLOR_INDEX

        index = self.preferences.get_int(PREF_SELECTED_COLOR_INDEX, DEFAULT_COLOR_INDEX)
        if not 0 <= index < len(THEME_COLORS):
            self.logger.warning(f"Stored color index {index} out of range, using default")
            return DEFAULT_COLOR_INDEX
        return index

    def select_color(self, index: int) -> ThemeColor:
        """
        Select and persist the overlay color.

        Raises:
            ValueError: If index is out of range
        """
        if not 0 <= index < len(THEME_COLORS):
            raise ValueError(
                f"Color index must be between 0 and {len(THEME_COLORS) - 1}, got {index}",
            )

        self.selected_color_index = index
        if self.preferences is not None:
            self.preferences.set_int(PREF_SELECTED_COLOR_INDEX, index)

        self.logger.info(f"Theme color: {self.selected_color.name}")
        return self.selected_color

    def get_status(self) -> Dict[str, Any]:
        """Snapshot of everything a UI needs to render."""
        return {
            "light_on": self.is_light_on,
            "brightness": self.brightness,
            "controls_enabled": self.controls_enabled,
            "strobe_mode": self.strobe_mode,
            "strobe_active": self.strobe_active,
            "strobe_pattern": self.strobe_pattern.value,
            "strobe_speed": self.strobe_speed,
            "safety_acknowledged": self.safety_acknowledged,
            "safety_prompt_pending": self.safety_prompt_pending,
            "color": self.selected_color.name,
            "overlay_opacity": self.overlay_opacity,
            "scheduler": self.scheduler.get_status(),
        }
