"""
App Constants

Theme colors, overlay opacity, and the user-facing texts of the flashlight.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeColor:
    """A selectable overlay color."""

    name: str
    hex: str


# Index into this tuple is what gets persisted as the selected color
THEME_COLORS = (
    ThemeColor("White", "#FFFFFF"),
    ThemeColor("Red", "#FF3B30"),
    ThemeColor("Green", "#34C759"),
    ThemeColor("Blue", "#007AFF"),
    ThemeColor("Yellow", "#FFCC00"),
    ThemeColor("Purple", "#AF52DE"),
)

DEFAULT_COLOR_INDEX = 0

# Overlay opacity while the light is off (lit overlay uses the brightness)
DIMMED_OVERLAY_OPACITY = 0.1


# =============================================================================
# USER-FACING TEXT
# =============================================================================

APP_NAME = "Flashy"
APP_VERSION = "1.0"

SAFETY_WARNING_TITLE = "Safety Warning"
SAFETY_WARNING_TEXT = (
    "Rapidly flashing lights can cause discomfort or seizures in some people. "
    "Are you sure you want to continue?"
)

ABOUT_TEXT = (
    f"{APP_NAME} turns your device into a multi-functional light source: "
    "adjustable brightness, multiple color options, an SOS mode for "
    "emergencies and strobe effects. No personal data is collected."
)
