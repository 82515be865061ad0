"""
Core App Modules

Public API:
    - AppState: User-facing flashlight state and intent routing
    - StrobeRequestResult: Outcome of strobe start/stop requests
    - PreferenceStore: Persistent key-value preferences
    - ThemeColor, THEME_COLORS: Overlay colors

Usage:
    from core import AppState, PreferenceStore

    app = AppState(torch_controller, scheduler, PreferenceStore())
    app.toggle_light()
"""

from core.app_state import AppState, StrobeRequestResult
from core.constants import THEME_COLORS, ThemeColor
from core.preferences import PreferenceStore

__all__ = [
    "THEME_COLORS",
    "AppState",
    "PreferenceStore",
    "StrobeRequestResult",
    "ThemeColor",
]
