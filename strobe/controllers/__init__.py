"""
Controllers Package

Strobe scheduling state machine.
"""

from strobe.controllers.strobe_scheduler import (
    SchedulerState,
    StrobeScheduler,
    StrobeSession,
)

# Public API (sorted alphabetically)
__all__ = [
    "SchedulerState",
    "StrobeScheduler",
    "StrobeSession",
]
