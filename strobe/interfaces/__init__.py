"""
Strobe Interfaces Package

Exposes the timer queue contract used by the strobe scheduler.
"""

from strobe.interfaces.timer_interface import TimerHandle, TimerQueueInterface

# Public API (sorted alphabetically)
__all__ = [
    "TimerHandle",
    "TimerQueueInterface",
]
