"""
Strobe Implementations Package

Exposes concrete timer queue implementations.
"""

from strobe.implementations.threaded_timer import ThreadedTimerQueue
from strobe.implementations.virtual_timer import VirtualTimerQueue

# Public API (sorted alphabetically)
__all__ = [
    "ThreadedTimerQueue",
    "VirtualTimerQueue",
]
