"""
Timer Queue Factory

Single place to choose between the real-time timer queue and the virtual
clock used for tests and dry runs.
"""

import logging
from typing import Literal

from strobe.implementations.threaded_timer import ThreadedTimerQueue
from strobe.implementations.virtual_timer import VirtualTimerQueue
from strobe.interfaces.timer_interface import TimerQueueInterface

TimerMode = Literal["real", "virtual"]

_logger = logging.getLogger(__name__)


def create_timer_queue(mode: TimerMode = "real") -> TimerQueueInterface:
    """
    Create a timer queue.

    Args:
        mode: "real" (worker thread, wall clock) or
              "virtual" (clock only moves when advanced)

    Returns:
        TimerQueueInterface implementation

    Raises:
        ValueError: If mode is unknown
    """
    if mode == "real":
        _logger.debug("Creating threaded timer queue")
        return ThreadedTimerQueue()

    if mode == "virtual":
        _logger.debug("Creating virtual timer queue")
        return VirtualTimerQueue()

    raise ValueError(f"Unknown timer mode: {mode}")
