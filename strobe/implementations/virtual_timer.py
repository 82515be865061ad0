"""
Virtual Timer Queue

Deterministic timer queue on a virtual clock. Nothing happens until the owner
advances time; then every due callback runs in deadline order and the clock
jumps to each callback's deadline before it runs.

Perfect for:
- Unit tests that assert exact strobe timings without sleeping
- Dry-run simulation of a strobe pattern
"""

import heapq
import logging
from typing import Any, Callable, Optional, TypeVar

from strobe.interfaces.timer_interface import TimerHandle, TimerQueueInterface

T = TypeVar("T")


class VirtualTimerQueue(TimerQueueInterface):
    """
    Timer queue driven by explicit advance() calls.

    Usage:
        timers = VirtualTimerQueue()
        timers.call_later(1.0, lambda: print("tick"))
        timers.advance(0.5)  # nothing
        timers.advance(0.5)  # prints "tick", timers.now() == 1.0
    """

    def __init__(self, start_time: float = 0.0):
        self.logger = logging.getLogger(__name__)
        self._now = start_time
        self._heap: list[TimerHandle] = []
        self._closed = False
        self.fired_count = 0

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        handle = TimerHandle(self._now + max(0.0, delay), callback)

        if self._closed:
            handle.cancel()
            self.logger.debug("Timer queue shut down, callback dropped")
            return handle

        heapq.heappush(self._heap, handle)
        return handle

    def run_sync(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        # The caller's thread already owns the virtual timeline
        return func(*args, **kwargs)

    def pending_count(self) -> int:
        return sum(1 for handle in self._heap if not handle.cancelled)

    def next_deadline(self) -> Optional[float]:
        """Deadline of the earliest pending callback, or None."""
        for handle in sorted(self._heap):
            if not handle.cancelled:
                return handle.deadline
        return None

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        Args:
            seconds: How far to move the clock (>= 0)

        Returns:
            Number of callbacks executed
        """
        if seconds < 0:
            raise ValueError(f"Cannot move virtual time backwards ({seconds})")
        return self.advance_to(self._now + seconds)

    def advance_to(self, target: float) -> int:
        """Move the clock to an absolute time. See advance()."""
        executed = 0

        # Small tolerance so accumulated float error (0.1 + 0.2 ...) still
        # fires callbacks scheduled "at" the target
        while self._heap and self._heap[0].deadline <= target + 1e-9:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue

            self._now = max(self._now, handle.deadline)
            self._execute(handle)
            executed += 1

        self._now = max(self._now, target)
        return executed

    def run_until_idle(self, max_time: float = 3600.0) -> bool:
        """
        Run callbacks until nothing is pending or max_time virtual seconds
        have passed (infinite patterns never go idle).

        Returns:
            True if the queue went idle, False if max_time was reached
        """
        limit = self._now + max_time

        while True:
            deadline = self.next_deadline()
            if deadline is None:
                return True
            if deadline > limit:
                self._now = limit
                return False
            self.advance_to(deadline)

    def shutdown(self) -> None:
        for handle in self._heap:
            handle.cancel()
        self._heap.clear()
        self._closed = True
        self.logger.debug("Virtual timer queue shut down")

    def _execute(self, handle: TimerHandle) -> None:
        try:
            handle.callback()
            self.fired_count += 1
        except Exception as e:
            # Never let one callback break the timeline
            self.logger.error(f"Error in timer callback: {e}", exc_info=True)
