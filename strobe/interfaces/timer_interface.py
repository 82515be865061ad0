"""
Timer Queue Interface

Contract for the single timeline of delayed callbacks that drives the strobe.
Callbacks run one at a time, in deadline order (ties in scheduling order),
never in parallel. Work submitted with run_sync() joins the same timeline, so
user actions and strobe ticks never race on the torch.

Implementations:
- ThreadedTimerQueue: real clock, one worker thread
- VirtualTimerQueue: virtual clock advanced explicitly (tests, simulation)
"""

import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_handle_ids = itertools.count(1)


class TimerHandle:
    """
    A scheduled callback.

    Cancelling a handle only marks it; the queue drops it when its deadline
    comes up.
    """

    def __init__(self, deadline: float, callback: Callable[[], Any]):
        self.id = next(_handle_ids)
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.deadline, self.id) < (other.deadline, other.id)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(id={self.id}, deadline={self.deadline:.3f}, {state})"


class TimerQueueInterface(ABC):
    """Abstract base class for timer queues."""

    @abstractmethod
    def now(self) -> float:
        """Current time on this queue's clock (seconds)."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """
        Schedule callback to run after delay seconds.

        Args:
            delay: Seconds from now (negative values are treated as 0)
            callback: Zero-argument function

        Returns:
            Handle that can be passed to cancel()
        """

    @abstractmethod
    def run_sync(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run func on the queue's timeline and return its result.

        Exceptions raised by func propagate to the caller.
        """

    @abstractmethod
    def pending_count(self) -> int:
        """Number of scheduled, not cancelled callbacks."""

    @abstractmethod
    def shutdown(self) -> None:
        """Drop all pending callbacks and stop processing."""

    def call_soon(self, callback: Callable[[], Any]) -> TimerHandle:
        """Schedule callback to run as soon as possible."""
        return self.call_later(0.0, callback)

    def cancel(self, handle: TimerHandle) -> None:
        """Cancel a scheduled callback. Cancelling twice is harmless."""
        handle.cancel()
