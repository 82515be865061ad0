"""
Threaded Timer Queue

Real-time timer queue with one background worker thread. Every scheduled
callback, and every function passed to run_sync(), executes on that worker,
one at a time. This is the single timeline the strobe scheduler and user
actions share in the running app.

The worker sleeps on a condition variable until the earliest deadline (or
until new work arrives), so an idle queue costs no CPU.
"""

import heapq
import logging
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Optional, TypeVar

from strobe.constants import RUN_SYNC_TIMEOUT, THREAD_SHUTDOWN_TIMEOUT
from strobe.interfaces.timer_interface import TimerHandle, TimerQueueInterface

T = TypeVar("T")


class ThreadedTimerQueue(TimerQueueInterface):
    """
    Timer queue backed by a single worker thread.

    Usage:
        timers = ThreadedTimerQueue()
        timers.call_later(0.5, lambda: print("half a second later"))
        result = timers.run_sync(app.toggle_light)  # runs on the worker
        timers.shutdown()
    """

    def __init__(self, name: str = "StrobeTimer"):
        self.logger = logging.getLogger(__name__)

        self._heap: list[TimerHandle] = []
        self._condition = threading.Condition()
        self._running = True

        self._worker_thread = threading.Thread(
            target=self._worker_loop,
            daemon=True,  # Dies when main program exits
            name=f"{name}-Worker",
        )
        self._worker_thread.start()

        self.logger.debug("Threaded timer queue started")

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        handle = TimerHandle(self.now() + max(0.0, delay), callback)

        with self._condition:
            if not self._running:
                handle.cancel()
                self.logger.debug("Timer queue shut down, callback dropped")
                return handle

            heapq.heappush(self._heap, handle)
            # Wake the worker: the new deadline may be earlier than its sleep
            self._condition.notify()

        return handle

    def run_sync(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run func on the worker thread and wait for its result.

        Called from the worker itself (e.g. inside a tick), func runs inline.

        Raises:
            RuntimeError: If the queue is shut down
            TimeoutError: If the worker doesn't get to it in time
        """
        if threading.current_thread() is self._worker_thread:
            return func(*args, **kwargs)

        if not self._running:
            raise RuntimeError("Timer queue is shut down")

        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(func(*args, **kwargs))
            except BaseException as e:
                future.set_exception(e)

        if self.call_soon(task).cancelled:
            raise RuntimeError("Timer queue is shut down")
        return future.result(timeout=RUN_SYNC_TIMEOUT)

    def pending_count(self) -> int:
        with self._condition:
            return sum(1 for handle in self._heap if not handle.cancelled)

    def is_running(self) -> bool:
        return self._running and self._worker_thread.is_alive()

    def _next_due(self) -> Optional[TimerHandle]:
        """
        Block until a callback is due or the queue stops.

        Returns:
            The due handle, or None when shutting down
        """
        with self._condition:
            while self._running:
                # Drop cancelled handles at the front
                while self._heap and self._heap[0].cancelled:
                    heapq.heappop(self._heap)

                if not self._heap:
                    self._condition.wait()
                    continue

                remaining = self._heap[0].deadline - self.now()
                if remaining <= 0:
                    return heapq.heappop(self._heap)

                self._condition.wait(timeout=remaining)
            return None

    def _worker_loop(self) -> None:
        self.logger.debug("Timer worker thread started")

        while True:
            handle = self._next_due()
            if handle is None:
                break

            if handle.cancelled:
                continue

            try:
                handle.callback()
            except Exception as e:
                # Never let worker crash - just log and continue
                self.logger.error(f"Error in timer callback: {e}", exc_info=True)

        self.logger.debug("Timer worker thread stopped")

    def shutdown(self) -> None:
        """
        Stop the worker thread and drop pending callbacks.

        Safe to call multiple times.
        """
        with self._condition:
            if not self._running:
                return
            self._running = False
            for handle in self._heap:
                handle.cancel()
            self._heap.clear()
            self._condition.notify_all()

        if (
            self._worker_thread.is_alive()
            and threading.current_thread() is not self._worker_thread
        ):
            self._worker_thread.join(timeout=THREAD_SHUTDOWN_TIMEOUT)

        self.logger.info("Timer queue stopped")
