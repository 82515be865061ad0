"""
Strobe Scheduler

State machine that drives timed torch on/off transitions for the selected
strobe pattern and speed.

State Flow:
    IDLE --start()--> RUNNING(pattern, speed, step) --stop()--> STOPPING --> IDLE
                        |    ^                                               ^
                        +----+ start() again: implicit stop, new session    |
                        +---- SOS sequence finished (no repeat) ------------+

Each RUNNING session schedules one tick at a time on the timer queue. A tick
carries the generation number of the session that scheduled it. When it
fires it compares that number against the live generation; stop() and
start() bump the generation, so ticks from an older session turn into no-ops
and never schedule a successor. stop() also cancels the pending handle.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from config.settings import SOS_REPEAT
from hardware.controllers.torch_controller import TorchController
from hardware.utils.torch_utils import validate_brightness
from strobe.constants import StrobePattern
from strobe.interfaces.timer_interface import TimerHandle, TimerQueueInterface
from strobe.patterns import StrobeStep, pattern_step, validate_speed


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"


@dataclass
class StrobeSession:
    """One strobing run, owned by the scheduler."""

    generation: int
    pattern: StrobePattern
    speed: float
    brightness: float
    step_index: int = 0
    running: bool = True
    started_at: float = field(default_factory=time.time)
    ticks_fired: int = 0


class StrobeScheduler:
    """
    Runs at most one strobe session at a time.

    Usage:
        scheduler = StrobeScheduler(torch_controller, timer_queue)
        scheduler.start(StrobePattern.PULSE, speed=2.0)
        ...
        scheduler.stop()
    """

    def __init__(
        self,
        torch: TorchController,
        timer_queue: TimerQueueInterface,
        repeat_sos: bool = SOS_REPEAT,
    ):
        """
        Initialize strobe scheduler.

        Args:
            torch: Torch controller the ticks write to
            timer_queue: Timeline the ticks are scheduled on
            repeat_sos: Loop SOS forever instead of playing it once
        """
        self.logger = logging.getLogger(__name__)
        self.torch = torch
        self.timers = timer_queue
        self.repeat_sos = repeat_sos

        self.state = SchedulerState.IDLE
        self.session: Optional[StrobeSession] = None

        self._generation = 0
        self._pending: Optional[TimerHandle] = None
        self.stale_ticks = 0

        self.callbacks: Dict[str, Optional[Callable]] = {
            "on_state_change": None,  # (old_state, new_state)
            "on_session_complete": None,  # (session) - finite pattern finished
        }

        self.logger.info(
            f"Strobe scheduler initialized (SOS repeat: {repeat_sos})",
        )

    @property
    def generation(self) -> int:
        """Token identifying the live session; bumped by every start/stop."""
        return self._generation

    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    def register_callback(self, callback_name: str, callback_func: Callable) -> None:
        """Register a callback function for scheduler events"""
        if callback_name not in self.callbacks:
            raise ValueError(f"Unknown callback: {callback_name}")
        self.callbacks[callback_name] = callback_func
        self.logger.debug(f"Registered callback: {callback_name}")

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def start(
        self,
        pattern: StrobePattern,
        speed: float = 1.0,
        brightness: Optional[float] = None,
    ) -> StrobeSession:
        """
        Start a strobe session, replacing any running one.

        Args:
            pattern: Strobe pattern to run
            speed: Speed multiplier, 0.5 to 5.0 in steps of 0.5
            brightness: Torch level for "on" ticks (default: controller level)

        Returns:
            The new live session

        Raises:
            ValueError: If speed or brightness is invalid
        """
        speed = validate_speed(speed)
        level = (
            self.torch.brightness
            if brightness is None
            else validate_brightness(brightness)
        )

        if self.state != SchedulerState.IDLE:
            self.stop(reason="superseded by new session")

        # Every session starts from a dark torch, even if the steady light was on
        self.torch.turn_off()

        self._generation += 1
        session = StrobeSession(
            generation=self._generation,
            pattern=pattern,
            speed=speed,
            brightness=level,
        )
        self.session = session
        self._transition_to(
            SchedulerState.RUNNING,
            f"{pattern.value} at speed {speed}",
        )

        self._schedule_next(session)
        return session

    def stop(self, reason: str = "") -> None:
        """
        Stop the live session (if any) and switch the torch off.

        Always succeeds; calling it while idle just ensures the torch is off.
        """
        if self.state == SchedulerState.RUNNING:
            self._transition_to(SchedulerState.STOPPING, reason)

        # Invalidate every tick scheduled so far
        self._generation += 1

        if self._pending is not None:
            self.timers.cancel(self._pending)
            self._pending = None

        if self.session is not None:
            self.session.running = False
            self.session = None

        self.torch.turn_off()

        if self.state != SchedulerState.IDLE:
            self._transition_to(SchedulerState.IDLE, reason)

    def set_brightness(self, brightness: float) -> None:
        """Change the level used by the live session's next "on" ticks."""
        level = validate_brightness(brightness)
        if self.session is not None:
            self.session.brightness = level
            # Apply right away if the torch is lit mid-flash
            if self.torch.is_on:
                self.torch.set_torch(True, level)

    # =========================================================================
    # TICKS
    # =========================================================================

    def _schedule_next(self, session: StrobeSession) -> None:
        step = pattern_step(
            session.pattern,
            session.speed,
            session.step_index,
            repeat_sos=self.repeat_sos,
        )

        if step is None:
            self._complete(session)
            return

        generation = session.generation

        if step.delay <= 0:
            self._pending = None
            self._on_tick(generation, step)
            return

        self._pending = self.timers.call_later(
            step.delay,
            lambda: self._on_tick(generation, step),
        )

    def _is_live(self, generation: int) -> bool:
        return (
            self.state == SchedulerState.RUNNING
            and self.session is not None
            and generation == self._generation
        )

    def _on_tick(self, generation: int, step: StrobeStep) -> None:
        if not self._is_live(generation):
            self.stale_ticks += 1
            self.logger.debug(f"Ignoring stale tick from generation {generation}")
            return

        session = self.session

        if step.ends_session:
            self._complete(session)
            return

        # Hardware failures are absorbed by the controller; the chain goes on
        self.torch.set_torch(step.torch_on, session.brightness)
        session.ticks_fired += 1
        session.step_index += 1

        # stop() may have run during the hardware call
        if not self._is_live(generation):
            return

        self._schedule_next(session)

    def _complete(self, session: StrobeSession) -> None:
        self.logger.info(
            f"Strobe pattern {session.pattern.value} finished "
            f"after {session.ticks_fired} ticks",
        )
        self.stop(reason="pattern complete")

        callback = self.callbacks["on_session_complete"]
        if callback:
            try:
                callback(session)
            except Exception as e:
                self.logger.error(f"Error in session complete callback: {e}")

    def _transition_to(self, new_state: SchedulerState, reason: str = "") -> None:
        old_state = self.state
        if new_state == old_state:
            return

        self.state = new_state

        log_msg = f"Strobe state: {old_state.value} -> {new_state.value}"
        if reason:
            log_msg += f" ({reason})"
        self.logger.info(log_msg)

        callback = self.callbacks["on_state_change"]
        if callback:
            try:
                callback(old_state, new_state)
            except Exception as e:
                self.logger.error(f"Error in state change callback: {e}")

    def get_status(self) -> Dict[str, Any]:
        """Get scheduler status for debugging/monitoring"""
        session = self.session
        return {
            "state": self.state.value,
            "generation": self._generation,
            "pattern": session.pattern.value if session else None,
            "speed": session.speed if session else None,
            "brightness": session.brightness if session else None,
            "step_index": session.step_index if session else None,
            "pending_timers": self.timers.pending_count(),
            "stale_ticks": self.stale_ticks,
        }
