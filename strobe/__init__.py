"""
Strobe Module

Timed strobe patterns for the torch: pattern timing, the timer queues that
carry the ticks, and the scheduler state machine.

Public API:
    - StrobePattern: CONSTANT, PULSE, SOS
    - StrobeScheduler: Start/stop strobe sessions on a TorchController
    - SchedulerState, StrobeSession: Scheduler state types
    - TimerQueueInterface: Timeline contract
    - ThreadedTimerQueue, VirtualTimerQueue: Timeline implementations
    - create_timer_queue: Quick timer queue creation

Usage:
    from hardware import TorchController
    from strobe import StrobePattern, StrobeScheduler, create_timer_queue

    scheduler = StrobeScheduler(TorchController(), create_timer_queue())
    scheduler.start(StrobePattern.SOS, speed=1.0)
"""

from strobe.constants import StrobePattern
from strobe.controllers.strobe_scheduler import (
    SchedulerState,
    StrobeScheduler,
    StrobeSession,
)
from strobe.factory import create_timer_queue
from strobe.implementations.threaded_timer import ThreadedTimerQueue
from strobe.implementations.virtual_timer import VirtualTimerQueue
from strobe.interfaces.timer_interface import TimerHandle, TimerQueueInterface
from strobe.patterns import StrobeStep, parse_pattern, pattern_step, validate_speed

__all__ = [
    "SchedulerState",
    "StrobePattern",
    "StrobeScheduler",
    "StrobeSession",
    "StrobeStep",
    "ThreadedTimerQueue",
    "TimerHandle",
    "TimerQueueInterface",
    "VirtualTimerQueue",
    "create_timer_queue",
    "parse_pattern",
    "pattern_step",
    "validate_speed",
]
