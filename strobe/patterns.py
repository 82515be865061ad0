"""
Strobe Pattern Timing

Turns a (pattern, speed, step index) into the next timed torch transition.
The scheduler walks the step index 0, 1, 2, ... and asks this module what to
do next, so every pattern is a pure function of its index.

Pattern steps:
    CONSTANT  even: after 1/speed -> ON      odd: after 1/speed -> OFF
    PULSE     even: after 1/speed -> ON      odd: after 0.1     -> OFF
    SOS       flash i ON (immediately for the very first flash,
              after the 0.2/speed gap otherwise), OFF after its duration.
              After flash 9 the sequence either restarts (repeat) or the
              session ends once the final gap has elapsed.
"""

from dataclasses import dataclass
from typing import Optional, Union

from strobe.constants import (
    CONSTANT_INTERVAL,
    MAX_STROBE_SPEED,
    MIN_STROBE_SPEED,
    PULSE_INTERVAL,
    PULSE_WIDTH,
    SOS_FLASHES,
    SOS_GAP,
    STROBE_SPEED_STEP,
    StrobePattern,
)

# Two steps (ON, OFF) per SOS flash
SOS_STEPS_PER_SEQUENCE = 2 * len(SOS_FLASHES)


@dataclass(frozen=True)
class StrobeStep:
    """
    One scheduled transition.

    Attributes:
        delay: Seconds to wait after the previous step
        torch_on: Torch state to apply when the step fires
        ends_session: True for the terminal step of a finite pattern
    """

    delay: float
    torch_on: bool
    ends_session: bool = False


def validate_speed(speed: float) -> float:
    """
    Check a strobe speed: [0.5, 5.0] in steps of 0.5.

    Raises:
        ValueError: If speed is out of range or not on a 0.5 step
    """
    value = float(speed)
    if not MIN_STROBE_SPEED <= value <= MAX_STROBE_SPEED:
        raise ValueError(
            f"Strobe speed must be between {MIN_STROBE_SPEED} and "
            f"{MAX_STROBE_SPEED}, got {speed}",
        )

    steps = value / STROBE_SPEED_STEP
    if abs(steps - round(steps)) > 1e-9:
        raise ValueError(
            f"Strobe speed must be a multiple of {STROBE_SPEED_STEP}, got {speed}",
        )
    return value


def parse_pattern(value: Union[str, StrobePattern]) -> StrobePattern:
    """
    Convert a pattern name ("constant", "Pulse", "SOS") to StrobePattern.

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(value, StrobePattern):
        return value

    try:
        return StrobePattern(value.strip().lower())
    except ValueError:
        names = ", ".join(p.value for p in StrobePattern)
        raise ValueError(f"Unknown strobe pattern '{value}' (expected: {names})") from None


def sos_flash_durations(speed: float) -> list[float]:
    """Flash durations of one SOS sequence at the given speed."""
    return [duration / speed for duration in SOS_FLASHES]


def pattern_step(
    pattern: StrobePattern,
    speed: float,
    index: int,
    repeat_sos: bool = False,
) -> Optional[StrobeStep]:
    """
    Get the step at position `index` of a pattern.

    Args:
        pattern: Strobe pattern
        speed: Validated speed multiplier
        index: Step position, starting at 0
        repeat_sos: Restart SOS after its ninth flash instead of ending

    Returns:
        The step, or None once a finite pattern has been fully consumed

    Example:
        pattern_step(StrobePattern.PULSE, 2.0, 0)  # StrobeStep(0.5, True)
        pattern_step(StrobePattern.PULSE, 2.0, 1)  # StrobeStep(0.1, False)
    """
    if index < 0:
        raise ValueError(f"Step index must be >= 0, got {index}")

    turn_on = index % 2 == 0

    if pattern == StrobePattern.CONSTANT:
        return StrobeStep(CONSTANT_INTERVAL / speed, turn_on)

    if pattern == StrobePattern.PULSE:
        if turn_on:
            return StrobeStep(PULSE_INTERVAL / speed, True)
        return StrobeStep(PULSE_WIDTH, False)

    if pattern == StrobePattern.SOS:
        return _sos_step(speed, index, repeat_sos)

    raise ValueError(f"Unsupported strobe pattern: {pattern}")


def _sos_step(speed: float, index: int, repeat: bool) -> Optional[StrobeStep]:
    gap = SOS_GAP / speed

    if not repeat and index >= SOS_STEPS_PER_SEQUENCE:
        if index == SOS_STEPS_PER_SEQUENCE:
            return StrobeStep(gap, False, ends_session=True)
        return None

    position = index % SOS_STEPS_PER_SEQUENCE
    flash = SOS_FLASHES[position // 2] / speed

    if position % 2 == 0:
        return StrobeStep(0.0 if index == 0 else gap, True)
    return StrobeStep(flash, False)
