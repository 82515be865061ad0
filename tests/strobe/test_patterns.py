"""
Strobe Pattern Tests

Tests for speed validation, pattern parsing and per-step timing.

To run:
    pytest tests/strobe/test_patterns.py -v
"""

import pytest

from strobe.constants import StrobePattern
from strobe.patterns import (
    SOS_STEPS_PER_SEQUENCE,
    StrobeStep,
    parse_pattern,
    pattern_step,
    sos_flash_durations,
    validate_speed,
)


# =============================================================================
# SPEED
# =============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("speed", [0.5, 1.0, 2.5, 5.0, 3])
def test_valid_speeds(speed):
    assert validate_speed(speed) == float(speed)


@pytest.mark.unit
@pytest.mark.parametrize("speed", [0.0, 0.25, 5.5, 1.25, -1.0])
def test_invalid_speeds(speed):
    with pytest.raises(ValueError):
        validate_speed(speed)


# =============================================================================
# PATTERN NAMES
# =============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [
        ("constant", StrobePattern.CONSTANT),
        ("Pulse", StrobePattern.PULSE),
        ("SOS", StrobePattern.SOS),
        (" sos ", StrobePattern.SOS),
        (StrobePattern.PULSE, StrobePattern.PULSE),
    ],
)
def test_parse_pattern(name, expected):
    assert parse_pattern(name) is expected


@pytest.mark.unit
def test_parse_unknown_pattern():
    with pytest.raises(ValueError, match="Unknown strobe pattern"):
        parse_pattern("disco")


# =============================================================================
# STEPS
# =============================================================================

@pytest.mark.unit
def test_constant_steps():
    """Equal on and off phases of 1/speed seconds."""
    assert pattern_step(StrobePattern.CONSTANT, 2.0, 0) == StrobeStep(0.5, True)
    assert pattern_step(StrobePattern.CONSTANT, 2.0, 1) == StrobeStep(0.5, False)
    assert pattern_step(StrobePattern.CONSTANT, 2.0, 1000) == StrobeStep(0.5, True)


@pytest.mark.unit
def test_pulse_steps():
    """Off always follows 0.1s after on, regardless of speed."""
    assert pattern_step(StrobePattern.PULSE, 1.0, 0) == StrobeStep(1.0, True)
    assert pattern_step(StrobePattern.PULSE, 1.0, 1) == StrobeStep(0.1, False)
    assert pattern_step(StrobePattern.PULSE, 5.0, 0) == StrobeStep(0.2, True)
    assert pattern_step(StrobePattern.PULSE, 5.0, 1) == StrobeStep(0.1, False)


@pytest.mark.unit
def test_sos_flash_durations():
    assert sos_flash_durations(1.0) == pytest.approx(
        [0.2, 0.2, 0.2, 0.6, 0.6, 0.6, 0.2, 0.2, 0.2],
    )
    assert sos_flash_durations(2.0) == pytest.approx(
        [0.1, 0.1, 0.1, 0.3, 0.3, 0.3, 0.1, 0.1, 0.1],
    )


@pytest.mark.unit
def test_sos_first_flash_is_immediate():
    assert pattern_step(StrobePattern.SOS, 1.0, 0) == StrobeStep(0.0, True)
    assert pattern_step(StrobePattern.SOS, 1.0, 1) == StrobeStep(0.2, False)
    assert pattern_step(StrobePattern.SOS, 1.0, 2) == StrobeStep(0.2, True)


@pytest.mark.unit
def test_sos_dash_durations():
    """Flashes 4-6 are dashes."""
    for flash in (3, 4, 5):
        step = pattern_step(StrobePattern.SOS, 1.0, 2 * flash + 1)
        assert step.delay == pytest.approx(0.6)
        assert step.torch_on is False


@pytest.mark.unit
def test_sos_without_repeat_ends_after_final_gap():
    end = pattern_step(StrobePattern.SOS, 2.0, SOS_STEPS_PER_SEQUENCE)

    assert end == StrobeStep(0.1, False, ends_session=True)
    assert pattern_step(StrobePattern.SOS, 2.0, SOS_STEPS_PER_SEQUENCE + 1) is None


@pytest.mark.unit
def test_sos_with_repeat_restarts_after_gap():
    restart = pattern_step(
        StrobePattern.SOS, 1.0, SOS_STEPS_PER_SEQUENCE, repeat_sos=True,
    )

    assert restart == StrobeStep(0.2, True)
    assert pattern_step(
        StrobePattern.SOS, 1.0, SOS_STEPS_PER_SEQUENCE + 1, repeat_sos=True,
    ) == StrobeStep(0.2, False)


@pytest.mark.unit
def test_negative_index_rejected():
    with pytest.raises(ValueError):
        pattern_step(StrobePattern.CONSTANT, 1.0, -1)
