"""
Strobe Constants

Timing values for the strobe patterns and limits for the speed control.
Pattern durations are given at speed 1.0; the scheduler divides them by the
selected speed unless stated otherwise.
"""

from enum import Enum

# =============================================================================
# STROBE PATTERNS
# =============================================================================


class StrobePattern(Enum):
    """Strobe patterns the user can select."""

    CONSTANT = "constant"
    PULSE = "pulse"
    SOS = "sos"


STROBE_PATTERN_LABELS = {
    StrobePattern.CONSTANT: "Constant",
    StrobePattern.PULSE: "Pulse",
    StrobePattern.SOS: "SOS",
}


# =============================================================================
# SPEED CONTROL
# =============================================================================
# Speed is a multiplier: 2.0 makes every scaled duration half as long

MIN_STROBE_SPEED = 0.5
MAX_STROBE_SPEED = 5.0
STROBE_SPEED_STEP = 0.5


# =============================================================================
# PATTERN TIMING (seconds at speed 1.0)
# =============================================================================

# Constant: on/off toggle interval
CONSTANT_INTERVAL = 1.0

# Pulse: wait between pulses (scaled), then a fixed flash (NOT scaled)
PULSE_INTERVAL = 1.0
PULSE_WIDTH = 0.1

# SOS: Morse "... --- ..."
SOS_DOT = 0.2
SOS_DASH = 0.6
SOS_GAP = 0.2  # Torch-off gap after every flash
SOS_FLASHES = (
    SOS_DOT, SOS_DOT, SOS_DOT,
    SOS_DASH, SOS_DASH, SOS_DASH,
    SOS_DOT, SOS_DOT, SOS_DOT,
)


# =============================================================================
# THREADING CONFIGURATION
# =============================================================================

# How long to wait for the timer thread to stop before giving up (seconds)
THREAD_SHUTDOWN_TIMEOUT = 2.0

# Upper bound for run_sync() waits on the timer thread (seconds)
RUN_SYNC_TIMEOUT = 5.0
