"""
Angle <-> pulse-width transforms for SSC-32U servos.

A pi radian sweep maps onto the 2000 us pulse span, centred on 1500 us.
Commanded pulse widths are clamped to the actuator range and reflected about
the midpoint for inverted joints. The order matters: forward conversion
inverts AFTER clamping, the reverse conversion un-inverts BEFORE computing
the angle.
"""

import math
from typing import Optional, Tuple

from .errors import OutOfRangeAngle
from .joints import JointCalibration

PULSE_WIDTH_MIN = 500
PULSE_WIDTH_MAX = 2500
PULSE_WIDTH_CENTER = 1500

# us per radian
SCALE = 2000.0 / math.pi


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp_pulse_width(pulse_width: int) -> int:
    if pulse_width < PULSE_WIDTH_MIN:
        return PULSE_WIDTH_MIN
    if pulse_width > PULSE_WIDTH_MAX:
        return PULSE_WIDTH_MAX
    return pulse_width


def invert_pulse_width(pulse_width: int) -> int:
    """Reflect about the midpoint; self-inverse on [500, 2500]."""
    return PULSE_WIDTH_MIN + PULSE_WIDTH_MAX - pulse_width


def velocity_to_speed(velocity: Optional[float]) -> Optional[float]:
    """
    Convert a joint velocity (rad/s) into a servo speed (us/s).

    Returns None unless the velocity is strictly positive; a missing speed
    leaves the controller's own speed limit in place.
    """
    if velocity is None or not velocity > 0:
        return None
    return SCALE * velocity


def angle_to_pulse_width(angle: float, calib: JointCalibration) -> int:
    """
    Convert a commanded joint angle into a servo pulse width.

    Raises:
        OutOfRangeAngle: angle outside [calib.min_angle, calib.max_angle].
    """
    if not calib.min_angle <= angle <= calib.max_angle:
        raise OutOfRangeAngle(calib.name, angle, calib.min_angle, calib.max_angle)

    pulse_width = round_half_up(SCALE * (angle - calib.offset_angle) + PULSE_WIDTH_CENTER)
    # Joint limits and actuator limits differ: a valid angle may still be clamped
    pulse_width = clamp_pulse_width(pulse_width)

    if calib.invert:
        pulse_width = invert_pulse_width(pulse_width)

    return pulse_width


def angle_to_command(angle: float, calib: JointCalibration,
                     velocity: Optional[float] = None) -> Tuple[int, Optional[float]]:
    """Pulse width and optional speed for one joint of one waypoint."""
    return angle_to_pulse_width(angle, calib), velocity_to_speed(velocity)


def pulse_width_to_angle(pulse_width: int, calib: JointCalibration) -> float:
    """
    Convert a measured pulse width back into a joint angle.

    The result is not clamped or validated. Callers drop non-positive
    readings before calling.
    """
    if calib.invert:
        pulse_width = invert_pulse_width(pulse_width)

    return (float(pulse_width) - PULSE_WIDTH_CENTER) / SCALE + calib.offset_angle
