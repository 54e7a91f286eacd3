import math

import pytest

from ssc32u_servo_bridge.errors import OutOfRangeAngle
from ssc32u_servo_bridge.joints import JointCalibration
from ssc32u_servo_bridge.pulse_width import (
    PULSE_WIDTH_MAX,
    PULSE_WIDTH_MIN,
    SCALE,
    angle_to_command,
    angle_to_pulse_width,
    clamp_pulse_width,
    invert_pulse_width,
    pulse_width_to_angle,
    round_half_up,
    velocity_to_speed,
)


@pytest.mark.parametrize('value, expected', [
    (2.5, 3),
    (2.4999, 2),
    (-2.5, -2),
    (-2.6, -3),
    (1499.5, 1500),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize('pulse_width', [-1000, 0, 499, 500, 1500, 2500, 2501, 10000])
def test_clamp_is_idempotent_and_bounded(pulse_width):
    once = clamp_pulse_width(pulse_width)
    assert PULSE_WIDTH_MIN <= once <= PULSE_WIDTH_MAX
    assert clamp_pulse_width(once) == once


def test_clamp_limits():
    assert clamp_pulse_width(499) == 500
    assert clamp_pulse_width(2501) == 2500
    assert clamp_pulse_width(1234) == 1234


def test_invert_is_self_inverse():
    for pulse_width in range(PULSE_WIDTH_MIN, PULSE_WIDTH_MAX + 1, 50):
        assert invert_pulse_width(invert_pulse_width(pulse_width)) == pulse_width
    assert invert_pulse_width(500) == 2500
    assert invert_pulse_width(1500) == 1500


def test_center_angle_is_midpoint(shoulder):
    assert angle_to_pulse_width(0.0, shoulder) == 1500


def test_upper_limit_angle(shoulder):
    # 2000/pi * 1.57 + 1500 = 2499.49...
    assert angle_to_pulse_width(1.57, shoulder) == 2499
    assert angle_to_pulse_width(-1.57, shoulder) == 501


def test_quarter_turn_reaches_actuator_limit():
    calib = JointCalibration(name='j', channel=0, min_angle=-math.pi / 2, max_angle=math.pi / 2)
    assert angle_to_pulse_width(math.pi / 2, calib) == 2500
    assert angle_to_pulse_width(-math.pi / 2, calib) == 500


def test_inverted_midpoint_unchanged(inverted_shoulder):
    assert angle_to_pulse_width(0.0, inverted_shoulder) == 1500


def test_inverted_joint_reflects(inverted_shoulder):
    # 2000/pi * 0.5 + 1500 = 1818.3 -> 1818 -> 3000 - 1818
    assert angle_to_pulse_width(0.5, inverted_shoulder) == 1182


def test_bounds_are_inclusive(shoulder):
    angle_to_pulse_width(shoulder.min_angle, shoulder)
    angle_to_pulse_width(shoulder.max_angle, shoulder)


@pytest.mark.parametrize('angle', [-1.57 - 1e-9, 1.57 + 1e-9, 3.0, -3.0])
def test_outside_bounds_rejected(shoulder, angle):
    with pytest.raises(OutOfRangeAngle) as excinfo:
        angle_to_pulse_width(angle, shoulder)

    err = excinfo.value
    assert err.joint == 'shoulder'
    assert err.angle == angle
    assert (err.min_angle, err.max_angle) == (-1.57, 1.57)


def test_valid_angle_clamped_by_offset():
    calib = JointCalibration(name='j', channel=3, min_angle=-1.57, max_angle=1.57, offset_angle=-1.0)
    # raw = 2000/pi * 2.0 + 1500 = 2773 -> clamped
    assert angle_to_pulse_width(1.0, calib) == 2500


def test_clamped_then_inverted():
    calib = JointCalibration(name='j', channel=3, min_angle=-1.57, max_angle=1.57,
                             offset_angle=-1.0, invert=True)
    assert angle_to_pulse_width(1.0, calib) == 500


def test_reversed_limits_reject_everything():
    calib = JointCalibration(name='j', channel=0, min_angle=1.0, max_angle=-1.0)
    for angle in (-1.0, 0.0, 1.0):
        with pytest.raises(OutOfRangeAngle):
            angle_to_pulse_width(angle, calib)


def test_velocity_to_speed():
    assert velocity_to_speed(0.5) == pytest.approx(SCALE * 0.5)
    assert velocity_to_speed(0.0) is None
    assert velocity_to_speed(-1.0) is None
    assert velocity_to_speed(None) is None


def test_angle_to_command(shoulder):
    assert angle_to_command(0.0, shoulder) == (1500, None)
    pulse_width, speed = angle_to_command(0.0, shoulder, 1.0)
    assert pulse_width == 1500
    assert speed == pytest.approx(2000.0 / math.pi)


def test_pulse_width_to_angle(shoulder, inverted_shoulder):
    assert pulse_width_to_angle(1500, shoulder) == 0.0
    assert pulse_width_to_angle(2500, shoulder) == pytest.approx(math.pi / 2)
    assert pulse_width_to_angle(2500, inverted_shoulder) == pytest.approx(-math.pi / 2)


def test_pulse_width_to_angle_applies_offset():
    calib = JointCalibration(name='j', channel=0, offset_angle=0.25)
    assert pulse_width_to_angle(1500, calib) == pytest.approx(0.25)


def test_pulse_width_to_angle_not_limited(shoulder):
    # Feedback is reported as sensed, even far outside the joint limits
    assert pulse_width_to_angle(5000, shoulder) == pytest.approx(3500 / SCALE)


@pytest.mark.parametrize('angle', [-1.5, -0.7, -0.01, 0.0, 0.3, 1.2, 1.56])
def test_round_trip_within_one_unit(shoulder, angle):
    pulse_width = angle_to_pulse_width(angle, shoulder)
    assert PULSE_WIDTH_MIN < pulse_width < PULSE_WIDTH_MAX
    assert pulse_width_to_angle(pulse_width, shoulder) == pytest.approx(angle, abs=math.pi / 2000)


def test_inverted_round_trip(inverted_shoulder):
    pulse_width = angle_to_pulse_width(0.5, inverted_shoulder)
    assert pulse_width_to_angle(pulse_width, inverted_shoulder) == pytest.approx(0.5, abs=math.pi / 2000)


def test_nan_angle_rejected(shoulder):
    with pytest.raises(OutOfRangeAngle):
        angle_to_pulse_width(math.nan, shoulder)


def test_nan_velocity_has_no_speed():
    assert velocity_to_speed(math.nan) is None
