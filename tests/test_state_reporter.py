import math

import pytest

from ssc32u_servo_bridge.messages import JointStateSample
from ssc32u_servo_bridge.pulse_width import SCALE
from ssc32u_servo_bridge.state_reporter import StateReporter, readings_from_response


def test_non_positive_readings_skipped(registry):
    samples = StateReporter(registry).report({0: 1500, 1: -1, 2: 0})
    assert samples == [JointStateSample('shoulder', 0.0)]


def test_missing_channel_skipped(registry):
    samples = StateReporter(registry).report({2: 2500})
    assert len(samples) == 1
    assert samples[0].name == 'wrist'
    assert samples[0].position == pytest.approx(math.pi / 2)


def test_inverted_joint_with_offset(registry):
    samples = StateReporter(registry).report({1: 1818})
    # 3000 - 1818 = 1182 -> (1182 - 1500) / scale + 0.1
    assert samples[0].name == 'elbow'
    assert samples[0].position == pytest.approx(-318 / SCALE + 0.1)


def test_one_sample_per_joint(registry):
    samples = StateReporter(registry).report({0: 1500, 1: 1500, 2: 1500})
    assert sorted(sample.name for sample in samples) == ['elbow', 'shoulder', 'wrist']


def test_readings_from_response():
    assert readings_from_response([1, 0, 2], [1500, 0, -1]) == {1: 1500, 0: 0, 2: -1}


def test_short_response_leaves_channels_out():
    assert readings_from_response([0, 1, 2], [1500]) == {0: 1500}
