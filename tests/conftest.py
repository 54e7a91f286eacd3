import pathlib

import pytest

from ssc32u_servo_bridge.joints import JointCalibration, JointRegistry

CONFIG_DIR = pathlib.Path(__file__).resolve().parents[1] / 'config'


@pytest.fixture
def shoulder():
    return JointCalibration(name='shoulder', channel=0, min_angle=-1.57, max_angle=1.57)


@pytest.fixture
def inverted_shoulder():
    return JointCalibration(name='shoulder', channel=0, min_angle=-1.57, max_angle=1.57, invert=True)


@pytest.fixture
def registry():
    return JointRegistry([
        JointCalibration(name='shoulder', channel=0, min_angle=-1.57, max_angle=1.57,
                         initialize=True),
        JointCalibration(name='elbow', channel=1, min_angle=-1.2, max_angle=1.4,
                         offset_angle=0.1, invert=True, default_angle=0.5, initialize=True),
        JointCalibration(name='wrist', channel=2, min_angle=-1.57, max_angle=1.57),
    ])


@pytest.fixture
def params_file():
    return CONFIG_DIR / 'ssc32u_joints.yaml'
