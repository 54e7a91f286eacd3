"""
SSC-32U Servo Bridge - Package Init

This package:
- Maps joint-angle trajectories onto SSC-32U pulse-width commands
- Validates commanded angles against per-joint calibration limits
- Clamps pulse widths to the actuator range [500, 2500]
- Converts queried pulse widths back into joint states
- Relaxes (drives low) every configured servo channel on request

This package does NOT:
- Plan, interpolate or smooth trajectories
- Close a position loop around the servos
- Persist calibration data

Only servo_controller_node imports rclpy; everything else runs without ROS.
"""

from .errors import (
    ServoBridgeError,
    ConfigurationError,
    TrajectoryRejected,
    UnknownJoint,
    OutOfRangeAngle,
    MalformedTrajectory,
)
from .joints import JointCalibration, JointRegistry
from .messages import ActuatorCommand, DiscreteOutput, JointStateSample, TrajectoryWaypoint
from .trajectory import TrajectoryCommandProcessor
from .state_reporter import StateReporter
from .controller import ServoController

__all__ = [
    'ServoBridgeError',
    'ConfigurationError',
    'TrajectoryRejected',
    'UnknownJoint',
    'OutOfRangeAngle',
    'MalformedTrajectory',
    'JointCalibration',
    'JointRegistry',
    'ActuatorCommand',
    'DiscreteOutput',
    'JointStateSample',
    'TrajectoryWaypoint',
    'TrajectoryCommandProcessor',
    'StateReporter',
    'ServoController',
]
