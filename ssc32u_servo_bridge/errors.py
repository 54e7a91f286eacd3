"""
Error taxonomy for the servo bridge.

TrajectoryRejected and its subclasses reject a whole command batch and are
never fatal. ConfigurationError is raised while building the joint registry
at startup.
"""


class ServoBridgeError(Exception):
    """Base class for all servo bridge errors."""


class ConfigurationError(ServoBridgeError):
    """Joint calibration or parameter file could not be used."""


class TrajectoryRejected(ServoBridgeError):
    """A trajectory command was rejected; nothing from it is published."""


class UnknownJoint(TrajectoryRejected):
    def __init__(self, name: str):
        super().__init__(f'Joint [{name}] does not exist')
        self.name = name


class OutOfRangeAngle(TrajectoryRejected):
    def __init__(self, joint: str, angle: float, min_angle: float, max_angle: float):
        super().__init__(
            f'The given position [{angle:f}] for joint [{joint}] is invalid '
            f'(limits [{min_angle:f}, {max_angle:f}])'
        )
        self.joint = joint
        self.angle = angle
        self.min_angle = min_angle
        self.max_angle = max_angle


class MalformedTrajectory(TrajectoryRejected):
    """A waypoint carries fewer positions than the command has joint names."""

    def __init__(self, waypoint_index: int, expected: int, actual: int):
        super().__init__(
            f'Point {waypoint_index} has {actual} positions, expected {expected}'
        )
        self.waypoint_index = waypoint_index
        self.expected = expected
        self.actual = actual
