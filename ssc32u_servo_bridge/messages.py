"""
Message Definitions

Plain Python classes for the values that cross the core boundary.
The ROS node converts between these and:
- trajectory_msgs/JointTrajectoryPoint
- ssc32u_msgs/ServoCommand
- ssc32u_msgs/DiscreteOutput
- sensor_msgs/JointState
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TrajectoryWaypoint:
    # Both aligned by index with the command's joint names
    positions: List[float] = field(default_factory=list)
    velocities: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class ActuatorCommand:
    channel: int
    pulse_width: int
    speed: Optional[float] = None  # None means no speed override


@dataclass(frozen=True)
class DiscreteOutput:
    LOW = 0
    HIGH = 1

    channel: int
    output: int = LOW


@dataclass(frozen=True)
class JointStateSample:
    name: str
    position: float
