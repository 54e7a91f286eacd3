"""
Message Definitions (Stub for ROS 2 interfaces)

Simplified Python classes mirroring the structure of:
- trajectory_msgs/JointTrajectory
- sensor_msgs/JointState
"""

import time
from dataclasses import dataclass, field
from typing import List

from ..messages import TrajectoryWaypoint


@dataclass
class Header:
    stamp: float = 0.0
    frame_id: str = ""


@dataclass
class JointTrajectory:
    header: Header = field(default_factory=Header)
    joint_names: List[str] = field(default_factory=list)
    points: List[TrajectoryWaypoint] = field(default_factory=list)


@dataclass
class JointState:
    header: Header = field(default_factory=lambda: Header(stamp=time.time()))
    name: List[str] = field(default_factory=list)
    position: List[float] = field(default_factory=list)
