"""
Trajectory command processing.

Turns a joint trajectory (joint names + waypoints) into one batch of servo
commands. The batch is all-or-nothing: the first unknown joint, out-of-range
angle or short waypoint rejects the whole command.
"""

from typing import List, Sequence

from .errors import MalformedTrajectory, UnknownJoint
from .joints import JointRegistry
from .messages import ActuatorCommand, TrajectoryWaypoint
from .pulse_width import angle_to_command


class TrajectoryCommandProcessor:

    def __init__(self, registry: JointRegistry):
        self.registry = registry

    def process(self, joint_names: Sequence[str],
                waypoints: Sequence[TrajectoryWaypoint]) -> List[ActuatorCommand]:
        """
        Build the servo command batch for a trajectory.

        Waypoints are handled in order and, within a waypoint, joints in the
        order of joint_names. Only the first failure is reported.

        Raises:
            UnknownJoint: a joint name is not in the registry.
            OutOfRangeAngle: a position lies outside the joint's limits.
            MalformedTrajectory: a waypoint has fewer positions than joints.
        """
        batch: List[ActuatorCommand] = []

        for index, waypoint in enumerate(waypoints):
            if len(waypoint.positions) < len(joint_names):
                raise MalformedTrajectory(index, len(joint_names), len(waypoint.positions))

            velocities = waypoint.velocities or []
            for j, name in enumerate(joint_names):
                calib = self.registry.get(name)
                if calib is None:
                    raise UnknownJoint(name)

                velocity = velocities[j] if j < len(velocities) else None
                pulse_width, speed = angle_to_command(waypoint.positions[j], calib, velocity)
                batch.append(ActuatorCommand(channel=calib.channel, pulse_width=pulse_width, speed=speed))

        return batch
