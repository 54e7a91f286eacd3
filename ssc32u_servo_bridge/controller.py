"""
Servo Controller (transport independent)

Owns the joint registry and the two pipelines built on it. The ROS node and
the logic simulator both drive an instance of this class and only take care
of moving messages in and out.

Responsibilities:
- Trajectory -> servo command batch (all-or-nothing)
- Pulse-width readings -> joint state snapshot
- Relax: one LOW discrete output per configured channel
- Initial pose for joints flagged with initialize
"""

import logging
from typing import List, Optional, Sequence

from .errors import TrajectoryRejected
from .joints import JointRegistry
from .messages import ActuatorCommand, DiscreteOutput, JointStateSample, TrajectoryWaypoint
from .state_reporter import StateReporter, readings_from_response
from .trajectory import TrajectoryCommandProcessor


class ServoController:

    def __init__(self, registry: JointRegistry, logger=None):
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)
        self.processor = TrajectoryCommandProcessor(registry)
        self.reporter = StateReporter(registry)

    def handle_trajectory(self, joint_names: Sequence[str],
                          waypoints: Sequence[TrajectoryWaypoint]) -> Optional[List[ActuatorCommand]]:
        """
        Process a trajectory command.

        Returns the command batch to publish, or None when the command was
        rejected (the reason is logged).
        """
        try:
            batch = self.processor.process(joint_names, waypoints)
        except TrajectoryRejected as e:
            self.logger.error(f'Trajectory rejected: {e}')
            return None

        self.logger.debug(f'Trajectory accepted: {len(batch)} servo commands')
        return batch

    def relax_joints(self) -> List[DiscreteOutput]:
        """One LOW output per distinct configured channel."""
        outputs = []
        seen = set()
        for channel in self.registry.channels():
            if channel in seen:
                continue
            seen.add(channel)
            outputs.append(DiscreteOutput(channel=channel, output=DiscreteOutput.LOW))
        return outputs

    def initial_pose(self) -> List[ActuatorCommand]:
        """Commands moving every joint flagged initialize to its default angle."""
        joints = [calib for calib in self.registry if calib.initialize]
        if not joints:
            return []

        waypoint = TrajectoryWaypoint(positions=[calib.default_angle for calib in joints])
        batch = self.handle_trajectory([calib.name for calib in joints], [waypoint])
        return batch or []

    def query_channels(self) -> List[int]:
        """Channels to ask the board about, aligned with the response list."""
        return self.registry.channels()

    def handle_pulse_widths(self, pulse_widths: Sequence[int],
                            channels: Optional[Sequence[int]] = None) -> List[JointStateSample]:
        """Turn a query response (aligned with channels) into a joint snapshot."""
        if channels is None:
            channels = self.query_channels()
        return self.reporter.report(readings_from_response(channels, pulse_widths))

    def handle_query_future(self, future, channels: Sequence[int]) -> Optional[List[JointStateSample]]:
        """
        Snapshot from a completed pulse-width query future.

        A failed or empty query skips this tick (logged) and returns None.
        """
        error = future.exception()
        if error is not None:
            self.logger.warning(f'query_pulse_width failed: {error}')
            return None

        result = future.result()
        if result is None:
            self.logger.warning('query_pulse_width returned no result')
            return None

        return self.handle_pulse_widths(list(result.pulse_width), channels)
