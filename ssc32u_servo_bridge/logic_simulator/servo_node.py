"""
Servo Controller Node (Logic Mirror)

Mirrors the topic wiring of servo_controller_node.py on the local MessageBus:
- 'command'          -> ServoController.handle_trajectory -> 'servo_cmd'
- 'relax_joints'     (service) -> 'discrete_output' per channel
- publish_joint_states() -> 'query_pulse_width' -> 'joint_states'
"""

import logging

from . import messages

logger = logging.getLogger(__name__)


class SimulatedServoNode:
    def __init__(self, bus, controller):
        self.bus = bus
        self.controller = controller

        self.bus.subscribe('command', self.handle_command)
        self.bus.advertise('relax_joints', self.relax_joints)

        logger.info(f'Servo node mirror initialized with {len(controller.registry)} joints')

    def handle_command(self, trajectory):
        batch = self.controller.handle_trajectory(trajectory.joint_names, trajectory.points)
        if batch is not None:
            self.bus.publish('servo_cmd', batch)

    def relax_joints(self, request=None):
        for output in self.controller.relax_joints():
            self.bus.publish('discrete_output', output)

    def publish_initial_pose(self):
        batch = self.controller.initial_pose()
        if batch:
            self.bus.publish('servo_cmd', batch)

    def publish_joint_states(self):
        """One state tick: query the board, publish what came back."""
        if not self.bus.service_ready('query_pulse_width'):
            logger.debug('query_pulse_width not available, skipping joint states')
            return None

        channels = self.controller.query_channels()
        pulse_widths = self.bus.call('query_pulse_width', channels)
        samples = self.controller.handle_pulse_widths(pulse_widths, channels)

        msg = messages.JointState()
        msg.name = [sample.name for sample in samples]
        msg.position = [sample.position for sample in samples]
        self.bus.publish('joint_states', msg)
        return msg
