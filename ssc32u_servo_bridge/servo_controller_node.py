"""
SSC-32U Servo Controller Node

This node is the ROS 2 front end of ServoController. All angle/pulse-width
logic lives in the ROS-free modules of this package; the node only converts
messages and owns the timer and the query client.

Responsibilities:
- Subscribe to trajectory commands and publish servo command groups
- Reject a whole trajectory on any unknown joint or out-of-range angle
- Serve relax_joints by driving every configured channel low
- Periodically query pulse widths and publish joint states

Parameters:
- joints.<name>.{channel, min_angle, max_angle, offset_angle, invert,
  default_angle, initialize}
- publish_joint_states, publish_rate, initialize_joints
"""

import rclpy
from rclpy.node import Node
from rclpy.qos import QoSProfile, HistoryPolicy

from sensor_msgs.msg import JointState
from std_srvs.srv import Empty
from trajectory_msgs.msg import JointTrajectory
from ssc32u_msgs.msg import DiscreteOutput, ServoCommand, ServoCommandGroup
from ssc32u_msgs.srv import QueryPulseWidth

from .config import JOINTS_PREFIX, NODE_NAME, ControllerSettings, parse_joint_parameters
from .controller import ServoController
from .messages import TrajectoryWaypoint


class ServoControllerNode(Node):
    """Servo Controller Node - ROS wiring around ServoController."""

    def __init__(self, **kwargs):
        super().__init__(
            NODE_NAME,
            allow_undeclared_parameters=True,
            automatically_declare_parameters_from_overrides=True,
            **kwargs
        )

        # Joint calibration
        joint_params = {
            name: param.value
            for name, param in self.get_parameters_by_prefix(JOINTS_PREFIX).items()
        }
        registry = parse_joint_parameters(joint_params, log=self.get_logger())
        self.controller = ServoController(registry, logger=self.get_logger())

        # Node settings, environment wins over parameters
        node_params = {
            name: self.get_parameter(name).value
            for name in ('publish_joint_states', 'publish_rate', 'initialize_joints')
            if self.has_parameter(name)
        }
        self.settings = ControllerSettings.from_parameters(node_params).with_environment()

        self.get_logger().info(f'Configured joints: {registry.names}')

        latest_only = QoSProfile(history=HistoryPolicy.KEEP_LAST, depth=1)

        # === SUBSCRIBERS ===
        self.trajectory_sub = self.create_subscription(
            JointTrajectory,
            'command',
            self.joint_command_callback,
            1
        )

        # === PUBLISHERS ===
        self.discrete_output_pub = self.create_publisher(DiscreteOutput, 'discrete_output', latest_only)
        self.servo_command_pub = self.create_publisher(ServoCommandGroup, 'servo_cmd', latest_only)

        self.joint_state_pub = None
        self.joint_states_timer = None
        if self.settings.publish_joint_states:
            self.joint_state_pub = self.create_publisher(JointState, 'joint_states', latest_only)

            period = self.settings.publish_period
            if period is not None:
                self.joint_states_timer = self.create_timer(period, self.publish_joint_states)
                self.get_logger().info(f'Publishing joint states at {self.settings.publish_rate} Hz')

        # === SERVICES / CLIENTS ===
        self.relax_joints_srv = self.create_service(Empty, 'relax_joints', self.relax_joints_callback)
        self.query_pw_client = self.create_client(QueryPulseWidth, 'query_pulse_width')

        if self.settings.initialize_joints:
            self.publish_initial_pose()

        self.get_logger().info('Servo Controller initialized')

    def _publish_commands(self, batch):
        msg = ServoCommandGroup()
        for command in batch:
            servo_command = ServoCommand()
            servo_command.channel = command.channel
            servo_command.pw = command.pulse_width
            if command.speed is not None:
                # Integer field on the wire, truncated
                servo_command.speed = int(command.speed)
            msg.commands.append(servo_command)
        self.servo_command_pub.publish(msg)

    def joint_command_callback(self, msg: JointTrajectory):
        waypoints = [
            TrajectoryWaypoint(positions=list(point.positions), velocities=list(point.velocities))
            for point in msg.points
        ]

        batch = self.controller.handle_trajectory(list(msg.joint_names), waypoints)
        if batch is None:
            return

        self._publish_commands(batch)

    def publish_initial_pose(self):
        batch = self.controller.initial_pose()
        if batch:
            self.get_logger().info(f'Moving {len(batch)} joints to their default angle')
            self._publish_commands(batch)

    def relax_joints_callback(self, request, response):
        for output in self.controller.relax_joints():
            msg = DiscreteOutput()
            msg.channel = output.channel
            msg.output = output.output
            self.discrete_output_pub.publish(msg)
        return response

    def publish_joint_states(self):
        """Timer tick: ask the board for pulse widths, publish on reply."""
        if not self.query_pw_client.service_is_ready():
            self.get_logger().debug('query_pulse_width not available, skipping joint states')
            return

        channels = self.controller.query_channels()
        request = QueryPulseWidth.Request()
        request.channels = channels

        future = self.query_pw_client.call_async(request)
        future.add_done_callback(lambda f: self._pulse_width_response_callback(f, channels))

    def _pulse_width_response_callback(self, future, channels):
        samples = self.controller.handle_query_future(future, channels)
        if samples is None:
            return

        msg = JointState()
        msg.header.stamp = self.get_clock().now().to_msg()
        msg.name = [sample.name for sample in samples]
        msg.position = [sample.position for sample in samples]
        self.joint_state_pub.publish(msg)

    def destroy_node(self):
        """Clean shutdown."""
        self.get_logger().info('Shutting down Servo Controller')
        super().destroy_node()


def main(args=None):
    rclpy.init(args=args)
    node = ServoControllerNode()

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
