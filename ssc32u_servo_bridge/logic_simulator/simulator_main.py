"""
Logic Simulator Orchestrator

Runs the controller against the fake board:
1. Loads the joint parameter file
2. Starts Bus, Board and Node mirror
3. Sends the initial pose, then sweeps every joint to its limits
4. Sends one out-of-range command (must be rejected)
5. Relaxes all joints
"""

import argparse
import logging
import sys

from ..config import NODE_NAME, ControllerSettings, load_parameter_file, parse_joint_parameters
from ..controller import ServoController
from ..errors import ConfigurationError
from ..messages import TrajectoryWaypoint
from . import messages
from .bus import MessageBus
from .fake_board import FakeSSC32U
from .servo_node import SimulatedServoNode

logger = logging.getLogger('servo_sim')


def build(params_path, node_name=NODE_NAME):
    """Wire bus, board and node mirror from a parameter file."""
    joint_params, node_params = load_parameter_file(params_path, node_name)
    settings = ControllerSettings.from_parameters(node_params).with_environment()
    registry = parse_joint_parameters(joint_params)

    bus = MessageBus()
    board = FakeSSC32U(bus)
    node = SimulatedServoNode(bus, ServoController(registry))
    return bus, board, node, settings


def _log_state(node):
    state = node.publish_joint_states()
    if state is None:
        return
    for name, position in zip(state.name, state.position):
        logger.info(f'  {name:<20} {position:+.4f} rad')


def _move(bus, names, positions):
    traj = messages.JointTrajectory(joint_names=list(names))
    traj.points.append(TrajectoryWaypoint(positions=list(positions)))
    bus.publish('command', traj)


def run(params_path, node_name=NODE_NAME):
    bus, board, node, settings = build(params_path, node_name)
    registry = node.controller.registry
    names = registry.names

    if settings.initialize_joints:
        logger.info('Sending initial pose')
        node.publish_initial_pose()
        _log_state(node)

    for label, pick in (('min', lambda c: c.min_angle), ('max', lambda c: c.max_angle)):
        logger.info(f'Moving all joints to {label} angle')
        _move(bus, names, [pick(calib) for calib in registry])
        _log_state(node)

    if names:
        first = registry[names[0]]
        logger.info(f'Commanding {first.name} beyond its limit (expect rejection)')
        before = board.batches_received
        _move(bus, [first.name], [first.max_angle + 0.1])
        if board.batches_received != before:
            logger.error('Out-of-range command reached the board')
            return 1

    logger.info('Relaxing joints')
    bus.call('relax_joints', None)
    _log_state(node)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='SSC-32U servo controller logic simulator')
    parser.add_argument('params', help='ROS 2 parameter file with the joint definitions')
    parser.add_argument('--node-name', default=NODE_NAME, help='Node section to read from the file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug messages')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(asctime)s] [%(name)s] %(levelname)s: %(message)s',
    )

    try:
        return run(args.params, args.node_name)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2


if __name__ == '__main__':
    sys.exit(main())
