"""
Servo Controller Launch File

Starts the SSC-32U servo controller node with a joint parameter file:
- Subscribes to 'command' (JointTrajectory)
- Publishes 'servo_cmd', 'discrete_output' and 'joint_states'

Joint state publishing can be overridden with the SSC32U_PUBLISH_JOINT_STATES
and SSC32U_PUBLISH_RATE environment variables.
"""
import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    default_params = os.path.join(
        get_package_share_directory('ssc32u_servo_bridge'), 'config', 'ssc32u_joints.yaml'
    )

    return LaunchDescription([
        DeclareLaunchArgument(
            'params_file',
            default_value=default_params,
            description='Parameter file with the joint calibration'
        ),
        DeclareLaunchArgument(
            'namespace',
            default_value='ssc32u',
            description='Namespace of the controller topics'
        ),

        Node(
            package='ssc32u_servo_bridge',
            executable='servo_controller',
            name='ssc32u_servo_controller',
            namespace=LaunchConfiguration('namespace'),
            output='screen',
            parameters=[LaunchConfiguration('params_file')]
        ),
    ])
