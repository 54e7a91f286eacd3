from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'ssc32u_servo_bridge'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['tests']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'),
            glob('launch/*.py')),
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    install_requires=['setuptools', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    tests_require=['pytest'],
    zip_safe=True,
    maintainer='Robot Team',
    maintainer_email='robot@example.com',
    description='Joint trajectory <-> pulse width bridge for the SSC-32U servo controller',
    license='BSD-3-Clause',
    entry_points={
        'console_scripts': [
            'servo_controller = ssc32u_servo_bridge.servo_controller_node:main',
            'servo_sim = ssc32u_servo_bridge.logic_simulator.simulator_main:main',
        ],
    },
)
