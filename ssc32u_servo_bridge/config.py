"""
Configuration for the servo controller.

Joint calibration arrives as flat ROS parameters named
joints.<joint_name>.<field>. The node reads them with
get_parameters_by_prefix('joints'); tools and the logic simulator read the
same YAML parameter file directly. Both paths end in parse_joint_parameters.

Node settings can be overridden from the environment:
- SSC32U_PUBLISH_JOINT_STATES
- SSC32U_PUBLISH_RATE
- SSC32U_INITIALIZE_JOINTS
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigurationError
from .joints import JointCalibration, JointRegistry

logger = logging.getLogger(__name__)

NODE_NAME = 'ssc32u_servo_controller'
JOINTS_PREFIX = 'joints'

_FLOAT_FIELDS = ('min_angle', 'max_angle', 'offset_angle', 'default_angle')
_BOOL_FIELDS = ('invert', 'initialize')

_TRUE_STRINGS = ('1', 'true', 'yes', 'on')
_FALSE_STRINGS = ('0', 'false', 'no', 'off')


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f'Not a boolean: {value!r}')
    return bool(value)


def _split_joint_parameter(key: str) -> Tuple[str, str]:
    # 'shoulder.channel' -> ('shoulder', 'channel')
    name, _, field = key.partition('.')
    return name, field


def _build_calibration(name: str, fields: Mapping[str, Any]) -> JointCalibration:
    if 'channel' not in fields:
        raise ConfigurationError(f'Joint [{name}] has no channel')

    try:
        channel = int(fields['channel'])
        kwargs = {key: float(fields[key]) for key in _FLOAT_FIELDS if key in fields}
        kwargs.update({key: parse_bool(fields[key]) for key in _BOOL_FIELDS if key in fields})
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'Joint [{name}] has an invalid parameter: {e}') from e

    if channel < 0:
        raise ConfigurationError(f'Joint [{name}] has a negative channel ({channel})')

    return JointCalibration(name=name, channel=channel, **kwargs)


def parse_joint_parameters(params: Mapping[str, Any], log=None) -> JointRegistry:
    """
    Build the joint registry from '<joint>.<field>' -> value parameters.

    Unknown fields are ignored. Missing optional fields keep their defaults.
    min_angle > max_angle is accepted as configured.
    """
    log = log or logger

    grouped: Dict[str, Dict[str, Any]] = {}
    for key, value in params.items():
        name, field = _split_joint_parameter(key)
        if not name or not field:
            continue
        grouped.setdefault(name, {})[field] = value

    if not grouped:
        log.warning('No joints were provided')

    registry = JointRegistry(_build_calibration(name, fields) for name, fields in grouped.items())

    duplicates = registry.duplicate_channels()
    if duplicates:
        log.warning(f'Channels shared by more than one joint: {duplicates}')

    return registry


def _flatten(tree: Mapping[str, Any], prefix: str = '') -> Dict[str, Any]:
    flat = {}
    for key, value in tree.items():
        full_key = f'{prefix}.{key}' if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def load_parameter_file(path: str, node_name: str = NODE_NAME) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Read a ROS 2 parameter file.

    Returns (joint_params, node_params): joint_params keyed '<joint>.<field>'
    (the 'joints.' prefix removed), node_params holding everything else.
    Parameters under the '/**' wildcard apply too; the node's own section wins.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f'Cannot read parameter file {path}: {e}') from e

    params: Dict[str, Any] = {}
    for section in ('/**', node_name, '/' + node_name):
        node_section = data.get(section) or {}
        params.update(_flatten(node_section.get('ros__parameters') or {}))

    joint_params = {}
    node_params = {}
    prefix = JOINTS_PREFIX + '.'
    for key, value in params.items():
        if key.startswith(prefix):
            joint_params[key[len(prefix):]] = value
        else:
            node_params[key] = value

    return joint_params, node_params


@dataclass(frozen=True)
class ControllerSettings:
    publish_joint_states: bool = False
    publish_rate: int = 0  # Hz, <= 0 disables the state timer
    initialize_joints: bool = False

    @classmethod
    def from_parameters(cls, params: Mapping[str, Any]) -> 'ControllerSettings':
        defaults = cls()
        try:
            return cls(
                publish_joint_states=parse_bool(params.get('publish_joint_states', defaults.publish_joint_states)),
                publish_rate=int(params.get('publish_rate', defaults.publish_rate)),
                initialize_joints=parse_bool(params.get('initialize_joints', defaults.initialize_joints)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f'Invalid controller parameter: {e}') from e

    def with_environment(self, environ: Optional[Mapping[str, str]] = None) -> 'ControllerSettings':
        """Apply SSC32U_* environment overrides on top of these settings."""
        environ = os.environ if environ is None else environ
        try:
            return replace(
                self,
                publish_joint_states=parse_bool(
                    environ.get('SSC32U_PUBLISH_JOINT_STATES', self.publish_joint_states)),
                publish_rate=int(environ.get('SSC32U_PUBLISH_RATE', self.publish_rate)),
                initialize_joints=parse_bool(
                    environ.get('SSC32U_INITIALIZE_JOINTS', self.initialize_joints)),
            )
        except ValueError as e:
            raise ConfigurationError(f'Invalid environment override: {e}') from e

    @property
    def publish_period(self) -> Optional[float]:
        """Seconds between joint state queries, or None when disabled."""
        if not self.publish_joint_states or self.publish_rate <= 0:
            return None
        return 1.0 / self.publish_rate
