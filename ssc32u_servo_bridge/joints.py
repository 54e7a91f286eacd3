"""
Joint calibration table.

The registry is built once at startup and never mutated afterwards, so it can
be shared between the command callback, the relax service and the state
timer without locking.
"""

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class JointCalibration:
    """
    Static parameters mapping one joint's angle onto its servo channel.

    Angles are in radians. min_angle <= max_angle is assumed but not checked;
    a joint configured the other way round rejects every command.
    """
    name: str
    channel: int
    min_angle: float = 0.0
    max_angle: float = 0.0
    offset_angle: float = 0.0
    invert: bool = False
    default_angle: float = 0.0
    initialize: bool = False


class JointRegistry:
    """Read-only lookup of joint name -> JointCalibration, iterated by name."""

    def __init__(self, calibrations: Iterable[JointCalibration] = ()):
        joints = {}
        for calib in calibrations:
            if calib.name in joints:
                raise ConfigurationError(f'Joint [{calib.name}] is defined more than once')
            joints[calib.name] = calib
        self._joints = MappingProxyType({name: joints[name] for name in sorted(joints)})

    def get(self, name: str) -> Optional[JointCalibration]:
        return self._joints.get(name)

    def __getitem__(self, name: str) -> JointCalibration:
        return self._joints[name]

    def __contains__(self, name) -> bool:
        return name in self._joints

    def __iter__(self) -> Iterator[JointCalibration]:
        return iter(self._joints.values())

    def __len__(self) -> int:
        return len(self._joints)

    def __repr__(self):
        return f'JointRegistry({list(self._joints)})'

    @property
    def names(self) -> List[str]:
        return list(self._joints)

    def channels(self) -> List[int]:
        """Channels in registry order, one entry per joint."""
        return [calib.channel for calib in self]

    def duplicate_channels(self) -> List[int]:
        """Channels claimed by more than one joint (breaks state reporting)."""
        counts = Counter(self.channels())
        return sorted(channel for channel, count in counts.items() if count > 1)
