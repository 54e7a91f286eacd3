"""
Joint state reporting from queried servo pulse widths.
"""

from typing import Dict, List, Mapping, Sequence

from .joints import JointRegistry
from .messages import JointStateSample
from .pulse_width import pulse_width_to_angle


def readings_from_response(channels: Sequence[int], pulse_widths: Sequence[int]) -> Dict[int, int]:
    """Zip a query response (aligned with the requested channels) into a mapping."""
    return {channel: int(pw) for channel, pw in zip(channels, pulse_widths)}


class StateReporter:

    def __init__(self, registry: JointRegistry):
        self.registry = registry

    def report(self, channel_readings: Mapping[int, int]) -> List[JointStateSample]:
        """
        Convert channel readings into joint samples.

        A joint whose channel has no reading, or a reading <= 0, is left out
        of the snapshot rather than reported as zero.
        """
        samples = []
        for calib in self.registry:
            pulse_width = channel_readings.get(calib.channel)
            if pulse_width is None or pulse_width <= 0:
                continue
            samples.append(JointStateSample(calib.name, pulse_width_to_angle(pulse_width, calib)))
        return samples
