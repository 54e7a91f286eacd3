"""
Fake SSC-32U Board (Logic Only)

Emulates the servo board side of the wire:
- 'servo_cmd' batches set the pulse width of each channel
- 'discrete_output' LOW switches a channel off (reads back as 0)
- 'query_pulse_width' answers with the last pulse width per channel

No motion is simulated; a channel jumps straight to its commanded value.
"""

import logging
import threading

from ..messages import DiscreteOutput

logger = logging.getLogger(__name__)


class FakeSSC32U:
    CHANNEL_COUNT = 32

    def __init__(self, bus):
        self.bus = bus
        self.lock = threading.Lock()

        # 0 means the channel has never been driven
        self.pulse_widths = [0] * self.CHANNEL_COUNT
        self.outputs = [DiscreteOutput.LOW] * self.CHANNEL_COUNT
        self.batches_received = 0

        self.bus.subscribe('servo_cmd', self.handle_servo_commands)
        self.bus.subscribe('discrete_output', self.handle_discrete_output)
        self.bus.advertise('query_pulse_width', self.handle_query)

        logger.info('Fake SSC-32U ready')

    def _valid_channel(self, channel):
        if 0 <= channel < self.CHANNEL_COUNT:
            return True
        logger.warning(f'Channel {channel} does not exist on the board')
        return False

    def handle_servo_commands(self, commands):
        with self.lock:
            self.batches_received += 1
            for command in commands:
                if self._valid_channel(command.channel):
                    self.pulse_widths[command.channel] = command.pulse_width
        logger.debug(f'Applied {len(commands)} servo commands')

    def handle_discrete_output(self, msg):
        if not self._valid_channel(msg.channel):
            return
        with self.lock:
            self.outputs[msg.channel] = msg.output
            if msg.output == DiscreteOutput.LOW:
                self.pulse_widths[msg.channel] = 0

    def handle_query(self, channels):
        """Pulse widths aligned with the requested channels; -1 for bad channels."""
        with self.lock:
            return [
                self.pulse_widths[channel] if 0 <= channel < self.CHANNEL_COUNT else -1
                for channel in channels
            ]
