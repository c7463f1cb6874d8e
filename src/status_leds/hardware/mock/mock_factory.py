"""MockHardwareFactory — in-memory sink and state source for dev and test.

The created instances are public attributes so tests can reach the
``simulate_*()`` helpers directly.
"""

from __future__ import annotations

from status_leds.core.interfaces.hardware import ByteSink, HardwareFactory
from status_leds.core.interfaces.state_source import StateSource
from status_leds.hardware.mock.mock_hardware import MockByteSink, MockStateSource


class MockHardwareFactory(HardwareFactory):
    """Factory that returns :class:`MockByteSink` and :class:`MockStateSource`."""

    def __init__(self, queue_size: int = 100) -> None:
        self.sink = MockByteSink()
        self.source = MockStateSource(queue_size=queue_size)

    def create_byte_sink(self) -> ByteSink:
        return self.sink

    def create_state_source(self) -> StateSource:
        return self.source
