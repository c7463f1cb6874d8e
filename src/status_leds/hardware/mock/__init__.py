"""Mock hardware backend for development and testing."""

from status_leds.hardware.mock.mock_factory import MockHardwareFactory
from status_leds.hardware.mock.mock_hardware import MockByteSink, MockStateSource

__all__ = ["MockHardwareFactory", "MockByteSink", "MockStateSource"]
