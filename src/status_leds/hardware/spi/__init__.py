"""SPI hardware backend for the LED strip.

Provides :class:`SpiByteSink` and :class:`SpiHardwareFactory` (SPI output
plus the systemd state source).
"""

from status_leds.hardware.spi.spi_device import SpiByteSink
from status_leds.hardware.spi.spi_factory import SpiHardwareFactory

__all__ = ["SpiByteSink", "SpiHardwareFactory"]
