"""Hardware abstraction: factory + platform backends (spi, mock)."""

from status_leds.hardware.factory import create_hardware_factory

__all__ = ["create_hardware_factory"]
