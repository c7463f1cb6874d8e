"""Abstract interfaces for the byte sink, hardware factory and state source."""

from status_leds.core.interfaces.hardware import ByteSink, HardwareFactory
from status_leds.core.interfaces.state_source import StateSource

__all__ = ["ByteSink", "HardwareFactory", "StateSource"]
