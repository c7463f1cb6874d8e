"""Hardware abstraction interfaces (ABCs).

The SPI and mock backends both implement these interfaces, so the core
never couples to a concrete transport.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from status_leds.core.interfaces.state_source import StateSource


class ByteSink(ABC):
    """Destination for transmission frames (e.g. an SPI character device)."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write *data*, returning the number of bytes actually written.

        Raises:
            OSError: The device rejected the write.
        """

    def close(self) -> None:
        """Release the device.  No-op by default (mock)."""


class HardwareFactory(ABC):
    """Creates the byte sink and state source for the current platform."""

    @abstractmethod
    def create_byte_sink(self) -> ByteSink: ...

    @abstractmethod
    def create_state_source(self) -> StateSource: ...

    def cleanup(self) -> None:
        """Release hardware resources.  No-op by default (mock)."""
