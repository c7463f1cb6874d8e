"""SPI character-device byte sink.

Frames are written straight to ``/dev/spidev<bus>.<device>``; the kernel
spidev driver turns each ``write()`` into one SPI transfer.
"""

from __future__ import annotations

import logging
import os

from status_leds.core.exceptions import DeviceOpenError
from status_leds.core.interfaces.hardware import ByteSink
from status_leds.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)


class SpiByteSink(ByteSink):
    """Unbuffered writer for an spidev node.

    Args:
        device_path: e.g. ``/dev/spidev0.0``.

    Raises:
        DeviceOpenError: The device node cannot be opened for writing.
    """

    def __init__(self, device_path: str) -> None:
        self._path = device_path
        self._log = ContextualLogger(_log, device=device_path)
        try:
            self._fd: int | None = os.open(device_path, os.O_WRONLY)
        except OSError as exc:
            raise DeviceOpenError(
                f"Failed to open SPI device {device_path}: {exc.strerror or exc}",
                hint="Enable SPI (dtparam=spi=on) and check the user can write the device node",
            ) from exc
        self._log.info("Opened SPI device")

    @property
    def path(self) -> str:
        return self._path

    def write(self, data: bytes) -> int:
        if self._fd is None:
            raise OSError(f"SPI device {self._path} is closed")
        return os.write(self._fd, data)

    def close(self) -> None:
        if self._fd is None:
            return
        try:
            os.close(self._fd)
        except OSError:
            self._log.exception("Error closing SPI device")
        self._fd = None
        self._log.debug("SPI device closed")
