"""SpiHardwareFactory — real SPI output and the systemd state source."""

from __future__ import annotations

import logging

from status_leds.core.interfaces.hardware import ByteSink, HardwareFactory
from status_leds.core.interfaces.state_source import StateSource
from status_leds.core.models.config import StatusLedsConfig
from status_leds.hardware.spi.spi_device import SpiByteSink
from status_leds.monitor.systemd_source import SystemdStateSource

_log = logging.getLogger(__name__)


class SpiHardwareFactory(HardwareFactory):
    """Opens the configured spidev node lazily and closes it on cleanup.

    Args:
        config: Full configuration (``strip.spidev`` and ``system`` polling).
    """

    def __init__(self, config: StatusLedsConfig) -> None:
        self._config = config
        self._sink: SpiByteSink | None = None
        self._source: SystemdStateSource | None = None

    def create_byte_sink(self) -> ByteSink:
        if self._sink is None:
            self._sink = SpiByteSink(self._config.strip.device_path)
        return self._sink

    def create_state_source(self) -> StateSource:
        if self._source is None:
            self._source = SystemdStateSource(
                poll_interval=self._config.system.poll_interval_seconds,
                queue_size=self._config.system.event_queue_size,
            )
        return self._source

    def cleanup(self) -> None:
        """Close the SPI device and stop the state source."""
        if self._source is not None:
            self._source.close()
        if self._sink is not None:
            self._sink.close()
        _log.info("SpiHardwareFactory cleanup complete")
