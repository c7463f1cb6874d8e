"""Tests for platform detection in create_hardware_factory."""

from __future__ import annotations

import logging
from unittest.mock import patch

from status_leds.core.models.config import ServiceConfig, StatusLedsConfig, SystemConfig
from status_leds.hardware.factory import create_hardware_factory
from status_leds.hardware.mock.mock_factory import MockHardwareFactory
from status_leds.hardware.spi.spi_factory import SpiHardwareFactory
from status_leds.monitor.systemd_source import SystemdStateSource


def _config(dev_mode: bool = False) -> StatusLedsConfig:
    return StatusLedsConfig(
        services=[ServiceConfig(name="a.service")],
        system=SystemConfig(dev_mode=dev_mode, poll_interval_seconds=2.0),
    )


class TestCreateHardwareFactory:
    @patch("status_leds.hardware.factory._is_raspberry_pi", return_value=False)
    def test_real_hardware_off_pi_without_dev_mode(self, _pi, caplog):
        with caplog.at_level(logging.WARNING, logger="status_leds.hardware.factory"):
            factory = create_hardware_factory(_config())
        assert isinstance(factory, SpiHardwareFactory)
        assert "Not a Raspberry Pi" in caplog.text

    @patch("status_leds.hardware.factory._is_raspberry_pi", return_value=False)
    def test_mock_off_pi_in_dev_mode(self, _pi):
        assert isinstance(create_hardware_factory(_config(dev_mode=True)), MockHardwareFactory)

    @patch("status_leds.hardware.factory._is_raspberry_pi", return_value=True)
    def test_mock_in_dev_mode(self, _pi):
        assert isinstance(create_hardware_factory(_config(dev_mode=True)), MockHardwareFactory)

    @patch("status_leds.hardware.factory._is_raspberry_pi", return_value=True)
    def test_spi_on_pi(self, _pi):
        assert isinstance(create_hardware_factory(_config()), SpiHardwareFactory)


class TestSpiHardwareFactory:
    def test_state_source_is_systemd_and_cached(self):
        factory = SpiHardwareFactory(_config())
        source = factory.create_state_source()
        assert isinstance(source, SystemdStateSource)
        assert factory.create_state_source() is source

    @patch("status_leds.hardware.spi.spi_factory.SpiByteSink")
    def test_byte_sink_opens_configured_device(self, MockSink):
        factory = SpiHardwareFactory(_config())
        sink = factory.create_byte_sink()
        MockSink.assert_called_once_with("/dev/spidev0.0")
        assert factory.create_byte_sink() is sink

    @patch("status_leds.hardware.spi.spi_factory.SpiByteSink")
    def test_cleanup_closes_sink_and_source(self, MockSink):
        factory = SpiHardwareFactory(_config())
        sink = factory.create_byte_sink()
        source = factory.create_state_source()
        factory.cleanup()
        sink.close.assert_called_once()
        assert source.closed

    def test_cleanup_without_resources(self):
        SpiHardwareFactory(_config()).cleanup()
