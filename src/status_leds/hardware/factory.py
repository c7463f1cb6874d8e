"""Hardware factory — platform detection and factory creation.

Mock hardware is used only when ``dev_mode`` is set; every other run
talks to the real spidev node and systemd.
"""

from __future__ import annotations

import logging

from status_leds.core.interfaces.hardware import HardwareFactory
from status_leds.core.models.config import StatusLedsConfig

_log = logging.getLogger(__name__)


def _is_raspberry_pi() -> bool:
    """Return ``True`` if running on a Raspberry Pi."""
    try:
        with open("/sys/firmware/devicetree/base/model") as f:
            model = f.read().lower()
        return "raspberry pi" in model
    except OSError:
        return False


def create_hardware_factory(config: StatusLedsConfig) -> HardwareFactory:
    """Return the appropriate :class:`HardwareFactory` for the platform.

    * ``dev_mode`` → ``MockHardwareFactory``.
    * Otherwise → ``SpiHardwareFactory`` (with a warning off a Raspberry Pi).
    """
    if config.system.dev_mode:
        from status_leds.hardware.mock.mock_factory import MockHardwareFactory

        _log.info("Using MockHardwareFactory (dev_mode)")
        return MockHardwareFactory(queue_size=config.system.event_queue_size)

    if not _is_raspberry_pi():
        _log.warning(
            "Not a Raspberry Pi; using %s anyway (pass --dev for mock hardware)",
            config.strip.device_path,
        )

    from status_leds.hardware.spi.spi_factory import SpiHardwareFactory

    _log.info("Using SpiHardwareFactory (%s)", config.strip.device_path)
    return SpiHardwareFactory(config)
