"""State sources backed by the host service manager."""

from status_leds.monitor.systemd_source import SystemdStateSource

__all__ = ["SystemdStateSource"]
