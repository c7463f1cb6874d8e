"""Configuration: config manager and the shipped JSON file."""

from status_leds.config.config_manager import load_config, write_default_config

__all__ = ["load_config", "write_default_config"]
