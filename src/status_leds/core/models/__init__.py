"""Pydantic models for colours, states, events and configuration."""
from status_leds.core.models.color import LOADING, OFF, Color
from status_leds.core.models.config import (
    ServiceConfig,
    StatusLedsConfig,
    StripConfig,
    SystemConfig,
    default_config,
)
from status_leds.core.models.event import ServiceEvent
from status_leds.core.models.state import ServiceState

__all__ = [
    "Color",
    "OFF",
    "LOADING",
    "ServiceConfig",
    "StatusLedsConfig",
    "StripConfig",
    "SystemConfig",
    "default_config",
    "ServiceEvent",
    "ServiceState",
]
