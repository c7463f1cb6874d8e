"""Core services: LED buffer, colour resolution, event routing, rendering."""

from status_leds.core.color_resolver import ColorResolver
from status_leds.core.event_channel import EventChannel, EventSubscription
from status_leds.core.event_router import EventRouter
from status_leds.core.led_buffer import LedBuffer, LedCell
from status_leds.core.orchestrator import ExitReason, Orchestrator
from status_leds.core.renderer import Renderer, RendererState

__all__ = [
    "ColorResolver",
    "EventChannel",
    "EventSubscription",
    "EventRouter",
    "ExitReason",
    "LedBuffer",
    "LedCell",
    "Orchestrator",
    "Renderer",
    "RendererState",
]
