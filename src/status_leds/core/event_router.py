"""EventRouter — applies service events to the LED buffer.

Purely reactive: resolves each event's colour and updates the owning cell.
Performs no I/O, so it never waits on the output device.
"""

from __future__ import annotations

import logging

from status_leds.core.color_resolver import ColorResolver
from status_leds.core.event_channel import EventSubscription
from status_leds.core.led_buffer import LedBuffer
from status_leds.core.models.event import ServiceEvent

_log = logging.getLogger(__name__)


class EventRouter:
    """Bridges the :class:`ServiceEvent` stream to :class:`LedBuffer` updates.

    Args:
        buffer: The shared LED buffer.
        resolver: Palette lookup; the cell position is the service index.
    """

    def __init__(self, buffer: LedBuffer, resolver: ColorResolver) -> None:
        self._buffer = buffer
        self._resolver = resolver
        self.applied = 0
        self.skipped = 0

    def apply(self, event: ServiceEvent) -> bool:
        """Apply one event.  Returns ``False`` if no cell tracks its unit."""
        cell = self._buffer.find_by_unit(event.unit_name)
        if cell is None:
            self.skipped += 1
            _log.warning("Ignoring event for unmonitored unit '%s'", event.unit_name)
            return False

        state_name = event.state.value
        color = self._resolver.resolve(cell.position, state_name)
        if color is None:
            _log.warning(
                "No color defined for state '%s' of service '%s' — keeping %s",
                state_name, event.unit_name, cell.color,
            )

        previous = cell.service_state
        self._buffer.set_state(cell.position, event.state, color)
        self.applied += 1

        if previous != event.state:
            _log.info(
                "Service '%s' state changed to %s (LED %d → %s)",
                event.unit_name, state_name, cell.position, cell.color,
            )
        else:
            _log.debug("Service '%s' still %s", event.unit_name, state_name)
        return True

    async def run(self, subscription: EventSubscription) -> None:
        """Consume *subscription* until its channel is closed."""
        _log.info("Event router started")
        async for event in subscription:
            self.apply(event)
        _log.info("Event router stopped (channel closed)")
