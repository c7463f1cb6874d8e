"""State source interface: the authority that reports unit states."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from status_leds.core.event_channel import EventChannel, EventSubscription
from status_leds.core.models.event import ServiceEvent
from status_leds.core.models.state import ServiceState

_log = logging.getLogger(__name__)


class StateSource(ABC):
    """Asynchronously reports service state transitions.

    Concrete sources implement the four queries plus :meth:`monitor`, the
    long-running producer.  Events reach consumers through :meth:`events`;
    delivery order per unit is publication order.

    Args:
        queue_size: Per-subscriber event queue bound.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._channel = EventChannel(queue_size=queue_size)

    @abstractmethod
    async def is_available(self) -> bool:
        """Return ``True`` if the underlying service manager is reachable."""

    @abstractmethod
    async def current_state(self, unit_name: str) -> ServiceState:
        """Point-in-time state of *unit_name*.

        Raises:
            StateSourceError: The query itself failed.
        """

    @abstractmethod
    async def watch(self, unit_name: str) -> None:
        """Register interest in *unit_name*.  Idempotent."""

    @abstractmethod
    async def monitor(self) -> None:
        """Produce events until :meth:`close` is called."""

    # ------------------------------------------------------------------
    # Shared behaviour
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._channel.is_closed

    def events(self) -> EventSubscription:
        """Subscribe to the ongoing event stream."""
        return self._channel.subscribe()

    def publish(self, unit_name: str, state: ServiceState) -> int:
        return self._channel.publish(ServiceEvent(unit_name=unit_name, state=state))

    async def register(self, unit_name: str) -> ServiceState:
        """Query, watch and announce the initial state of *unit_name*."""
        state = await self.current_state(unit_name)
        _log.info("Unit '%s' initial state: %s", unit_name, state.value)
        await self.watch(unit_name)
        self.publish(unit_name, state)
        return state

    def close(self) -> None:
        """Stop producing and end every subscription."""
        self._channel.close()
