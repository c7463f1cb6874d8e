"""Fan-out channel for :class:`ServiceEvent` — ``asyncio.Queue`` per subscriber.

Key behaviours:
* ``publish`` never blocks the producer.
* With no subscriber attached the event is dropped (logged at debug).
* Each subscriber has a bounded queue — on overflow the oldest event is
  dropped with a warning.
* Producers on other threads use :meth:`EventChannel.publish_threadsafe`.
* ``close()`` ends every subscriber's ``async for`` loop.
"""

from __future__ import annotations

import asyncio
import logging

from status_leds.core.models.event import ServiceEvent

_log = logging.getLogger(__name__)

_CLOSED = object()


class EventSubscription:
    """One receiver of an :class:`EventChannel`; iterate with ``async for``."""

    def __init__(self, channel: EventChannel, queue_size: int) -> None:
        self._channel = channel
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self.dropped = 0

    def __aiter__(self) -> EventSubscription:
        return self

    async def __anext__(self) -> ServiceEvent:
        item = await self.get()
        if item is None:
            raise StopAsyncIteration
        return item

    async def get(self) -> ServiceEvent | None:
        """Wait for the next event; ``None`` once the channel is closed."""
        if self._closed and self._queue.empty():
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._closed = True
            return None
        assert isinstance(item, ServiceEvent)
        return item

    def unsubscribe(self) -> None:
        self._channel._remove(self)

    # -- called by the channel on the loop thread --

    def _offer(self, event: ServiceEvent) -> None:
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            self.dropped += 1
            _log.warning("Event queue overflow — dropped oldest event (unit=%s)", event.unit_name)
            self._queue.put_nowait(event)

    def _close(self) -> None:
        # Make room for the sentinel so a full queue still terminates.
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)


class EventChannel:
    """Broadcast channel of service events.

    Args:
        queue_size: Per-subscriber queue bound before overflow handling.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: list[EventSubscription] = []
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def bind(self) -> None:
        """Remember the running loop so other threads can publish."""
        self._loop = asyncio.get_running_loop()

    def subscribe(self) -> EventSubscription:
        """Attach a new receiver.  Must be called on the event loop."""
        if self._loop is None:
            self.bind()
        sub = EventSubscription(self, self._queue_size)
        if self._closed:
            sub._close()
        else:
            self._subscribers.append(sub)
        return sub

    def publish(self, event: ServiceEvent) -> int:
        """Offer *event* to every subscriber; returns how many received it."""
        if self._closed:
            _log.debug("Channel closed, discarding event for %s", event.unit_name)
            return 0
        if not self._subscribers:
            _log.debug("No subscribers — dropped event for %s (%s)", event.unit_name, event.state.value)
            return 0
        for sub in list(self._subscribers):
            sub._offer(event)
        return len(self._subscribers)

    def publish_threadsafe(self, event: ServiceEvent) -> None:
        """Publish from a non-loop thread via ``call_soon_threadsafe``."""
        assert self._loop is not None, "EventChannel.bind() has not been called"
        self._loop.call_soon_threadsafe(self.publish, event)

    def close(self) -> None:
        """Stop delivery and wake every subscriber.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        for sub in self._subscribers:
            sub._close()
        self._subscribers.clear()
        _log.debug("Event channel closed")

    def _remove(self, sub: EventSubscription) -> None:
        try:
            self._subscribers.remove(sub)
        except ValueError:
            pass
