"""Orchestrator — startup & shutdown sequencing for the LED monitor.

All real work lives in dedicated modules; this class validates the
configuration against the strip, wires the buffer, router and renderer
together, runs them as tasks and tears everything down in order.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from status_leds.core.color_resolver import ColorResolver
from status_leds.core.event_router import EventRouter
from status_leds.core.exceptions import StateSourceUnavailableError
from status_leds.core.interfaces.hardware import ByteSink
from status_leds.core.interfaces.state_source import StateSource
from status_leds.core.led_buffer import LedBuffer
from status_leds.core.models.color import LOADING, Color
from status_leds.core.models.config import StatusLedsConfig, check_strip_capacity
from status_leds.core.renderer import Renderer

_log = logging.getLogger(__name__)


class ExitReason(str, Enum):
    """Why :meth:`Orchestrator.run` returned."""

    SIGNAL = "signal"
    MONITOR_EXITED = "monitor_exited"
    ROUTER_EXITED = "router_exited"
    RENDERER_EXITED = "renderer_exited"


class Orchestrator:
    """Top-level coordinator.

    Construction validates and builds everything synchronously, so
    configuration problems surface before any task starts.

    Args:
        config: Validated configuration.
        state_source: Where unit states come from.
        sink: Output device handed to the :class:`Renderer`.
        loading_color: Shown on every cell until its first event arrives.

    Raises:
        ConfigurationError: More services than LEDs.
    """

    def __init__(
        self,
        config: StatusLedsConfig,
        state_source: StateSource,
        sink: ByteSink,
        loading_color: Color = LOADING,
    ) -> None:
        check_strip_capacity(len(config.services), config.strip.length)

        self._config = config
        self._source = state_source

        self._buffer = LedBuffer(config.strip.length)
        for service in config.services:
            self._buffer.add_cell(service.name)
        self._buffer.fill(loading_color)

        self._router = EventRouter(self._buffer, ColorResolver.from_config(config))
        self._renderer = Renderer(
            self._buffer,
            sink,
            strip_length=config.strip.length,
            hertz=config.strip.hertz,
        )

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def buffer(self) -> LedBuffer:
        return self._buffer

    @property
    def router(self) -> EventRouter:
        return self._router

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, shutdown: asyncio.Event) -> ExitReason:
        """Run until *shutdown* is set or a background task ends.

        The LEDs are turned off on every exit path, including startup
        failures and cancellation.

        Raises:
            StateSourceUnavailableError: The state source is unreachable.
            StateSourceError: A unit could not be registered.
        """
        with self._renderer:
            if not await self._source.is_available():
                raise StateSourceUnavailableError(
                    "Service manager is not reachable",
                    hint="status-leds requires a running systemd (is this a systemd host?)",
                )

            self._renderer.render_once()

            # Subscribe before registering so the initial events are kept.
            subscription = self._source.events()
            for index, service in enumerate(self._config.services):
                _log.info("Adding service '%s' to position %d", service.name, index)
                await self._source.register(service.name)

            tasks: dict[asyncio.Task[None], ExitReason] = {
                asyncio.create_task(self._source.monitor(), name="state-monitor"): ExitReason.MONITOR_EXITED,
                asyncio.create_task(self._router.run(subscription), name="event-router"): ExitReason.ROUTER_EXITED,
                asyncio.create_task(self._renderer.run(), name="led-renderer"): ExitReason.RENDERER_EXITED,
            }
            shutdown_task = asyncio.create_task(shutdown.wait(), name="shutdown-wait")
            _log.info("Started successfully, monitoring %d services", len(self._config.services))

            try:
                done, _pending = await asyncio.wait(
                    [shutdown_task, *tasks], return_when=asyncio.FIRST_COMPLETED
                )
                reason = ExitReason.SIGNAL
                if shutdown_task in done:
                    _log.info("Shutdown signal received")
                else:
                    for task in done:
                        reason = tasks[task]
                        self._report_unexpected_exit(task)
            finally:
                self._source.close()
                for task in [shutdown_task, *tasks]:
                    task.cancel()
                await asyncio.gather(shutdown_task, *tasks, return_exceptions=True)
                _log.info("Shutting down...")

        return reason

    @staticmethod
    def _report_unexpected_exit(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            _log.error("Task %s was cancelled unexpectedly", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            _log.error("Task %s failed: %s", task.get_name(), exc, exc_info=exc)
        else:
            _log.error("Task %s ended unexpectedly", task.get_name())
