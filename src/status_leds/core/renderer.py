"""Renderer — periodic frame writer with a guaranteed all-off shutdown.

Lifecycle::

    IDLE ──run()──▶ RUNNING ──stop()──▶ DRAINING ──▶ STOPPED
      └────────────────stop()──────────────▲

Every device write goes through one write lock.  :meth:`Renderer.stop`
flips the state before taking that lock, so once it returns no further
frame can reach the device and the off frame is the last one written.
Writes run in the default thread-pool executor; a slow device stretches
its own tick but never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from enum import Enum
from types import TracebackType

from status_leds.core.interfaces.hardware import ByteSink
from status_leds.core.led_buffer import LedBuffer

_log = logging.getLogger(__name__)


class RendererState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


def period_from_hertz(hertz: int) -> float:
    """``1000 ms / hertz`` at whole-millisecond resolution, in seconds."""
    if hertz <= 0:
        raise ValueError(f"hertz must be > 0, got {hertz}")
    return max(1, 1000 // hertz) / 1000


class Renderer:
    """Owns the byte sink and writes :class:`LedBuffer` frames to it.

    Args:
        buffer: LED buffer to snapshot each tick.
        sink: Output device; no other component may write to it.
        strip_length: Physical LED count (frame is ``strip_length * 4`` bytes).
        hertz: Refresh rate.
    """

    def __init__(self, buffer: LedBuffer, sink: ByteSink, strip_length: int, hertz: int) -> None:
        self._buffer = buffer
        self._sink = sink
        self._strip_length = strip_length
        self._period = period_from_hertz(hertz)
        self._hertz = hertz
        self._state = RendererState.IDLE
        self._state_lock = threading.Lock()
        self._write_lock = threading.Lock()

        self.frames_written = 0
        self.write_errors = 0

    def __enter__(self) -> Renderer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> RendererState:
        return self._state

    @property
    def period(self) -> float:
        """Tick period in seconds."""
        return self._period

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def render_once(self) -> bool:
        """Snapshot the buffer and write it now (blocking).

        Allowed while ``IDLE`` or ``RUNNING``; returns ``False`` once
        shutdown has begun or if the write failed.
        """
        return self._write_frame(self._buffer.snapshot_bytes(self._strip_length), final=False)

    def _write_frame(self, frame: bytes, *, final: bool) -> bool:
        with self._write_lock:
            if not final and self._state not in (RendererState.IDLE, RendererState.RUNNING):
                return False
            try:
                written = self._sink.write(frame)
            except OSError as exc:
                self.write_errors += 1
                _log.error("Failed to write %d bytes to LED device: %s", len(frame), exc)
                return False
            if written != len(frame):
                self.write_errors += 1
                _log.warning(
                    "Partial write to LED device: %d of %d bytes written", written, len(frame)
                )
                return False
            self.frames_written += 1
            _log.debug("Wrote %d byte frame", len(frame))
            return True

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Write a frame every :attr:`period` seconds until :meth:`stop`.

        Failed writes are logged and retried on the next tick.  Missed
        ticks are not replayed.
        """
        with self._state_lock:
            if self._state is not RendererState.IDLE:
                _log.debug("Renderer.run() ignored in state %s", self._state.value)
                return
            self._state = RendererState.RUNNING

        _log.info("Starting LED strip update loop (%dHz, period=%.3fs)", self._hertz, self._period)
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while self._state is RendererState.RUNNING:
            frame = self._buffer.snapshot_bytes(self._strip_length)
            await loop.run_in_executor(None, lambda: self._write_frame(frame, final=False))

            next_tick += self._period
            delay = next_tick - loop.time()
            if delay < 0:
                next_tick = loop.time()
                delay = 0
            await asyncio.sleep(delay)
        _log.info("LED strip update loop stopped")

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Turn every LED off and stop writing.  Runs its body exactly once.

        Blocks until any in-flight write returns, then resets the buffer
        and writes one all-off frame.  Errors are logged, never raised.
        """
        with self._state_lock:
            if self._state in (RendererState.DRAINING, RendererState.STOPPED):
                return
            self._state = RendererState.DRAINING

        _log.debug("Shutting down LED strip")
        try:
            self._buffer.reset_all()
            if not self._write_frame(self._buffer.snapshot_bytes(self._strip_length), final=True):
                _log.error("Failed to turn off LEDs during shutdown")
        except Exception:
            _log.exception("Unexpected error while turning off LEDs")
        finally:
            self._state = RendererState.STOPPED
        _log.info("LED strip turned off")
