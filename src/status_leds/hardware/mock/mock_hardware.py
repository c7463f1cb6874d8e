"""Mock hardware implementations for development and testing.

Each class implements the corresponding ABC from
:mod:`status_leds.core.interfaces` with in-memory state and
``simulate_*()`` helpers for tests and ``--dev`` runs.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from status_leds.core.exceptions import StateSourceError
from status_leds.core.interfaces.hardware import ByteSink
from status_leds.core.interfaces.state_source import StateSource
from status_leds.core.models.state import ServiceState

_log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Byte sink
# ---------------------------------------------------------------------------

class MockByteSink(ByteSink):
    """Records every frame written.

    Attributes:
        frames: All frames accepted, oldest first.
        fail_writes: When ``True``, :meth:`write` raises ``OSError``.
        short_by: Report this many fewer bytes than requested.
        closed: Set by :meth:`close`.
    """

    def __init__(self) -> None:
        self.frames: list[bytes] = []
        self.fail_writes = False
        self.short_by = 0
        self.closed = False
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        if self.fail_writes:
            raise OSError("simulated device write failure")
        with self._lock:
            self.frames.append(bytes(data))
        _log.debug("MockByteSink: %s", data.hex())
        return max(0, len(data) - self.short_by)

    @property
    def last_frame(self) -> bytes | None:
        with self._lock:
            return self.frames[-1] if self.frames else None

    def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# State source
# ---------------------------------------------------------------------------

class MockStateSource(StateSource):
    """In-memory service manager.

    Units default to ``ACTIVE`` unless given in *states*.

    Args:
        states: Initial unit → state table.
        available: Value returned by :meth:`is_available`.
    """

    def __init__(
        self,
        states: dict[str, ServiceState] | None = None,
        available: bool = True,
        queue_size: int = 100,
    ) -> None:
        super().__init__(queue_size=queue_size)
        self.states: dict[str, ServiceState] = dict(states or {})
        self.available = available
        self.watched: list[str] = []
        self.failing_units: set[str] = set()
        self._stopped = asyncio.Event()

    async def is_available(self) -> bool:
        return self.available

    async def current_state(self, unit_name: str) -> ServiceState:
        if unit_name in self.failing_units:
            raise StateSourceError(f"Failed to get state for unit '{unit_name}'")
        return self.states.get(unit_name, ServiceState.ACTIVE)

    async def watch(self, unit_name: str) -> None:
        if unit_name not in self.watched:
            self.watched.append(unit_name)

    async def monitor(self) -> None:
        await self._stopped.wait()

    def close(self) -> None:
        super().close()
        self._stopped.set()

    # -- Simulation helpers --

    def simulate_state(self, unit_name: str, state: ServiceState) -> int:
        """Change *unit_name*'s state and publish the event."""
        self.states[unit_name] = state
        return self.publish(unit_name, state)
