"""systemd state source — polls unit states through ``systemctl``.

Each poll runs ``systemctl show`` for every watched unit and publishes the
result, so a dropped event is corrected on the next poll.  Per-unit query
failures are logged and skipped; they never stop the loop.
"""

from __future__ import annotations

import asyncio
import logging

from status_leds.core.exceptions import StateSourceError
from status_leds.core.interfaces.state_source import StateSource
from status_leds.core.models.state import ServiceState
from status_leds.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)

SYSTEMCTL = "systemctl"


def parse_properties(output: str) -> dict[str, str]:
    """Parse ``Key=Value`` lines from ``systemctl show``."""
    props: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            props[key.strip()] = value.strip()
    return props


class SystemdStateSource(StateSource):
    """State source backed by the local systemd manager.

    Args:
        poll_interval: Seconds between polls of all watched units.
        queue_size: Per-subscriber event queue bound.
        systemctl: Path or name of the ``systemctl`` binary.
    """

    def __init__(
        self,
        poll_interval: float = 5.0,
        queue_size: int = 100,
        systemctl: str = SYSTEMCTL,
    ) -> None:
        super().__init__(queue_size=queue_size)
        self._poll_interval = poll_interval
        self._systemctl = systemctl
        self._watched: list[str] = []
        self._stopped: asyncio.Event | None = None

    @property
    def watched_units(self) -> list[str]:
        return list(self._watched)

    # ------------------------------------------------------------------
    # systemctl
    # ------------------------------------------------------------------

    async def _systemctl_show(self, *args: str) -> dict[str, str]:
        cmd = [self._systemctl, "show", *args]
        _log.debug("Running command: %s", " ".join(cmd))
        process = await asyncio.create_subprocess_exec(
            *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
        )
        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() or f"exit code {process.returncode}"
            raise StateSourceError(f"Command failed: {' '.join(cmd)}: {error_msg}")
        return parse_properties(stdout.decode(errors="replace"))

    # ------------------------------------------------------------------
    # StateSource
    # ------------------------------------------------------------------

    async def is_available(self) -> bool:
        try:
            props = await self._systemctl_show("--property=Version")
        except (OSError, StateSourceError) as exc:
            _log.warning("SystemD not detected: %s", exc)
            return False
        version = props.get("Version", "")
        if not version:
            _log.warning("SystemD not detected: no manager version reported")
            return False
        _log.debug("SystemD %s is running", version)
        return True

    async def current_state(self, unit_name: str) -> ServiceState:
        try:
            props = await self._systemctl_show(
                unit_name, "--property=ActiveState", "--property=LoadState"
            )
        except OSError as exc:
            raise StateSourceError(f"Failed to query unit '{unit_name}': {exc}") from exc

        if props.get("LoadState") == "not-found":
            _log.debug("Unit '%s' not found", unit_name)
            return ServiceState.UNKNOWN
        active = props.get("ActiveState")
        _log.debug("Unit '%s' state: %s", unit_name, active)
        return ServiceState.parse(active)

    async def watch(self, unit_name: str) -> None:
        if unit_name in self._watched:
            _log.debug("Already watching unit '%s'", unit_name)
            return
        self._watched.append(unit_name)
        _log.info("Watching state changes for unit '%s'", unit_name)

    async def monitor(self) -> None:
        """Poll every watched unit each interval until :meth:`close`."""
        if self.closed:
            return
        self._stopped = asyncio.Event()
        _log.info("Starting SystemD monitoring (every %.1fs)", self._poll_interval)
        while not self._stopped.is_set():
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self._poll_interval)
            except asyncio.TimeoutError:
                pass
            else:
                break
            await self.poll_once()
        _log.info("SystemD monitoring stopped")

    async def poll_once(self) -> int:
        """Query and publish every watched unit; returns how many succeeded."""
        ok = 0
        for unit_name in list(self._watched):
            if self.closed:
                break
            try:
                state = await self.current_state(unit_name)
            except StateSourceError as exc:
                ContextualLogger(_log, unit=unit_name).error("Failed to get state: %s", exc)
                continue
            self.publish(unit_name, state)
            ok += 1
        return ok

    def close(self) -> None:
        super().close()
        if self._stopped is not None:
            self._stopped.set()
