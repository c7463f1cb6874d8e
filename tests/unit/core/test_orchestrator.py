"""Tests for Orchestrator startup validation, wiring and teardown."""

import asyncio

import pytest

from status_leds.core.exceptions import (
    ConfigurationError,
    StateSourceError,
    StateSourceUnavailableError,
)
from status_leds.core.models.color import LOADING, Color
from status_leds.core.models.config import ServiceConfig, StatusLedsConfig, StripConfig
from status_leds.core.models.state import ServiceState
from status_leds.core.orchestrator import ExitReason, Orchestrator
from status_leds.core.renderer import RendererState
from tests.helpers.runtime import wait_for

OFF_FRAME = bytes(20)


class TestConstruction:
    def test_one_cell_per_service_in_order(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        assert [c.unit_name for c in orch.buffer] == ["svc1", "svc2"]
        assert [c.position for c in orch.buffer] == [0, 1]
        assert orch.buffer.capacity == 5

    def test_loading_colour_applied(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        assert all(c.color == LOADING for c in orch.buffer)

    def test_too_many_services_fails_fast(self, source, sink):
        config = StatusLedsConfig.model_construct(
            services=[ServiceConfig(name=f"s{i}") for i in range(3)],
            strip=StripConfig(length=2),
        )
        with pytest.raises(ConfigurationError, match="More services"):
            Orchestrator(config, source, sink)
        assert sink.frames == []


class TestRun:
    async def test_unavailable_source_is_fatal_and_lights_off(self, two_service_config, sink):
        from status_leds.hardware.mock.mock_hardware import MockStateSource

        orch = Orchestrator(two_service_config, MockStateSource(available=False), sink)
        with pytest.raises(StateSourceUnavailableError):
            await orch.run(asyncio.Event())
        assert sink.frames == [OFF_FRAME]
        assert orch.renderer.state is RendererState.STOPPED

    async def test_registration_failure_is_fatal_and_lights_off(self, two_service_config, source, sink):
        source.failing_units.add("svc2")
        orch = Orchestrator(two_service_config, source, sink)
        with pytest.raises(StateSourceError):
            await orch.run(asyncio.Event())
        assert sink.frames[-1] == OFF_FRAME

    async def test_initial_loading_frame_written_first(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        shutdown = asyncio.Event()
        task = asyncio.create_task(orch.run(shutdown))
        await wait_for(lambda: len(sink.frames) >= 1)
        assert sink.frames[0] == LOADING.to_bytes() * 2 + bytes(12)
        shutdown.set()
        assert await asyncio.wait_for(task, timeout=2.0) is ExitReason.SIGNAL

    async def test_initial_states_applied_and_units_watched(self, two_service_config, source, sink):
        source.states["svc2"] = ServiceState.FAILED
        orch = Orchestrator(two_service_config, source, sink)
        shutdown = asyncio.Event()
        task = asyncio.create_task(orch.run(shutdown))
        await wait_for(lambda: orch.router.applied >= 2)
        assert source.watched == ["svc1", "svc2"]
        assert orch.buffer.get(0).color == Color.from_hex("00ff5500")
        assert orch.buffer.get(1).color == Color.from_hex("55002200")
        shutdown.set()
        await task

    async def test_signal_shutdown_turns_lights_off(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        shutdown = asyncio.Event()
        task = asyncio.create_task(orch.run(shutdown))
        await wait_for(lambda: len(sink.frames) >= 3)
        shutdown.set()
        assert await asyncio.wait_for(task, timeout=2.0) is ExitReason.SIGNAL
        assert sink.frames[-1] == OFF_FRAME
        assert sink.frames.count(OFF_FRAME) == 1
        assert source.closed
        assert orch.renderer.state is RendererState.STOPPED

    async def test_monitor_exit_triggers_shutdown(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        task = asyncio.create_task(orch.run(asyncio.Event()))
        await wait_for(lambda: orch.renderer.state is RendererState.RUNNING)
        source.close()
        reason = await asyncio.wait_for(task, timeout=2.0)
        assert reason in (ExitReason.MONITOR_EXITED, ExitReason.ROUTER_EXITED)
        assert sink.frames[-1] == OFF_FRAME

    async def test_failing_monitor_triggers_shutdown(self, two_service_config, source, sink):
        async def broken_monitor() -> None:
            raise RuntimeError("bus went away")

        source.monitor = broken_monitor  # type: ignore[method-assign]
        orch = Orchestrator(two_service_config, source, sink)
        reason = await asyncio.wait_for(orch.run(asyncio.Event()), timeout=2.0)
        assert reason is ExitReason.MONITOR_EXITED
        assert sink.frames[-1] == OFF_FRAME

    async def test_cancellation_still_turns_lights_off(self, two_service_config, source, sink):
        orch = Orchestrator(two_service_config, source, sink)
        task = asyncio.create_task(orch.run(asyncio.Event()))
        await wait_for(lambda: orch.renderer.state is RendererState.RUNNING)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert sink.frames[-1] == OFF_FRAME
