"""Shared pytest fixtures for status-leds tests."""

from __future__ import annotations

import pytest

from status_leds.core.models.config import ServiceConfig, StatusLedsConfig, StripConfig
from status_leds.hardware.mock.mock_hardware import MockByteSink, MockStateSource


@pytest.fixture
def two_service_config() -> StatusLedsConfig:
    """Two services on a 5-LED strip at 10 Hz; svc1 overrides 'active'."""
    return StatusLedsConfig(
        services=[
            ServiceConfig(name="svc1", states_map={"active": "00ff5500"}),
            ServiceConfig(name="svc2"),
        ],
        strip=StripConfig(length=5, hertz=10),
    )


@pytest.fixture
def sink() -> MockByteSink:
    return MockByteSink()


@pytest.fixture
def source() -> MockStateSource:
    return MockStateSource()
