"""Pydantic model for service state events."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from status_leds.core.models.state import ServiceState


class ServiceEvent(BaseModel):
    """A unit's state as reported by the state source at *timestamp*."""

    model_config = ConfigDict(frozen=True)

    unit_name: str = Field(description="systemd unit name, e.g. 'ssh.service'")
    state: ServiceState
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
