"""Configuration Pydantic models: StatusLedsConfig, StripConfig, ServiceConfig."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from status_leds.core.exceptions import ConfigurationError
from status_leds.core.models.color import Color

# Bytes per LED on the wire (R, G, B, W).
CHANNELS = 4

DEFAULT_COLOURS: dict[str, str] = {
    "active": "00ff0000",
    "inactive": "01010101",
    "reloading": "11551100",
    "failed": "55002200",
    "activating": "00442200",
    "deactivating": "22440000",
}


def _check_colours(colours: dict[str, str], where: str) -> None:
    for state, value in colours.items():
        try:
            Color.from_hex(value)
        except ValueError as exc:
            raise ValueError(f"Invalid color '{value}' for state '{state}'{where}: {exc}") from exc


def check_strip_capacity(service_count: int, length: int) -> None:
    """Raise :class:`ConfigurationError` if *service_count* LEDs don't fit."""
    if service_count > length:
        raise ConfigurationError(
            f"More services ({service_count}) than LEDs ({length})",
            hint="Remove services or increase strip.length",
        )


class ServiceConfig(BaseModel):
    """One monitored unit and its optional per-state colour overrides."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="systemd unit name, e.g. 'ssh.service'")
    states_map: dict[str, str] = Field(
        default_factory=dict,
        description="State name → RRGGBBWW override for this service only",
    )

    @model_validator(mode="after")
    def _validate_colours(self) -> ServiceConfig:
        _check_colours(self.states_map, f" in service '{self.name}'")
        return self


class StripConfig(BaseModel):
    """Physical strip parameters and the strip-wide state palette."""

    model_config = ConfigDict(extra="forbid")

    spidev: str = Field(default="0.0", description="SPI bus.device, opened as /dev/spidev<bus.device>")
    channels: int = Field(default=CHANNELS, description="Colour channels per LED (RGBW only)")
    length: int = Field(default=5, ge=1, le=255, description="Number of LEDs on the strip")
    hertz: int = Field(default=10, gt=0, description="Frame refresh rate")
    colours: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COLOURS),
        description="State name → RRGGBBWW shared by every service",
    )

    @field_validator("channels")
    @classmethod
    def _rgbw_only(cls, value: int) -> int:
        if value != CHANNELS:
            raise ValueError(f"only {CHANNELS}-channel (RGBW) strips are supported, got {value}")
        return value

    @field_validator("colours")
    @classmethod
    def _validate_colours(cls, value: dict[str, str]) -> dict[str, str]:
        _check_colours(value, "")
        return value

    @property
    def period_ms(self) -> int:
        """Render period in whole milliseconds, never below 1."""
        return max(1, 1000 // self.hertz)

    @property
    def device_path(self) -> str:
        return f"/dev/spidev{self.spidev}"


class SystemConfig(BaseModel):
    """Non-hardware runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str | None = Field(default=None, description="Rotating log directory; console only if unset")
    poll_interval_seconds: float = Field(default=5.0, gt=0, description="systemd polling period")
    event_queue_size: int = Field(default=100, ge=1, description="Per-subscriber event queue bound")
    dev_mode: bool = Field(default=False, description="Use mock hardware and state source")


class StatusLedsConfig(BaseModel):
    """Top-level configuration loaded from ``status_leds_config.json`` (or YAML)."""

    model_config = ConfigDict(extra="forbid")

    services: list[ServiceConfig]
    strip: StripConfig = Field(default_factory=StripConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    @model_validator(mode="after")
    def _validate_services(self) -> StatusLedsConfig:
        if not self.services:
            raise ValueError("No services configured")
        names = [s.name for s in self.services]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate service names: {', '.join(duplicates)}")
        if len(self.services) > self.strip.length:
            raise ValueError(f"More services ({len(self.services)}) than LEDs ({self.strip.length})")
        return self


def default_config() -> StatusLedsConfig:
    """Configuration used by ``--write-default-config``."""
    return StatusLedsConfig(services=[ServiceConfig(name="example.service")])
