"""Exception hierarchy for status-leds.

Everything raised on purpose by this package derives from
:class:`StatusLedsError` so the CLI can report startup failures in one place.
Device write failures are not wrapped: the :class:`~status_leds.core.renderer.Renderer`
handles the sink's ``OSError`` directly.
"""

from __future__ import annotations


class StatusLedsError(Exception):
    """Base exception for all status-leds errors.

    Attributes:
        message: Human-readable description.
        hint: Optional suggestion for how to fix the problem.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    def get_full_message(self) -> str:
        """Return the message followed by the hint, if any."""
        if self.hint:
            return f"{self.message}\n\nSuggestion: {self.hint}"
        return self.message


class ConfigurationError(StatusLedsError):
    """Configuration is invalid, cannot be parsed, or does not fit the strip."""


class ColorFormatError(StatusLedsError, ValueError):
    """A colour string is not exactly 8 hex digits (after an optional prefix)."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(
            f"Invalid colour '{value}': {reason}",
            hint="Use 8 hex digits in RRGGBBWW order, e.g. '00ff0000'",
        )
        self.value = value


class CapacityExceededError(StatusLedsError):
    """More cells were requested than the strip has LEDs."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Cannot add more services: strip only has {capacity} LEDs")
        self.capacity = capacity


class CellNotFoundError(StatusLedsError, LookupError):
    """No cell exists at the requested position or for the requested unit."""


class StateSourceError(StatusLedsError):
    """A state query against the service manager failed."""


class StateSourceUnavailableError(StateSourceError):
    """The service manager is not reachable at startup."""


class DeviceOpenError(StatusLedsError):
    """The output device could not be opened."""
