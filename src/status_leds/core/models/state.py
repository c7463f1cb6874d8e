"""Service state enumeration."""

from __future__ import annotations

from enum import Enum


class ServiceState(str, Enum):
    """``ActiveState`` of a monitored unit.

    Values are the lower-case names used in configuration colour maps.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    ACTIVATING = "activating"
    DEACTIVATING = "deactivating"
    RELOADING = "reloading"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ServiceState:
        """Map free-form text to a state; anything unrecognised is ``UNKNOWN``."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN
