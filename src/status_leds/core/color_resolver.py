"""ColorResolver — (service index, state name) → colour with strip fallback."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from status_leds.core.models.color import Color
from status_leds.core.models.config import StatusLedsConfig

_log = logging.getLogger(__name__)


class ColorResolver:
    """Read-only view of the configured palette.

    Resolution order: the service's own ``states_map`` entry, then the
    strip-wide ``colours`` entry, then ``None``.  Malformed strings are
    treated as missing (they are rejected at config load, so this only
    guards hand-built mappings).

    Args:
        overrides: Per-service override maps, indexed by service position.
        defaults: Strip-wide state → colour map.
    """

    def __init__(
        self,
        overrides: Sequence[Mapping[str, str]],
        defaults: Mapping[str, str],
    ) -> None:
        self._overrides = [dict(m) for m in overrides]
        self._defaults = dict(defaults)

    @classmethod
    def from_config(cls, config: StatusLedsConfig) -> ColorResolver:
        return cls(
            overrides=[svc.states_map for svc in config.services],
            defaults=config.strip.colours,
        )

    def resolve(self, service_index: int, state_name: str) -> Color | None:
        """Return the colour for *state_name* on service *service_index*."""
        if 0 <= service_index < len(self._overrides):
            override = self._parse(self._overrides[service_index].get(state_name))
            if override is not None:
                return override
        return self._parse(self._defaults.get(state_name))

    @staticmethod
    def _parse(value: str | None) -> Color | None:
        if value is None:
            return None
        try:
            return Color.from_hex(value)
        except ValueError:
            _log.debug("Ignoring malformed colour %r", value)
            return None
