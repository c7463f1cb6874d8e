"""LedBuffer — per-position colour/state cells and frame serialisation.

Each :class:`LedCell` stores its colour and service state as one immutable
:class:`CellState` that is swapped under the cell's own lock, so a reader
never sees a new state paired with an old colour.  No lock is shared
across cells and none is held while a frame is being written out.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterator

from status_leds.core.exceptions import CapacityExceededError, CellNotFoundError
from status_leds.core.models.color import OFF, Color
from status_leds.core.models.config import CHANNELS
from status_leds.core.models.state import ServiceState

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellState:
    """What one LED shows and why."""

    color: Color = OFF
    service_state: ServiceState = ServiceState.UNKNOWN


class LedCell:
    """One addressable LED tracking one unit.

    ``position`` and ``unit_name`` are fixed at creation.
    """

    def __init__(self, position: int, unit_name: str) -> None:
        self._position = position
        self._unit_name = unit_name
        self._lock = threading.Lock()
        self._state = CellState()

    def __repr__(self) -> str:
        state = self.snapshot()
        return (
            f"LedCell(position={self._position}, unit_name={self._unit_name!r}, "
            f"color={state.color}, service_state={state.service_state.value})"
        )

    @property
    def position(self) -> int:
        return self._position

    @property
    def unit_name(self) -> str:
        return self._unit_name

    @property
    def color(self) -> Color:
        return self.snapshot().color

    @property
    def service_state(self) -> ServiceState:
        return self.snapshot().service_state

    def snapshot(self) -> CellState:
        with self._lock:
            return self._state

    def set_color(self, color: Color) -> None:
        with self._lock:
            self._state = CellState(color, self._state.service_state)

    def set_state(self, state: ServiceState, color: Color | None = None) -> None:
        """Set the service state and, if given, the colour in one step."""
        with self._lock:
            new_color = self._state.color if color is None else color
            self._state = CellState(new_color, state)

    def reset(self) -> None:
        with self._lock:
            self._state = CellState()

    def to_bytes(self) -> bytes:
        return self.snapshot().color.to_bytes()


class LedBuffer:
    """Ordered, fixed-capacity collection of :class:`LedCell`.

    Positions are assigned sequentially by :meth:`add_cell` and never
    change.  Lookup by position is O(1); lookup by unit is a linear scan.

    Args:
        capacity: Number of LEDs on the physical strip.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._cells: list[LedCell] = []
        self._add_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[LedCell]:
        return iter(list(self._cells))

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._cells) >= self._capacity

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def add_cell(self, unit_name: str) -> int:
        """Append a cell for *unit_name* and return its position.

        Raises:
            CapacityExceededError: The buffer already holds ``capacity`` cells.
        """
        with self._add_lock:
            if len(self._cells) >= self._capacity:
                raise CapacityExceededError(self._capacity)
            position = len(self._cells)
            self._cells.append(LedCell(position, unit_name))
        _log.info("Added service '%s' to LED position %d", unit_name, position)
        return position

    def get(self, position: int) -> LedCell:
        if 0 <= position < len(self._cells):
            return self._cells[position]
        raise CellNotFoundError(f"No LED cell at position {position}")

    def get_by_unit(self, unit_name: str) -> LedCell:
        for cell in self._cells:
            if cell.unit_name == unit_name:
                return cell
        raise CellNotFoundError(f"No LED cell for unit '{unit_name}'")

    def find_by_unit(self, unit_name: str) -> LedCell | None:
        """Like :meth:`get_by_unit` but returns ``None`` when absent."""
        try:
            return self.get_by_unit(unit_name)
        except CellNotFoundError:
            return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_color(self, position: int, color: Color) -> None:
        self.get(position).set_color(color)

    def set_state(self, position: int, state: ServiceState, color: Color | None = None) -> None:
        self.get(position).set_state(state, color)

    def fill(self, color: Color) -> None:
        """Set every existing cell to *color* (state untouched)."""
        for cell in self._cells:
            cell.set_color(color)

    def reset_all(self) -> None:
        """Turn every cell off and forget its state."""
        for cell in self._cells:
            cell.reset()

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def snapshot_bytes(self, strip_length: int) -> bytes:
        """Return a ``strip_length * 4`` byte frame in R, G, B, W order.

        Positions without a cell (or beyond the populated range) are
        zero-filled; cells at or past *strip_length* are not emitted.
        """
        frame = bytearray(strip_length * CHANNELS)
        for cell in list(self._cells):
            pos = cell.position
            if pos < strip_length:
                offset = pos * CHANNELS
                frame[offset:offset + CHANNELS] = cell.to_bytes()
        return bytes(frame)
