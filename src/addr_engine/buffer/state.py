"""Cursor selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field

from addr_engine.address.ranges import LineRange


@dataclass(slots=True)
class BufferState:
    """Mutable holder of the current selection."""

    cursor: LineRange = field(default_factory=lambda: LineRange.single(0))

    def set_cursor(self, selection: LineRange) -> None:
        self.cursor = selection
