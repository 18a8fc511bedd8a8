"""Read-only view of a buffer that address evaluation depends on."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .ranges import LineRange


class AddressContext(Protocol):
    """Snapshot contract consumed by the evaluator.

    Implementations must not change while an evaluation is in flight, and
    ``cursor`` / ``lookup_mark`` hand out values the caller cannot mutate.
    """

    @property
    def lines(self) -> Sequence[str]:
        ...

    @property
    def line_count(self) -> int:
        ...

    @property
    def cursor(self) -> LineRange:
        ...

    def lookup_mark(self, name: str) -> Optional[LineRange]:
        """Return the range stored under ``name``, or ``None``."""
        ...

    def block_of(self, index: int) -> LineRange:
        """Return every line of the structural block containing ``index``."""
        ...


__all__ = ["AddressContext"]
