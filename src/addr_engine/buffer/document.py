"""Line storage backing address evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Plain list-of-lines text storage.

    Unlike an editing buffer there is no implicit trailing empty line: an
    empty text has zero lines, which is the case ``$`` refuses to resolve.
    """

    _lines: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.splitlines())

    def snapshot(self) -> Sequence[str]:
        """Return the current lines as an immutable tuple."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)
