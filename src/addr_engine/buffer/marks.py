"""Named bookmark storage."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from addr_engine.address.parser import MARK_NAME_STOPS, is_mark_name
from addr_engine.address.ranges import LineRange


def _check_name(name: str) -> str:
    if not is_mark_name(name):
        raise ValueError(
            f"Invalid mark name {name!r}: must be non-empty without whitespace "
            f"or any of {MARK_NAME_STOPS!r}"
        )
    return name


class MarkTable:
    """Maps mark names to line ranges; lookups hand out the stored value."""

    def __init__(self, marks: Optional[Mapping[str, Iterable[int]]] = None) -> None:
        self._marks: Dict[str, LineRange] = {}
        if marks:
            self.load(marks)

    def get(self, name: str) -> Optional[LineRange]:
        return self._marks.get(name)

    def set(self, name: str, selection: LineRange) -> None:
        self._marks[_check_name(name)] = LineRange.of(selection.lines)

    def remove(self, name: str) -> Optional[LineRange]:
        return self._marks.pop(name, None)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._marks))

    def __contains__(self, name: object) -> bool:
        return name in self._marks

    def __len__(self) -> int:
        return len(self._marks)

    def serialize(self) -> Mapping[str, tuple[int, ...]]:
        return {name: selection.sorted() for name, selection in self._marks.items()}

    def load(self, data: Mapping[str, Iterable[int]]) -> None:
        for name, indices in data.items():
            self.set(name, LineRange.of(indices))

    def freeze(self) -> Mapping[str, LineRange]:
        """Read-only copy for snapshots."""

        return MappingProxyType(dict(self._marks))
