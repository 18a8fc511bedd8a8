"""Line-index sets and the wrapping/saturating arithmetic applied to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Iterator, Tuple

INDEX_BITS = 64
INDEX_MODULUS = 1 << INDEX_BITS
MAX_INDEX = INDEX_MODULUS - 1
MIN_DELTA = -(1 << (INDEX_BITS - 1))
MAX_DELTA = (1 << (INDEX_BITS - 1)) - 1


def wrapping_add(index: int, delta: int) -> int:
    """``index + delta`` modulo ``2**64``."""

    return (index + delta) % INDEX_MODULUS


def saturating_sub(index: int, amount: int) -> int:
    """``index - amount`` clamped at zero."""

    return max(index - amount, 0)


def shift_index(index: int, delta: int) -> int:
    """Move one index by a signed delta: wrap forward, saturate backward."""

    if delta >= 0:
        return wrapping_add(index, delta)
    return saturating_sub(index, -delta)


@dataclass(frozen=True, slots=True)
class LineRange:
    """Immutable, deduplicated set of zero-based line indices."""

    lines: frozenset[int] = frozenset()

    @classmethod
    def of(cls, indices: Iterable[int]) -> "LineRange":
        return cls(frozenset(indices))

    @classmethod
    def empty(cls) -> "LineRange":
        return cls()

    @classmethod
    def single(cls, index: int) -> "LineRange":
        return cls(frozenset((index,)))

    @classmethod
    def span(cls, start: int, end: int) -> "LineRange":
        """Inclusive ``[start, end]``; empty when ``end < start``."""

        if end < start:
            return cls()
        return cls(frozenset(range(start, end + 1)))

    @classmethod
    def whole(cls, length: int) -> "LineRange":
        return cls(frozenset(range(max(length, 0))))

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.lines))

    def __len__(self) -> int:
        return len(self.lines)

    def __contains__(self, index: object) -> bool:
        return index in self.lines

    def __bool__(self) -> bool:
        return bool(self.lines)

    def __repr__(self) -> str:
        return f"LineRange({sorted(self.lines)!r})"

    def sorted(self) -> Tuple[int, ...]:
        return tuple(sorted(self.lines))

    def first(self) -> int | None:
        return min(self.lines) if self.lines else None

    def last(self) -> int | None:
        return max(self.lines) if self.lines else None

    def union(self, *others: "LineRange") -> "LineRange":
        merged = set(self.lines)
        for other in others:
            merged.update(other.lines)
        return LineRange(frozenset(merged))

    def intersection(self, other: "LineRange") -> "LineRange":
        return LineRange(self.lines & other.lines)

    def complement(self, length: int) -> "LineRange":
        """Indices in ``[0, length)`` that are not in this range."""

        return LineRange(frozenset(i for i in range(max(length, 0)) if i not in self.lines))

    def offset(self, delta: int) -> "LineRange":
        return LineRange(frozenset(shift_index(i, delta) for i in self.lines))

    def expand(self, count: int) -> "LineRange":
        """Grow each index forward by ``count`` lines, or backward when negative.

        Forward steps wrap; backward steps stop at line 0.
        """

        grown: set[int] = set()
        if count >= 0:
            for index in self.lines:
                grown.update(wrapping_add(index, step) for step in range(count + 1))
        else:
            for index in self.lines:
                grown.update(saturating_sub(index, step) for step in range(-count + 1))
        return LineRange(frozenset(grown))

    def expand_around(self, count: int) -> "LineRange":
        """Grow each index by ``abs(count)`` in both directions, wrapping at zero."""

        radius = abs(count)
        grown: set[int] = set()
        for index in self.lines:
            grown.update(
                wrapping_add(index, step) for step in range(-radius, radius + 1)
            )
        return LineRange(frozenset(grown))

    def issubset(self, other: AbstractSet[int] | "LineRange") -> bool:
        target = other.lines if isinstance(other, LineRange) else other
        return self.lines <= target


__all__ = [
    "INDEX_BITS",
    "INDEX_MODULUS",
    "MAX_INDEX",
    "MIN_DELTA",
    "MAX_DELTA",
    "LineRange",
    "saturating_sub",
    "shift_index",
    "wrapping_add",
]
