"""Syntax tree produced by the address parser.

Each grammar rule has one frozen node type. ``str(node)`` renders the node
back to address text, which is what diagnostics and telemetry report.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field
from typing import Tuple

import regex


@dataclass(frozen=True, slots=True)
class AbsoluteLine:
    index: int

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True, slots=True)
class RelativeLine:
    """``base^delta``: a line number nudged by a signed delta."""

    base: int
    delta: int

    def __str__(self) -> str:
        return f"{self.base}^{self.delta}"


@dataclass(frozen=True, slots=True)
class LastLine:
    def __str__(self) -> str:
        return "$"


LineNode = typing.Union[AbsoluteLine, RelativeLine, LastLine]


@dataclass(frozen=True, slots=True)
class Search:
    pattern: str
    regex: "regex.Pattern[str]" = field(compare=False, repr=False)

    def __str__(self) -> str:
        return f"/{self.pattern}/"


@dataclass(frozen=True, slots=True)
class LineSpan:
    start: LineNode
    end: LineNode

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class SingleLine:
    line: LineNode

    def __str__(self) -> str:
        return str(self.line)


@dataclass(frozen=True, slots=True)
class Invert:
    inner: "AddressNode"

    def __str__(self) -> str:
        return f"!{self.inner}"


@dataclass(frozen=True, slots=True)
class WholeBuffer:
    def __str__(self) -> str:
        return "%"


@dataclass(frozen=True, slots=True)
class CursorRef:
    """The current selection; ``implicit`` when no address text was given."""

    implicit: bool = False

    def __str__(self) -> str:
        return "" if self.implicit else "."


@dataclass(frozen=True, slots=True)
class MarkRef:
    name: str

    def __str__(self) -> str:
        return f"'{self.name}"


@dataclass(frozen=True, slots=True)
class Group:
    inner: "AddressNode"

    def __str__(self) -> str:
        return f"({self.inner})"


@dataclass(frozen=True, slots=True)
class Offset:
    target: "AddressNode"
    delta: int

    def __str__(self) -> str:
        return f"{self.target}^{self.delta}"


@dataclass(frozen=True, slots=True)
class Block:
    target: "AddressNode"

    def __str__(self) -> str:
        return f"{self.target}&"


@dataclass(frozen=True, slots=True)
class ExpandAround:
    target: "AddressNode"
    count: int

    def __str__(self) -> str:
        return f"{self.target}##{self.count}"


@dataclass(frozen=True, slots=True)
class Expand:
    target: "AddressNode"
    count: int

    def __str__(self) -> str:
        return f"{self.target}#{self.count}"


@dataclass(frozen=True, slots=True)
class Intersection:
    left: "AddressNode"
    right: "AddressNode"

    def __str__(self) -> str:
        return f"{self.left}*{self.right}"


@dataclass(frozen=True, slots=True)
class Union:
    terms: Tuple["AddressNode", ...]

    def __post_init__(self) -> None:
        if not self.terms:
            raise ValueError("Union requires at least one term")

    def __str__(self) -> str:
        return "+".join(str(term) for term in self.terms)


AddressNode = typing.Union[
    Search,
    LineSpan,
    SingleLine,
    Invert,
    WholeBuffer,
    CursorRef,
    MarkRef,
    Group,
    Offset,
    Block,
    ExpandAround,
    Expand,
    Intersection,
    Union,
]


__all__ = [
    "AbsoluteLine",
    "RelativeLine",
    "LastLine",
    "LineNode",
    "Search",
    "LineSpan",
    "SingleLine",
    "Invert",
    "WholeBuffer",
    "CursorRef",
    "MarkRef",
    "Group",
    "Offset",
    "Block",
    "ExpandAround",
    "Expand",
    "Intersection",
    "Union",
    "AddressNode",
]
