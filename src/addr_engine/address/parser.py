"""Ordered-choice recursive-descent parser for address expressions.

Every rule returns ``(node, next_position)`` on success or ``None`` on
failure; a failing alternative never consumes input, so the caller simply
tries the next one. ``Expr`` itself never fails: when no term matches it
yields an implicit cursor reference and consumes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TypeVar

import regex

from .ast import (
    AbsoluteLine,
    AddressNode,
    Block,
    CursorRef,
    Expand,
    ExpandAround,
    Group,
    Intersection,
    Invert,
    LastLine,
    LineNode,
    LineSpan,
    MarkRef,
    Offset,
    RelativeLine,
    Search,
    SingleLine,
    Union,
    WholeBuffer,
)
from .errors import InvalidPatternError
from .ranges import MAX_DELTA, MAX_INDEX, MIN_DELTA

T = TypeVar("T")
Parsed = Optional[Tuple[T, int]]

_UINT = regex.compile(r"[0-9]+")
_INT = regex.compile(r"-?[0-9]+")
# mark names stop at whitespace and at the characters that can follow a term
MARK_NAME_STOPS = "+*^&#()"
_MARK_NAME = regex.compile(rf"[^\s{regex.escape(MARK_NAME_STOPS)}]+")


def is_mark_name(name: str) -> bool:
    """True when ``'name`` would parse back as a reference to ``name``."""

    return _MARK_NAME.fullmatch(name) is not None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing the longest address prefix of ``text``."""

    text: str
    node: AddressNode
    consumed: int
    diagnostics: Tuple[InvalidPatternError, ...] = ()

    @property
    def remainder(self) -> str:
        return self.text[self.consumed :]

    @property
    def matched(self) -> bool:
        """False when the input held no address and the cursor stands in."""

        return not (isinstance(self.node, CursorRef) and self.node.implicit)


class AddressParser:
    """Parses one expression; create a fresh instance per input."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._diagnostics: List[InvalidPatternError] = []

    def parse(self) -> ParseResult:
        node, end = self._expr(0)
        return ParseResult(
            text=self.text,
            node=node,
            consumed=end,
            diagnostics=tuple(self._diagnostics),
        )

    # Expr := Term ('+' Term)* | <empty>
    def _expr(self, pos: int) -> Tuple[AddressNode, int]:
        first = self._term(pos)
        if first is None:
            return CursorRef(implicit=True), pos

        node, pos = first
        terms = [node]
        while self._at(pos, "+"):
            following = self._term(pos + 1)
            if following is None:
                break
            node, pos = following
            terms.append(node)

        if len(terms) == 1:
            return terms[0], pos
        return Union(tuple(terms)), pos

    # Term := Offset | Block | Expand2 | Expand1 | Intersection | Mark | Primary
    #
    # Every composite starts with the same Primary at the same position, so
    # the primary is parsed once and the postfix forms are tried in order.
    def _term(self, pos: int) -> Parsed[AddressNode]:
        primary = self._primary(pos)
        if primary is None:
            return None

        node, after = primary
        suffixes: Tuple[Callable[[AddressNode, int], Parsed[AddressNode]], ...] = (
            self._offset,
            self._block,
            self._expand_around,
            self._expand,
            self._intersection,
        )
        for suffix in suffixes:
            composite = suffix(node, after)
            if composite is not None:
                return composite
        return primary

    def _offset(self, target: AddressNode, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "^"):
            return None
        delta = self._int(pos + 1)
        if delta is None:
            return None
        return Offset(target, delta[0]), delta[1]

    def _block(self, target: AddressNode, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "&"):
            return None
        return Block(target), pos + 1

    def _expand_around(self, target: AddressNode, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "##"):
            return None
        count = self._int(pos + 2)
        if count is None:
            return None
        return ExpandAround(target, count[0]), count[1]

    def _expand(self, target: AddressNode, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "#"):
            return None
        count = self._int(pos + 1)
        if count is None:
            return None
        return Expand(target, count[0]), count[1]

    def _intersection(self, left: AddressNode, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "*"):
            return None
        right = self._primary(pos + 1)
        if right is None:
            return None
        return Intersection(left, right[0]), right[1]

    # Primary := Search | RangeOrSingle | Invert | Special | Mark | '(' Expr ')'
    def _primary(self, pos: int) -> Parsed[AddressNode]:
        for rule in (
            self._search,
            self._range_or_single,
            self._invert,
            self._special,
            self._mark,
            self._group,
        ):
            parsed = rule(pos)
            if parsed is not None:
                return parsed
        return None

    def _search(self, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "/"):
            return None
        close = self.text.find("/", pos + 1)
        if close <= pos + 1:
            return None
        pattern = self.text[pos + 1 : close]
        try:
            compiled = regex.compile(pattern)
        except regex.error as exc:
            self._record(InvalidPatternError(pattern, position=pos, reason=str(exc)))
            return None
        return Search(pattern, compiled), close + 1

    def _range_or_single(self, pos: int) -> Parsed[AddressNode]:
        start = self._line(pos)
        if start is None:
            return None
        start_node, after = start
        if self._at(after, "-"):
            end = self._line(after + 1)
            if end is not None:
                return LineSpan(start_node, end[0]), end[1]
        return SingleLine(start_node), after

    def _invert(self, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "!"):
            return None
        inner, end = self._expr(pos + 1)
        return Invert(inner), end

    def _special(self, pos: int) -> Parsed[AddressNode]:
        if self._at(pos, "%"):
            return WholeBuffer(), pos + 1
        if self._at(pos, "."):
            return CursorRef(), pos + 1
        return None

    def _mark(self, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "'"):
            return None
        found = _MARK_NAME.match(self.text, pos + 1)
        if found is None:
            return None
        return MarkRef(found.group()), found.end()

    def _group(self, pos: int) -> Parsed[AddressNode]:
        if not self._at(pos, "("):
            return None
        inner, end = self._expr(pos + 1)
        if not self._at(end, ")"):
            return None
        return Group(inner), end + 1

    # Line := UInt '^' Int | UInt | '$'
    def _line(self, pos: int) -> Parsed[LineNode]:
        base = self._uint(pos)
        if base is not None:
            value, after = base
            if self._at(after, "^"):
                delta = self._int(after + 1)
                if delta is not None:
                    return RelativeLine(value, delta[0]), delta[1]
            return AbsoluteLine(value), after
        if self._at(pos, "$"):
            return LastLine(), pos + 1
        return None

    def _uint(self, pos: int) -> Parsed[int]:
        found = _UINT.match(self.text, pos)
        if found is None:
            return None
        value = int(found.group())
        if value > MAX_INDEX:
            return None
        return value, found.end()

    def _int(self, pos: int) -> Parsed[int]:
        found = _INT.match(self.text, pos)
        if found is None:
            return None
        value = int(found.group())
        if not MIN_DELTA <= value <= MAX_DELTA:
            return None
        return value, found.end()

    def _at(self, pos: int, token: str) -> bool:
        return self.text.startswith(token, pos)

    def _record(self, error: InvalidPatternError) -> None:
        if all(seen.position != error.position for seen in self._diagnostics):
            self._diagnostics.append(error)


def parse_address(text: str) -> ParseResult:
    """Parse the longest address prefix of ``text``."""

    return AddressParser(text).parse()


__all__ = [
    "MARK_NAME_STOPS",
    "AddressParser",
    "ParseResult",
    "is_mark_name",
    "parse_address",
]
