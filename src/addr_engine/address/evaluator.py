"""Evaluation of parsed addresses against a buffer snapshot."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional, Tuple

from addr_engine.runtime import telemetry
from addr_engine.runtime.settings import EngineSettings

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
from .context import AddressContext
from .errors import EmptyBufferError, PatternTimeoutError, RangeTooLargeError
from .parser import parse_address
from .ranges import INDEX_MODULUS, LineRange, shift_index

NodeHandler = Callable[["AddressEvaluator", Any], LineRange]


class AddressEvaluator:
    """Turns syntax trees into line ranges for one snapshot."""

    def __init__(
        self, context: AddressContext, *, settings: Optional[EngineSettings] = None
    ) -> None:
        self.context = context
        self.settings = settings or EngineSettings.from_env()

    def evaluate(self, node: AddressNode) -> LineRange:
        handler = _NODE_HANDLERS.get(type(node))
        if handler is None:
            raise TypeError(f"Cannot evaluate {type(node).__name__}")
        return handler(self, node)

    def resolve_line(self, node: LineNode) -> int:
        if isinstance(node, AbsoluteLine):
            return node.index
        if isinstance(node, RelativeLine):
            return shift_index(node.base, node.delta)
        if isinstance(node, LastLine):
            count = self.context.line_count
            if count <= 0:
                raise EmptyBufferError()
            return count - 1
        raise TypeError(f"Not a line address: {type(node).__name__}")

    def check_span(self, operator: str, requested: int) -> None:
        limit = self.settings.max_span
        if limit is not None and requested > limit:
            raise RangeTooLargeError(operator, requested=requested, limit=limit)


def _eval_search(evaluator: AddressEvaluator, node: Search) -> LineRange:
    budget = evaluator.settings.pattern_timeout
    if budget is None:
        return LineRange.of(
            index
            for index, line in enumerate(evaluator.context.lines)
            if node.regex.search(line)
        )

    # one budget for the whole buffer, not per line
    deadline = time.monotonic() + budget
    matched = []
    for index, line in enumerate(evaluator.context.lines):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise PatternTimeoutError(node.pattern, timeout=budget)
        try:
            found = node.regex.search(line, timeout=remaining)
        except TimeoutError as exc:
            raise PatternTimeoutError(node.pattern, timeout=budget) from exc
        if found:
            matched.append(index)
    return LineRange.of(matched)


def _eval_line_span(evaluator: AddressEvaluator, node: LineSpan) -> LineRange:
    start = evaluator.resolve_line(node.start)
    end = evaluator.resolve_line(node.end)
    if end >= start:
        evaluator.check_span(str(node), end - start + 1)
    return LineRange.span(start, end)


def _eval_single(evaluator: AddressEvaluator, node: SingleLine) -> LineRange:
    return LineRange.single(evaluator.resolve_line(node.line))


def _eval_invert(evaluator: AddressEvaluator, node: Invert) -> LineRange:
    inner = evaluator.evaluate(node.inner)
    return inner.complement(evaluator.context.line_count)


def _eval_whole(evaluator: AddressEvaluator, node: WholeBuffer) -> LineRange:
    return LineRange.whole(evaluator.context.line_count)


def _eval_cursor(evaluator: AddressEvaluator, node: CursorRef) -> LineRange:
    return LineRange.of(evaluator.context.cursor.lines)


def _eval_mark(evaluator: AddressEvaluator, node: MarkRef) -> LineRange:
    stored = evaluator.context.lookup_mark(node.name)
    if stored is None:
        return LineRange.empty()
    return LineRange.of(stored.lines)


def _eval_group(evaluator: AddressEvaluator, node: Group) -> LineRange:
    return evaluator.evaluate(node.inner)


def _eval_offset(evaluator: AddressEvaluator, node: Offset) -> LineRange:
    return evaluator.evaluate(node.target).offset(node.delta)


def _eval_block(evaluator: AddressEvaluator, node: Block) -> LineRange:
    target = evaluator.evaluate(node.target)
    return LineRange.empty().union(
        *(evaluator.context.block_of(index) for index in target)
    )


def _eval_expand_around(evaluator: AddressEvaluator, node: ExpandAround) -> LineRange:
    target = evaluator.evaluate(node.target)
    width = min(2 * abs(node.count) + 1, INDEX_MODULUS)
    evaluator.check_span(str(node), len(target) * width)
    return target.expand_around(node.count)


def _eval_expand(evaluator: AddressEvaluator, node: Expand) -> LineRange:
    target = evaluator.evaluate(node.target)
    if node.count >= 0:
        requested = len(target) * (node.count + 1)
    else:
        # backward steps pile up on line 0
        requested = sum(min(-node.count, index) + 1 for index in target.lines)
    evaluator.check_span(str(node), requested)
    return target.expand(node.count)


def _eval_intersection(evaluator: AddressEvaluator, node: Intersection) -> LineRange:
    left = evaluator.evaluate(node.left)
    right = evaluator.evaluate(node.right)
    return left.intersection(right)


def _eval_union(evaluator: AddressEvaluator, node: Union) -> LineRange:
    return LineRange.empty().union(*(evaluator.evaluate(term) for term in node.terms))


_NODE_HANDLERS: Dict[type, NodeHandler] = {
    Search: _eval_search,
    LineSpan: _eval_line_span,
    SingleLine: _eval_single,
    Invert: _eval_invert,
    WholeBuffer: _eval_whole,
    CursorRef: _eval_cursor,
    MarkRef: _eval_mark,
    Group: _eval_group,
    Offset: _eval_offset,
    Block: _eval_block,
    ExpandAround: _eval_expand_around,
    Expand: _eval_expand,
    Intersection: _eval_intersection,
    Union: _eval_union,
}


def evaluate_prefix(
    expression: str,
    context: AddressContext,
    *,
    strict: Optional[bool] = None,
    settings: Optional[EngineSettings] = None,
) -> Tuple[LineRange, str]:
    """Evaluate the address at the start of ``expression``.

    Returns the selected lines and the text left after the address, which
    is where a command layer finds its verb. ``strict`` (defaulting to the
    ``strict_patterns`` setting) turns a recorded invalid search pattern
    into a raised ``InvalidPatternError``.
    """

    active = settings or EngineSettings.from_env()
    strict_mode = active.strict_patterns if strict is None else strict
    with telemetry.span(
        "address::evaluate",
        component="address",
        metadata={"expression": expression, "lines": context.line_count},
    ) as handle:
        parsed = parse_address(expression)
        for problem in parsed.diagnostics:
            telemetry.record_event(
                "address.invalid_pattern",
                level="warning",
                data={"pattern": problem.pattern, "position": problem.position},
            )
        if parsed.diagnostics and strict_mode:
            raise parsed.diagnostics[0]
        if not parsed.matched:
            telemetry.record_event(
                "address.cursor_fallback",
                level="debug",
                data={"expression": expression},
            )

        result = AddressEvaluator(context, settings=active).evaluate(parsed.node)
        handle.add_metadata("selected", len(result))
        return result, parsed.remainder


def evaluate(
    expression: str,
    context: AddressContext,
    *,
    strict: Optional[bool] = None,
    settings: Optional[EngineSettings] = None,
) -> LineRange:
    """Return the lines ``expression`` addresses in ``context``.

    Never fails for syntax: text without a leading address selects the
    cursor. Raises ``EmptyBufferError`` for ``$`` on an empty buffer,
    ``RangeTooLargeError`` past ``max_span``, ``PatternTimeoutError`` when a
    search outlives ``pattern_timeout`` and, in strict mode,
    ``InvalidPatternError``.
    """

    result, remainder = evaluate_prefix(
        expression, context, strict=strict, settings=settings
    )
    if remainder:
        telemetry.record_event(
            "address.trailing_text",
            level="debug",
            data={"expression": expression, "remainder": remainder},
        )
    return result


__all__ = ["AddressEvaluator", "evaluate", "evaluate_prefix"]
