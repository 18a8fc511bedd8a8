"""Buffer facade combining document, cursor state and marks."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from addr_engine.address import evaluate
from addr_engine.address.ranges import LineRange
from addr_engine.runtime import telemetry
from addr_engine.runtime.settings import EngineSettings

from .blocks import get_block_finder
from .document import BufferDocument
from .marks import MarkTable
from .state import BufferState
from .validation import ensure_selection


@dataclass(frozen=True, slots=True)
class BufferView:
    """Immutable snapshot that address expressions are evaluated against."""

    lines: Sequence[str]
    cursor: LineRange
    marks: Mapping[str, LineRange] = field(
        default_factory=lambda: MappingProxyType({})
    )
    block_style: str = "paragraph"

    @classmethod
    def of(
        cls,
        lines: Iterable[str],
        *,
        cursor: Iterable[int] = (),
        marks: Optional[Mapping[str, Iterable[int]]] = None,
        block_style: str = "paragraph",
    ) -> "BufferView":
        frozen_marks = {
            name: LineRange.of(indices) for name, indices in (marks or {}).items()
        }
        return cls(
            lines=tuple(lines),
            cursor=LineRange.of(cursor),
            marks=MappingProxyType(frozen_marks),
            block_style=block_style,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def lookup_mark(self, name: str) -> Optional[LineRange]:
        return self.marks.get(name)

    def block_of(self, index: int) -> LineRange:
        return get_block_finder(self.block_style)(self.lines, index)


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        marks: Optional[MarkTable] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        if state is None:
            start = LineRange.single(0) if self.document.line_count else LineRange()
            state = BufferState(cursor=start)
        self.state = state
        self.marks = marks or MarkTable()
        self.settings = settings or EngineSettings.from_env()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        settings: Optional[EngineSettings] = None,
    ) -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text), settings=settings)

    def snapshot(self) -> BufferView:
        return BufferView(
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            marks=self.marks.freeze(),
            block_style=self.settings.block_style,
        )

    def set_cursor(self, selection: LineRange) -> None:
        ensure_selection(self.document, selection)
        self.state.set_cursor(selection)
        telemetry.record_event(
            "buffer.cursor",
            level="debug",
            data={"buffer": self.name, "lines": len(selection)},
        )

    def set_mark(self, name: str, selection: LineRange) -> None:
        ensure_selection(self.document, selection)
        self.marks.set(name, selection)
        telemetry.record_event(
            "buffer.mark",
            level="debug",
            data={"buffer": self.name, "mark": name, "lines": len(selection)},
        )

    def remove_mark(self, name: str) -> Optional[LineRange]:
        return self.marks.remove(name)

    def evaluate(self, expression: str, *, strict: Optional[bool] = None) -> LineRange:
        return evaluate(
            expression, self.snapshot(), strict=strict, settings=self.settings
        )

    def select(self, expression: str) -> LineRange:
        """Evaluate ``expression`` and make the in-buffer part the new cursor."""

        with telemetry.span(
            name="buffer::select",
            component=True,
            metadata={"buffer": self.name},
        ) as handle:
            selected = self.evaluate(expression).intersection(
                LineRange.whole(self.document.line_count)
            )
            handle.add_metadata("selected", len(selected))
            self.set_cursor(selected)
            return selected
