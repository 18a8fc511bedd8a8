"""Bounds checks for ranges handed to buffers by callers."""

from __future__ import annotations

from addr_engine.address.ranges import LineRange

from .document import BufferDocument


class BufferValidationError(RuntimeError):
    """Raised when a caller supplies a selection outside the document."""

    def __init__(self, message: str, *, selection: LineRange | None = None) -> None:
        super().__init__(message)
        self.selection = selection


def ensure_selection(document: BufferDocument, selection: LineRange) -> LineRange:
    first = selection.first()
    if first is not None and first < 0:
        raise BufferValidationError("Negative line index", selection=selection)
    last = selection.last()
    if last is not None and last >= document.line_count:
        raise BufferValidationError(
            f"Line {last} out of range for {document.line_count} lines",
            selection=selection,
        )
    return selection
