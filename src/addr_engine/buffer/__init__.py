"""Buffer abstractions that address expressions are evaluated against."""

from .blocks import BLOCK_FINDERS, get_block_finder, indent_block, paragraph_block
from .buffer import Buffer, BufferView
from .document import BufferDocument
from .marks import MarkTable
from .state import BufferState
from .validation import BufferValidationError, ensure_selection

__all__ = [
    "BLOCK_FINDERS",
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "MarkTable",
    "ensure_selection",
    "get_block_finder",
    "indent_block",
    "paragraph_block",
]
