"""Structural block detection used by the ``&`` address operator."""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from addr_engine.address.ranges import LineRange

BlockFinder = Callable[[Sequence[str], int], LineRange]


def _blank(line: str) -> bool:
    return not line.strip()


def _indent(line: str) -> int:
    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip())


def paragraph_block(lines: Sequence[str], index: int) -> LineRange:
    """Contiguous non-blank lines around ``index``; a blank line stands alone."""

    if not 0 <= index < len(lines):
        return LineRange.empty()
    if _blank(lines[index]):
        return LineRange.single(index)

    start = index
    while start > 0 and not _blank(lines[start - 1]):
        start -= 1
    end = index
    while end + 1 < len(lines) and not _blank(lines[end + 1]):
        end += 1
    return LineRange.span(start, end)


def indent_block(lines: Sequence[str], index: int) -> LineRange:
    """Lines indented at least as deep as ``index``, blank edges trimmed."""

    if not 0 <= index < len(lines):
        return LineRange.empty()
    if _blank(lines[index]):
        return LineRange.single(index)

    depth = _indent(lines[index])

    def inside(row: int) -> bool:
        line = lines[row]
        return _blank(line) or _indent(line) >= depth

    start = index
    while start > 0 and inside(start - 1):
        start -= 1
    end = index
    while end + 1 < len(lines) and inside(end + 1):
        end += 1

    while _blank(lines[start]):
        start += 1
    while _blank(lines[end]):
        end -= 1
    return LineRange.span(start, end)


BLOCK_FINDERS: Dict[str, BlockFinder] = {
    "paragraph": paragraph_block,
    "indent": indent_block,
}


def get_block_finder(style: str) -> BlockFinder:
    try:
        return BLOCK_FINDERS[style]
    except KeyError as exc:
        raise ValueError(f"Unknown block style '{style}'") from exc


__all__ = [
    "BLOCK_FINDERS",
    "BlockFinder",
    "get_block_finder",
    "indent_block",
    "paragraph_block",
]
