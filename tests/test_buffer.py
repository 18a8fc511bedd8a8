from __future__ import annotations

import pytest

from addr_engine.address import EmptyBufferError, LineRange
from addr_engine.buffer import (
    Buffer,
    BufferDocument,
    BufferValidationError,
    MarkTable,
    indent_block,
    paragraph_block,
)
from addr_engine.runtime.settings import EngineSettings

PYTHON_SOURCE = (
    "def f():",
    "    a = 1",
    "",
    "    b = 2",
    "def g():",
    "    c = 3",
)


def make_buffer(text: str = "foo\nbar\nbaz\nqux\n") -> Buffer:
    return Buffer.from_text(text, settings=EngineSettings())


def test_document_has_no_phantom_trailing_line() -> None:
    assert BufferDocument.from_text("foo\nbar\n").line_count == 2
    assert BufferDocument.from_text("").line_count == 0


def test_document_snapshot_is_a_tuple() -> None:
    document = BufferDocument.from_text("a\nb")

    assert document.snapshot() == ("a", "b")
    assert document.line_count == 2


def test_new_buffer_starts_on_first_line() -> None:
    buffer = make_buffer()

    assert buffer.state.cursor == LineRange.single(0)
    assert buffer.evaluate("") == LineRange.single(0)


def test_empty_buffer_has_empty_cursor_and_rejects_last_line() -> None:
    buffer = make_buffer("")

    assert buffer.state.cursor == LineRange.empty()
    with pytest.raises(EmptyBufferError):
        buffer.evaluate("$")


def test_marks_are_visible_to_addresses() -> None:
    buffer = make_buffer()
    buffer.set_mark("a", LineRange.of([0, 3]))

    assert buffer.evaluate("'a") == LineRange.of([0, 3])
    assert buffer.evaluate("'a+1-2") == LineRange.of([0, 1, 2, 3])

    buffer.remove_mark("a")

    assert buffer.evaluate("'a") == LineRange.empty()


def test_out_of_range_cursor_and_marks_are_rejected() -> None:
    buffer = make_buffer()

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(LineRange.single(9))
    with pytest.raises(BufferValidationError) as excinfo:
        buffer.set_mark("far", LineRange.of([2, 4]))
    assert excinfo.value.selection == LineRange.of([2, 4])


def test_select_moves_the_cursor() -> None:
    buffer = make_buffer()

    selected = buffer.select("/ba/")

    assert selected == LineRange.of([1, 2])
    assert buffer.evaluate(".") == LineRange.of([1, 2])
    assert buffer.evaluate("!.") == LineRange.of([0, 3])


def test_select_drops_lines_past_the_end() -> None:
    buffer = make_buffer()

    selected = buffer.select("2#5")

    assert selected == LineRange.of([2, 3])
    assert buffer.state.cursor == selected


def test_snapshot_is_isolated_from_later_changes() -> None:
    buffer = make_buffer()
    view = buffer.snapshot()

    buffer.set_mark("b", LineRange.single(1))
    buffer.set_cursor(LineRange.single(3))

    assert view.lookup_mark("b") is None
    assert view.cursor == LineRange.single(0)
    assert buffer.snapshot().lookup_mark("b") == LineRange.single(1)


def test_snapshot_marks_are_read_only() -> None:
    view = make_buffer().snapshot()

    with pytest.raises(TypeError):
        view.marks["x"] = LineRange.single(0)  # type: ignore[index]


def test_mark_table_round_trips_through_serialize() -> None:
    table = MarkTable({"top": [0], "pair": [3, 1]})

    restored = MarkTable(table.serialize())

    assert restored.names() == ("pair", "top")
    assert restored.get("pair") == LineRange.of([1, 3])
    assert "top" in restored
    assert len(restored) == 2


def test_mark_table_rejects_names_addresses_cannot_reach() -> None:
    table = MarkTable()

    for name in ("", "two words", "a+b", "x*y", "up^1", "p&", "n#2", "(m)"):
        with pytest.raises(ValueError):
            table.set(name, LineRange.single(0))
    assert len(table) == 0


def test_buffer_mark_names_match_what_addresses_can_reach() -> None:
    buffer = make_buffer()

    with pytest.raises(ValueError):
        buffer.set_mark("a+b", LineRange.single(0))

    buffer.set_mark("top.1", LineRange.single(2))

    assert buffer.evaluate("'top.1") == LineRange.single(2)


def test_paragraph_block_spans_non_blank_neighbours() -> None:
    lines = ("a", "b", "", "c")

    assert paragraph_block(lines, 1) == LineRange.of([0, 1])
    assert paragraph_block(lines, 2) == LineRange.single(2)
    assert paragraph_block(lines, 3) == LineRange.single(3)
    assert paragraph_block(lines, 4) == LineRange.empty()


def test_indent_block_follows_nesting() -> None:
    assert indent_block(PYTHON_SOURCE, 1) == LineRange.of([1, 2, 3])
    assert indent_block(PYTHON_SOURCE, 5) == LineRange.single(5)
    assert indent_block(PYTHON_SOURCE, 0) == LineRange.span(0, 5)
    assert indent_block(PYTHON_SOURCE, 2) == LineRange.single(2)


def test_buffer_block_style_comes_from_settings() -> None:
    buffer = Buffer.from_text(
        "\n".join(PYTHON_SOURCE), settings=EngineSettings(block_style="indent")
    )

    assert buffer.evaluate("3&") == LineRange.of([1, 2, 3])
    assert make_buffer("\n".join(PYTHON_SOURCE)).evaluate("3&") == LineRange.of(
        [3, 4, 5]
    )
