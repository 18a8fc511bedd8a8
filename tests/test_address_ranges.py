from __future__ import annotations

from addr_engine.address.ranges import (
    MAX_INDEX,
    LineRange,
    saturating_sub,
    shift_index,
    wrapping_add,
)


def test_wrapping_add_rolls_over_at_index_width() -> None:
    assert wrapping_add(MAX_INDEX, 1) == 0
    assert wrapping_add(0, -1) == MAX_INDEX
    assert wrapping_add(5, 3) == 8


def test_saturating_sub_stops_at_zero() -> None:
    assert saturating_sub(3, 5) == 0
    assert saturating_sub(7, 2) == 5


def test_shift_index_wraps_forward_and_saturates_backward() -> None:
    assert shift_index(MAX_INDEX, 2) == 1
    assert shift_index(2, -10) == 0
    assert shift_index(10, -3) == 7


def test_span_is_inclusive_and_reversed_span_is_empty() -> None:
    assert LineRange.span(1, 3) == LineRange.of([1, 2, 3])
    assert LineRange.span(4, 2) == LineRange.empty()
    assert LineRange.span(2, 2) == LineRange.single(2)


def test_line_range_deduplicates_and_iterates_sorted() -> None:
    selection = LineRange.of([3, 1, 3, 2, 1])

    assert len(selection) == 3
    assert list(selection) == [1, 2, 3]
    assert selection.first() == 1
    assert selection.last() == 3
    assert 2 in selection
    assert 7 not in selection


def test_empty_range_is_falsy() -> None:
    empty = LineRange.empty()

    assert not empty
    assert empty.first() is None
    assert empty.last() is None


def test_complement_ignores_indices_past_the_buffer() -> None:
    selection = LineRange.of([1, 10])

    assert selection.complement(4) == LineRange.of([0, 2, 3])
    assert LineRange.whole(4).complement(4) == LineRange.empty()


def test_offset_applies_wrap_and_saturation_per_index() -> None:
    selection = LineRange.of([0, 2, 5])

    assert selection.offset(2) == LineRange.of([2, 4, 7])
    assert selection.offset(-3) == LineRange.of([0, 2])


def test_expand_forward_and_backward() -> None:
    selection = LineRange.of([1, 6])

    assert selection.expand(2) == LineRange.of([1, 2, 3, 6, 7, 8])
    assert selection.expand(-2) == LineRange.of([0, 1, 4, 5, 6])
    assert selection.expand(0) == selection


def test_expand_around_wraps_below_zero() -> None:
    selection = LineRange.single(0)

    assert selection.expand_around(1) == LineRange.of([MAX_INDEX, 0, 1])
    assert selection.expand_around(-1) == selection.expand_around(1)


def test_union_and_intersection_build_new_ranges() -> None:
    left = LineRange.of([0, 1])
    right = LineRange.of([1, 2])

    merged = left.union(right, LineRange.single(5))

    assert merged == LineRange.of([0, 1, 2, 5])
    assert left.intersection(right) == LineRange.single(1)
    assert left == LineRange.of([0, 1])
    assert left.issubset(merged)
