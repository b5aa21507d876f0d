"""Test the line store."""

import pytest
from evilined.model import LineStore, CursorPosition
from evilined.exceptions import BoundsError, CapacityError


def test_empty_store():
    """Test a new store has no lines."""
    store = LineStore()
    assert store.count == 0
    assert len(store) == 0
    assert store.lines == []


def test_index_out_of_range():
    """Test that out-of-range reads raise a bounds error."""
    store = LineStore(["a"])
    with pytest.raises(BoundsError):
        store[1]
    with pytest.raises(BoundsError):
        store[-1]


def test_make_room_shifts_lines():
    """Test opening empty slots in the middle."""
    store = LineStore(["a", "b", "c"])
    store.make_room(1, 2)
    assert store.lines == ["a", "", "", "b", "c"]


def test_make_room_at_end():
    """Test opening a slot after the last line."""
    store = LineStore(["a"])
    store.make_room(1, 1)
    assert store.lines == ["a", ""]


def test_make_room_over_capacity():
    """Capacity failure leaves the store untouched."""
    store = LineStore(["a", "b"], capacity=3)
    with pytest.raises(CapacityError):
        store.make_room(0, 2)
    assert store.lines == ["a", "b"]


def test_close_gap():
    """Test removing lines from the middle."""
    store = LineStore(["a", "b", "c", "d"])
    store.close_gap(1, 2)
    assert store.lines == ["a", "d"]


def test_close_gap_past_end_is_clamped():
    """Test removing more lines than remain."""
    store = LineStore(["a", "b", "c"])
    store.close_gap(1, 10)
    assert store.lines == ["a"]


def test_set_line_truncates():
    """Test that over-long text is truncated."""
    store = LineStore(["a"], max_line_length=5)
    store.set_line(0, "abcdefgh")
    assert store[0] == "abcde"


def test_set_line_bad_index():
    store = LineStore(["a"])
    with pytest.raises(BoundsError):
        store.set_line(3, "x")


def test_insert_line():
    """Test inserting a single line."""
    store = LineStore(["a", "c"])
    store.insert_line(1, "b")
    assert store.lines == ["a", "b", "c"]


def test_insert_line_full():
    """Test that inserting into a full store fails without change."""
    store = LineStore(["a"], capacity=1)
    with pytest.raises(CapacityError):
        store.insert_line(0, "b")
    assert store.lines == ["a"]


def test_ensure_exists_grows_store():
    """Test growing the store with empty lines."""
    store = LineStore()
    store.ensure_exists(2)
    assert store.lines == ["", "", ""]


def test_ensure_exists_stops_at_capacity():
    """Test that growing stops at capacity."""
    store = LineStore(capacity=2)
    store.ensure_exists(5)
    assert store.count == 2


def test_replace_all_is_all_or_nothing():
    """Test that oversized content is rejected as a whole."""
    store = LineStore(["keep"], capacity=2)
    with pytest.raises(CapacityError):
        store.replace_all(["1", "2", "3"])
    assert store.lines == ["keep"]


def test_iteration_is_snapshot():
    """Test that iteration is not affected by mutation."""
    store = LineStore(["a", "b"])
    seen = []
    for line in store:
        seen.append(line)
        store.clear()
    assert seen == ["a", "b"]


def test_lines_snapshot_is_independent():
    """Test that the lines snapshot is a copy."""
    store = LineStore(["a"])
    snapshot = store.lines
    store.set_line(0, "b")
    assert snapshot == ["a"]


def test_cursor_position_ordering():
    assert CursorPosition(0, 5) < CursorPosition(1, 0)
    assert CursorPosition(1, 2) < CursorPosition(1, 3)
    assert CursorPosition(1, 3) >= CursorPosition(1, 3)
