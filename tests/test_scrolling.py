"""Tests for keeping the caret inside the viewport."""

from tilde.document import Document, Position
from tilde.view import Direction, View


def numbered_lines(count):
    return "\n".join(f"line {i}" for i in range(count))


def test_scroll_down_by_minimum():
    view = View(Document.load(numbered_lines(50)), rows=10, cols=40)
    for _ in range(10):
        view.move_cursor(Direction.DOWN)
    assert view.caret.line == 10
    assert view.top_line == 1


def test_scroll_up_by_minimum():
    view = View(Document.load(numbered_lines(50)), rows=10, cols=40)
    view.caret = Position(30, 0)
    view.scroll_to_cursor()
    assert view.top_line == 21
    view.move_cursor(Direction.UP)
    assert view.top_line == 21
    view.caret = Position(15, 0)
    view.scroll_to_cursor()
    assert view.top_line == 15


def test_no_scroll_while_caret_visible():
    view = View(Document.load(numbered_lines(50)), rows=10, cols=40)
    view.caret = Position(9, 0)
    view.scroll_to_cursor()
    assert view.scroll == (0, 0)


def test_horizontal_scroll_right_and_back():
    view = View(Document.load("x" * 100), rows=5, cols=20)
    view.move_cursor(Direction.END)
    assert view.caret_column() == 100
    assert view.left_column == 81
    assert view.caret_screen_position() == (0, 19)

    view.move_cursor(Direction.HOME)
    assert view.left_column == 0


def test_horizontal_scroll_snaps_forward_past_wide_cluster():
    # Columns: "a" 0, "中" 1-2, then "b" repeated
    view = View(Document.load("a中" + "b" * 10), rows=5, cols=4)
    view.caret = Position(0, 4)  # column 5
    view.scroll_to_cursor()
    # The naive edge (column 2) would cut the wide cluster in half
    assert view.left_column == 3
    assert view.caret_screen_position() == (0, 2)


def test_left_edge_snaps_back_to_wide_cluster_start():
    view = View(Document.load("bbbbbbbbbb\na中bbbbbbb"), rows=5, cols=5)
    view.caret = Position(0, 6)
    view.scroll_to_cursor()
    assert view.left_column == 2
    view.move_cursor(Direction.LEFT)
    view.move_cursor(Direction.LEFT)
    assert view.left_column == 2

    view.move_cursor(Direction.DOWN)
    assert view.caret == Position(1, 3)
    assert view.left_column == 1
    assert view.caret_screen_position() == (1, 3)


def test_resize_rescrolls():
    view = View(Document.load(numbered_lines(50)), rows=20, cols=40)
    view.caret = Position(15, 0)
    view.scroll_to_cursor()
    assert view.top_line == 0
    view.resize(5, 40)
    assert view.top_line == 11
    assert view.viewport_size == (5, 40)


def test_zero_sized_viewport_does_not_fail():
    view = View(Document.load(numbered_lines(5)), rows=0, cols=0)
    view.move_cursor(Direction.DOWN)
    assert view.caret == Position(1, 0)
    assert list(view.visible_rows()) == []
