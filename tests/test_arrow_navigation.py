"""Tests for horizontal caret movement and line wrapping at edges."""

from tilde.document import Document, Position
from tilde.view import Direction, View


def make_view(text, rows=10, cols=40):
    return View(Document.load(text), rows=rows, cols=cols)


def test_right_moves_one_grapheme():
    view = make_view("a中b")
    view.move_cursor(Direction.RIGHT)
    view.move_cursor(Direction.RIGHT)
    assert view.caret == Position(0, 2)
    assert view.caret_column() == 3


def test_right_at_line_end_wraps_to_next_line():
    view = make_view("ab\ncd")
    view.caret = Position(0, 2)
    view.move_cursor(Direction.RIGHT)
    assert view.caret == Position(1, 0)


def test_right_at_document_end_stays():
    view = make_view("ab")
    view.caret = Position(0, 2)
    view.move_cursor(Direction.RIGHT)
    assert view.caret == Position(0, 2)


def test_left_at_line_start_wraps_to_previous_end():
    view = make_view("abc\nd")
    view.caret = Position(1, 0)
    view.move_cursor(Direction.LEFT)
    assert view.caret == Position(0, 3)


def test_left_at_document_start_stays():
    view = make_view("abc")
    view.move_cursor(Direction.LEFT)
    assert view.caret == Position(0, 0)


def test_home_and_end():
    view = make_view("hello")
    view.caret = Position(0, 2)
    view.move_cursor(Direction.END)
    assert view.caret == Position(0, 5)
    view.move_cursor(Direction.HOME)
    assert view.caret == Position(0, 0)


def test_up_on_first_line_stays_on_line():
    view = make_view("hello\nworld")
    view.caret = Position(0, 3)
    view.move_cursor(Direction.UP)
    assert view.caret == Position(0, 3)


def test_down_on_last_line_stays_on_line():
    view = make_view("hello\nworld")
    view.caret = Position(1, 3)
    view.move_cursor(Direction.DOWN)
    assert view.caret == Position(1, 3)


def test_page_down_moves_by_viewport_rows():
    view = make_view("\n".join(str(i) for i in range(30)), rows=10)
    view.move_cursor(Direction.PAGE_DOWN)
    assert view.caret == Position(10, 0)
    view.move_cursor(Direction.PAGE_DOWN)
    view.move_cursor(Direction.PAGE_DOWN)
    assert view.caret == Position(29, 0)
    view.move_cursor(Direction.PAGE_UP)
    assert view.caret == Position(19, 0)


def test_vertical_move_lands_on_grapheme_boundary():
    view = make_view("abcd\n中中")
    view.caret = Position(0, 3)
    view.move_cursor(Direction.DOWN)
    # Column 3 falls inside the second wide cluster; snap to its start
    assert view.caret == Position(1, 1)
