"""Tests for Document loading and editing."""

import pytest

from tilde.document import Document, Position, detect_line_ending


def make_doc(*lines):
    return Document.load("\n".join(lines))


def test_new_document_has_one_empty_line():
    doc = Document()
    assert doc.line_count() == 1
    assert doc.text_of_line(0) == ""
    assert not doc.is_dirty()


def test_load_splits_lines():
    doc = Document.load("one\ntwo\nthree")
    assert doc.line_count() == 3
    assert doc.text_of_line(1) == "two"
    assert doc.line_ending == "\n"


def test_load_empty_text():
    doc = Document.load("")
    assert doc.line_count() == 1
    assert doc.text_of_line(0) == ""


def test_load_trailing_newline_gives_empty_last_line():
    doc = Document.load("a\n")
    assert doc.line_count() == 2
    assert doc.text_of_line(1) == ""


def test_load_crlf():
    doc = Document.load("a\r\nb")
    assert doc.line_ending == "\r\n"
    assert doc.text_of_line(0) == "a"
    assert doc.text_of_line(1) == "b"


def test_first_line_ending_wins():
    assert detect_line_ending("a\r\nb\nc") == "\r\n"
    assert detect_line_ending("a\rb\r\n") == "\r"
    assert detect_line_ending("abc") == "\n"
    assert detect_line_ending("abc", default="\r\n") == "\r\n"


def test_invalid_utf8_becomes_replacement_character():
    doc = Document.load(b"ok\xffok")
    assert doc.text_of_line(0) == "ok\ufffdok"
    assert len(doc.line(0)) == 5


def test_line_out_of_range():
    doc = make_doc("a")
    with pytest.raises(IndexError):
        doc.line(1)


def test_insert_char():
    doc = make_doc("ac")
    pos = doc.insert_char(Position(0, 1), "b")
    assert pos == Position(0, 2)
    assert doc.text_of_line(0) == "abc"
    assert doc.is_dirty()


def test_insert_line_terminator_splits_line():
    doc = make_doc("hello world")
    pos = doc.insert_char(Position(0, 5), "\n")
    assert pos == Position(1, 0)
    assert doc.text_of_line(0) == "hello"
    assert doc.text_of_line(1) == " world"


def test_insert_at_invalid_position():
    doc = make_doc("ab")
    with pytest.raises(IndexError):
        doc.insert_char(Position(0, 3), "x")
    with pytest.raises(IndexError):
        doc.insert_char(Position(1, 0), "x")


def test_delete_before_within_line():
    doc = make_doc("abc")
    pos = doc.delete_before(Position(0, 2))
    assert pos == Position(0, 1)
    assert doc.text_of_line(0) == "ac"


def test_delete_before_joins_lines():
    doc = make_doc("ab", "cd")
    pos = doc.delete_before(Position(1, 0))
    assert pos == Position(0, 2)
    assert doc.line_count() == 1
    assert doc.text_of_line(0) == "abcd"


def test_delete_before_at_document_start_is_noop():
    doc = make_doc("ab")
    pos = doc.delete_before(Position(0, 0))
    assert pos == Position(0, 0)
    assert doc.text_of_line(0) == "ab"
    assert not doc.is_dirty()


def test_delete_after_within_line():
    doc = make_doc("abc")
    pos = doc.delete_after(Position(0, 1))
    assert pos == Position(0, 1)
    assert doc.text_of_line(0) == "ac"


def test_delete_after_joins_next_line():
    doc = make_doc("ab", "cd")
    pos = doc.delete_after(Position(0, 2))
    assert pos == Position(0, 2)
    assert doc.text_of_line(0) == "abcd"


def test_delete_after_at_document_end_is_noop():
    doc = make_doc("ab")
    pos = doc.delete_after(Position(0, 2))
    assert pos == Position(0, 2)
    assert not doc.is_dirty()


def test_wide_character_delete():
    doc = make_doc("a中b")
    pos = doc.delete_before(Position(0, 2))
    assert pos == Position(0, 1)
    assert doc.text_of_line(0) == "ab"
    assert doc.line(0).total_width == 2


def test_positions_order_by_document():
    assert Position(0, 5) < Position(1, 0)
    assert Position(1, 2) < Position(1, 3)
    assert sorted([Position(2, 0), Position(0, 9), Position(1, 1)]) == [
        Position(0, 9), Position(1, 1), Position(2, 0)]


def test_end_position():
    doc = make_doc("ab", "xyz")
    assert doc.end_position() == Position(1, 3)


def test_insert_combining_mark_keeps_caret_and_marks_dirty():
    doc = make_doc("e")
    pos = doc.insert_char(Position(0, 1), "\u0301")
    assert pos == Position(0, 1)
    assert doc.text_of_line(0) == "e\u0301"
    assert doc.is_dirty()
