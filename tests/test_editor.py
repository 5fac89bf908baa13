"""Tests for the Editor controller without a real terminal."""

from unittest.mock import MagicMock

import pytest

from tilde.constants import EditorConstants
from tilde.editor import Editor
from tilde.keyboard import KeyboardHandler
from tilde.settings import Settings
from tilde.view import Highlight


@pytest.fixture
def terminal():
    term = MagicMock()
    term.text_rows = 9
    term.width = 40
    return term


def make_editor(terminal, **settings):
    return Editor(terminal=terminal, settings=Settings(**settings))


def press(editor, *keys):
    parser = KeyboardHandler(editor.terminal)
    for key in keys:
        editor.handle_key_event(parser.parse_key(key))


def test_starts_with_empty_untitled_document(terminal):
    editor = make_editor(terminal)
    assert editor.document.file_path is None
    assert editor.document.line_count() == 1
    assert editor.view.viewport_size == (9, 40)
    assert editor.session.message == EditorConstants.HELP_MESSAGE


def test_load_existing_file(terminal, tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("alpha\nbeta", encoding="utf-8")
    editor = make_editor(terminal)
    editor.load_file(str(path))
    assert editor.document.file_path == str(path)
    assert editor.document.text_of_line(1) == "beta"


def test_load_missing_file_binds_path(terminal, tmp_path):
    path = tmp_path / "new.txt"
    editor = make_editor(terminal)
    editor.load_file(str(path))
    assert editor.document.file_path == str(path)
    assert editor.document.text() == ""
    assert not path.exists()
    assert editor.document.is_dirty()


def test_quitting_new_missing_file_warns_first(terminal, tmp_path):
    editor = make_editor(terminal)
    editor.load_file(str(tmp_path / "new.txt"))
    editor.running = True
    press(editor, "<Ctrl-q>")
    assert editor.running
    assert editor.session.message.startswith("WARNING")


def test_load_unreadable_falls_back_to_untitled(terminal, tmp_path):
    editor = make_editor(terminal)
    editor.load_file(str(tmp_path))  # a directory cannot be opened as a file
    assert editor.document.file_path is None
    assert editor.session.message.startswith(f"Could not open {tmp_path}: ")


def test_default_line_ending_setting(terminal, tmp_path):
    editor = make_editor(terminal, default_line_ending="\r\n")
    editor.load_file(str(tmp_path / "new.txt"))
    assert editor.document.line_ending == "\r\n"


def test_typing_and_quitting(terminal):
    editor = make_editor(terminal)
    editor.running = True
    press(editor, 'h', 'i', '<Ctrl-j>', 'x')
    assert editor.document.text() == "hi\nx"

    press(editor, '<Ctrl-q>', '<Ctrl-q>')
    assert editor.running
    press(editor, '<Ctrl-q>')
    assert not editor.running


def test_quit_times_from_settings(terminal):
    editor = make_editor(terminal, quit_times=1)
    editor.running = True
    press(editor, 'x', '<Ctrl-q>')
    assert not editor.running


def test_enter_confirms_search_prompt(terminal, tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("one\ntwo\nthree", encoding="utf-8")
    editor = make_editor(terminal)
    editor.load_file(str(path))
    press(editor, '<Ctrl-f>', 't', 'h', '<Ctrl-j>')
    assert editor.view.caret.line == 2
    assert not editor.session.prompting
    assert editor.document.text() == "one\ntwo\nthree"


def test_resize_updates_view(terminal):
    editor = make_editor(terminal)
    terminal.text_rows = 3
    terminal.width = 12
    editor.handle_resize()
    assert editor.view.viewport_size == (3, 12)


def test_draw_shows_welcome_on_untouched_buffer(terminal):
    editor = make_editor(terminal)
    editor.draw()
    args, kwargs = terminal.draw_frame.call_args
    rows = args[0]
    assert len(rows) == 9
    welcome = rows[3][0]
    assert "tilde editor" in welcome[0]
    assert welcome[1] == Highlight.NONE
    assert kwargs["message_line"] == EditorConstants.HELP_MESSAGE
    assert kwargs["prompt_cursor_x"] is None
    assert kwargs["status_line"].startswith(EditorConstants.UNTITLED)


def test_draw_without_welcome_when_disabled(terminal):
    editor = make_editor(terminal, show_welcome=False)
    editor.draw()
    rows = terminal.draw_frame.call_args[0][0]
    assert all("tilde editor" not in text for row in rows for text, _ in row)


def test_draw_prompt_line(terminal):
    editor = make_editor(terminal)
    press(editor, 'x', '<Ctrl-f>', 'x')
    editor.draw()
    kwargs = terminal.draw_frame.call_args[1]
    assert kwargs["message_line"] == EditorConstants.SEARCH_PROMPT + "x"
    assert kwargs["prompt_cursor_x"] == len(EditorConstants.SEARCH_PROMPT) + 1
