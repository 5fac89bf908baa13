"""Editor session: prompt modes, quit confirmation and save flows.

The session owns no text itself. It routes each command to the View,
opens and closes the search and save-as prompts, counts down unsaved-quit
confirmations, and turns file errors into status messages.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .commandbar import CommandBar
from .commands import (
    Cancel, Command, Confirm, DeleteBackward, DeleteForward, InsertChar,
    InsertNewline, MoveCursor, Quit, Resize, Save, Search, SearchNext,
    SearchPrevious,
)
from .constants import EditorConstants
from .document import Document
from .search import NoMatch
from .view import Direction, View

logger = logging.getLogger(__name__)

_FORWARD = (Direction.RIGHT, Direction.DOWN)
_BACKWARD = (Direction.LEFT, Direction.UP)


class Mode(Enum):
    NORMAL = "normal"
    SEARCH_PROMPT = "search_prompt"
    SAVE_AS_PROMPT = "save_as_prompt"
    TERMINATED = "terminated"


def describe_error(error: OSError) -> str:
    return error.strerror or str(error)


class Session:
    """State machine driving one editing session over a View."""

    def __init__(self, view: View, quit_times: int = EditorConstants.QUIT_TIMES):
        self.view = view
        self.mode = Mode.NORMAL
        self.quit_times = max(1, quit_times)
        self.quit_remaining = self.quit_times
        self.message: Optional[str] = None
        self.command_bar: Optional[CommandBar] = None
        self.last_query: Optional[str] = None

    @property
    def document(self) -> Document:
        return self.view.document

    @property
    def prompting(self) -> bool:
        return self.mode in (Mode.SEARCH_PROMPT, Mode.SAVE_AS_PROMPT)

    @property
    def terminated(self) -> bool:
        return self.mode == Mode.TERMINATED

    def handle(self, command: Command) -> None:
        """Process one command to completion."""
        if self.mode == Mode.TERMINATED:
            return
        if isinstance(command, Resize):
            self.view.resize(command.rows, command.cols)
            return

        self.message = None
        if isinstance(command, Quit):
            if self.mode == Mode.NORMAL:
                self._quit()
            return
        self.quit_remaining = self.quit_times

        if self.mode == Mode.NORMAL:
            self._handle_normal(command)
        elif self.mode == Mode.SEARCH_PROMPT:
            self._handle_search_prompt(command)
        elif self.mode == Mode.SAVE_AS_PROMPT:
            self._handle_save_as_prompt(command)

    def _set_mode(self, mode: Mode) -> None:
        logger.debug(f"Session mode {self.mode.value} -> {mode.value}")
        self.mode = mode

    # --- Normal mode ---
    def _handle_normal(self, command: Command) -> None:
        if isinstance(command, InsertChar):
            self.view.insert_char(command.ch)
        elif isinstance(command, InsertNewline):
            self.view.insert_newline()
        elif isinstance(command, DeleteBackward):
            self.view.delete_backward()
        elif isinstance(command, DeleteForward):
            self.view.delete_forward()
        elif isinstance(command, MoveCursor):
            self.view.move_cursor(command.direction)
        elif isinstance(command, Save):
            self._save()
        elif isinstance(command, Search):
            self.view.begin_search()
            self.command_bar = CommandBar(EditorConstants.SEARCH_PROMPT)
            self._set_mode(Mode.SEARCH_PROMPT)
        elif isinstance(command, SearchNext):
            self._repeat_search(backward=False)
        elif isinstance(command, SearchPrevious):
            self._repeat_search(backward=True)
        elif isinstance(command, (Confirm, Cancel)):
            pass  # Nothing to confirm or cancel
        else:
            raise TypeError(f"unknown command: {command!r}")

    def _quit(self) -> None:
        if not self.document.is_dirty():
            self._set_mode(Mode.TERMINATED)
            return
        self.quit_remaining -= 1
        if self.quit_remaining <= 0:
            logger.info("Quitting with unsaved changes")
            self._set_mode(Mode.TERMINATED)
            return
        self.message = EditorConstants.QUIT_WARNING_MESSAGE.format(self.quit_remaining)

    def _save(self) -> None:
        if not self.document.file_path:
            self.command_bar = CommandBar(EditorConstants.SAVE_AS_PROMPT)
            self._set_mode(Mode.SAVE_AS_PROMPT)
            return
        try:
            self.document.save()
        except OSError as e:
            logger.warning(f"Save failed: {e}")
            self.message = EditorConstants.SAVE_ERROR_MESSAGE.format(describe_error(e))
            return
        self.message = EditorConstants.SAVED_MESSAGE

    def _repeat_search(self, backward: bool) -> None:
        if not self.last_query:
            self.message = EditorConstants.NO_MATCH_MESSAGE
            return
        try:
            self.view.repeat_search(self.last_query, backward=backward)
        except NoMatch:
            self.message = EditorConstants.NO_MATCH_MESSAGE

    # --- Prompts ---
    def _close_prompt(self) -> None:
        self.command_bar = None
        self._set_mode(Mode.NORMAL)

    def _handle_search_prompt(self, command: Command) -> None:
        bar = self.command_bar
        if isinstance(command, InsertChar):
            bar.insert(command.ch)
            self.view.update_search(bar.value)
        elif isinstance(command, DeleteBackward):
            if bar.delete_backward():
                self.view.update_search(bar.value)
        elif isinstance(command, SearchNext) or (
                isinstance(command, MoveCursor) and command.direction in _FORWARD):
            self._navigate_matches(backward=False)
        elif isinstance(command, SearchPrevious) or (
                isinstance(command, MoveCursor) and command.direction in _BACKWARD):
            self._navigate_matches(backward=True)
        elif isinstance(command, Confirm):
            self.view.end_search(accept=True)
            if bar.value:
                self.last_query = bar.value
            self._close_prompt()
        elif isinstance(command, Cancel):
            self.view.end_search(accept=False)
            self._close_prompt()

    def _navigate_matches(self, backward: bool) -> None:
        try:
            if backward:
                self.view.search_previous()
            else:
                self.view.search_next()
        except NoMatch:
            self.message = EditorConstants.NO_MATCH_MESSAGE

    def _handle_save_as_prompt(self, command: Command) -> None:
        bar = self.command_bar
        if isinstance(command, InsertChar):
            bar.insert(command.ch)
        elif isinstance(command, DeleteBackward):
            bar.delete_backward()
        elif isinstance(command, Confirm):
            path = bar.value
            self._close_prompt()
            if not path:
                self.message = EditorConstants.SAVE_ABORTED_MESSAGE
                return
            self._save_as(path)
        elif isinstance(command, Cancel):
            self._close_prompt()
            self.message = EditorConstants.SAVE_ABORTED_MESSAGE

    def _save_as(self, path: str) -> None:
        try:
            self.document.save_as(path)
        except OSError as e:
            logger.warning(f"Save as {path} failed: {e}")
            self.message = EditorConstants.SAVE_ERROR_MESSAGE.format(describe_error(e))
            return
        self.message = EditorConstants.SAVED_MESSAGE
