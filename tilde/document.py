"""Document model: an ordered, never-empty sequence of lines."""

from __future__ import annotations

import errno
import logging
import os
import re
import shutil
import tempfile
from dataclasses import dataclass
from typing import Optional, Union

from .constants import EditorConstants
from .line import Line

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True, order=True)
class Position:
    """A logical location: line index, then grapheme index within the line.

    Ordering follows document order.
    """
    line: int = 0
    grapheme: int = 0


def detect_line_ending(text: str, default: str = EditorConstants.DEFAULT_LINE_ENDING) -> str:
    """Return the first line terminator found in text, or ``default``."""
    match = _LINE_BREAK.search(text)
    return match.group(0) if match else default


def is_line_terminator(ch: str) -> bool:
    return ch in EditorConstants.LINE_ENDINGS


class Document:
    """Lines of text plus the file they came from.

    All edits go through ``insert_char``, ``delete_before`` and
    ``delete_after``; each returns the caret position after the edit.
    """

    def __init__(self, lines: Optional[list[Line]] = None, file_path: Optional[str] = None,
                 line_ending: str = EditorConstants.DEFAULT_LINE_ENDING):
        self._lines: list[Line] = lines if lines else [Line()]
        self.file_path = file_path
        self.line_ending = line_ending
        self.dirty = False

    @classmethod
    def load(cls, raw_text: Union[str, bytes], file_path: Optional[str] = None,
             default_line_ending: str = EditorConstants.DEFAULT_LINE_ENDING) -> "Document":
        """Build a document from file content.

        Bytes are decoded as UTF-8; invalid sequences become U+FFFD so the
        result is always a valid grapheme sequence. The first line
        terminator encountered decides the style used when saving.
        """
        if isinstance(raw_text, bytes):
            raw_text = raw_text.decode("utf-8", errors="replace")
        line_ending = detect_line_ending(raw_text, default_line_ending)
        lines = [Line(part) for part in _LINE_BREAK.split(raw_text)]
        return cls(lines, file_path=file_path, line_ending=line_ending)

    @classmethod
    def open(cls, path: str, default_line_ending: str = EditorConstants.DEFAULT_LINE_ENDING) -> "Document":
        """Read ``path`` from disk. Raises OSError if it cannot be read."""
        with open(path, "rb") as f:
            content = f.read()
        logger.debug(f"Loaded {len(content)} bytes from {path}")
        return cls.load(content, file_path=path, default_line_ending=default_line_ending)

    # --- Read accessors ---
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> Line:
        if index < 0 or index >= len(self._lines):
            raise IndexError(f"line {index} out of range 0..{len(self._lines) - 1}")
        return self._lines[index]

    def text_of_line(self, index: int) -> str:
        return self.line(index).text

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    def is_dirty(self) -> bool:
        return self.dirty

    def text(self) -> str:
        return self.line_ending.join(line.text for line in self._lines)

    def end_position(self) -> Position:
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def _check(self, pos: Position) -> Line:
        line = self.line(pos.line)
        if pos.grapheme < 0 or pos.grapheme > len(line):
            raise IndexError(f"grapheme {pos.grapheme} out of range 0..{len(line)} on line {pos.line}")
        return line

    # --- Edits ---
    def insert_char(self, pos: Position, ch: str) -> Position:
        line = self._check(pos)
        if is_line_terminator(ch):
            head, tail = line.split(pos.grapheme)
            self._lines[pos.line:pos.line + 1] = [head, tail]
            self.dirty = True
            return Position(pos.line + 1, 0)
        # A combining mark merges into the cluster before it, inserting 0
        inserted = line.insert(pos.grapheme, ch)
        if ch:
            self.dirty = True
        return Position(pos.line, pos.grapheme + inserted)

    def delete_before(self, pos: Position) -> Position:
        line = self._check(pos)
        if pos.grapheme > 0:
            line.remove(pos.grapheme - 1)
            self.dirty = True
            return Position(pos.line, pos.grapheme - 1)
        if pos.line == 0:
            return pos
        previous = self._lines[pos.line - 1]
        join_point = Position(pos.line - 1, len(previous))
        self._lines[pos.line - 1:pos.line + 1] = [previous.concat(line)]
        self.dirty = True
        return join_point

    def delete_after(self, pos: Position) -> Position:
        line = self._check(pos)
        if pos.grapheme < len(line):
            line.remove(pos.grapheme)
            self.dirty = True
        elif pos.line + 1 < len(self._lines):
            following = self._lines[pos.line + 1]
            self._lines[pos.line:pos.line + 2] = [line.concat(following)]
            self.dirty = True
        return pos

    # --- Persistence ---
    def save(self) -> None:
        """Write the document to ``file_path``.

        Raises:
            OSError: no path is associated, or the write failed.
        """
        if not self.file_path:
            raise OSError(errno.ENOENT, "No file name")
        self._write(self.file_path)
        self.dirty = False

    def save_as(self, path: str) -> None:
        """Write to ``path`` and associate the document with it on success."""
        self._write(path)
        self.file_path = path
        self.dirty = False

    def _write(self, path: str) -> None:
        """Write atomically: temp file in the same directory, then rename.

        A symlink is followed so the link survives, and an existing file
        keeps its permission bits.
        """
        content = self.text().encode("utf-8")
        path = os.path.realpath(path)
        dir_name = os.path.dirname(path) or '.'
        suffix = os.path.splitext(path)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            if os.path.exists(path):
                shutil.copymode(path, temp_filename)
            os.replace(temp_filename, path)
        except OSError as e:
            logger.warning(f"Could not save {path}: {e}")
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            raise
        logger.info(f"Saved {len(content)} bytes to {path}")
