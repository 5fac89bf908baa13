"""Caret, scrolling and rendering on top of a Document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from . import search
from .constants import EditorConstants
from .document import Document, Position
from .line import Line
from .search import SearchState


class Direction(Enum):
    """Cursor movement directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


VERTICAL = (Direction.UP, Direction.DOWN, Direction.PAGE_UP, Direction.PAGE_DOWN)


class Highlight(Enum):
    """How a run of rendered text should be drawn."""
    NONE = "none"
    MATCH = "match"
    ACTIVE_MATCH = "active_match"


Segment = tuple[str, Highlight]


@dataclass(frozen=True)
class DocumentStatus:
    """Status fields for the status bar. Line and column are 1-based."""
    file_name: str
    dirty: bool
    line_count: int
    current_line: int
    current_column: int


class View:
    """Caret and viewport over a document.

    ``top_line`` and ``left_column`` anchor the viewport in document
    coordinates; ``left_column`` is measured in display columns.
    ``desired_column`` remembers the caret's display column across
    consecutive vertical moves and is cleared by any other action.
    """

    def __init__(self, document: Document, rows: int = 24, cols: int = 80):
        self.document = document
        self.caret = Position()
        self.top_line = 0
        self.left_column = 0
        self.rows = rows
        self.cols = cols
        self.search: Optional[SearchState] = None
        self.desired_column: Optional[int] = None

    @property
    def scroll(self) -> tuple[int, int]:
        return (self.top_line, self.left_column)

    @property
    def viewport_size(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def resize(self, rows: int, cols: int) -> None:
        self.rows = max(0, rows)
        self.cols = max(0, cols)
        self.scroll_to_cursor()

    def _caret_line(self) -> Line:
        return self.document.line(self.caret.line)

    def caret_column(self) -> int:
        """Display column of the caret within its line."""
        return self._caret_line().display_width(0, self.caret.grapheme)

    # --- Movement ---
    def move_cursor(self, direction: Direction) -> None:
        if direction in VERTICAL:
            page = max(self.rows, 1)
            delta = {
                Direction.UP: -1,
                Direction.DOWN: 1,
                Direction.PAGE_UP: -page,
                Direction.PAGE_DOWN: page,
            }[direction]
            self._move_vertically(delta)
        else:
            self.desired_column = None
            self._move_horizontally(direction)
        self.scroll_to_cursor()

    def _move_vertically(self, delta: int) -> None:
        if self.desired_column is None:
            self.desired_column = self.caret_column()
        target = min(max(self.caret.line + delta, 0), self.document.line_count() - 1)
        grapheme = self.document.line(target).grapheme_index_at_width(self.desired_column)
        self.caret = Position(target, grapheme)

    def _move_horizontally(self, direction: Direction) -> None:
        line_index, grapheme = self.caret.line, self.caret.grapheme
        length = len(self._caret_line())
        if direction == Direction.LEFT:
            if grapheme > 0:
                self.caret = Position(line_index, grapheme - 1)
            elif line_index > 0:
                self.caret = Position(line_index - 1, len(self.document.line(line_index - 1)))
        elif direction == Direction.RIGHT:
            if grapheme < length:
                self.caret = Position(line_index, grapheme + 1)
            elif line_index + 1 < self.document.line_count():
                self.caret = Position(line_index + 1, 0)
        elif direction == Direction.HOME:
            self.caret = Position(line_index, 0)
        elif direction == Direction.END:
            self.caret = Position(line_index, length)
        else:
            raise ValueError(f"not a horizontal direction: {direction}")

    # --- Edits ---
    def insert_char(self, ch: str) -> None:
        self.caret = self.document.insert_char(self.caret, ch)
        self._after_edit()

    def insert_newline(self) -> None:
        self.insert_char("\n")

    def delete_backward(self) -> None:
        self.caret = self.document.delete_before(self.caret)
        self._after_edit()

    def delete_forward(self) -> None:
        self.caret = self.document.delete_after(self.caret)
        self._after_edit()

    def _after_edit(self) -> None:
        self.desired_column = None
        self.scroll_to_cursor()

    # --- Scrolling ---
    def scroll_to_cursor(self) -> None:
        """Scroll by the least amount that brings the caret into view."""
        rows = max(self.rows, 1)
        cols = max(self.cols, 1)

        if self.caret.line < self.top_line:
            self.top_line = self.caret.line
        elif self.caret.line >= self.top_line + rows:
            self.top_line = self.caret.line - rows + 1

        column = self.caret_column()
        if column < self.left_column:
            self.left_column = column
        elif column >= self.left_column + cols:
            self.left_column = column - cols + 1
        self.left_column = self._snap_left_edge(self.left_column, column, cols)

    def _snap_left_edge(self, edge: int, column: int, cols: int) -> int:
        """Move ``edge`` onto a cluster boundary of the caret line.

        Snaps back to the start of a straddling wide cluster unless that
        would push the caret past the right side of the viewport.
        """
        line = self._caret_line()
        index = line.grapheme_index_at_width(edge)
        start = line.display_width(0, index)
        if start >= edge or index >= len(line):
            return edge
        if column - start < cols:
            return start
        return line.display_width(0, index + 1)

    def caret_screen_position(self) -> tuple[int, int]:
        """(row, column) of the caret relative to the viewport."""
        return (self.caret.line - self.top_line, self.caret_column() - self.left_column)

    # --- Rendering ---
    def visible_rows(self) -> Iterator[str]:
        """Yield the rendered text of each viewport row, top to bottom.

        Rows past the end of the document yield ``EditorConstants.EMPTY_ROW``.
        """
        for segments in self.visible_segments():
            yield "".join(text for text, _ in segments)

    def visible_segments(self) -> Iterator[list[Segment]]:
        """Yield each viewport row as runs of (text, highlight)."""
        marks = self._marks_by_line()
        for line_index in range(self.top_line, self.top_line + max(self.rows, 0)):
            if line_index >= self.document.line_count():
                yield [(EditorConstants.EMPTY_ROW, Highlight.NONE)]
            else:
                yield self._render_line(self.document.line(line_index), marks.get(line_index, {}))

    def _render_line(self, line: Line, marks: dict[int, Highlight]) -> list[Segment]:
        left = self.left_column
        right = left + max(self.cols, 0)
        segments: list[Segment] = []

        def emit(text: str, highlight: Highlight) -> None:
            if segments and segments[-1][1] == highlight:
                segments[-1] = (segments[-1][0] + text, highlight)
            else:
                segments.append((text, highlight))

        column = 0
        for index, width in enumerate(line.widths):
            start, end = column, column + width
            column = end
            if start >= right:
                break
            if start < left:
                if end > left:
                    # Wide cluster cut by the left edge: keep the columns, drop the glyph
                    emit(" " * (end - left), Highlight.NONE)
                continue
            if end > right:
                break
            emit(line.render_cluster(index), marks.get(index, Highlight.NONE))
        return segments

    def _marks_by_line(self) -> dict[int, dict[int, Highlight]]:
        """Grapheme highlights for search matches on visible lines."""
        marks: dict[int, dict[int, Highlight]] = {}
        if self.search is None:
            return marks
        bottom = self.top_line + max(self.rows, 0)
        active = self.search.active_match
        for match in self.search.matches:
            start, end = match
            if not self.top_line <= start.line < bottom:
                continue
            highlight = Highlight.ACTIVE_MATCH if match == active else Highlight.MATCH
            line_marks = marks.setdefault(start.line, {})
            for index in range(start.grapheme, end.grapheme):
                line_marks[index] = highlight
        return marks

    def status(self) -> DocumentStatus:
        return DocumentStatus(
            file_name=self.document.file_path or EditorConstants.UNTITLED,
            dirty=self.document.is_dirty(),
            line_count=self.document.line_count(),
            current_line=self.caret.line + 1,
            current_column=self.caret.grapheme + 1,
        )

    def is_untouched(self) -> bool:
        """True for a fresh untitled buffer that has never been edited."""
        return (self.document.file_path is None and not self.document.is_dirty()
                and self.document.line_count() == 1 and len(self.document.line(0)) == 0)

    # --- Search ---
    def begin_search(self) -> None:
        self.search = search.begin(self.document, self.caret)

    def update_search(self, query: str) -> None:
        self.search = search.update_query(self._active_search(), self.document, query)
        self._follow_search()

    def search_next(self) -> None:
        self.search = search.advance(self._active_search())
        self._follow_search()

    def search_previous(self) -> None:
        self.search = search.retreat(self._active_search())
        self._follow_search()

    def end_search(self, accept: bool) -> None:
        """Leave search mode, keeping the active match or restoring the origin."""
        state = self._active_search()
        self.search = None
        self.caret = search.confirm(state) if accept else search.cancel(state)
        self._after_edit()

    def repeat_search(self, query: str, backward: bool = False) -> None:
        """Jump to the next (or previous) occurrence of query from the caret."""
        self.caret = search.find_next(self.document, query, self.caret, backward=backward)
        self._after_edit()

    def _active_search(self) -> SearchState:
        if self.search is None:
            raise RuntimeError("no search in progress")
        return self.search

    def _follow_search(self) -> None:
        self.caret = search.confirm(self._active_search())
        self.desired_column = None
        self.scroll_to_cursor()
