"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Iterable, Optional

import blessed

from .constants import EditorConstants
from .statusbar import display_width, fit, format_message
from .view import Highlight, Segment


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading curtsies key events."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Leave fullscreen mode and restore the terminal."""
        try:
            if self._curtsies_input is not None:
                self._curtsies_input.__exit__(None, None, None)
        finally:
            self._curtsies_input = None
            if self.is_fullscreen:
                print(self.term.normal + self.term.exit_fullscreen, end='')
                print(self.term.normal_cursor, end='', flush=True)
                self.is_fullscreen = False

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    def _styled(self, text: str, highlight: Highlight) -> str:
        if highlight == Highlight.ACTIVE_MATCH:
            return self.term.reverse + text + self.term.normal
        if highlight == Highlight.MATCH:
            return self.term.underline + text + self.term.normal
        return text

    def compose_row(self, segments: Iterable[Segment], width: int) -> str:
        """Join highlighted runs and pad the row to ``width`` columns."""
        out = []
        used = 0
        for text, highlight in segments:
            out.append(self._styled(text, highlight))
            used += display_width(text)
        out.append(" " * max(0, width - used))
        return ''.join(out)

    def draw_frame(self, rows: Iterable[list[Segment]], cursor_y: int, cursor_x: int,
                   status_line: str, message_line: str,
                   prompt_cursor_x: Optional[int] = None) -> None:
        """Paint one full frame.

        Args:
            rows: Text rows as highlighted runs, top to bottom
            cursor_y: Caret row within the text area
            cursor_x: Caret column within the text area
            status_line: Status bar text, drawn in reverse video
            message_line: Message or prompt text for the last row
            prompt_cursor_x: Caret column on the message row while a prompt is open
        """
        width = self.term.width
        out = [self.term.hide_cursor, self.term.home]
        for y, segments in enumerate(rows):
            out.append(self.term.move(y, 0) + self.compose_row(segments, width))

        status_y = self.text_rows
        out.append(self.term.move(status_y, 0))
        out.append(self.term.reverse + fit(status_line, width) + self.term.normal)
        out.append(self.term.move(status_y + 1, 0) + format_message(message_line, width))

        if prompt_cursor_x is not None:
            out.append(self.term.move(status_y + 1, min(prompt_cursor_x, max(width - 1, 0))))
        else:
            out.append(self.term.move(cursor_y, cursor_x))
        out.append(self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height

    @property
    def text_rows(self):
        """Rows available for document text."""
        return max(0, self.term.height - EditorConstants.STATUS_ROWS)
