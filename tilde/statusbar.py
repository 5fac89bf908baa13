"""Plain-text formatting for the status bar, message line and welcome banner."""

from .constants import EditorConstants
from .line import Line
from .view import DocumentStatus


def fit(text: str, width: int) -> str:
    """Truncate or pad text to exactly ``width`` display columns."""
    if width <= 0:
        return ""
    line = Line(text)
    end = line.grapheme_index_at_width(width)
    clipped = "".join(line.clusters[:end])
    return clipped + " " * (width - line.display_width(0, end))


def display_width(text: str) -> int:
    return Line(text).total_width


def format_status(status: DocumentStatus, width: int) -> str:
    """Left: file name, line count, modified flag. Right: caret location."""
    left = f"{status.file_name} - {status.line_count} lines"
    if status.dirty:
        left += " (modified)"
    right = f"Ln {status.current_line}/{status.line_count}, Col {status.current_column}"
    gap = width - display_width(left) - display_width(right)
    if gap < 1:
        return fit(left, width)
    return left + " " * gap + right


def format_message(message: str, width: int) -> str:
    return fit(message or "", width)


def welcome_line(width: int, version: str) -> str:
    """The centred banner drawn on an untouched buffer."""
    message = f"{EditorConstants.NAME} editor -- version {version}"
    if width <= 0:
        return ""
    message_width = display_width(message)
    if message_width >= width:
        return fit(message, width)
    padding = (width - message_width) // 2
    if padding:
        return fit(EditorConstants.EMPTY_ROW + " " * (padding - 1) + message, width)
    return fit(message, width)
