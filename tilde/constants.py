"""Constants and configuration defaults for the tilde editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    NAME = "tilde"

    # Session
    QUIT_TIMES = 3  # Quit presses needed to discard unsaved changes

    # Line endings
    LINE_ENDINGS = ("\r\n", "\n", "\r")
    DEFAULT_LINE_ENDING = "\n"

    # Rendering
    EMPTY_ROW = "~"  # Drawn for rows past the end of the document
    CONTROL_REPLACEMENT = "▯"
    BLANK_REPLACEMENT = "␣"
    TAB_REPLACEMENT = " "
    STATUS_ROWS = 2  # Status bar plus message/prompt line

    # Prompts
    SEARCH_PROMPT = "Search (Esc to cancel, Arrows to navigate): "
    SAVE_AS_PROMPT = "Save as: "

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"
    SAVED_MESSAGE = "File saved successfully."
    SAVE_ERROR_MESSAGE = "Error writing file: {}"
    SAVE_ABORTED_MESSAGE = "Save aborted."
    NO_MATCH_MESSAGE = "No match"
    OPEN_ERROR_MESSAGE = "Could not open {}: {}"
    QUIT_WARNING_MESSAGE = (
        "WARNING! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    )
    UNTITLED = "[No Name]"
