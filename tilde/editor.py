"""Main editor controller: input loop, file loading and drawing."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import Resize, command_for
from .constants import EditorConstants
from .document import Document
from .keyboard import KeyboardHandler, KeyEvent
from .session import Session, describe_error
from .settings import Settings, load_settings
from .statusbar import format_status, welcome_line
from .terminal import TerminalInterface
from .version import get_version
from .view import Highlight, View

logger = logging.getLogger(__name__)


class Editor:
    """Owns the document and runs the single-threaded control loop."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else load_settings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.session = self._new_session(
            Document(line_ending=self.settings.default_line_ending))
        self.running = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def view(self) -> View:
        return self.session.view

    @property
    def document(self) -> Document:
        return self.session.document

    def _new_session(self, document: Document, message: str = EditorConstants.HELP_MESSAGE) -> Session:
        view = View(document, self.terminal.text_rows, self.terminal.width)
        session = Session(view, quit_times=self.settings.quit_times)
        session.message = message
        return session

    def load_file(self, filename: str) -> None:
        """Open ``filename``, replacing the current document.

        A file that does not exist yet becomes a new empty document bound
        to that path, marked modified since nothing is on disk yet. Any
        other read error leaves an empty untitled document and reports the
        failure in the message line.
        """
        line_ending = self.settings.default_line_ending
        message = EditorConstants.HELP_MESSAGE
        try:
            document = Document.open(filename, default_line_ending=line_ending)
        except FileNotFoundError:
            logger.info(f"{filename} does not exist, starting a new file")
            document = Document(file_path=filename, line_ending=line_ending)
            # Unsaved until the first save creates the file
            document.dirty = True
        except OSError as e:
            logger.warning(f"Could not open {filename}: {e}")
            document = Document(line_ending=line_ending)
            message = EditorConstants.OPEN_ERROR_MESSAGE.format(filename, describe_error(e))
        self.session = self._new_session(document, message)

    def handle_key_event(self, key_event: KeyEvent) -> None:
        command = command_for(key_event, prompting=self.session.prompting)
        if command is None:
            logger.debug(f"Unbound key {key_event.raw!r}")
            return
        self.session.handle(command)
        if self.session.terminated:
            self.running = False

    def handle_resize(self) -> None:
        self.session.handle(Resize(self.terminal.text_rows, self.terminal.width))

    def _on_sigwinch(self, signum, frame):
        del signum, frame  # Unused
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def draw(self) -> None:
        view = self.view
        rows = list(view.visible_segments())
        if self.settings.show_welcome and view.is_untouched() and rows:
            rows[len(rows) // 3] = [(welcome_line(view.cols, get_version()), Highlight.NONE)]

        bar = self.session.command_bar
        if bar is not None:
            message, prompt_x = bar.render(), bar.caret_column()
        else:
            message, prompt_x = self.session.message or "", None

        cursor_y, cursor_x = view.caret_screen_position()
        self.terminal.draw_frame(
            rows, cursor_y, cursor_x,
            status_line=format_status(view.status(), self.terminal.width),
            message_line=message,
            prompt_cursor_x=prompt_x,
        )

    def run(self) -> None:
        """Run the main editor loop until the session terminates."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        self.terminal.setup()
        self.running = True
        old_settings = None
        try:
            # Let Ctrl-S and Ctrl-Q through as keys instead of flow control
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError):
                old_settings = None

            self.handle_resize()
            need_draw = True
            while self.running:
                if need_draw:
                    self.draw()
                    need_draw = False

                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.handle_resize()
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                        need_draw = True
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
