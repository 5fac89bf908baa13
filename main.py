#!/usr/bin/env python3
"""tilde - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home, End, PageUp, PageDown: Move the cursor
    Ctrl-F: Search (arrows or Ctrl-N/Ctrl-P step through matches)
    Ctrl-S: Save file
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Type to insert text, Enter splits the line
    Backspace / Delete: Delete characters
"""

from tilde.__main__ import main


if __name__ == "__main__":
    main()
