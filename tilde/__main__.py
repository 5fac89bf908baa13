"""tilde CLI entry point.

Allows running via `python -m tilde` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def describe_key_event(ev) -> str:
    parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
    flags = [name for name, on in (('ctrl', ev.is_ctrl), ('alt', ev.is_alt)) if on]
    if flags:
        parts.append(f"flags={'+'.join(flags)}")
    return ' '.join(parts)


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    import termios
    from .keyboard import KeyboardHandler, KeyType
    from .terminal import TerminalInterface

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()

    old_settings = None
    try:
        old_settings = termios.tcgetattr(sys.stdin)
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        new_settings[3] &= ~termios.ISIG
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, OSError):
        old_settings = None

    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            print(describe_key_event(ev) + "\r")
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            except (termios.error, OSError):
                pass
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tilde", description="A small terminal text editor.")
    parser.add_argument("file", nargs="?", help="file to open or create")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--keytest", action="store_true", help="show parsed key events")
    parser.add_argument("--log", metavar="FILE", help="write debug log to FILE")
    return parser


def configure_logging(log_file: Optional[str]) -> None:
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return
    configure_logging(args.log)
    if args.keytest:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args.file:
        editor.load_file(args.file)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
