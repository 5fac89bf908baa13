"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'pgup': 'page_up',
    'pgdn': 'page_down',
    'esc': 'escape',
    'return': 'enter',
    'del': 'delete',
}


@dataclass
class KeyEvent:
    """A parsed keyboard event."""
    key_type: KeyType
    value: str  # Base key: 'a', 'left', 'backspace', ...
    raw: str  # Token as received from the terminal
    is_ctrl: bool = False
    is_alt: bool = False


class KeyboardHandler:
    """Turns curtsies key names into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Read the next key from the terminal and parse it.

        Returns None when no key arrived before the timeout.
        """
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token or a raw character.

        Args:
            key: Token such as ``'<UP>'``, ``'<Ctrl-q>'`` or a plain character.

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            code = ord(key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if 1 <= code <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + code - 1), key_str, is_ctrl=True)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        # '<Ctrl-x>', '<Esc+u>', '<PAGEUP>', '<SPACE>'
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-') if len(name) > 1 else [name]
        base = parts[-1] or '-'
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        base = _ALIASES.get(base, base)

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(KeyType.REGULAR, ' ', ' ')
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', '\t')

        if 'ctrl' in mods and len(base) == 1:
            # Terminals send Ctrl-M for Enter and Ctrl-H for Backspace
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)

        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, key_str, is_alt=True)

        return KeyEvent(KeyType.SPECIAL, base, key_str, is_ctrl='ctrl' in mods)
