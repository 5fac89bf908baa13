"""Editor commands and the key bindings that produce them."""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .keyboard import KeyEvent, KeyType
from .view import Direction


class Command:
    """Base class for everything the session can be asked to do."""


@dataclass(frozen=True)
class InsertChar(Command):
    ch: str


@dataclass(frozen=True)
class InsertNewline(Command):
    pass


@dataclass(frozen=True)
class DeleteBackward(Command):
    pass


@dataclass(frozen=True)
class DeleteForward(Command):
    pass


@dataclass(frozen=True)
class MoveCursor(Command):
    direction: Direction


@dataclass(frozen=True)
class Quit(Command):
    pass


@dataclass(frozen=True)
class Save(Command):
    pass


@dataclass(frozen=True)
class Search(Command):
    pass


@dataclass(frozen=True)
class SearchNext(Command):
    pass


@dataclass(frozen=True)
class SearchPrevious(Command):
    pass


@dataclass(frozen=True)
class Confirm(Command):
    pass


@dataclass(frozen=True)
class Cancel(Command):
    pass


@dataclass(frozen=True)
class Resize(Command):
    rows: int
    cols: int


KeyBinding = Tuple[KeyType, str]


class KeyBindings:
    """Maps key combinations to command factories."""

    def __init__(self):
        self._bindings: Dict[KeyBinding, Callable[[], Command]] = {}
        self._setup_default_bindings()

    def _setup_default_bindings(self):
        for name, direction in (
            ('left', Direction.LEFT),
            ('right', Direction.RIGHT),
            ('up', Direction.UP),
            ('down', Direction.DOWN),
            ('home', Direction.HOME),
            ('end', Direction.END),
            ('page_up', Direction.PAGE_UP),
            ('page_down', Direction.PAGE_DOWN),
        ):
            self.register((KeyType.SPECIAL, name), lambda d=direction: MoveCursor(d))

        self.register((KeyType.SPECIAL, 'backspace'), DeleteBackward)
        self.register((KeyType.SPECIAL, 'delete'), DeleteForward)
        self.register((KeyType.SPECIAL, 'enter'), InsertNewline)
        self.register((KeyType.SPECIAL, 'escape'), Cancel)

        self.register((KeyType.CTRL, 'q'), Quit)
        self.register((KeyType.CTRL, 's'), Save)
        self.register((KeyType.CTRL, 'f'), Search)
        self.register((KeyType.CTRL, 'n'), SearchNext)
        self.register((KeyType.CTRL, 'p'), SearchPrevious)

    def register(self, key: KeyBinding, factory: Callable[[], Command]):
        self._bindings[key] = factory

    def lookup(self, key_event: KeyEvent, prompting: bool = False) -> Optional[Command]:
        """Return the command for a key event, or None if it is unbound.

        While a prompt is open Enter confirms it instead of splitting the line.
        """
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter' and prompting:
            return Confirm()
        factory = self._bindings.get((key_event.key_type, key_event.value))
        if factory is not None:
            return factory()
        if key_event.key_type == KeyType.REGULAR and key_event.value:
            return InsertChar(key_event.value)
        return None


_default_bindings = KeyBindings()


def command_for(key_event: KeyEvent, prompting: bool = False) -> Optional[Command]:
    return _default_bindings.lookup(key_event, prompting)
