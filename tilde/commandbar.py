"""Single-line input shown in the message row while a prompt is open."""

from .line import Line


class CommandBar:
    """A prompt label followed by an editable value.

    Typing always appends and Backspace always removes the last
    grapheme; there is no caret movement inside the bar.
    """

    def __init__(self, prompt: str, value: str = ""):
        self.prompt = prompt
        self._value = Line(value)

    @property
    def value(self) -> str:
        return self._value.text

    def insert(self, text: str) -> None:
        self._value.insert(len(self._value), text)

    def delete_backward(self) -> bool:
        """Remove the last grapheme. Returns False if the value was empty."""
        if not len(self._value):
            return False
        self._value.remove(len(self._value) - 1)
        return True

    def render(self) -> str:
        return self.prompt + self.value

    def caret_column(self) -> int:
        """Display column of the caret, counting the prompt."""
        return Line(self.prompt).total_width + self._value.total_width
