"""tilde - a small terminal text editor."""

from .document import Document, Position
from .line import Line
from .search import NoMatch, SearchState
from .view import Direction, View

__all__ = [
    'Document',
    'Position',
    'Line',
    'NoMatch',
    'SearchState',
    'Direction',
    'View',
]
