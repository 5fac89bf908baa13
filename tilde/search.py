"""Document-wide search: match index and match navigation.

Matches are recomputed in full on every query edit. Queries are typed by
hand and documents are interactive-sized, so no incremental index is kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .document import Document, Position


class NoMatch(LookupError):
    """Raised when navigating a search that has no matches."""


Match = tuple[Position, Position]


@dataclass(frozen=True)
class SearchState:
    origin: Position
    query: str = ""
    matches: tuple[Match, ...] = field(default_factory=tuple)
    active_index: Optional[int] = None

    @property
    def active_match(self) -> Optional[Match]:
        if self.active_index is None:
            return None
        return self.matches[self.active_index]


def find_matches(document: Document, query: str) -> tuple[Match, ...]:
    """All matches of query in document order."""
    matches = []
    for line_index, line in enumerate(document.lines):
        for start, end in line.find_all(query):
            matches.append((Position(line_index, start), Position(line_index, end)))
    return tuple(matches)


def begin(document: Document, origin: Position) -> SearchState:
    del document  # Unused until a query is typed
    return SearchState(origin=origin)


def update_query(state: SearchState, document: Document, query: str) -> SearchState:
    matches = find_matches(document, query)
    if not matches:
        return replace(state, query=query, matches=matches, active_index=None)
    active = next((i for i, (start, _) in enumerate(matches) if start >= state.origin), 0)
    return replace(state, query=query, matches=matches, active_index=active)


def advance(state: SearchState) -> SearchState:
    """Move to the next match, wrapping after the last one."""
    if not state.matches:
        raise NoMatch(state.query)
    current = -1 if state.active_index is None else state.active_index
    return replace(state, active_index=(current + 1) % len(state.matches))


def retreat(state: SearchState) -> SearchState:
    """Move to the previous match, wrapping before the first one."""
    if not state.matches:
        raise NoMatch(state.query)
    current = 0 if state.active_index is None else state.active_index
    return replace(state, active_index=(current - 1) % len(state.matches))


def cancel(state: SearchState) -> Position:
    return state.origin


def confirm(state: SearchState) -> Position:
    match = state.active_match
    return match[0] if match else state.origin


def find_next(document: Document, query: str, after: Position, backward: bool = False) -> Position:
    """Start of the first match strictly after (or before) ``after``, wrapping.

    Raises:
        NoMatch: the query does not occur in the document.
    """
    matches = find_matches(document, query)
    if not matches:
        raise NoMatch(query)
    starts = [start for start, _ in matches]
    if backward:
        earlier = [start for start in starts if start < after]
        return earlier[-1] if earlier else starts[-1]
    return next((start for start in starts if start > after), starts[0])
