"""A single line of text stored as grapheme clusters with cached widths."""

from __future__ import annotations

import unicodedata
from typing import Iterator, Optional

import regex
from wcwidth import wcswidth

from .constants import EditorConstants

_GRAPHEME = regex.compile(r"\X")


def segment(text: str) -> list[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


def _is_control(cluster: str) -> bool:
    return all(unicodedata.category(ch) == "Cc" for ch in cluster)


def cluster_width(cluster: str) -> int:
    """Return the number of terminal columns a cluster occupies (0, 1 or 2).

    Tabs, control characters and zero-width blanks such as U+2028 are
    drawn as one-column markers, so they count as 1 whatever wcwidth says.
    """
    if cluster == "\t" or _is_control(cluster):
        return 1
    width = wcswidth(cluster)
    if width < 0 or (width == 0 and cluster.isspace()):
        return 1
    return min(width, 2)


def render_cluster(cluster: str) -> str:
    """Return the glyph drawn on screen for a cluster."""
    if cluster == " ":
        return cluster
    if cluster == "\t":
        return EditorConstants.TAB_REPLACEMENT
    if _is_control(cluster):
        return EditorConstants.CONTROL_REPLACEMENT
    if cluster.isspace():
        return EditorConstants.BLANK_REPLACEMENT.ljust(cluster_width(cluster))
    return cluster


class Line:
    """A mutable row of grapheme clusters.

    ``clusters`` and ``widths`` are parallel lists; ``total_width`` is kept
    equal to ``sum(widths)`` by every mutation.
    """

    def __init__(self, text: str = ""):
        self._clusters: list[str] = segment(text)
        self._widths: list[int] = [cluster_width(c) for c in self._clusters]
        self._total_width: int = sum(self._widths)

    @classmethod
    def _from_parts(cls, clusters: list[str], widths: list[int]) -> "Line":
        line = cls.__new__(cls)
        line._clusters = clusters
        line._widths = widths
        line._total_width = sum(widths)
        return line

    # --- Read access ---
    @property
    def clusters(self) -> tuple[str, ...]:
        return tuple(self._clusters)

    @property
    def widths(self) -> tuple[int, ...]:
        return tuple(self._widths)

    @property
    def total_width(self) -> int:
        return self._total_width

    @property
    def text(self) -> str:
        return "".join(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def __getitem__(self, index: int) -> str:
        return self._clusters[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._clusters)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Line({self.text!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._clusters == other._clusters

    def render_cluster(self, index: int) -> str:
        return render_cluster(self._clusters[index])

    # --- Edits ---
    def insert(self, at: int, text: str) -> int:
        """Insert text before grapheme index ``at``.

        The clusters on either side are segmented together with the new
        text, so a combining mark typed after a letter joins its cluster.
        Returns how many clusters the line grew by.
        """
        if at < 0 or at > len(self._clusters):
            raise IndexError(f"insert index {at} out of range 0..{len(self._clusters)}")
        if not text:
            return 0
        lo = max(at - 1, 0)
        hi = min(at + 1, len(self._clusters))
        merged = "".join(self._clusters[lo:at]) + text + "".join(self._clusters[at:hi])
        return self._resegment(lo, hi, merged) - (hi - lo)

    def _resegment(self, lo: int, hi: int, text: str) -> int:
        """Replace clusters ``[lo, hi)`` with the segmentation of text."""
        new_clusters = segment(text)
        new_widths = [cluster_width(c) for c in new_clusters]
        self._total_width += sum(new_widths) - sum(self._widths[lo:hi])
        self._clusters[lo:hi] = new_clusters
        self._widths[lo:hi] = new_widths
        return len(new_clusters)

    def remove(self, at: int) -> str:
        """Remove and return the cluster at ``at``."""
        if at < 0 or at >= len(self._clusters):
            raise IndexError(f"remove index {at} out of range 0..{len(self._clusters) - 1}")
        self._total_width -= self._widths.pop(at)
        return self._clusters.pop(at)

    def split(self, at: int) -> tuple["Line", "Line"]:
        """Return ``[0, at)`` and ``[at, end)`` as two new lines."""
        if at < 0 or at > len(self._clusters):
            raise IndexError(f"split index {at} out of range 0..{len(self._clusters)}")
        head = Line._from_parts(self._clusters[:at], self._widths[:at])
        tail = Line._from_parts(self._clusters[at:], self._widths[at:])
        return head, tail

    def concat(self, other: "Line") -> "Line":
        joined = Line._from_parts(self._clusters + other._clusters, self._widths + other._widths)
        seam = len(self._clusters)
        if 0 < seam < len(joined._clusters):
            joined._resegment(seam - 1, seam + 1, joined._clusters[seam - 1] + joined._clusters[seam])
        return joined

    # --- Width math ---
    def display_width(self, start: int = 0, end: Optional[int] = None) -> int:
        """Sum of cluster widths over the grapheme range ``[start, end)``."""
        if end is None:
            end = len(self._clusters)
        if start < 0 or end > len(self._clusters) or start > end:
            raise IndexError(f"width range {start}..{end} invalid for {len(self._clusters)} clusters")
        if start == 0 and end == len(self._clusters):
            return self._total_width
        return sum(self._widths[start:end])

    def grapheme_index_at_width(self, target_width: int) -> int:
        """Find the grapheme index whose cumulative width is closest to, but
        not above, ``target_width``.

        Zero-width clusters share a cumulative width with their neighbour;
        the lowest such index wins. A target at or past the line width maps
        to the end of the line.
        """
        if target_width >= self._total_width:
            return len(self._clusters)
        cumulative = 0
        best = 0
        for index, width in enumerate(self._widths):
            if cumulative + width > target_width:
                break
            cumulative += width
            if width:
                best = index + 1
        return best

    # --- Search ---
    def find_all(self, needle: str) -> list[tuple[int, int]]:
        """Return non-overlapping ``(start, end)`` grapheme ranges of needle."""
        wanted = segment(needle)
        size = len(wanted)
        if size == 0 or size > len(self._clusters):
            return []
        matches = []
        i = 0
        last_start = len(self._clusters) - size
        while i <= last_start:
            if self._clusters[i:i + size] == wanted:
                matches.append((i, i + size))
                i += size
            else:
                i += 1
        return matches
