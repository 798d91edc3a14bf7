"""A single line of text, addressed by grapheme clusters and display columns.

Rows keep their raw text as a ``str`` and cache two derived values: the list
of grapheme clusters and the display length. A tab cluster occupies
``tab_width`` display columns; every other cluster occupies one. Both caches
are rebuilt after every mutation, so ``len(row)`` is always
``grapheme_count + tab_count * (tab_width - 1)``.

Two coordinate systems are in play:

- grapheme index: position in the list of clusters (used by ``insert``,
  ``delete`` and ``find``)
- display column: position on screen (used by ``render``, ``split`` and the
  cursor)

``column_to_index`` and ``index_to_column`` translate between them.
"""

from typing import Optional

import grapheme

from .constants import EditorConstants

TAB = "\t"


class Row:
    """One line of a document."""

    def __init__(self, text: str = "", tab_width: int = EditorConstants.TAB_WIDTH):
        self.tab_width = tab_width
        self._text = text
        self._graphemes: list[str] = []
        self.display_len = 0
        self._update()

    def _update(self) -> None:
        """Re-segment the text and recompute the display length."""
        self._graphemes = list(grapheme.graphemes(self._text))
        tabs = sum(1 for g in self._graphemes if g == TAB)
        self.display_len = len(self._graphemes) + tabs * (self.tab_width - 1)

    def _set_text(self, text: str) -> None:
        self._text = text
        self._update()

    @property
    def text(self) -> str:
        """Raw text of the row (tabs unexpanded, no line terminator)."""
        return self._text

    def __len__(self) -> int:
        return self.display_len

    def __eq__(self, other):
        if isinstance(other, Row):
            return self._text == other._text
        return NotImplemented

    def __repr__(self) -> str:
        return f"Row({self._text!r})"

    def grapheme_count(self) -> int:
        return len(self._graphemes)

    def _cluster_width(self, cluster: str) -> int:
        return self.tab_width if cluster == TAB else 1

    # --- Coordinate translation ---

    def index_to_column(self, index: int) -> int:
        """Return the display column where grapheme ``index`` starts.

        Indexes past the end map to the display length.
        """
        index = max(0, min(index, len(self._graphemes)))
        return sum(self._cluster_width(g) for g in self._graphemes[:index])

    def column_to_index(self, column: int) -> int:
        """Return the index of the grapheme covering ``column``.

        A column inside a tab maps to the tab itself. Columns at or past the
        end map to the grapheme count (the append position).
        """
        if column <= 0:
            return 0
        end = 0
        for i, cluster in enumerate(self._graphemes):
            end += self._cluster_width(cluster)
            if end > column:
                return i
        return len(self._graphemes)

    def snap_column(self, column: int) -> int:
        """Clamp ``column`` into ``[0, len]`` and move it to a cluster start."""
        column = max(0, min(column, self.display_len))
        return self.index_to_column(self.column_to_index(column))

    def next_column(self, column: int) -> int:
        """Column one grapheme to the right of ``column`` (stops at the end)."""
        return self.index_to_column(self.column_to_index(column) + 1)

    def previous_column(self, column: int) -> int:
        """Column one grapheme to the left of ``column`` (stops at 0)."""
        column = max(0, min(column, self.display_len))
        index = self.column_to_index(column)
        start = self.index_to_column(index)
        if start < column:
            # Inside a tab: step back to where it starts
            return start
        return self.index_to_column(index - 1)

    # --- Rendering ---

    def render(self, start: int, end: int) -> str:
        """Return the text visible between display columns ``start`` and ``end``.

        The range is clamped so that ``end <= len(self)`` and
        ``start <= end``. Tabs are expanded to spaces; a tab cut by the range
        contributes only its visible spaces.
        """
        end = max(0, min(end, self.display_len))
        start = max(0, min(start, end))
        if start == end:
            return ""
        cells: list[str] = []
        for cluster in self._graphemes:
            if cluster == TAB:
                cells.extend(" " * self.tab_width)
            else:
                cells.append(cluster)
        return "".join(cells[start:end])

    # --- Mutation ---

    def push(self, c: str) -> None:
        """Append a character at the end of the row."""
        self._set_text(self._text + c)

    def insert(self, index: int, c: str) -> None:
        """Insert a character before grapheme ``index``.

        Indexes past the end append; negative indexes insert at the start.
        """
        if index >= len(self._graphemes):
            self.push(c)
            return
        index = max(0, index)
        before = "".join(self._graphemes[:index])
        after = "".join(self._graphemes[index:])
        self._set_text(before + c + after)

    def delete(self, index: int) -> None:
        """Remove grapheme ``index``. Out-of-range indexes are ignored."""
        if not 0 <= index < len(self._graphemes):
            return
        remaining = self._graphemes[:index] + self._graphemes[index + 1:]
        self._set_text("".join(remaining))

    def append(self, other: "Row") -> None:
        """Join another row's text onto the end of this one."""
        self._set_text(self._text + other.text)

    def split(self, at: int) -> tuple["Row", "Row"]:
        """Split at display column ``at`` into ``(left, right)``.

        The row itself is left unchanged.
        """
        index = self.column_to_index(at)
        left = Row("".join(self._graphemes[:index]), self.tab_width)
        right = Row("".join(self._graphemes[index:]), self.tab_width)
        return left, right

    # --- Search ---

    def find(self, query: str, start: int = 0) -> Optional[int]:
        """Return the grapheme index of the first match of ``query``.

        The search begins at grapheme ``start``. Matches must begin and end on
        cluster boundaries, so a combining mark never matches half a cluster.
        An empty query never matches.
        """
        if not query:
            return None
        boundaries: dict[int, int] = {}
        offset = 0
        for i, cluster in enumerate(self._graphemes):
            boundaries[offset] = i
            offset += len(cluster)
        boundaries[offset] = len(self._graphemes)

        start = max(0, min(start, len(self._graphemes)))
        begin = sum(len(g) for g in self._graphemes[:start])
        pos = self._text.find(query, begin)
        while pos != -1:
            if pos in boundaries and pos + len(query) in boundaries:
                return boundaries[pos]
            pos = self._text.find(query, pos + 1)
        return None
