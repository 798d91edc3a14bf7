"""Line-oriented document model: an ordered list of rows plus file I/O."""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants
from .row import Row

logger = logging.getLogger(__name__)


@dataclass
class Position:
    """A cursor or viewport coordinate.

    ``x`` is a display column, ``y`` a row index. Positions may run past the
    end of a row while navigating; the document clamps them before editing.
    """

    x: int = 0
    y: int = 0


class Document:
    """Ordered rows of text, the file they came from and a dirty flag.

    Row indices are dense (``0..len(document)``). The row index equal to
    ``len(document)`` is the append line: editing there creates a new row.
    Every lookup past the end goes through ``row_or_empty``, which returns a
    fresh empty row instead of failing.
    """

    def __init__(
        self,
        rows: Optional[list[Row]] = None,
        filename: Optional[str] = None,
        tab_width: int = EditorConstants.TAB_WIDTH,
    ):
        self.tab_width = tab_width
        self._rows: list[Row] = list(rows) if rows else []
        self.filename = filename
        self.dirty = False

    @classmethod
    def from_lines(cls, lines: list[str], filename: Optional[str] = None,
                   tab_width: int = EditorConstants.TAB_WIDTH) -> "Document":
        return cls([Row(line, tab_width) for line in lines], filename, tab_width)

    @classmethod
    def open(cls, path: str, tab_width: int = EditorConstants.TAB_WIDTH) -> "Document":
        """Load a UTF-8 text file, one row per line.

        Raises:
            OSError: the file cannot be read or is not valid UTF-8.
        """
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise OSError(f"{path}: not valid UTF-8 ({e.reason})") from e

        lines = content.split('\n')
        if lines and lines[-1] == "":
            # A trailing newline terminates the last line; it does not start a new one
            lines.pop()
        lines = [line[:-1] if line.endswith('\r') else line for line in lines]
        logger.debug("Opened %s (%d rows)", path, len(lines))
        return cls.from_lines(lines, filename=path, tab_width=tab_width)

    def save(self) -> None:
        """Write every row followed by a newline, replacing the file atomically.

        Raises:
            ValueError: no filename is set; prompt for one first.
            OSError: the file could not be written. ``dirty`` stays set.
        """
        if not self.filename:
            raise ValueError("document has no filename")

        filename = self.filename
        dir_name = os.path.dirname(filename) or '.'
        base_name = os.path.basename(filename)
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name,
                                             prefix=EditorConstants.ATOMIC_SAVE_PREFIX + base_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                for row in self._rows:
                    temp_file.write(row.text)
                    temp_file.write('\n')
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError:
            if temp_filename is not None and os.path.exists(temp_filename):
                os.remove(temp_filename)
            raise

        self.dirty = False
        logger.debug("Saved %s (%d rows)", filename, len(self._rows))

    def save_as(self, filename: str) -> None:
        self.filename = filename
        self.save()

    # --- Accessors ---

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def row_or_empty(self, index: int) -> Row:
        """Return row ``index``, or a new empty row when there is none."""
        row = self.row(index)
        if row is None:
            return Row("", self.tab_width)
        return row

    def is_empty(self) -> bool:
        return not self._rows

    def is_dirty(self) -> bool:
        return self.dirty

    def _clamp(self, position: Position) -> Position:
        y = max(0, min(position.y, len(self._rows)))
        x = max(0, min(position.x, len(self.row_or_empty(y))))
        return Position(x, y)

    # --- Editing ---

    def insert(self, position: Position, c: str) -> bool:
        """Insert ``c`` at ``position``; on the append line a new row is created."""
        if c == '\n':
            return self.insert_newline(position)
        at = self._clamp(position)
        if at.y == len(self._rows):
            row = Row("", self.tab_width)
            row.push(c)
            self._rows.append(row)
        else:
            row = self._rows[at.y]
            if at.x == len(row):
                row.push(c)
            else:
                row.insert(row.column_to_index(at.x), c)
        self.dirty = True
        return True

    def insert_newline(self, position: Position) -> bool:
        """Split the row at ``position``.

        On the append line two empty rows are added: the line the cursor was
        on and the line it moves to.
        """
        at = self._clamp(position)
        if at.y >= len(self._rows):
            self._rows.append(Row("", self.tab_width))
            self._rows.append(Row("", self.tab_width))
        else:
            left, right = self._rows[at.y].split(at.x)
            self._rows[at.y] = left
            self._rows.insert(at.y + 1, right)
        self.dirty = True
        return True

    def delete_backward(self, position: Position) -> bool:
        """Delete the grapheme before ``position`` or join with the previous row."""
        at = self._clamp(position)
        if at.x > 0:
            row = self._rows[at.y]
            index = row.column_to_index(at.x)
            if index == 0:
                return False
            row.delete(index - 1)
        elif at.y > 0 and at.y < len(self._rows):
            current = self._rows.pop(at.y)
            self._rows[at.y - 1].append(current)
        else:
            # Document start, or the append line which has nothing to join
            return False
        self.dirty = True
        return True

    def delete_forward(self, position: Position) -> bool:
        """Delete the grapheme at ``position`` or pull the next row up."""
        at = self._clamp(position)
        row = self.row(at.y)
        if row is None:
            return False
        if at.x < len(row):
            row.delete(row.column_to_index(at.x))
        elif at.y + 1 < len(self._rows):
            following = self._rows.pop(at.y + 1)
            row.append(following)
        else:
            return False
        self.dirty = True
        return True

    def find(self, query: str) -> Optional[Position]:
        """Return the position of the first match, scanning top to bottom."""
        for y, row in enumerate(self._rows):
            index = row.find(query)
            if index is not None:
                return Position(row.index_to_column(index), y)
        return None
