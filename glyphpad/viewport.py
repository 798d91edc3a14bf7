"""Cursor movement and scroll-offset arithmetic.

The controller owns two positions: the logical cursor (display column, row
index) and the viewport offset (the top-left document coordinate shown on
screen). Movement is computed from the key action, the document shape and
the visible text-area size only. All arithmetic saturates: nothing goes below
zero and nothing runs past the document or row bounds.
"""

from enum import Enum
from typing import Optional

from .document import Document, Position


class Movement(Enum):
    """Cursor movements the controller understands."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LINE_START = "line_start"
    LINE_END = "line_end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


def scroll(cursor: Position, width: int, height: int, offset: Position) -> Position:
    """Return the offset that keeps ``cursor`` inside a ``width`` x ``height`` window.

    A cursor above or left of the window pulls the offset onto it; a cursor
    below or right of it pushes the offset by exactly the overflow.
    Dimensions below one are treated as one.
    """
    width = max(1, width)
    height = max(1, height)
    x, y = offset.x, offset.y

    if cursor.y < y:
        y = cursor.y
    elif cursor.y >= y + height:
        y = cursor.y - height + 1

    if cursor.x < x:
        x = cursor.x
    elif cursor.x >= x + width:
        x = cursor.x - width + 1

    return Position(x, y)


class Viewport:
    """Cursor position plus scroll offset for one document view."""

    def __init__(self, cursor: Optional[Position] = None, offset: Optional[Position] = None):
        self.cursor = cursor or Position()
        self.offset = offset or Position()

    def move_cursor(self, movement: Movement, document: Document, width: int, height: int) -> None:
        """Apply ``movement`` to the cursor.

        ``width`` and ``height`` are the text-area dimensions; paging jumps by
        ``height`` rows. The offset is recomputed afterwards.
        """
        x, y = self.cursor.x, self.cursor.y
        last_line = len(document)  # the append line below the last row
        row = document.row_or_empty(y)

        if movement == Movement.LEFT:
            if x > 0:
                x = row.previous_column(x)
            elif y > 0:
                y -= 1
                x = len(document.row_or_empty(y))
        elif movement == Movement.RIGHT:
            if x < len(row):
                x = row.next_column(x)
            elif y + 1 < len(document):
                y += 1
                x = 0
        elif movement == Movement.UP:
            y = max(0, y - 1)
            x = document.row_or_empty(y).snap_column(x)
        elif movement == Movement.DOWN:
            y = min(last_line, y + 1)
            x = document.row_or_empty(y).snap_column(x)
        elif movement == Movement.LINE_START:
            x = 0
        elif movement == Movement.LINE_END:
            x = len(row)
        elif movement == Movement.PAGE_UP:
            y = max(0, y - max(1, height))
            x = document.row_or_empty(y).snap_column(x)
        elif movement == Movement.PAGE_DOWN:
            y = min(last_line, y + max(1, height))
            x = document.row_or_empty(y).snap_column(x)

        self.cursor = Position(x, y)
        self.scroll(width, height)

    def clamp_to(self, document: Document) -> Position:
        """Pull the cursor back inside the document and return it."""
        y = max(0, min(self.cursor.y, len(document)))
        x = document.row_or_empty(y).snap_column(self.cursor.x)
        self.cursor = Position(x, y)
        return self.cursor

    def scroll(self, width: int, height: int) -> None:
        self.offset = scroll(self.cursor, width, height, self.offset)

    def screen_position(self) -> Position:
        """Cursor position relative to the top-left of the text area."""
        return Position(max(0, self.cursor.x - self.offset.x),
                        max(0, self.cursor.y - self.offset.y))
