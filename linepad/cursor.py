"""Caret position bound to a LineBuffer."""

from enum import Enum
from typing import Tuple

from .buffer import LineBuffer


class ColumnPolicy(Enum):
    """What happens to the column on vertical movement."""
    CLAMP = "clamp"  # keep the column, clamped to the new line length
    END_OF_LINE = "end_of_line"  # jump to the end of the new line


class Cursor:
    """(row, column) position inside a LineBuffer.

    The cursor refers to the buffer by index only. Callers must call
    clamp() or move_to() after any structural edit so the position stays
    within 0 <= row < line_count and 0 <= column <= len(line[row]).
    """

    def __init__(self, buffer: LineBuffer, row: int = 0, column: int = 0,
                 column_policy: ColumnPolicy = ColumnPolicy.CLAMP):
        self.buffer = buffer
        self.column_policy = column_policy
        self._row = 0
        self._column = 0
        self.move_to(row, column)

    def __repr__(self) -> str:
        return f"Cursor(row={self._row}, column={self._column})"

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    def as_tuple(self) -> Tuple[int, int]:
        return (self._row, self._column)

    def move_to(self, row: int, column: int) -> None:
        """Place the cursor, clamping both coordinates into range."""
        self._row = max(0, min(row, self.buffer.line_count - 1))
        self._column = max(0, min(column, self.buffer.line_length(self._row)))

    def clamp(self) -> None:
        self.move_to(self._row, self._column)

    # --- Navigation ---

    def move_up(self) -> bool:
        if self._row == 0:
            return False
        self._move_vertically(self._row - 1)
        return True

    def move_down(self) -> bool:
        if self._row >= self.buffer.line_count - 1:
            return False
        self._move_vertically(self._row + 1)
        return True

    def _move_vertically(self, row: int) -> None:
        length = self.buffer.line_length(row)
        if self.column_policy is ColumnPolicy.END_OF_LINE:
            column = length
        else:
            column = min(self._column, length)
        self._row = row
        self._column = column

    def move_left(self) -> bool:
        # Does not wrap to the previous line
        if self._column == 0:
            return False
        self._column -= 1
        return True

    def move_right(self) -> bool:
        # Does not wrap to the next line
        if self._column >= self.buffer.line_length(self._row):
            return False
        self._column += 1
        return True
