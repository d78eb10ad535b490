"""Flat line storage for the document being edited."""

from typing import Iterable, Iterator, Optional, Set


class LineBuffer:
    """Ordered sequence of text lines that is never empty.

    Every structural edit returns the set of rows whose on-screen text is
    stale after the edit. Edits that shift the rows below them (split, merge,
    insert and remove) mark every row from the edit point down to the last
    affected row, including a row vacated at the bottom of the document.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append("")

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))

    def __repr__(self) -> str:
        return f"LineBuffer({self._lines!r})"

    @property
    def lines(self) -> list[str]:
        """Copy of the current lines."""
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str:
        self._check_row(row)
        return self._lines[row]

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._lines):
            raise IndexError(f"row {row} out of range (0..{len(self._lines) - 1})")

    def _check_position(self, row: int, col: int) -> None:
        self._check_row(row)
        if not 0 <= col <= len(self._lines[row]):
            raise IndexError(f"column {col} out of range for row {row}")

    def _rows_from(self, row: int, last: int) -> Set[int]:
        return set(range(row, last + 1))

    # --- Single-line edits ---

    def insert_char(self, row: int, col: int, ch: str) -> Set[int]:
        """Insert one character at col, shifting the suffix right."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        return self.insert_text(row, col, ch)

    def insert_text(self, row: int, col: int, text: str) -> Set[int]:
        """Insert a run of characters at col."""
        self._check_position(row, col)
        if not text:
            return set()
        line = self._lines[row]
        self._lines[row] = line[:col] + text + line[col:]
        return {row}

    def delete_char_before(self, row: int, col: int) -> Set[int]:
        """Remove the character at col-1. No-op at column 0."""
        self._check_position(row, col)
        if col == 0:
            return set()
        line = self._lines[row]
        self._lines[row] = line[:col - 1] + line[col:]
        return {row}

    # --- Structural edits ---

    def split_line(self, row: int, col: int) -> Set[int]:
        """Keep [0, col) on row and move [col, end) to a new line below."""
        self._check_position(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])
        return self._rows_from(row, len(self._lines) - 1)

    def insert_blank_line_after(self, row: int) -> Set[int]:
        self._check_row(row)
        self._lines.insert(row + 1, "")
        return self._rows_from(row, len(self._lines) - 1)

    def merge_with_previous(self, row: int) -> Set[int]:
        """Append line[row] to line[row-1] and remove line[row].

        Raises IndexError for row 0, which has no previous line.
        """
        self._check_row(row)
        if row == 0:
            raise IndexError("cannot merge the first line with a previous line")
        old_last = len(self._lines) - 1
        self._lines[row - 1] += self._lines.pop(row)
        return self._rows_from(row - 1, old_last)

    def remove_line(self, row: int) -> Set[int]:
        """Remove line[row]; removing the only line leaves one empty line."""
        self._check_row(row)
        old_last = len(self._lines) - 1
        if len(self._lines) == 1:
            self._lines[0] = ""
            return {0}
        del self._lines[row]
        return self._rows_from(row, old_last)
