"""Incremental screen synchronization for the edited document."""

from typing import Iterable, Optional

from .buffer import LineBuffer
from .constants import EditorConstants
from .cursor import Cursor


def display_text(text: str) -> str:
    """Replace characters outside the printable set with a placeholder."""
    placeholder = EditorConstants.UNPRINTABLE_PLACEHOLDER
    return ''.join(ch if ch in EditorConstants.PRINTABLE_CHARACTERS else placeholder
                   for ch in text)


class RenderSync:
    """Replays changed rows onto a terminal surface.

    The surface is anything with the TerminalSession output primitives:
    hide_cursor, show_cursor, clear_row, write_row, move_cursor,
    clear_screen and the width/height properties.
    """

    def __init__(self, surface):
        self.surface = surface

    def redraw(self, dirty_rows: Iterable[int], buffer: LineBuffer, cursor: Cursor) -> None:
        """Redraw dirty rows top to bottom, then place the caret.

        Rows past the end of the buffer are drawn empty so text left behind
        by a removed line disappears. Rows below the screen are skipped.
        """
        height = self.surface.height
        for row in sorted(set(dirty_rows)):
            if row < 0 or row >= height:
                continue
            text = buffer.line(row) if row < buffer.line_count else ""
            caret = cursor.column if row == cursor.row else None
            self._redraw_row(row, text, caret)
        self.surface.move_cursor(cursor.row, cursor.column)

    def redraw_all(self, buffer: LineBuffer, cursor: Cursor) -> None:
        """Repaint every on-screen row from a cleared screen."""
        self.surface.clear_screen()
        rows = range(min(buffer.line_count, self.surface.height))
        self.redraw(rows, buffer, cursor)

    def _redraw_row(self, row: int, text: str, caret: Optional[int]) -> None:
        # Hidden while the row is rewritten to avoid flicker
        self.surface.hide_cursor()
        self.surface.clear_row(row)
        self.surface.write_row(row, display_text(text))
        if caret is not None:
            self.surface.move_cursor(row, caret)
        self.surface.show_cursor()
