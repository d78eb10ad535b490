"""Main editing controller."""

import logging
from typing import Optional, Set

from .buffer import LineBuffer
from .commands import CommandRegistry
from .config import EditorConfig
from .constants import EditorConstants
from .cursor import Cursor
from .keyboard import KeyboardHandler, KeyIntent
from .render import RenderSync

logger = logging.getLogger(__name__)


class EditEngine:
    """Dispatches key intents to the buffer and cursor.

    Each intent produces the set of rows to redraw. The engine does not own
    the terminal; run() borrows an active TerminalSession for one loop.
    """

    def __init__(self, buffer: Optional[LineBuffer] = None,
                 config: Optional[EditorConfig] = None):
        self.buffer = buffer if buffer is not None else LineBuffer()
        self.config = config or EditorConfig()
        self.cursor = Cursor(self.buffer, column_policy=self.config.column_policy)
        self.command_registry = CommandRegistry()
        self.running = False
        self.modified = False

    def run(self, session, keyboard: Optional[KeyboardHandler] = None) -> None:
        """Edit until Escape.

        Terminal errors propagate unchanged; the caller's session context
        restores the terminal.
        """
        keyboard = keyboard or KeyboardHandler(session)
        renderer = RenderSync(session)
        self.running = True
        try:
            renderer.redraw_all(self.buffer, self.cursor)
            while self.running:
                intent = keyboard.get_intent()
                dirty = self.handle_key(intent)
                renderer.redraw(dirty, self.buffer, self.cursor)
        except KeyboardInterrupt:
            logger.info("Interrupted; ending session")
        finally:
            self.running = False

    def handle_key(self, intent: KeyIntent) -> Set[int]:
        """Apply one intent and return the rows that need redrawing."""
        return self.command_registry.execute(self, intent)

    # --- Edits ---

    def insert_char(self, char: str) -> Set[int]:
        row, col = self.cursor.as_tuple()
        dirty = self.buffer.insert_char(row, col, char)
        self.cursor.move_to(row, col + 1)
        return dirty

    def insert_tab(self) -> Set[int]:
        row, col = self.cursor.as_tuple()
        dirty = self.buffer.insert_text(row, col, EditorConstants.TAB_TEXT)
        self.cursor.move_to(row, col + EditorConstants.TAB_WIDTH)
        return dirty

    def newline(self) -> Set[int]:
        row, col = self.cursor.as_tuple()
        if col < self.buffer.line_length(row):
            dirty = self.buffer.split_line(row, col)
        else:
            dirty = self.buffer.insert_blank_line_after(row)
        self.cursor.move_to(row + 1, 0)
        return dirty

    def backspace(self) -> Set[int]:
        row, col = self.cursor.as_tuple()
        if col > 0:
            dirty = self.buffer.delete_char_before(row, col)
            self.cursor.move_to(row, col - 1)
            return dirty
        if row == 0:
            return set()
        # Land on the old merge boundary, not the end of the merged line
        boundary = self.buffer.line_length(row - 1)
        dirty = self.buffer.merge_with_previous(row)
        self.cursor.move_to(row - 1, boundary)
        return dirty

    def log_buffer(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            lines = "\n".join(self.buffer)
            logger.debug(f"Buffer after edit (cursor {self.cursor.as_tuple()}):\n{lines}")
