"""Terminal session using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from collections import deque
from typing import Callable, Optional

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

from .errors import ErrorKind, TerminalIOError

logger = logging.getLogger(__name__)


def _default_input_factory(in_stream):
    return Input(in_stream=in_stream, keynames='curtsies')


class TerminalSession:
    """Scoped ownership of the terminal for one editing session.

    Use as a context manager. Entering saves the terminal mode, switches
    input to raw unbuffered mode and enters the fullscreen; leaving restores
    all of it on every exit path, including when an error is propagating.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 in_stream=None,
                 input_factory: Optional[Callable] = None):
        self.term = terminal or blessed.Terminal()
        self._in_stream = in_stream or sys.stdin
        self._input_factory = input_factory or _default_input_factory
        self._input = None
        self._fd: Optional[int] = None
        self._saved_mode: Optional[list] = None
        self._pending: deque[str] = deque()
        self.is_fullscreen = False

    # --- Setup / teardown ---

    def __enter__(self) -> "TerminalSession":
        try:
            self._setup()
        except BaseException:
            self._restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._restore()
        return False

    def _setup(self) -> None:
        try:
            self._fd = self._in_stream.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalIOError(ErrorKind.GET_HANDLE, str(e))

        try:
            self._saved_mode = termios.tcgetattr(self._fd)
        except (termios.error, OSError) as e:
            raise TerminalIOError(ErrorKind.GET_MODE, str(e))

        # Raw, non-echoing, unbuffered input
        try:
            self._input = self._input_factory(self._in_stream)
            self._input.__enter__()
        except (termios.error, OSError) as e:
            self._input = None
            raise TerminalIOError(ErrorKind.SET_MODE, str(e))

        self.check_screen_size()
        self._write(self.term.enter_fullscreen + self.term.clear, ErrorKind.CURSOR_POSITION)
        self.is_fullscreen = True

    def _restore(self) -> None:
        """Undo everything _setup managed to do. Never raises."""
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not leave raw input mode: {e}")
            finally:
                self._input = None
        if self._saved_mode is not None and self._fd is not None:
            try:
                termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved_mode)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal mode: {e}")
            finally:
                self._saved_mode = None
        if self.is_fullscreen:
            try:
                self._write(self.term.exit_fullscreen + self.term.normal_cursor,
                            ErrorKind.SET_CURSOR_INFO)
            except TerminalIOError as e:
                logger.warning(f"Could not leave fullscreen: {e}")
            finally:
                self.is_fullscreen = False
        self._pending.clear()

    # --- Screen geometry ---

    def check_screen_size(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise TerminalIOError(ErrorKind.SCREEN_INFO,
                                  f"unusable screen size {self.width}x{self.height}")

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        try:
            return int(self.term.width)
        except (OSError, TypeError, ValueError) as e:
            raise TerminalIOError(ErrorKind.SCREEN_INFO, str(e))

    @property
    def height(self) -> int:
        """Terminal height in rows."""
        try:
            return int(self.term.height)
        except (OSError, TypeError, ValueError) as e:
            raise TerminalIOError(ErrorKind.SCREEN_INFO, str(e))

    # --- Output ---

    def _write(self, text: str, kind: ErrorKind) -> None:
        try:
            print(text, end='', flush=True, file=self.term.stream)
        except (OSError, ValueError) as e:
            raise TerminalIOError(kind, str(e))

    def hide_cursor(self) -> None:
        self._write(self.term.hide_cursor, ErrorKind.SET_CURSOR_INFO)

    def show_cursor(self) -> None:
        self._write(self.term.normal_cursor, ErrorKind.SET_CURSOR_INFO)

    def move_cursor(self, row: int, col: int) -> None:
        """Move the caret, clamped to the visible grid."""
        row = max(0, min(row, self.height - 1))
        col = max(0, min(col, self.width - 1))
        self._write(self.term.move(row, col), ErrorKind.CURSOR_POSITION)

    def clear_row(self, row: int) -> None:
        """Blank the full width of a row by overwriting it with spaces."""
        self._write(self.term.move(row, 0) + ' ' * self.width, ErrorKind.CURSOR_POSITION)

    def write_row(self, row: int, text: str) -> None:
        """Write text from the start of a row."""
        self._write(self.term.move(row, 0) + text[:self.width], ErrorKind.CURSOR_POSITION)

    def clear_screen(self) -> None:
        self._write(self.term.home + self.term.clear, ErrorKind.CURSOR_POSITION)

    # --- Input ---

    def read_key(self) -> str:
        """Block for the next key and return its curtsies name."""
        if self._pending:
            return self._pending.popleft()
        if self._input is None:
            raise TerminalIOError(ErrorKind.INPUT_READ, "terminal session is not active")
        try:
            event = next(self._input)
        except (OSError, StopIteration) as e:
            raise TerminalIOError(ErrorKind.INPUT_READ, str(e))
        if isinstance(event, PasteEvent):
            # A burst of keys read at once; hand them out one at a time
            self._pending.extend(str(key) for key in event.events)
            if not self._pending:
                return self.read_key()
            return self._pending.popleft()
        return str(event)

