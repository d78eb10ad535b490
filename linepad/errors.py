"""Error taxonomy for the linepad editor.

Every failure is reported with a named kind. The numeric value of a kind is
the process exit status used by the command-line entry point.
"""

from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """Kinds of fatal errors, valued by exit status."""
    NONE = 0
    COMMAND_LINE_ARGUMENTS = 1
    FILE_OPEN = 2
    GET_MODE = 3
    SET_MODE = 4
    CURSOR_POSITION = 5
    GET_HANDLE = 6
    INPUT_READ = 7
    SCREEN_INFO = 8
    GET_CURSOR_INFO = 9
    SET_CURSOR_INFO = 10

    @property
    def label(self) -> str:
        """Printable name of the kind."""
        return _LABELS[self]

    @property
    def exit_status(self) -> int:
        return int(self)


_LABELS = {
    ErrorKind.NONE: "No Error",
    ErrorKind.COMMAND_LINE_ARGUMENTS: "CommandLineArgumentsError",
    ErrorKind.FILE_OPEN: "FileOpenError",
    ErrorKind.GET_MODE: "GetConsoleMode",
    ErrorKind.SET_MODE: "SetConsoleMode",
    ErrorKind.CURSOR_POSITION: "SetConsoleCursorPosition",
    ErrorKind.GET_HANDLE: "GetStdHandle",
    ErrorKind.INPUT_READ: "ReadConsoleInput",
    ErrorKind.SCREEN_INFO: "GetConsoleScreenBufferInfo",
    ErrorKind.GET_CURSOR_INFO: "GetConsoleCursorInfoError",
    ErrorKind.SET_CURSOR_INFO: "SetConsoleCursorInfoError",
}


class LinepadError(Exception):
    """Base class for errors that end the editing session."""

    kind: ErrorKind = ErrorKind.NONE

    def __init__(self, kind: Optional[ErrorKind] = None, message: str = ""):
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message or self.kind.label)

    @property
    def exit_status(self) -> int:
        return self.kind.exit_status


class CommandLineArgumentsError(LinepadError):
    """Too many command-line arguments."""

    kind = ErrorKind.COMMAND_LINE_ARGUMENTS

    def __init__(self, message: str = ""):
        super().__init__(message=message)


class FileOpenError(LinepadError):
    """A load or save target could not be opened."""

    kind = ErrorKind.FILE_OPEN

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message=message or f"Cannot open {path}")


class TerminalIOError(LinepadError):
    """A terminal operation failed; always fatal to the session."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.detail = detail
        super().__init__(kind, f"{kind.label}: {detail}" if detail else kind.label)
