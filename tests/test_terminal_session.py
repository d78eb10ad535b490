"""Test the terminal session resource and its error kinds."""

import io
import tempfile
import termios
from unittest.mock import MagicMock, PropertyMock, patch

import blessed
import pytest
from curtsies.events import PasteEvent

from linepad.errors import ErrorKind, TerminalIOError
from linepad.terminal import TerminalSession

_STREAM = io.StringIO()
_TERM = blessed.Terminal(kind='xterm-256color', stream=_STREAM, force_styling=True)


@pytest.fixture
def output():
    _STREAM.seek(0)
    _STREAM.truncate(0)
    return _STREAM


@pytest.fixture
def screen_size():
    with patch.object(TerminalSession, 'width', new_callable=PropertyMock, return_value=20), \
            patch.object(TerminalSession, 'height', new_callable=PropertyMock, return_value=5):
        yield


class MockInput:
    """Stands in for curtsies Input."""

    def __init__(self, events=()):
        self.events = list(events)
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, *args):
        self.exited = True

    def __next__(self):
        if not self.events:
            raise StopIteration
        return self.events.pop(0)


class TtyStream:
    def fileno(self):
        return 0


def test_hide_and_show_cursor(output):
    session = TerminalSession(terminal=_TERM)
    session.hide_cursor()
    session.show_cursor()
    assert output.getvalue() == _TERM.hide_cursor + _TERM.normal_cursor


def test_clear_row_blank_fills_full_width(output, screen_size):
    session = TerminalSession(terminal=_TERM)
    session.clear_row(3)
    assert output.getvalue() == _TERM.move(3, 0) + ' ' * 20


def test_write_row_clips_to_width(output, screen_size):
    session = TerminalSession(terminal=_TERM)
    session.write_row(1, "x" * 30)
    assert output.getvalue() == _TERM.move(1, 0) + "x" * 20


def test_move_cursor_clamps_to_grid(output, screen_size):
    session = TerminalSession(terminal=_TERM)
    session.move_cursor(9, 99)
    assert output.getvalue() == _TERM.move(4, 19)


def test_write_failure_reports_cursor_position_kind(screen_size):
    stream = io.StringIO()
    term = MagicMock()
    term.stream = stream
    term.move.return_value = ""
    stream.close()
    session = TerminalSession(terminal=term)
    with pytest.raises(TerminalIOError) as excinfo:
        session.move_cursor(0, 0)
    assert excinfo.value.kind is ErrorKind.CURSOR_POSITION
    with pytest.raises(TerminalIOError) as excinfo:
        session.hide_cursor()
    assert excinfo.value.kind is ErrorKind.SET_CURSOR_INFO


def test_read_key_requires_active_session():
    session = TerminalSession(terminal=_TERM)
    with pytest.raises(TerminalIOError) as excinfo:
        session.read_key()
    assert excinfo.value.kind is ErrorKind.INPUT_READ


def test_missing_input_handle():
    session = TerminalSession(terminal=_TERM, in_stream=io.StringIO())
    with pytest.raises(TerminalIOError) as excinfo:
        with session:
            pass
    assert excinfo.value.kind is ErrorKind.GET_HANDLE


def test_non_terminal_input_fails_mode_query():
    with tempfile.TemporaryFile() as f:
        session = TerminalSession(terminal=_TERM, in_stream=f)
        with pytest.raises(TerminalIOError) as excinfo:
            with session:
                pass
    assert excinfo.value.kind is ErrorKind.GET_MODE


def test_raw_mode_failure_restores_saved_mode():
    def failing_input(stream):
        raise termios.error(25, "Inappropriate ioctl for device")

    with patch('linepad.terminal.termios.tcgetattr', return_value=['saved']), \
            patch('linepad.terminal.termios.tcsetattr') as mock_set:
        session = TerminalSession(terminal=_TERM, in_stream=TtyStream(),
                                  input_factory=failing_input)
        with pytest.raises(TerminalIOError) as excinfo:
            with session:
                pass
    assert excinfo.value.kind is ErrorKind.SET_MODE
    mock_set.assert_called_once_with(0, termios.TCSAFLUSH, ['saved'])


def test_session_restores_terminal_when_body_fails(output, screen_size):
    mock_input = MockInput()
    with patch('linepad.terminal.termios.tcgetattr', return_value=['saved']), \
            patch('linepad.terminal.termios.tcsetattr') as mock_set:
        session = TerminalSession(terminal=_TERM, in_stream=TtyStream(),
                                  input_factory=lambda stream: mock_input)
        with pytest.raises(TerminalIOError):
            with session:
                assert mock_input.entered and not mock_input.exited
                assert session.is_fullscreen
                raise TerminalIOError(ErrorKind.INPUT_READ, "boom")
    assert mock_input.entered and mock_input.exited
    mock_set.assert_called_once_with(0, termios.TCSAFLUSH, ['saved'])
    assert not session.is_fullscreen
    assert output.getvalue().endswith(_TERM.exit_fullscreen + _TERM.normal_cursor)


def test_unusable_screen_size_is_reported():
    with patch('linepad.terminal.termios.tcgetattr', return_value=['saved']), \
            patch('linepad.terminal.termios.tcsetattr'), \
            patch.object(TerminalSession, 'width', new_callable=PropertyMock, return_value=0), \
            patch.object(TerminalSession, 'height', new_callable=PropertyMock, return_value=24):
        session = TerminalSession(terminal=_TERM, in_stream=TtyStream(),
                                  input_factory=lambda stream: MockInput())
        with pytest.raises(TerminalIOError) as excinfo:
            with session:
                pass
    assert excinfo.value.kind is ErrorKind.SCREEN_INFO


def test_read_key_expands_paste_events(output, screen_size):
    paste = PasteEvent()
    paste.events.extend(['a', 'b', '<SPACE>'])
    mock_input = MockInput(['<UP>', paste, 'c'])
    with patch('linepad.terminal.termios.tcgetattr', return_value=['saved']), \
            patch('linepad.terminal.termios.tcsetattr'):
        with TerminalSession(terminal=_TERM, in_stream=TtyStream(),
                             input_factory=lambda stream: mock_input) as session:
            keys = [session.read_key() for _ in range(5)]
            with pytest.raises(TerminalIOError) as excinfo:
                session.read_key()
    assert keys == ['<UP>', 'a', 'b', '<SPACE>', 'c']
    assert excinfo.value.kind is ErrorKind.INPUT_READ
