"""Test the command-line entry point."""

import logging
from unittest.mock import MagicMock, patch

import pytest
from linepad.__main__ import main
from linepad.config import EditorConfig
from linepad.editor import EditEngine
from linepad.errors import ErrorKind, TerminalIOError
from linepad.keyboard import IntentType, KeyIntent


def intents_for(text_keys):
    intents = []
    for key in text_keys:
        if key == 'ENTER':
            intents.append(KeyIntent(IntentType.ENTER))
        elif key == 'ESC':
            intents.append(KeyIntent(IntentType.ESCAPE))
        else:
            intents.append(KeyIntent.printable(key))
    return intents


@pytest.fixture
def editor_env(tmp_path, monkeypatch):
    """Run main() with a fake terminal and default config in tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LINEPAD_LOG", raising=False)
    store = MagicMock()
    store.load.return_value = EditorConfig()
    with patch('linepad.__main__.get_config_store', return_value=store), \
            patch('linepad.terminal.TerminalSession') as mock_session_cls:
        yield mock_session_cls


def scripted_run(keys):
    def fake_run(self, session, keyboard=None):
        self.running = True
        for intent in intents_for(keys):
            self.handle_key(intent)
            if not self.running:
                break
    return fake_run


def test_too_many_arguments(capsys):
    assert main(["a.txt", "b.txt"]) == ErrorKind.COMMAND_LINE_ARGUMENTS.exit_status
    err = capsys.readouterr().err
    assert "Usage:" in err
    assert "CommandLineArgumentsError" in err


def test_version_flag(capsys):
    with patch('linepad.__main__.get_version_string', return_value="linepad abc1234 unknown"):
        assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "linepad abc1234 unknown"


def test_new_document_saved_to_prompted_filename(editor_env, tmp_path):
    with patch.object(EditEngine, 'run', scripted_run(['h', 'i', 'ENTER', '!', 'ESC'])), \
            patch('builtins.input', side_effect=['y', 'out.txt']):
        assert main([]) == 0
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "hi\n!\n"
    editor_env.return_value.__enter__.assert_called_once()
    editor_env.return_value.__exit__.assert_called_once()


def test_declining_save_writes_nothing(editor_env, tmp_path):
    with patch.object(EditEngine, 'run', scripted_run(['x', 'ESC'])), \
            patch('builtins.input', return_value='n'):
        assert main([]) == 0
    assert list(tmp_path.iterdir()) == []


def test_ctrl_c_at_save_prompt_exits_cleanly(editor_env, tmp_path):
    with patch.object(EditEngine, 'run', scripted_run(['x', 'ESC'])), \
            patch('builtins.input', side_effect=KeyboardInterrupt):
        assert main([]) == 0
    assert list(tmp_path.iterdir()) == []


def test_ctrl_c_at_filename_prompt_exits_cleanly(editor_env, tmp_path):
    with patch.object(EditEngine, 'run', scripted_run(['x', 'ESC'])), \
            patch('builtins.input', side_effect=['y', KeyboardInterrupt]):
        assert main([]) == 0
    assert list(tmp_path.iterdir()) == []


def test_unmodified_buffer_skips_prompt(editor_env, tmp_path):
    with patch.object(EditEngine, 'run', scripted_run(['ESC'])), \
            patch('builtins.input') as mock_input:
        assert main([]) == 0
    mock_input.assert_not_called()


def test_opened_file_is_saved_in_place(editor_env, tmp_path):
    doc = tmp_path / "doc.txt"
    doc.write_text("abc\n", encoding="utf-8")
    with patch.object(EditEngine, 'run', scripted_run(['ENTER', 'ESC'])), \
            patch('builtins.input', return_value='y') as mock_input:
        assert main(["doc.txt"]) == 0
    # Only the confirmation is asked; the file name is known
    assert mock_input.call_count == 1
    assert doc.read_text(encoding="utf-8") == "\nabc\n"


def test_missing_file_is_file_open_error(editor_env, capsys):
    assert main(["missing.txt"]) == ErrorKind.FILE_OPEN.exit_status
    assert "FileOpenError" in capsys.readouterr().err
    editor_env.assert_not_called()


def test_terminal_failure_exits_with_its_kind(editor_env, capsys):
    def failing_run(self, session, keyboard=None):
        raise TerminalIOError(ErrorKind.INPUT_READ, "read failed")

    with patch.object(EditEngine, 'run', failing_run), \
            patch('builtins.input') as mock_input:
        assert main([]) == ErrorKind.INPUT_READ.exit_status
    assert "ReadConsoleInput" in capsys.readouterr().err
    # The session was still closed on the failure path
    editor_env.return_value.__exit__.assert_called_once()
    mock_input.assert_not_called()


def test_log_env_var_enables_debug_file_logging(monkeypatch, tmp_path):
    from linepad.__main__ import configure_logging

    log_file = tmp_path / "linepad.log"
    monkeypatch.setenv("LINEPAD_LOG", str(log_file))
    with patch('linepad.__main__.logging.basicConfig') as mock_basic_config:
        configure_logging(EditorConfig(log_level="ERROR"))
    kwargs = mock_basic_config.call_args.kwargs
    assert kwargs["filename"] == str(log_file)
    assert kwargs["level"] == logging.DEBUG


def test_configured_log_file_uses_configured_level(monkeypatch, tmp_path):
    from linepad.__main__ import configure_logging

    monkeypatch.delenv("LINEPAD_LOG", raising=False)
    config = EditorConfig(log_file=str(tmp_path / "x.log"), log_level="INFO")
    with patch('linepad.__main__.logging.basicConfig') as mock_basic_config:
        configure_logging(config)
    assert mock_basic_config.call_args.kwargs["level"] == logging.INFO


def test_no_log_file_configures_nothing(monkeypatch):
    from linepad.__main__ import configure_logging

    monkeypatch.delenv("LINEPAD_LOG", raising=False)
    with patch('linepad.__main__.logging.basicConfig') as mock_basic_config:
        configure_logging(EditorConfig())
    mock_basic_config.assert_not_called()
