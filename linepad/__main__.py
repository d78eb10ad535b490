"""Linepad CLI entry point.

Allows running via `python -m linepad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Sequence

from .config import EditorConfig, get_config_store
from .constants import EditorConstants
from .errors import CommandLineArgumentsError, LinepadError
from .version import get_version_string

logger = logging.getLogger(__name__)


def configure_logging(config: EditorConfig) -> None:
    """Send log records to a file when one is configured.

    The terminal belongs to the editor while it runs, so nothing is logged
    to the screen. LINEPAD_LOG overrides the configured log file and turns
    on debug records.
    """
    log_file = os.environ.get(EditorConstants.LOG_ENV_VAR)
    level = 'DEBUG' if log_file else config.log_level
    log_file = log_file or config.log_file
    if not log_file:
        logging.getLogger(EditorConstants.APP_NAME).addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=os.path.expanduser(log_file),
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def resolve_path(filename: str) -> str:
    """Resolve a file argument against the current working directory."""
    return os.path.join(os.getcwd(), filename)


def save_after_session(lines: list[str], path: Optional[str], encoding: str) -> bool:
    """Offer to save the buffer once the terminal is back in normal mode.

    Returns:
        True if the buffer was written
    """
    from .document_io import save_lines
    from .prompt import ask_for_confirmation, ask_for_filename

    if not ask_for_confirmation(EditorConstants.SAVE_PROMPT):
        return False
    if path is None:
        filename = ask_for_filename()
        if filename is None:
            return False
        path = resolve_path(filename)
    save_lines(path, lines, encoding=encoding)
    return True


def run_editor(args: Sequence[str], prog: str = EditorConstants.APP_NAME) -> int:
    """Load, edit and optionally save one document.

    Raises:
        LinepadError: For usage errors and every fatal I/O failure
    """
    if len(args) > 1:
        print(EditorConstants.USAGE_MESSAGE.format(prog), file=sys.stderr)
        raise CommandLineArgumentsError(f"expected at most one file, got {len(args)}")

    config = get_config_store().load()
    configure_logging(config)

    # Lazy import to avoid importing terminal deps for --version
    from .buffer import LineBuffer
    from .document_io import load_lines
    from .editor import EditEngine
    from .terminal import TerminalSession

    path = resolve_path(args[0]) if args else None
    if path is not None:
        lines = load_lines(path, encoding=config.encoding,
                           missing_ok=config.open_missing_as_new)
    else:
        lines = [""]

    engine = EditEngine(LineBuffer(lines), config)
    with TerminalSession() as session:
        engine.run(session)

    if engine.modified:
        save_after_session(engine.buffer.lines, path, config.encoding)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else EditorConstants.APP_NAME
    try:
        return run_editor(args, prog=prog)
    except LinepadError as e:
        logger.error(f"Session ended with {e.kind.label}: {e}")
        print(e.kind.label, file=sys.stderr)
        return e.exit_status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
