"""Whole-document load and save."""

import logging
import os
import shutil
import tempfile
from typing import Iterable, List

from .constants import EditorConstants
from .errors import FileOpenError

logger = logging.getLogger(__name__)


def split_lines(content: str) -> List[str]:
    """Split file content into lines, one per terminated record.

    A final line terminator does not start an extra empty line, and empty
    content gives a single empty line.
    """
    if not content:
        return [""]
    lines = content.split(EditorConstants.LINE_TERMINATOR)
    if content.endswith(EditorConstants.LINE_TERMINATOR):
        lines.pop()
    return lines


def load_lines(path: str, encoding: str = EditorConstants.DEFAULT_ENCODING,
               missing_ok: bool = False) -> List[str]:
    """Read a file as a list of lines.

    Args:
        path: File to read
        encoding: Text encoding; undecodable bytes are kept as surrogates
        missing_ok: Return a single empty line when the file does not exist

    Raises:
        FileOpenError: If the file cannot be opened or read
    """
    try:
        with open(path, 'r', encoding=encoding, errors='surrogateescape') as f:
            content = f.read()
    except FileNotFoundError as e:
        if missing_ok:
            logger.info(f"{path} does not exist; starting a new document")
            return [""]
        raise FileOpenError(path, f"Cannot open {path}: {e.strerror}") from e
    except OSError as e:
        raise FileOpenError(path, f"Cannot open {path}: {e.strerror}") from e
    return split_lines(content)


def _default_file_mode() -> int:
    """Mode a newly created file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_in_place(path: str, content: str, encoding: str) -> None:
    with open(path, 'w', encoding=encoding, errors='surrogateescape') as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())


def save_lines(path: str, lines: Iterable[str],
               encoding: str = EditorConstants.DEFAULT_ENCODING) -> None:
    """Save lines to a file, each followed by a line terminator.

    Symlinks are followed, so the file they point to receives the text. The
    text is written to a temporary file next to the target and renamed over
    it, keeping the target's permissions; a failed save leaves the old file
    intact. When the directory cannot hold a temporary file, the target is
    written in place.

    Raises:
        FileOpenError: If the target cannot be opened for writing
    """
    content = ''.join(line + EditorConstants.LINE_TERMINATOR for line in lines)
    target = os.path.realpath(path)
    exists = os.path.exists(target)
    if exists and not os.access(target, os.W_OK):
        raise FileOpenError(path, f"Cannot save to {path}: Permission denied")

    try:
        temp_file = tempfile.NamedTemporaryFile(mode='w', encoding=encoding,
                                                errors='surrogateescape',
                                                dir=os.path.dirname(target),
                                                suffix=EditorConstants.SAVE_TEMP_SUFFIX,
                                                delete=False)
    except OSError as e:
        logger.info(f"Cannot create a temporary file next to {target} ({e}); writing in place")
        try:
            _write_in_place(target, content, encoding)
        except OSError as write_error:
            raise FileOpenError(path, f"Cannot save to {path}: {write_error.strerror or write_error}") from write_error
        logger.info(f"Saved {path}")
        return

    temp_filename = temp_file.name
    try:
        with temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        if exists:
            shutil.copymode(target, temp_filename)
        else:
            os.chmod(temp_filename, _default_file_mode())
        os.replace(temp_filename, target)
    except OSError as e:
        if os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove {temp_filename}: {cleanup_error}")
        raise FileOpenError(path, f"Cannot save to {path}: {e.strerror or e}") from e
    logger.info(f"Saved {path}")
