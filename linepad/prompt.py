"""Line-mode prompts shown after the editing session ends."""

from typing import Optional

from .constants import EditorConstants


def ask_for_confirmation(message: str) -> bool:
    """Ask a y/n question on standard input until it gets an answer.

    Only the first character of the reply counts, case-insensitively.
    End of input or Ctrl-C counts as "no".
    """
    while True:
        try:
            reply = input(message + EditorConstants.CONFIRM_SUFFIX)
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        if reply:
            response = reply[0].lower()
            if response == 'y':
                return True
            if response == 'n':
                return False
        print(EditorConstants.INVALID_CONFIRMATION_MESSAGE)


def ask_for_filename() -> Optional[str]:
    """Ask for a file name; empty replies ask again.

    Returns:
        The name, or None if input ended or was interrupted
    """
    while True:
        try:
            reply = input(EditorConstants.FILENAME_PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        if reply:
            return reply
