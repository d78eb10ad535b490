"""Constants and configuration defaults for the linepad editor."""

import string


class EditorConstants:
    """Central fixed values for the editor."""

    APP_NAME = "linepad"

    # Editing
    TAB_WIDTH = 4  # Tab inserts a fixed run of spaces
    TAB_TEXT = " " * TAB_WIDTH
    # Characters accepted as printable input; everything else is dropped
    PRINTABLE_CHARACTERS = frozenset(
        string.ascii_letters + string.digits + string.punctuation + " "
    )
    # Shown in place of characters outside the printable set
    UNPRINTABLE_PLACEHOLDER = "?"

    # Files
    LINE_TERMINATOR = "\n"
    DEFAULT_ENCODING = "utf-8"
    SAVE_TEMP_SUFFIX = ".tmp"

    # Configuration
    CONFIG_FILENAME = "config.json"
    LOG_ENV_VAR = "LINEPAD_LOG"  # Path of a debug log file

    # Messages
    USAGE_MESSAGE = "Usage: {} [file]"
    SAVE_PROMPT = "Save modified buffer?"
    CONFIRM_SUFFIX = " (y/n): "
    INVALID_CONFIRMATION_MESSAGE = "Invalid input. Please enter 'y' for yes or 'n' for no."
    FILENAME_PROMPT = "Filename to write: "
