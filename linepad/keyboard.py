"""Translation of raw key input into editing intents."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class IntentType(Enum):
    """Closed set of intents the editor understands."""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ENTER = "enter"
    BACKSPACE = "backspace"
    TAB = "tab"
    ESCAPE = "escape"
    PRINTABLE = "printable"


@dataclass(frozen=True)
class KeyIntent:
    """A parsed key press."""
    intent_type: IntentType
    char: Optional[str] = None  # Only set for PRINTABLE
    raw: str = ""  # The key token the intent came from

    @classmethod
    def printable(cls, char: str, raw: Optional[str] = None) -> "KeyIntent":
        if char not in EditorConstants.PRINTABLE_CHARACTERS:
            raise ValueError(f"{char!r} is not a printable character")
        return cls(IntentType.PRINTABLE, char, raw if raw is not None else char)


# curtsies key names (lowercased, modifiers joined by '-') to intents
_NAMED_KEYS = {
    'up': IntentType.MOVE_UP,
    'down': IntentType.MOVE_DOWN,
    'left': IntentType.MOVE_LEFT,
    'right': IntentType.MOVE_RIGHT,
    'enter': IntentType.ENTER,
    'return': IntentType.ENTER,
    'ctrl-j': IntentType.ENTER,
    'ctrl-m': IntentType.ENTER,
    'backspace': IntentType.BACKSPACE,
    'ctrl-h': IntentType.BACKSPACE,
    'tab': IntentType.TAB,
    'ctrl-i': IntentType.TAB,
    'esc': IntentType.ESCAPE,
    'escape': IntentType.ESCAPE,
}

# Raw characters and escape sequences, for sources that do not name keys
_RAW_KEYS = {
    '\x1b[A': IntentType.MOVE_UP,
    '\x1b[B': IntentType.MOVE_DOWN,
    '\x1b[C': IntentType.MOVE_RIGHT,
    '\x1b[D': IntentType.MOVE_LEFT,
    '\x1bOA': IntentType.MOVE_UP,
    '\x1bOB': IntentType.MOVE_DOWN,
    '\x1bOC': IntentType.MOVE_RIGHT,
    '\x1bOD': IntentType.MOVE_LEFT,
    '\r': IntentType.ENTER,
    '\n': IntentType.ENTER,
    '\x7f': IntentType.BACKSPACE,
    '\x08': IntentType.BACKSPACE,
    '\t': IntentType.TAB,
    '\x1b': IntentType.ESCAPE,
}


class KeyboardHandler:
    """Reads keys from a terminal session and yields KeyIntents."""

    def __init__(self, terminal_session):
        self.terminal = terminal_session

    def get_intent(self) -> KeyIntent:
        """Block until a recognized key arrives and return its intent.

        Keys outside the intent set are dropped without being reported.
        """
        while True:
            key = self.terminal.read_key()
            intent = self.parse_key(key)
            if intent is not None:
                return intent
            logger.debug(f"Dropped unrecognized key {key!r}")

    def parse_key(self, key) -> Optional[KeyIntent]:
        """Parse a curtsies key name or a raw key string.

        Returns None for keys that map to no intent.
        """
        key_str = str(key)
        if not key_str:
            return None

        # curtsies-style names like '<UP>', '<Ctrl-j>', '<SPACE>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            if name in ('space', 'spacebar', 'spc'):
                return KeyIntent.printable(' ', raw=key_str)
            intent_type = _NAMED_KEYS.get(name)
            if intent_type is None:
                return None
            return KeyIntent(intent_type, raw=key_str)

        intent_type = _RAW_KEYS.get(key_str)
        if intent_type is not None:
            return KeyIntent(intent_type, raw=key_str)

        if len(key_str) == 1 and key_str in EditorConstants.PRINTABLE_CHARACTERS:
            return KeyIntent.printable(key_str)
        return None
