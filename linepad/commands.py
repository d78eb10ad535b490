"""Command pattern implementation for editor intents."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set, TYPE_CHECKING

from .keyboard import IntentType

if TYPE_CHECKING:
    from .editor import EditEngine
    from .keyboard import KeyIntent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, engine: 'EditEngine', intent: 'KeyIntent') -> Set[int]:
        """Execute the command.

        Args:
            engine: EditEngine instance
            intent: The intent that triggered this command

        Returns:
            Rows whose on-screen text is stale after the command
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, engine: 'EditEngine', intent: 'KeyIntent') -> Set[int]:
        """Movement never changes text, so no row is dirty."""
        self._move(engine)
        return set()

    @abstractmethod
    def _move(self, engine: 'EditEngine'):
        """Perform the movement."""


class UpLineCommand(MovementCommand):
    def _move(self, engine):
        engine.cursor.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, engine):
        engine.cursor.move_down()


class LeftCharCommand(MovementCommand):
    def _move(self, engine):
        engine.cursor.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, engine):
        engine.cursor.move_right()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, engine: 'EditEngine', intent: 'KeyIntent') -> Set[int]:
        dirty = self._edit(engine, intent)
        if dirty:
            engine.modified = True
            engine.log_buffer()
        return dirty

    @abstractmethod
    def _edit(self, engine: 'EditEngine', intent: 'KeyIntent') -> Set[int]:
        """Perform the edit and return the dirty rows."""


class InsertTextCommand(EditCommand):
    def _edit(self, engine, intent):
        return engine.insert_char(intent.char)


class TabCommand(EditCommand):
    def _edit(self, engine, intent):
        return engine.insert_tab()


class InsertNewlineCommand(EditCommand):
    def _edit(self, engine, intent):
        return engine.newline()


class BackspaceCommand(EditCommand):
    def _edit(self, engine, intent):
        return engine.backspace()


class QuitCommand(EditorCommand):
    def execute(self, engine, intent):
        engine.running = False
        return set()


class CommandRegistry:
    """Registry mapping intents to commands."""

    def __init__(self):
        self._commands: Dict[IntentType, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register(IntentType.MOVE_UP, UpLineCommand())
        self.register(IntentType.MOVE_DOWN, DownLineCommand())
        self.register(IntentType.MOVE_LEFT, LeftCharCommand())
        self.register(IntentType.MOVE_RIGHT, RightCharCommand())

        # Editing commands
        self.register(IntentType.PRINTABLE, InsertTextCommand())
        self.register(IntentType.TAB, TabCommand())
        self.register(IntentType.ENTER, InsertNewlineCommand())
        self.register(IntentType.BACKSPACE, BackspaceCommand())

        # Session end
        self.register(IntentType.ESCAPE, QuitCommand())

    def register(self, intent_type: IntentType, command: EditorCommand):
        """Register a command for an intent type."""
        self._commands[intent_type] = command

    def get_command(self, intent_type: IntentType) -> Optional[EditorCommand]:
        return self._commands.get(intent_type)

    def execute(self, engine: 'EditEngine', intent: 'KeyIntent') -> Set[int]:
        """Execute the command for the given intent.

        Returns:
            The dirty rows; empty when no command is registered
        """
        command = self.get_command(intent.intent_type)
        if command is None:
            return set()
        return command.execute(engine, intent)
