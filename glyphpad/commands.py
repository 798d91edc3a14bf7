"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .viewport import Movement

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Moves the cursor; never modifies the document."""

    def __init__(self, movement: Movement):
        self.movement = movement

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.move_cursor(self.movement)
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands report whether the document changed."""
        return bool(self._edit(editor, key_event))

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit and return True if anything changed."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.delete_backward()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.delete_forward()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.insert_newline()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if not char or (ord(char[0]) < 32 and char != '\t'):
            return False
        changed = False
        for c in char:
            changed = editor.insert_char(c) or changed
        return changed


class SystemCommand(EditorCommand):
    """Base class for system commands like save, search, quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.save()


class SearchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.search()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands (arrows plus their Emacs control equivalents)
        movements = {
            Movement.LEFT: [(KeyType.SPECIAL, 'left'), (KeyType.CTRL, 'b')],
            Movement.RIGHT: [(KeyType.SPECIAL, 'right'), (KeyType.CTRL, 'f')],
            Movement.UP: [(KeyType.SPECIAL, 'up'), (KeyType.CTRL, 'p')],
            Movement.DOWN: [(KeyType.SPECIAL, 'down'), (KeyType.CTRL, 'n')],
            Movement.LINE_START: [(KeyType.SPECIAL, 'home'), (KeyType.CTRL, 'a')],
            Movement.LINE_END: [(KeyType.SPECIAL, 'end'), (KeyType.CTRL, 'e')],
            Movement.PAGE_UP: [(KeyType.SPECIAL, 'page_up')],
            Movement.PAGE_DOWN: [(KeyType.SPECIAL, 'page_down')],
        }
        for movement, keys in movements.items():
            command = MovementCommand(movement)
            for key in keys:
                self.register(key, command)

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.CTRL, 'd'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 'w'), SaveCommand())
        self.register((KeyType.CTRL, 's'), SearchCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
