"""Command pattern implementation for selector actions."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .selector import Selector
    from .keyboard import KeyEvent


class Outcome(Enum):
    """What the controller does after a command ran."""
    CONTINUE = "continue"  # Stay running, screen unchanged
    REDRAW = "redraw"      # Stay running, redraw from the mark
    FINISH = "finish"      # Clear the UI and emit the selection
    CANCEL = "cancel"      # Release the terminal and emit nothing


class SelectorCommand(ABC):
    """Base class for selector commands."""

    @abstractmethod
    def execute(self, selector: 'Selector', key_event: 'KeyEvent') -> Outcome:
        """Execute the command.

        Args:
            selector: Selector instance
            key_event: The key event that triggered this command

        Returns:
            The transition the controller should take next
        """
        pass


class UpLineCommand(SelectorCommand):
    def execute(self, selector, key_event):
        selector.view.move_cursor_up()
        return Outcome.REDRAW


class DownLineCommand(SelectorCommand):
    def execute(self, selector, key_event):
        selector.view.move_cursor_down()
        return Outcome.REDRAW


class ToggleSelectionCommand(SelectorCommand):
    """Toggle the line under the cursor.

    In single selection mode a successful toggle confirms immediately.
    """

    def execute(self, selector, key_event):
        changed = selector.selection.toggle(selector.view.cursor_index)
        if selector.config.multiline:
            return Outcome.REDRAW
        if changed:
            return Outcome.FINISH
        # Cursor rests on an unselectable line only when nothing is selectable
        return Outcome.CONTINUE


class ContinueCommand(SelectorCommand):
    def execute(self, selector, key_event):
        if selector.selection.is_empty():
            return Outcome.CONTINUE
        return Outcome.FINISH


class QuitCommand(SelectorCommand):
    def execute(self, selector, key_event):
        return Outcome.CANCEL


class CommandRegistry:
    """Maps decoded key events to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], SelectorCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        quit_command = QuitCommand()
        toggle_command = ToggleSelectionCommand()

        # Navigation
        self.register((KeyType.UP, 'up'), UpLineCommand())
        self.register((KeyType.DOWN, 'down'), DownLineCommand())

        # Selection
        self.register((KeyType.ENTER, 'enter'), toggle_command)
        self.register((KeyType.CHARACTER, 's'), toggle_command)
        self.register((KeyType.CHARACTER, 'c'), ContinueCommand())

        # Quit / cancel
        self.register((KeyType.QUIT, 'quit'), quit_command)
        self.register((KeyType.CHARACTER, 'q'), quit_command)

    def register(self, key: Tuple[KeyType, str], command: SelectorCommand):
        """Register a command for a key."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[SelectorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, selector: 'Selector', key_event: 'KeyEvent') -> Outcome:
        """Execute the command bound to the key event.

        Keys without a command are ignored.
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return Outcome.CONTINUE
        return command.execute(selector, key_event)
