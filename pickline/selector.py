"""Main selector controller."""

import logging
import sys
from typing import Optional, TextIO

from .commands import CommandRegistry, Outcome
from .config import SelectorConfig
from .keyboard import KeyboardHandler, KeyEvent
from .model import LineStore, SelectionModel
from .render import ScreenRenderer
from .terminal import TerminalInterface
from .view import ListView

logger = logging.getLogger(__name__)


class Selector:
    """Interactive line selection session.

    One blocking read per iteration: decode it, run the bound command,
    redraw if needed. The session ends on quit, on end of terminal input,
    or when a selection is confirmed, and the terminal is released on
    every one of those paths.
    """

    def __init__(
        self,
        store: LineStore,
        config: Optional[SelectorConfig] = None,
        terminal: Optional[TerminalInterface] = None,
        output: Optional[TextIO] = None,
    ):
        """Initialize the selector components.

        Args:
            store: Lines to choose from
            config: Selector options (defaults to single selection,
                positional order, numbered lines)
            terminal: Terminal to draw on and read keys from
            output: Stream receiving the selected lines (default stdout)
        """
        self.store = store
        self.config = config or SelectorConfig()
        self.terminal = terminal or TerminalInterface()
        self.output = output if output is not None else sys.stdout
        self.keyboard = KeyboardHandler(self.terminal)
        self.selection = SelectionModel(store, self.config.order_mode)
        self.command_registry = CommandRegistry()
        # Sized once the terminal is set up
        self.view: Optional[ListView] = None
        self.renderer: Optional[ScreenRenderer] = None
        self.running = False
        self.result: Optional[list[str]] = None

    def run(self) -> Optional[list[str]]:
        """Run the selection loop.

        Returns:
            The emitted lines, or None if the session was cancelled.

        Raises:
            TerminalError: if the terminal can't be set up; no loop is run.
        """
        self.terminal.setup()
        try:
            self._start()
            self.running = True
            while self.running:
                key_event = self.keyboard.get_key_event()
                if key_event is None:
                    logger.debug("End of terminal input")
                    self._cancel()
                    break
                self._handle_key_event(key_event)
        finally:
            self.terminal.cleanup()
        return self.result

    def _start(self):
        """Create the view for the terminal size and draw the first frame."""
        self.view = ListView(self.store, self.terminal.height)
        self.renderer = ScreenRenderer(
            self.store,
            self.selection,
            self.view,
            self.terminal.width,
            show_numbers=not self.config.hide_numbers,
        )
        logger.debug(
            f"Session start: {len(self.store)} lines, "
            f"{self.view.num_rows} rows x {self.renderer.num_columns} columns"
        )
        self.terminal.write(self.renderer.screen())
        # Mark the top of the drawn block so redraws start from the same place
        drawn = self.renderer.visible_row_count()
        self.terminal.cursor_up(drawn)
        self.terminal.save_cursor()
        self.terminal.cursor_down(drawn)

    def _handle_key_event(self, key_event: KeyEvent):
        """Dispatch a decoded key event and apply the resulting transition."""
        logger.debug(f"Key {key_event.key_type.value} {key_event.value!r}")
        outcome = self.command_registry.execute(self, key_event)
        if outcome is Outcome.REDRAW:
            self._redraw()
        elif outcome is Outcome.FINISH:
            self._finish()
        elif outcome is Outcome.CANCEL:
            self._cancel()

    def _redraw(self):
        self.terminal.restore_cursor()
        self.terminal.write(self.renderer.screen())

    def _cancel(self):
        logger.info("Selection cancelled")
        self.running = False

    def _finish(self):
        """Erase the UI and write the selected lines to the output stream."""
        self.terminal.restore_cursor()
        self.terminal.write(self.renderer.blank_screen())
        self.terminal.restore_cursor()

        lines = self.selection.selected_lines()
        self.output.write("\n".join(lines))
        self.output.flush()
        logger.info(f"Emitted {len(lines)} selected line(s)")
        self.result = lines
        self.running = False
