"""Controlling terminal access: raw mode, size, and cursor control."""

import logging
import os
import termios
import tty
from typing import Optional

import blessed

from .constants import SelectorConstants

logger = logging.getLogger(__name__)


class TerminalError(OSError):
    """The controlling terminal could not be set up."""


class TerminalInterface:
    """Handles terminal I/O on the controlling tty.

    Standard input and output usually belong to a pipeline, so the
    interface opens the tty device itself. The device is put in raw mode
    on ``setup()`` and restored and closed exactly once on ``cleanup()``.
    """

    def __init__(
        self,
        tty_path: str = SelectorConstants.TTY_PATH,
        fd: Optional[int] = None,
        term_program: Optional[str] = None,
    ):
        """Prepare the interface; nothing is opened until ``setup()``.

        Args:
            tty_path: Terminal device to open
            fd: Already open terminal descriptor to adopt instead; it is
                restored but not closed on cleanup
            term_program: Terminal variant, defaults to $TERM_PROGRAM
        """
        self.tty_path = tty_path
        self.fd: Optional[int] = fd
        self._owns_fd = fd is None
        self._saved_attrs: Optional[list] = None
        self._active = False
        self.term: Optional[blessed.Terminal] = None
        self.rows = 0
        self.columns = 0
        if term_program is None:
            term_program = os.environ.get(SelectorConstants.TERM_PROGRAM_ENV, "")
        self.legacy_cursor = term_program == SelectorConstants.LEGACY_CURSOR_TERMINAL

    def setup(self) -> None:
        """Open the tty, enter raw mode and cache its size.

        Raises:
            TerminalError: if any step fails; the terminal is restored first.
        """
        try:
            if self.fd is None:
                self.fd = os.open(self.tty_path, os.O_RDWR)
            self._active = True
            if not os.isatty(self.fd):
                raise TerminalError(f"{self.tty_path} is not a terminal")
            self._saved_attrs = termios.tcgetattr(self.fd)
            tty.setraw(self.fd, termios.TCSANOW)
            self.rows, self.columns = self._query_size()
        except (OSError, termios.error) as e:
            self.cleanup()
            if isinstance(e, TerminalError):
                raise
            raise TerminalError(f"cannot use terminal {self.tty_path}: {e}") from e
        logger.debug(f"Terminal ready: {self.rows} rows, {self.columns} columns")

    def _query_size(self) -> tuple[int, int]:
        stream = open(self.fd, "w", encoding="utf-8", closefd=False)
        self.term = blessed.Terminal(stream=stream)
        rows, columns = self.term.height, self.term.width
        if rows <= 0 or columns <= 0:
            raise TerminalError(f"terminal reports unusable size {rows}x{columns}")
        return rows, columns

    def cleanup(self) -> None:
        """Restore terminal attributes and close the device.

        Safe to call more than once; only the first call has an effect.
        """
        if not self._active:
            return
        self._active = False
        try:
            if self._saved_attrs is not None:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
        except (OSError, termios.error) as e:
            logger.warning(f"Could not restore terminal attributes: {e}")
        finally:
            self._saved_attrs = None
            if self._owns_fd and self.fd is not None:
                os.close(self.fd)
                self.fd = None

    @property
    def is_active(self) -> bool:
        return self._active

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def read(self, size: int) -> bytes:
        """One blocking read of at most ``size`` bytes; ``b''`` at end of input."""
        return os.read(self.fd, size)

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        while data:
            data = data[os.write(self.fd, data):]

    def save_cursor(self) -> None:
        self.write(SelectorConstants.SAVE_CURSOR_LEGACY if self.legacy_cursor
                   else SelectorConstants.SAVE_CURSOR_ANSI)

    def restore_cursor(self) -> None:
        self.write(SelectorConstants.RESTORE_CURSOR_LEGACY if self.legacy_cursor
                   else SelectorConstants.RESTORE_CURSOR_ANSI)

    def cursor_up(self, n: int) -> None:
        self.write(SelectorConstants.CURSOR_UP * n)

    def cursor_down(self, n: int) -> None:
        self.write(SelectorConstants.CURSOR_DOWN * n)

    @property
    def height(self) -> int:
        """Rows available to the list, excluding the rows kept free below it."""
        return max(1, self.rows - SelectorConstants.CHROME_ROWS)

    @property
    def width(self) -> int:
        return self.columns
