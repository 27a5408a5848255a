"""Keyboard input decoding from raw terminal bytes."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import SelectorConstants

logger = logging.getLogger(__name__)


class KeyType(Enum):
    """Kinds of logical actions a read can produce."""
    QUIT = "quit"
    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    CHARACTER = "character"
    IGNORED = "ignored"  # Escape sequences other than up/down


@dataclass
class KeyEvent:
    """A decoded read from the terminal."""
    key_type: KeyType
    value: str  # Action name ('quit', 'up', ...) or the typed character
    raw: bytes


def decode_key(data: bytes) -> KeyEvent:
    """Classify one chunk of terminal input.

    Only the first byte decides, except for escape sequences which must
    match the cursor-up or cursor-down sequence exactly. Any other escape
    sequence is ignored rather than being passed on as a literal ESC.
    """
    first = data[0]
    if first == SelectorConstants.CTRL_C:
        return KeyEvent(key_type=KeyType.QUIT, value="quit", raw=data)
    if first == SelectorConstants.CARRIAGE_RETURN:
        return KeyEvent(key_type=KeyType.ENTER, value="enter", raw=data)
    if first == SelectorConstants.ESCAPE:
        if data == SelectorConstants.UP_BYTES:
            return KeyEvent(key_type=KeyType.UP, value="up", raw=data)
        if data == SelectorConstants.DOWN_BYTES:
            return KeyEvent(key_type=KeyType.DOWN, value="down", raw=data)
        return KeyEvent(key_type=KeyType.IGNORED, value="", raw=data)
    char = data[:1].decode("utf-8", errors="replace")
    return KeyEvent(key_type=KeyType.CHARACTER, value=char, raw=data)


class KeyboardHandler:
    """Reads fixed-size chunks from the terminal and decodes them."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface providing ``read(size)``."""
        self.terminal = terminal_interface

    def get_key_event(self) -> Optional[KeyEvent]:
        """Block for the next read and decode it.

        Returns None at end of input, which callers treat like quit.
        """
        try:
            data = self.terminal.read(SelectorConstants.READ_SIZE)
        except OSError as e:
            logger.warning(f"Terminal read failed, treating as end of input: {e}")
            return None
        if not data:
            return None
        return decode_key(data)
