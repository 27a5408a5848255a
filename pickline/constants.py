"""Constants and wire-level escape sequences for the line selector."""


class SelectorConstants:
    """Central configuration constants for the selector."""

    # Keyboard input
    READ_SIZE = 3  # Longest recognized key sequence (ESC [ A)
    CTRL_C = 0x03
    CARRIAGE_RETURN = 0x0D
    ESCAPE = 0x1B
    UP_BYTES = b"\x1b[A"
    DOWN_BYTES = b"\x1b[B"

    # Cursor movement
    CURSOR_UP = "\x1b[A"
    CURSOR_DOWN = "\x1b[B"
    SAVE_CURSOR_ANSI = "\x1b[s"
    RESTORE_CURSOR_ANSI = "\x1b[u"
    SAVE_CURSOR_LEGACY = "\x1b7"
    RESTORE_CURSOR_LEGACY = "\x1b8"
    LEGACY_CURSOR_TERMINAL = "Apple_Terminal"  # TERM_PROGRAM value needing ESC 7 / ESC 8

    # Layout
    CHROME_ROWS = 2  # Rows kept free below the list
    LINE_END = "\r\n"  # Raw mode disables output post-processing

    # Terminal device
    TTY_PATH = "/dev/tty"

    # Environment
    CONFIG_ENV = "PICKLINE_CONFIG"
    LOG_ENV = "PICKLINE_LOG"
    TERM_PROGRAM_ENV = "TERM_PROGRAM"


class Style:
    """ANSI SGR sequences used by the renderer."""

    RESET = "\x1b[0m"
    FAINT = "\x1b[2m"
    BLACK = "\x1b[30m"
    MAGENTA = "\x1b[35m"
    BG_BRIGHT_YELLOW = "\x1b[103m"
    BG_BRIGHT_MAGENTA = "\x1b[105m"
