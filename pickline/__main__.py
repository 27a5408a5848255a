"""Pickline CLI entry point.

Allows running via `python -m pickline` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from .constants import SelectorConstants
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "Usage: pickline [OPTIONS] [FILE]"

HELP_TEXT = f"""\
{USAGE}

Tool for interactively selecting input lines. Lines are read from FILE,
or from standard input when FILE is missing or '-'. The selected lines
are written to standard output.

Options:
  -h, --help            output help
  -m, --multiline       enable multiple line selection
  -p, --preserve-order  output lines in order of selection
  -n, --hide-numbers    do not prefix lines with their line number
  -V, --version         output version
      --keytest         show how key presses are decoded

Controls:
  up                    move cursor up
  down                  move cursor down
  q                     quit / cancel
  s, enter              select line
  c                     output selection to stdout and exit
"""

LONG_OPTIONS = {
    "--help": "help",
    "--multiline": "multiline",
    "--preserve-order": "preserve_order",
    "--hide-numbers": "hide_numbers",
    "--version": "version",
    "--keytest": "keytest",
}

SHORT_OPTIONS = {
    "h": "help",
    "m": "multiline",
    "p": "preserve_order",
    "n": "hide_numbers",
    "V": "version",
}


class UsageError(Exception):
    """Invalid command line."""


@dataclass
class Options:
    help: bool = False
    version: bool = False
    keytest: bool = False
    multiline: bool = False
    preserve_order: bool = False
    hide_numbers: bool = False
    file: Optional[str] = None


def parse_args(argv: list[str]) -> Options:
    """Parse command line arguments (without the program name).

    Short flags may be combined (``-mp``) and ``--`` ends option parsing.
    """
    options = Options()
    files: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            files.extend(args)
            break
        if arg.startswith("--"):
            name = LONG_OPTIONS.get(arg)
            if name is None:
                raise UsageError(f"unknown option '{arg}'")
            setattr(options, name, True)
        elif arg.startswith("-") and arg != "-":
            for flag in arg[1:]:
                name = SHORT_OPTIONS.get(flag)
                if name is None:
                    raise UsageError(f"unknown option '-{flag}'")
                setattr(options, name, True)
        else:
            files.append(arg)
    if len(files) > 1:
        raise UsageError("at most one input file may be given")
    options.file = files[0] if files else None
    return options


def configure_logging() -> None:
    """Send log records to the file named by $PICKLINE_LOG, if set.

    The terminal belongs to the selector UI, so there is no console logging.
    """
    log_file = os.environ.get(SelectorConstants.LOG_ENV)
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _escape_bytes(data: bytes) -> str:
    """Return a printable representation of raw key bytes."""
    # Represent control/escape characters visibly
    return data.decode('latin-1').encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the selector's input stack.

    Every read is decoded exactly as the selector would decode it and the
    result is printed on the terminal. Quit with Ctrl-C.
    """
    from .keyboard import KeyboardHandler, KeyType
    from .terminal import TerminalInterface

    terminal = TerminalInterface()
    terminal.setup()
    keyboard = KeyboardHandler(terminal)
    newline = SelectorConstants.LINE_END

    try:
        terminal.write("Keyboard test mode - press keys to see decoded actions." + newline)
        terminal.write("Quit with Ctrl-C." + newline)
        while True:
            ev = keyboard.get_key_event()
            if ev is None:
                terminal.write("End of input." + newline)
                break
            parts = [
                f"type={ev.key_type.value}",
                f"value={ev.value!r}",
                f"raw='{_escape_bytes(ev.raw)}'",
            ]
            terminal.write(' '.join(parts) + newline)
            if ev.key_type is KeyType.QUIT:
                terminal.write("Exiting keyboard test." + newline)
                break
    finally:
        terminal.cleanup()


def _read_source(path: Optional[str]) -> str:
    from .model import read_input

    if path is None or path == "-":
        return read_input(sys.stdin.buffer)
    with open(path, "rb") as f:
        return read_input(f)


def _discard_stdout():
    """Point stdout at devnull so the flush at interpreter exit cannot fail again."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(argv: Optional[list[str]] = None) -> int:
    configure_logging()
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        print(f"pickline: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    if options.help:
        print(HELP_TEXT, end="")
        return 0
    if options.version:
        print(get_version_string())
        return 0

    # Lazy import to avoid terminal deps for --help and --version
    from .config import load_config
    from .model import LineStore
    from .selector import Selector
    from .terminal import TerminalError

    if options.keytest:
        try:
            run_keyboard_test()
        except TerminalError as e:
            logger.error(f"Terminal setup failed: {e}")
            print(f"pickline: {e}", file=sys.stderr)
            return 1
        return 0

    config = load_config().with_flags(
        multiline=options.multiline,
        preserve_order=options.preserve_order,
        hide_numbers=options.hide_numbers,
    )

    try:
        text = _read_source(options.file)
    except OSError as e:
        print(f"pickline: cannot read {options.file}: {e.strerror or e}", file=sys.stderr)
        return 1

    selector = Selector(LineStore.from_text(text), config)
    try:
        selector.run()
    except TerminalError as e:
        logger.error(f"Terminal setup failed: {e}")
        print(f"pickline: {e}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        logger.warning("Standard output closed before the selection was written")
        _discard_stdout()
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
