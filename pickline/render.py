"""Turn selector state into the text written to the terminal."""

from enum import Enum

from wcwidth import wcswidth, wcwidth

from .constants import SelectorConstants, Style
from .model import LineStore, SelectionModel
from .view import ListView


def truncate_cells(text: str, columns: int) -> tuple[str, int]:
    """Cut text to at most ``columns`` terminal cells.

    Returns the cut text and the number of cells it takes.
    """
    used = 0
    for i, ch in enumerate(text):
        width = max(wcwidth(ch), 0)
        if used + width > columns:
            return text[:i], used
        used += width
    return text, used


class LineStyle(Enum):
    """Per-line style; the value is the SGR prefix written before the text."""
    UNSELECTED = ""
    HIGHLIGHT_SELECTED = Style.BG_BRIGHT_MAGENTA + Style.BLACK
    HIGHLIGHTED = Style.BG_BRIGHT_YELLOW + Style.BLACK
    SELECTED = Style.MAGENTA
    UNSELECTABLE = Style.FAINT

    def apply(self, text: str) -> str:
        if self is LineStyle.UNSELECTED:
            return text
        return self.value + text + Style.RESET


class ScreenRenderer:
    """Formats the visible slice of lines for in-place redraws.

    Every row is padded with spaces to the terminal width, or cut to it,
    so a redraw fully overwrites the previous frame without clearing the
    screen.
    """

    def __init__(
        self,
        store: LineStore,
        selection: SelectionModel,
        view: ListView,
        num_columns: int,
        show_numbers: bool = True,
    ):
        self.store = store
        self.selection = selection
        self.view = view
        self.num_columns = num_columns
        self.show_numbers = show_numbers

    def line_style(self, index: int) -> LineStyle:
        """Pick the style for a line: cursor beats selection beats blank."""
        is_highlighted = index == self.view.cursor_index
        is_selected = self.selection.is_selected(index)
        if is_highlighted and is_selected:
            return LineStyle.HIGHLIGHT_SELECTED
        if is_highlighted:
            return LineStyle.HIGHLIGHTED
        if is_selected:
            return LineStyle.SELECTED
        if self.store.is_unselectable(index):
            return LineStyle.UNSELECTABLE
        return LineStyle.UNSELECTED

    def line_text(self, index: int) -> str:
        """Unstyled row text with order badge and line number prefixes."""
        text = self.store.display_text(index)
        if self.selection.preserve_order and self.selection.is_selected(index):
            text = f"({self.selection.sequence_number(index)}) {text}"
        if self.show_numbers:
            text = f"{index}: {text}"
        return text

    def format_line(self, row: int) -> str:
        """Format the line shown at visible ``row`` (0 is the top row)."""
        index = row + self.view.row_offset
        style = self.line_style(index)
        text = self.line_text(index)
        padding = self.num_columns - wcswidth(text)
        if padding >= 0:
            return style.apply(text) + " " * padding + SelectorConstants.LINE_END
        text, used = truncate_cells(text, self.num_columns)
        # Trailing reset so a cut-off style never leaks into the next row;
        # a wide character that would straddle the edge leaves one blank cell
        return (style.apply(text) + Style.RESET + " " * (self.num_columns - used)
                + SelectorConstants.LINE_END)

    def screen(self) -> str:
        """All visible rows as one string, for a single batched write."""
        return "".join(self.format_line(row) for row in range(len(self.view.visible_range())))

    def visible_row_count(self) -> int:
        return min(len(self.store), self.view.num_rows)

    def blank_screen(self) -> str:
        """Width-padded blank rows covering everything ``screen`` can draw."""
        blank = " " * self.num_columns
        return SelectorConstants.LINE_END.join([blank] * self.visible_row_count())
