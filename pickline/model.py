from enum import Enum
from typing import BinaryIO, Optional

from wcwidth import wcwidth


def read_input(stream: BinaryIO) -> str:
    """Read a whole binary stream and decode it as UTF-8.

    Undecodable bytes become U+FFFD so that arbitrary input can still be
    displayed and selected.
    """
    return stream.read().decode("utf-8", errors="replace")


class LineStore:
    """Immutable ordered lines; a line is identified by its index."""

    def __init__(self, lines: Optional[list[str]] = None):
        self._lines: tuple[str, ...] = tuple(lines) if lines else ("",)

    @classmethod
    def from_text(cls, text: str) -> "LineStore":
        """Split an input blob into lines.

        Line terminators at the very end of the blob are dropped, so a
        final newline does not produce an extra blank line. A single
        trailing carriage return is removed from every line.
        """
        text = text.rstrip("\r\n")
        if not text:
            return cls([""])
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        return cls(lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def display_text(self, index: int) -> str:
        """Return the line as it should be drawn.

        Trailing whitespace is removed, tabs are expanded to spaces and any
        other control character becomes "?", so every character left has a
        known cell width.
        """
        text = self._lines[index].rstrip().expandtabs()
        return "".join(ch if wcwidth(ch) >= 0 else "?" for ch in text)

    def is_unselectable(self, index: int) -> bool:
        return self._lines[index].strip() == ""

    def first_selectable(self) -> int:
        """Index of the first selectable line, or 0 when there is none."""
        for i in range(len(self._lines)):
            if not self.is_unselectable(i):
                return i
        return 0


class OrderMode(Enum):
    """How selected lines are ordered on output."""
    POSITIONAL = "positional"
    PRESERVE = "preserve"


class SelectionModel:
    """Selected line indices plus the sequence number recorded for each.

    In positional mode the sequence number of a line is its own index, so
    output follows document order. In preserve mode numbers are handed out
    from a running counter and closed up on deselect, so the numbers of the
    remaining selections are always 0..k-1.
    """

    def __init__(self, store: LineStore, mode: OrderMode = OrderMode.POSITIONAL):
        self.store = store
        self.mode = mode
        self.selected: set[int] = set()
        self.order: dict[int, int] = {}
        self.next_sequence = 0

    @property
    def preserve_order(self) -> bool:
        return self.mode is OrderMode.PRESERVE

    def _is_valid_target(self, index: int) -> bool:
        return 0 <= index < len(self.store) and not self.store.is_unselectable(index)

    def toggle(self, index: int) -> bool:
        """Select or deselect a line.

        Returns True if the selection changed. Unselectable or out of range
        indices are ignored.
        """
        if not self._is_valid_target(index):
            return False
        if index in self.selected:
            self._remove(index)
        else:
            self._add(index)
        return True

    def _add(self, index: int) -> None:
        self.selected.add(index)
        if self.preserve_order:
            self.order[index] = self.next_sequence
            self.next_sequence += 1
        else:
            self.order[index] = index

    def _remove(self, index: int) -> None:
        self.selected.discard(index)
        removed = self.order.pop(index)
        if not self.preserve_order:
            return
        for other, sequence in self.order.items():
            if sequence > removed:
                self.order[other] = sequence - 1
        self.next_sequence -= 1

    def is_selected(self, index: int) -> bool:
        return index in self.selected

    def sequence_number(self, index: int) -> Optional[int]:
        return self.order.get(index)

    def is_empty(self) -> bool:
        return not self.selected

    def ordered_selection(self) -> list[int]:
        """Selected indices sorted by their sequence numbers."""
        return sorted(self.selected, key=lambda i: self.order[i])

    def selected_lines(self) -> list[str]:
        """Original (untrimmed) text of the selected lines in output order."""
        return [self.store[i] for i in self.ordered_selection()]
