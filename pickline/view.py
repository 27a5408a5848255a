"""Cursor and scroll position over a list of lines."""

from .model import LineStore


class ListView:
    """Cursor index plus the window of lines currently on screen.

    ``row_offset`` is the index of the first visible line and ``num_rows``
    the number of lines the window can show. ``move_cursor`` is the only
    mutator; after every call the cursor lies inside
    ``[row_offset, row_offset + num_rows)``.
    """

    cursor_index: int = 0
    row_offset: int = 0

    def __init__(self, store: LineStore, num_rows: int):
        self.store = store
        self.num_rows = max(1, num_rows)
        self.cursor_index = store.first_selectable()
        # Smallest offset that keeps the starting cursor visible
        self.row_offset = max(0, self.cursor_index - self.num_rows + 1)

    @property
    def total_lines(self) -> int:
        return len(self.store)

    def visible_range(self) -> range:
        end = min(self.total_lines, self.row_offset + self.num_rows)
        return range(self.row_offset, end)

    def move_cursor(self, delta: int, allow_skip: bool = True) -> bool:
        """Move the cursor by ``delta`` lines, scrolling if needed.

        Unselectable lines are stepped over one at a time in the direction
        of travel when ``allow_skip`` is set; otherwise landing on one is a
        no-op. Running off either end of the list is a no-op. Returns True
        if the cursor moved.
        """
        if delta == 0:
            return False
        step = 1 if delta > 0 else -1
        target = self.cursor_index + delta
        while True:
            if not 0 <= target < self.total_lines:
                return False
            if not self.store.is_unselectable(target):
                break
            if not allow_skip:
                return False
            target += step

        if target == self.cursor_index:
            return False

        if step < 0 and target < self.row_offset:
            self.row_offset = target
        elif step > 0 and target >= self.row_offset + self.num_rows:
            self.row_offset = target - self.num_rows + 1
        self.cursor_index = target
        return True

    def move_cursor_up(self) -> bool:
        return self.move_cursor(-1, allow_skip=True)

    def move_cursor_down(self) -> bool:
        return self.move_cursor(1, allow_skip=True)
