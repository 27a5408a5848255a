"""Tests for line formatting and screen rendering."""

import unittest

from pickline.constants import Style
from pickline.model import LineStore, OrderMode, SelectionModel
from pickline.render import LineStyle, ScreenRenderer
from pickline.view import ListView

RESET = Style.RESET
HIGHLIGHT = Style.BG_BRIGHT_YELLOW + Style.BLACK
HIGHLIGHT_SELECTED = Style.BG_BRIGHT_MAGENTA + Style.BLACK


def make_renderer(lines, rows=10, columns=20, mode=OrderMode.POSITIONAL, show_numbers=True):
    store = LineStore(lines)
    selection = SelectionModel(store, mode)
    view = ListView(store, rows)
    return ScreenRenderer(store, selection, view, columns, show_numbers=show_numbers)


class TestLineStyle(unittest.TestCase):

    def setUp(self):
        self.renderer = make_renderer(["a", "", "b", "c"])
        self.selection = self.renderer.selection

    def test_cursor_line_is_highlighted(self):
        self.assertEqual(self.renderer.line_style(0), LineStyle.HIGHLIGHTED)

    def test_cursor_on_selected_line(self):
        self.selection.toggle(0)
        self.assertEqual(self.renderer.line_style(0), LineStyle.HIGHLIGHT_SELECTED)

    def test_selected_line(self):
        self.selection.toggle(2)
        self.assertEqual(self.renderer.line_style(2), LineStyle.SELECTED)

    def test_blank_line(self):
        self.assertEqual(self.renderer.line_style(1), LineStyle.UNSELECTABLE)

    def test_plain_line(self):
        self.assertEqual(self.renderer.line_style(3), LineStyle.UNSELECTED)

    def test_style_sequences(self):
        self.assertEqual(LineStyle.UNSELECTED.apply("x"), "x")
        self.assertEqual(LineStyle.HIGHLIGHTED.apply("x"), "\x1b[103m\x1b[30mx\x1b[0m")
        self.assertEqual(LineStyle.HIGHLIGHT_SELECTED.apply("x"), "\x1b[105m\x1b[30mx\x1b[0m")
        self.assertEqual(LineStyle.SELECTED.apply("x"), "\x1b[35mx\x1b[0m")
        self.assertEqual(LineStyle.UNSELECTABLE.apply("x"), "\x1b[2mx\x1b[0m")


class TestFormatLine(unittest.TestCase):

    def test_plain_line_is_numbered_and_padded(self):
        renderer = make_renderer(["a", "b"])
        self.assertEqual(renderer.format_line(1), "1: b" + " " * 16 + "\r\n")

    def test_highlighted_padding_is_unstyled(self):
        renderer = make_renderer(["a", "b"])
        self.assertEqual(renderer.format_line(0), HIGHLIGHT + "0: a" + RESET + " " * 16 + "\r\n")

    def test_blank_line(self):
        renderer = make_renderer(["a", ""])
        self.assertEqual(renderer.format_line(1), Style.FAINT + "1: " + RESET + " " * 17 + "\r\n")

    def test_hide_numbers(self):
        renderer = make_renderer(["a", "b"], show_numbers=False)
        self.assertEqual(renderer.format_line(1), "b" + " " * 19 + "\r\n")

    def test_trailing_whitespace_not_rendered(self):
        renderer = make_renderer(["a", "b    "], columns=6)
        self.assertEqual(renderer.format_line(1), "1: b  \r\n")

    def test_preserve_order_badge(self):
        renderer = make_renderer(["x", "y", "z"], mode=OrderMode.PRESERVE)
        renderer.selection.toggle(2)
        renderer.selection.toggle(1)
        self.assertEqual(renderer.line_text(2), "2: (0) z")
        self.assertEqual(renderer.line_text(1), "1: (1) y")
        self.assertEqual(renderer.line_text(0), "0: x")

    def test_no_badge_in_positional_mode(self):
        renderer = make_renderer(["x", "y"])
        renderer.selection.toggle(1)
        self.assertEqual(renderer.line_text(1), "1: y")

    def test_exact_width_has_no_padding_or_extra_reset(self):
        renderer = make_renderer(["abc", "def"], columns=6)
        self.assertEqual(renderer.format_line(1), "1: def\r\n")

    def test_long_line_is_truncated_with_reset(self):
        renderer = make_renderer(["0123456789abcdef", "x"], columns=8)
        self.assertEqual(
            renderer.format_line(0),
            HIGHLIGHT + "0: 01234" + RESET + RESET + "\r\n",
        )
        self.assertEqual(renderer.format_line(1), "1: x    \r\n")

    def test_long_unstyled_line_still_gets_reset(self):
        renderer = make_renderer(["a", "0123456789abcdef"], columns=5)
        self.assertEqual(renderer.format_line(1), "1: 01" + RESET + "\r\n")

    def test_tab_line_fits_width(self):
        renderer = make_renderer(["a\tb", "x"], columns=8)
        # "0: a" plus the tab expanded to column 8 of the text, cut at 8 cells
        self.assertEqual(
            renderer.format_line(0),
            HIGHLIGHT + "0: a    " + RESET + RESET + "\r\n",
        )
        self.assertNotIn("\t", renderer.screen())

    def test_tab_line_padded_by_cells(self):
        renderer = make_renderer(["x", "a\tb"], columns=14)
        self.assertEqual(renderer.format_line(1), "1: a       b  \r\n")

    def test_wide_characters_padded_by_cells(self):
        renderer = make_renderer(["x", "日本語"], columns=12)
        self.assertEqual(renderer.format_line(1), "1: 日本語   \r\n")

    def test_wide_character_never_straddles_edge(self):
        renderer = make_renderer(["x", "日本語日本"], columns=10)
        # 3 cells of prefix + 3 wide characters = 9; the fourth would need 11
        self.assertEqual(renderer.format_line(1), "1: 日本語" + RESET + " \r\n")

    def test_row_is_relative_to_offset(self):
        renderer = make_renderer([str(i) for i in range(10)], rows=3, columns=6)
        for _ in range(5):
            renderer.view.move_cursor_down()
        self.assertEqual(renderer.view.row_offset, 3)
        self.assertEqual(renderer.format_line(0), "3: 3  \r\n")


class TestScreen(unittest.TestCase):

    def test_screen_renders_visible_slice(self):
        renderer = make_renderer([str(i) for i in range(10)], rows=3, columns=6)
        renderer.view.move_cursor(4)
        screen = renderer.screen()
        self.assertEqual(
            screen,
            "2: 2  \r\n" + "3: 3  \r\n" + HIGHLIGHT + "4: 4" + RESET + "  \r\n",
        )

    def test_screen_with_fewer_lines_than_rows(self):
        renderer = make_renderer(["a", "b"], rows=5, columns=5)
        self.assertEqual(renderer.screen().count("\r\n"), 2)

    def test_blank_screen_covers_drawn_rows(self):
        renderer = make_renderer([str(i) for i in range(10)], rows=3, columns=4)
        self.assertEqual(renderer.blank_screen(), "    \r\n    \r\n    ")

    def test_blank_screen_for_short_list(self):
        renderer = make_renderer(["a"], rows=3, columns=2)
        self.assertEqual(renderer.blank_screen(), "  ")
        self.assertEqual(renderer.visible_row_count(), 1)


if __name__ == '__main__':
    unittest.main()
