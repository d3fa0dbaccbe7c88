"""Regression tests for ANSI line-shaping primitives.

Focuses on measuring, panning, and character-range slicing of styled lines.
These cases protect body rows from losing or leaking color at cut points.
"""

import unittest

from lazyscroll import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_width_ignores_escape_sequences(self) -> None:
        self.assertEqual(ansi_mod.ansi_display_width("\033[1;31mabc\033[0m"), 3)

    def test_wide_characters_and_tabs_use_terminal_columns(self) -> None:
        self.assertEqual(ansi_mod.ansi_display_width("日本"), 4)
        self.assertEqual(ansi_mod.ansi_display_width("a\tb"), 9)

    def test_strip_ansi_leaves_plain_text(self) -> None:
        self.assertEqual(ansi_mod.strip_ansi("\033[32mok\033[0m!"), "ok!")


class SliceAnsiLineTests(unittest.TestCase):
    def test_viewport_reinjects_active_color(self) -> None:
        line = "\033[31mabcdef\033[0m"
        self.assertEqual(ansi_mod.slice_ansi_line(line, 2, 3), "\033[31mcde")

    def test_viewport_past_end_is_empty(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("abc", 5, 3), "")

    def test_start_inside_tab_keeps_only_columns_right_of_start(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("a\tb", 3, 10), "     b")
        self.assertEqual(ansi_mod.slice_ansi_line("a\tb", 3, 2), "  ")

    def test_start_inside_wide_character_shows_a_blank_column(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("漢字", 1, 4), " 字")

    def test_wide_character_crossing_right_edge_is_dropped(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("a漢", 0, 2), "a")

    def test_style_before_partial_tab_is_reopened(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("\033[33m\tx", 6, 4), "\033[33m  x")


class ExpandTabsTests(unittest.TestCase):
    def test_tabs_expand_to_next_stop_around_escapes(self) -> None:
        self.assertEqual(ansi_mod.expand_ansi_tabs("ab\033[1m\tc\033[0m"), "ab\033[1m      c\033[0m")

    def test_text_without_tabs_is_returned_unchanged(self) -> None:
        self.assertEqual(ansi_mod.expand_ansi_tabs("\033[1mab\033[0m"), "\033[1mab\033[0m")


class SliceAnsiCharsTests(unittest.TestCase):
    def test_range_from_start_keeps_leading_style(self) -> None:
        line = "\033[34mkey\033[0m = value"
        self.assertEqual(ansi_mod.slice_ansi_chars(line, 0, 3), "\033[34mkey\033[0m")

    def test_range_inside_colored_run_reopens_color(self) -> None:
        line = "\033[34mkeyword\033[0m"
        self.assertEqual(ansi_mod.slice_ansi_chars(line, 3, 5), "\033[34mwo")

    def test_range_keeps_inner_escapes(self) -> None:
        line = "ab\033[1mcd\033[0mef"
        self.assertEqual(ansi_mod.slice_ansi_chars(line, 1, 5), "b\033[1mcd\033[0me")

    def test_empty_range_is_empty(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_chars("abc", 2, 2), "")

    def test_pad_counts_visible_columns_only(self) -> None:
        self.assertEqual(ansi_mod.pad_ansi_line("\033[1mab\033[0m", 4), "\033[1mab\033[0m  ")
        self.assertEqual(ansi_mod.pad_ansi_line("abcdef", 4), "abcdef")


if __name__ == "__main__":
    unittest.main()
