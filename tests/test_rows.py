"""Tab expansion and logical-to-rendered column mapping."""

from __future__ import annotations

import dataclasses
import unittest

from picoview.rows import Row, RowBuffer, cx_to_rx, expand_tabs

SAMPLES = (
    "",
    "plain",
    "\t",
    "a\tb",
    "\t\tx",
    "12345678\tz",
    "1234567\t8",
    "mixed\t tabs\tand  spaces\t",
)


class TabExpansionTests(unittest.TestCase):
    def test_tab_after_one_char_renders_seven_spaces(self) -> None:
        row = Row.from_content("a\tb")
        self.assertEqual(row.render, "a" + " " * 7 + "b")
        self.assertEqual(row.rsize, 9)
        self.assertEqual(row.size, 3)

    def test_leading_tab_is_a_full_stop(self) -> None:
        self.assertEqual(expand_tabs("\tx"), " " * 8 + "x")

    def test_tab_on_a_stop_boundary_advances_a_full_stop(self) -> None:
        self.assertEqual(expand_tabs("12345678\tz"), "12345678" + " " * 8 + "z")

    def test_tab_one_before_stop_advances_one_column(self) -> None:
        self.assertEqual(expand_tabs("1234567\t8"), "1234567 8")

    def test_custom_tab_stop(self) -> None:
        self.assertEqual(expand_tabs("ab\tc", tab_stop=4), "ab  c")
        row = Row.from_content("ab\tc", tab_stop=4)
        self.assertEqual(cx_to_rx(row, 3, tab_stop=4), 4)

    def test_text_without_tabs_is_unchanged(self) -> None:
        self.assertEqual(expand_tabs("no tabs here"), "no tabs here")

    def test_rows_are_immutable(self) -> None:
        row = Row.from_content("x")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            row.chars = "y"  # type: ignore[misc]


class ColumnMappingTests(unittest.TestCase):
    def test_cx_at_row_end_matches_render_length(self) -> None:
        for content in SAMPLES:
            with self.subTest(content=content):
                row = Row.from_content(content)
                self.assertEqual(cx_to_rx(row, row.size), row.rsize)

    def test_cx_to_rx_is_monotonic(self) -> None:
        for content in SAMPLES:
            with self.subTest(content=content):
                row = Row.from_content(content)
                mapped = [cx_to_rx(row, cx) for cx in range(row.size + 1)]
                self.assertEqual(mapped, sorted(mapped))
                for cx, rx in enumerate(mapped):
                    self.assertGreaterEqual(rx, cx)

    def test_cursor_after_tab_lands_on_next_stop(self) -> None:
        row = Row.from_content("a\tb")
        self.assertEqual([cx_to_rx(row, cx) for cx in range(4)], [0, 1, 8, 9])


class RowBufferTests(unittest.TestCase):
    def test_append_row_tracks_count_and_order(self) -> None:
        buffer = RowBuffer()
        buffer.append_row("ab")
        buffer.append_row("")
        buffer.append_row("c")

        self.assertEqual(buffer.numrows, 3)
        self.assertEqual(len(buffer), 3)
        self.assertEqual([row.chars for row in buffer], ["ab", "", "c"])
        self.assertEqual(buffer[2].render, "c")

    def test_buffer_uses_its_tab_stop(self) -> None:
        buffer = RowBuffer(tab_stop=2)
        row = buffer.append_row("a\tb")
        self.assertEqual(row.render, "a b")
        self.assertEqual(buffer.cx_to_rx(0, 2), 2)


if __name__ == "__main__":
    unittest.main()
