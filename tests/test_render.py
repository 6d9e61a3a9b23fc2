"""Frame composition tests for styled pager lines."""

from __future__ import annotations

import unittest
from unittest import mock

from pygments.console import codes

from least import render
from least.overstrike import Span, SpanStyle


class RenderStyledLineTests(unittest.TestCase):
    def test_plain_span_has_no_escapes(self) -> None:
        self.assertEqual(render.render_styled_line((Span("hello"),), 80), "hello")

    def test_bold_and_underline_use_console_codes(self) -> None:
        line = (Span("NAME", SpanStyle.BOLD), Span(" - "), Span("arg", SpanStyle.UNDERLINE))
        self.assertEqual(
            render.render_styled_line(line, 80),
            f"{codes['bold']}NAME{codes['reset']} - {codes['underline']}arg{codes['reset']}",
        )

    def test_clips_to_width(self) -> None:
        line = (Span("abc", SpanStyle.BOLD), Span("defgh"))
        self.assertEqual(render.render_styled_line(line, 5), f"{codes['bold']}abc{codes['reset']}de")

    def test_wide_characters_count_two_columns(self) -> None:
        self.assertEqual(render.render_styled_line((Span("界界界"),), 5), "界界")

    def test_control_characters_are_shown_as_replacement(self) -> None:
        self.assertEqual(render.render_styled_line((Span("a\bb"),), 10), "a�b")


class ComposeFrameTests(unittest.TestCase):
    def test_frame_has_one_row_per_line_of_height(self) -> None:
        frame = render.compose_frame([(Span("one"),), (Span("two"),)], width=10, height=4)
        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertEqual(frame[len("\033[H\033[J"):].split("\r\n"), ["one", "two", "", ""])

    def test_empty_store_renders_blank_screen(self) -> None:
        frame = render.compose_frame([], width=10, height=2)
        self.assertEqual(frame, "\033[H\033[J\r\n")

    def test_write_frame_retries_partial_writes(self) -> None:
        with mock.patch("least.render.os.write", side_effect=[2, 3]) as write_mock:
            render.write_frame(1, "hello")
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"hello"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"llo"))


if __name__ == "__main__":
    unittest.main()
