"""Line store event application and range query tests."""

from __future__ import annotations

import unittest

from least.errors import IOReadError
from least.events import EndOfInput, KeyPressed, NewLines, ReaderFailed
from least.line_store import LineStore
from least.overstrike import Span, SpanStyle


class LineStoreTests(unittest.TestCase):
    def test_total_count_tracks_cumulative_batches(self) -> None:
        store = LineStore()
        seen = 0
        for size in (3, 0, 1, 7):
            store.apply(NewLines(tuple(f"line {seen + i}" for i in range(size))))
            seen += size
            self.assertEqual(store.total_count, seen)
            self.assertEqual(len(store), seen)
        self.assertEqual(store.lines(0, 1), [(Span("line 0", SpanStyle.NONE),)])
        self.assertEqual(store.lines(10, 1), [(Span("line 10", SpanStyle.NONE),)])

    def test_end_of_input_marks_exhausted(self) -> None:
        store = LineStore()
        self.assertFalse(store.exhausted)
        store.apply(EndOfInput())
        self.assertTrue(store.exhausted)
        self.assertEqual(store.lines(0, 24), [])

    def test_reader_failure_is_raised(self) -> None:
        store = LineStore()
        with self.assertRaises(IOReadError):
            store.apply(ReaderFailed(IOReadError("boom")))

    def test_terminal_events_are_a_contract_violation(self) -> None:
        with self.assertRaises(TypeError):
            LineStore().apply(KeyPressed("j"))

    def test_lines_returns_decoded_clamped_range(self) -> None:
        store = LineStore()
        store.apply(NewLines(("a", "B\bB", "c")))
        self.assertEqual(
            store.lines(1, 10),
            [(Span("B", SpanStyle.BOLD),), (Span("c"),)],
        )
        self.assertEqual(store.lines(0, 1), [(Span("a"),)])

    def test_lines_out_of_range_or_zero_count_is_empty(self) -> None:
        store = LineStore()
        store.apply(NewLines(("a", "b")))
        self.assertEqual(store.lines(2, 5), [])
        self.assertEqual(store.lines(7, 5), [])
        self.assertEqual(store.lines(0, 0), [])

    def test_empty_lines_decode_to_empty_spans(self) -> None:
        store = LineStore()
        store.apply(NewLines(("",)))
        self.assertEqual(store.lines(0, 1), [()])


if __name__ == "__main__":
    unittest.main()
