"""Tests for frame composition and ANSI width helpers."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazybrowser.ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, pad_ansi_line
from lazybrowser.entries import Entry
from lazybrowser.filtering import SearchMode
from lazybrowser.render import (
    RenderContext,
    build_frame,
    build_status_line,
    left_pane_width,
    list_view_rows,
)
from lazybrowser.state import Mode

ROOT = Path("/srv/site")
ENTRIES = [
    Entry(ROOT / "assets", is_dir=True),
    Entry(ROOT / "index.html", is_dir=False),
    Entry(ROOT / "style.css", is_dir=False),
]


def _context(**overrides) -> RenderContext:
    values = dict(
        width=80,
        height=10,
        current_dir=ROOT,
        mode=Mode.BROWSE,
        search_mode=SearchMode.PLAIN,
        query="",
        input_buffer="",
        entries=list(ENTRIES),
        selected_idx=1,
        list_start=0,
        total_entries=3,
        color=False,
    )
    values.update(overrides)
    return RenderContext(**values)


def _rows(frame: str) -> list[str]:
    body = frame.removeprefix("\033[H\033[J")
    return body.split("\r\n")


class FrameLayoutTests(unittest.TestCase):
    def test_frame_fills_terminal_height(self) -> None:
        rows = _rows(build_frame(_context()))
        self.assertEqual(len(rows), 10)

    def test_entries_listed_with_directory_marker_and_selection(self) -> None:
        rows = _rows(build_frame(_context()))

        self.assertIn("assets/", rows[1])
        self.assertIn("\033[7m", rows[2])
        self.assertIn("index.html", rows[2])
        self.assertNotIn("\033[7m", rows[3])

    def test_preview_shares_rows_with_list(self) -> None:
        rows = _rows(build_frame(_context(preview=["<!doctype html>", "<title>x</title>"])))

        self.assertTrue(rows[0].endswith("│<!doctype html>"))
        self.assertTrue(rows[1].endswith("│<title>x</title>"))

    def test_status_row_shows_directory_counts_and_message(self) -> None:
        rows = _rows(build_frame(_context(entries=ENTRIES[:1], status_message="Deleted x")))
        plain = ANSI_ESCAPE_RE.sub("", rows[-1])

        self.assertIn(str(ROOT), plain)
        self.assertIn("[1/3]", plain)
        self.assertTrue(plain.endswith("Deleted x"))

    def test_empty_view_placeholder(self) -> None:
        self.assertIn("(empty)", _rows(build_frame(_context(entries=[])))[1])
        self.assertIn("(no matches)", _rows(build_frame(_context(entries=[], query="zz")))[1])

    def test_list_scrolls_from_list_start(self) -> None:
        many = [Entry(ROOT / f"f{i:02}.txt", is_dir=False) for i in range(30)]
        rows = _rows(build_frame(_context(entries=many, selected_idx=20, list_start=15)))

        self.assertIn("f15.txt", rows[1])
        self.assertIn("f20.txt", rows[6])


class QueryAndPromptRowTests(unittest.TestCase):
    def test_query_row_while_searching(self) -> None:
        rows = _rows(build_frame(_context(mode=Mode.SEARCH, search_mode=SearchMode.FUZZY, query="ix")))
        self.assertTrue(rows[0].startswith("f> ix_"))

    def test_committed_query_row(self) -> None:
        rows = _rows(build_frame(_context(query="css")))
        self.assertTrue(rows[0].startswith("s> css "))

    def test_prompt_row_per_mode(self) -> None:
        cases = {
            Mode.RENAME: "Rename index.html to: new_",
            Mode.MOVE: "Move index.html to: new_",
            Mode.CREATE: "New file (end with / for dir): new_",
            Mode.DELETE_CONFIRM: "Delete index.html? (y/n)",
        }
        for mode, expected in cases.items():
            with self.subTest(mode=mode):
                rows = _rows(build_frame(_context(mode=mode, input_buffer="new", target=ROOT / "index.html")))
                self.assertEqual(rows[-2], expected)

    def test_prompt_names_captured_target_not_current_row(self) -> None:
        rows = _rows(build_frame(_context(mode=Mode.DELETE_CONFIRM, selected_idx=0, target=ROOT / "style.css")))
        self.assertEqual(rows[-2], "Delete style.css? (y/n)")

    def test_colored_frame_keeps_escape_sequences(self) -> None:
        frame = build_frame(_context(color=True))
        self.assertIn("\033[1;34m", frame)


class LayoutHelperTests(unittest.TestCase):
    def test_list_rows_and_pane_width(self) -> None:
        self.assertEqual(list_view_rows(24), 21)
        self.assertEqual(list_view_rows(2), 1)
        self.assertEqual(left_pane_width(100), 60)
        self.assertEqual(left_pane_width(10), 8)

    def test_build_status_line_right_aligns(self) -> None:
        self.assertEqual(build_status_line("left", 12, "right"), "left  right")
        self.assertEqual(build_status_line("left", 4, "right"), "ght")


class AnsiHelperTests(unittest.TestCase):
    def test_clip_preserves_escapes_and_counts_visible_columns(self) -> None:
        text = "\033[31mhello\033[0m world"
        clipped = clip_ansi_line(text, 3)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", clipped), "hel")
        self.assertTrue(clipped.startswith("\033[31m"))

    def test_wide_characters_and_tabs(self) -> None:
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("a\tb"), 9)
        self.assertEqual(clip_ansi_line("日本", 3), "日")

    def test_pad_to_exact_width(self) -> None:
        self.assertEqual(pad_ansi_line("ab", 4), "ab  ")
        self.assertEqual(pad_ansi_line("abcdef", 4), "abcd")


if __name__ == "__main__":
    unittest.main()
