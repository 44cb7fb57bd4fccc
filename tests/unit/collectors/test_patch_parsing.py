"""Tests for unified patch classification and untracked previews."""

from __future__ import annotations

import unittest

from repoview.collectors.diff import build_untracked_preview, parse_patch_lines
from repoview.snapshots import DiffLineType

PATCH = """diff --git a/app.py b/app.py
index 1111111..2222222 100644
--- a/app.py
+++ b/app.py
@@ -3,4 +3,4 @@ def main():
 keep = 1
-old = 2
+new = 2
 tail = 3
\\ No newline at end of file
"""


class ParsePatchLinesTests(unittest.TestCase):
    def test_classifies_rows_and_numbers_them_from_hunk_header(self) -> None:
        lines = parse_patch_lines(PATCH)

        self.assertEqual(
            [line.line_type for line in lines],
            [
                DiffLineType.HEADER,
                DiffLineType.CONTEXT,
                DiffLineType.DELETION,
                DiffLineType.ADDITION,
                DiffLineType.CONTEXT,
            ],
        )
        self.assertEqual(lines[0].content, "@@ -3,4 +3,4 @@")
        self.assertEqual((lines[1].old_line_num, lines[1].new_line_num), (3, 3))
        self.assertEqual((lines[2].old_line_num, lines[2].new_line_num), (4, None))
        self.assertEqual((lines[3].old_line_num, lines[3].new_line_num), (None, 4))
        self.assertEqual((lines[4].old_line_num, lines[4].new_line_num), (5, 5))

    def test_strips_trailing_whitespace_and_skips_file_headers(self) -> None:
        lines = parse_patch_lines(PATCH)

        self.assertEqual(lines[2].content, "old = 2")
        self.assertFalse(any(line.content.startswith("--- a/") for line in lines))

    def test_omitted_hunk_counts_default_to_one(self) -> None:
        lines = parse_patch_lines("@@ -1 +1 @@\n-a\n+b\n")

        self.assertEqual(lines[0].content, "@@ -1,1 +1,1 @@")
        self.assertEqual(len(lines), 3)

    def test_empty_patch_yields_no_lines(self) -> None:
        self.assertEqual(parse_patch_lines(""), [])


class UntrackedPreviewTests(unittest.TestCase):
    def test_short_file_is_single_hunk_of_additions(self) -> None:
        lines = build_untracked_preview("a\nb\n")

        self.assertEqual(lines[0].content, "@@ -0,0 +1,2 @@ (new file)")
        self.assertEqual([line.content for line in lines[1:]], ["a", "b"])
        self.assertEqual([line.new_line_num for line in lines[1:]], [1, 2])
        self.assertTrue(all(line.line_type is DiffLineType.ADDITION for line in lines[1:]))

    def test_long_file_is_truncated_with_trailing_notice(self) -> None:
        content = "".join(f"line {idx}\n" for idx in range(3500))
        lines = build_untracked_preview(content)

        self.assertEqual(len(lines), 3002)
        self.assertEqual(lines[0].content, "@@ -0,0 +1,3500 @@ (new file)")
        self.assertEqual(lines[-2].new_line_num, 3000)
        self.assertIs(lines[-1].line_type, DiffLineType.HEADER)
        self.assertIn("3000", lines[-1].content)
        self.assertIn("3500", lines[-1].content)

    def test_only_newline_breaks_preview_lines(self) -> None:
        lines = build_untracked_preview("a\x0cb\nc\u2028d\n")

        self.assertEqual(lines[0].content, "@@ -0,0 +1,2 @@ (new file)")
        self.assertEqual([line.content for line in lines[1:]], ["a\x0cb", "c\u2028d"])

    def test_crlf_file_yields_lines_without_carriage_returns(self) -> None:
        lines = build_untracked_preview("one\r\ntwo\r\n")

        self.assertEqual([line.content for line in lines[1:]], ["one", "two"])


if __name__ == "__main__":
    unittest.main()
