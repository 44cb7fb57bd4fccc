"""Tests for intra-line word emphasis on paired diff rows."""

from __future__ import annotations

import unittest
from unittest import mock

from repoview.collectors import word_diff
from repoview.collectors.word_diff import add_word_diffs, compute_word_diff, tokenize_words
from repoview.snapshots import DiffLine, DiffLineType, WordSpan


def _deletion(text: str, num: int = 1) -> DiffLine:
    return DiffLine(content=text, line_type=DiffLineType.DELETION, old_line_num=num)


def _addition(text: str, num: int = 1) -> DiffLine:
    return DiffLine(content=text, line_type=DiffLineType.ADDITION, new_line_num=num)


class TokenizeWordsTests(unittest.TestCase):
    def test_splits_words_whitespace_runs_and_single_punctuation(self) -> None:
        self.assertEqual(
            tokenize_words("call(a,  b)"),
            ["call", "(", "a", ",", "  ", "b", ")"],
        )

    def test_tokens_concatenate_back_to_input(self) -> None:
        text = "x = foo.bar(1) + 'y'  # note"
        self.assertEqual("".join(tokenize_words(text)), text)


class ComputeWordDiffTests(unittest.TestCase):
    def test_single_changed_word_keeps_shared_prefix_equal(self) -> None:
        script = compute_word_diff("foo bar", "foo baz")
        self.assertEqual(
            script,
            [("equal", "foo"), ("equal", " "), ("delete", "bar"), ("insert", "baz")],
        )

    def test_oversized_token_table_returns_none(self) -> None:
        with mock.patch.object(word_diff, "MAX_WORD_DIFF_CELLS", 3):
            self.assertIsNone(compute_word_diff("a b c", "x y z"))


class AddWordDiffsTests(unittest.TestCase):
    def test_paired_lines_get_complementary_spans(self) -> None:
        out = add_word_diffs([_deletion("foo bar"), _addition("foo baz")])

        self.assertEqual(out[0].inline_changes, (WordSpan("foo ", False), WordSpan("bar", True)))
        self.assertEqual(out[1].inline_changes, (WordSpan("foo ", False), WordSpan("baz", True)))

    def test_pass_never_changes_line_count_order_or_types(self) -> None:
        lines = [
            DiffLine(content="@@ -1,3 +1,2 @@", line_type=DiffLineType.HEADER),
            DiffLine(content="same", line_type=DiffLineType.CONTEXT, old_line_num=1, new_line_num=1),
            _deletion("alpha one", 2),
            _deletion("beta two", 3),
            _addition("alpha uno", 2),
        ]
        out = add_word_diffs(lines)

        self.assertEqual([line.line_type for line in out], [line.line_type for line in lines])
        self.assertEqual([line.content for line in out], [line.content for line in lines])
        self.assertEqual(
            [(line.old_line_num, line.new_line_num) for line in out],
            [(line.old_line_num, line.new_line_num) for line in lines],
        )

    def test_unequal_blocks_pair_by_position_and_leave_remainder_plain(self) -> None:
        out = add_word_diffs([_deletion("alpha one", 1), _deletion("beta two", 2), _addition("alpha uno", 1)])

        self.assertIsNotNone(out[0].inline_changes)
        self.assertIsNone(out[1].inline_changes)
        self.assertIsNotNone(out[2].inline_changes)

    def test_pair_without_shared_tokens_is_left_plain(self) -> None:
        out = add_word_diffs([_deletion("abc"), _addition("xyz")])

        self.assertIsNone(out[0].inline_changes)
        self.assertIsNone(out[1].inline_changes)

    def test_context_between_blocks_prevents_pairing(self) -> None:
        lines = [
            _deletion("foo bar"),
            DiffLine(content="ctx", line_type=DiffLineType.CONTEXT, old_line_num=2, new_line_num=1),
            _addition("foo baz", 2),
        ]
        out = add_word_diffs(lines)

        self.assertTrue(all(line.inline_changes is None for line in out))

    def test_addition_only_block_is_untouched(self) -> None:
        lines = [_addition("new line", 1), _addition("another", 2)]
        self.assertEqual(add_word_diffs(lines), lines)


if __name__ == "__main__":
    unittest.main()
