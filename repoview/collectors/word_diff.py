"""Intra-line word emphasis for paired deletion/addition rows.

The pass only attaches ``inline_changes`` metadata. It never adds, drops,
reorders or reclassifies diff lines.
"""

from __future__ import annotations

import re
from dataclasses import replace

from ..snapshots import DiffLine, DiffLineType, WordSpan

EQUAL = "equal"
DELETE = "delete"
INSERT = "insert"

# Word tables larger than this are left without emphasis.
MAX_WORD_DIFF_CELLS = 250_000

_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


def tokenize_words(text: str) -> list[str]:
    """Split text into word, whitespace-run and single-punctuation tokens."""
    return _TOKEN_RE.findall(text)


def _lcs_edit_script(old: list[str], new: list[str]) -> list[tuple[str, str]]:
    """Return a minimal equal/delete/insert script from an LCS table."""
    rows = len(old)
    cols = len(new)
    # lengths[i][j] = LCS length of old[i:] and new[j:]
    lengths = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row = lengths[i]
        below = lengths[i + 1]
        old_token = old[i]
        for j in range(cols - 1, -1, -1):
            if old_token == new[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]

    script: list[tuple[str, str]] = []
    i = j = 0
    while i < rows and j < cols:
        if old[i] == new[j]:
            script.append((EQUAL, old[i]))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            script.append((DELETE, old[i]))
            i += 1
        else:
            script.append((INSERT, new[j]))
            j += 1
    script.extend((DELETE, token) for token in old[i:])
    script.extend((INSERT, token) for token in new[j:])
    return script


def compute_word_diff(old_text: str, new_text: str) -> list[tuple[str, str]] | None:
    """Diff two lines word-by-word.

    Returns ``None`` when the token table would exceed
    ``MAX_WORD_DIFF_CELLS`` after trimming the shared prefix and suffix.
    """
    old_tokens = tokenize_words(old_text)
    new_tokens = tokenize_words(new_text)

    prefix = 0
    limit = min(len(old_tokens), len(new_tokens))
    while prefix < limit and old_tokens[prefix] == new_tokens[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < limit - prefix
        and old_tokens[len(old_tokens) - 1 - suffix] == new_tokens[len(new_tokens) - 1 - suffix]
    ):
        suffix += 1

    old_middle = old_tokens[prefix : len(old_tokens) - suffix]
    new_middle = new_tokens[prefix : len(new_tokens) - suffix]
    if len(old_middle) * len(new_middle) > MAX_WORD_DIFF_CELLS:
        return None

    script = [(EQUAL, token) for token in old_tokens[:prefix]]
    script.extend(_lcs_edit_script(old_middle, new_middle))
    script.extend((EQUAL, token) for token in old_tokens[len(old_tokens) - suffix :])
    return script


def _side_spans(script: list[tuple[str, str]], changed_tag: str) -> tuple[WordSpan, ...]:
    """Project a script onto one side and merge neighbouring tokens with equal flags."""
    spans: list[WordSpan] = []
    for tag, token in script:
        if tag != EQUAL and tag != changed_tag:
            continue
        changed = tag == changed_tag
        if spans and spans[-1].changed == changed:
            spans[-1] = WordSpan(text=spans[-1].text + token, changed=changed)
        else:
            spans.append(WordSpan(text=token, changed=changed))
    return tuple(spans)


def _run_end(lines: list[DiffLine], start: int, line_type: DiffLineType) -> int:
    end = start
    while end < len(lines) and lines[end].line_type == line_type:
        end += 1
    return end


def add_word_diffs(lines: list[DiffLine]) -> list[DiffLine]:
    """Attach word spans to deletion/addition pairs and return the new line list.

    A block of deletions immediately followed by a block of additions is
    paired by position up to the shorter block. Pairs sharing no token are
    left unannotated, as are unpaired lines.
    """
    out = list(lines)
    index = 0
    while index < len(out):
        if out[index].line_type != DiffLineType.DELETION:
            index += 1
            continue

        deletion_end = _run_end(out, index, DiffLineType.DELETION)
        addition_end = _run_end(out, deletion_end, DiffLineType.ADDITION)
        pairs = min(deletion_end - index, addition_end - deletion_end)
        for offset in range(pairs):
            deletion_idx = index + offset
            addition_idx = deletion_end + offset
            script = compute_word_diff(out[deletion_idx].content, out[addition_idx].content)
            if not script or not any(tag == EQUAL for tag, _token in script):
                continue
            out[deletion_idx] = replace(out[deletion_idx], inline_changes=_side_spans(script, DELETE))
            out[addition_idx] = replace(out[addition_idx], inline_changes=_side_spans(script, INSERT))

        index = max(addition_end, index + 1)
    return out


__all__ = ["add_word_diffs", "compute_word_diff", "tokenize_words"]
