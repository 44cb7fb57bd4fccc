"""Line-classified diffs for one path, with word-level emphasis.

Tracked paths are diffed ``HEAD``↔index (staged) or index↔work tree
(unstaged). Untracked paths are shown as an all-additions preview of the file
capped at ``MAX_UNTRACKED_DIFF_PREVIEW_LINES``.
"""

from __future__ import annotations

import re
import time
from pathlib import Path

from loguru import logger

from ..git import diff_patch, discover_repository, is_untracked
from ..limits import MAX_UNTRACKED_DIFF_PREVIEW_LINES
from ..log import perf_log
from ..snapshots import DiffLine, DiffLineType, DiffSnapshot
from ..textio import read_text, split_lines
from .word_diff import add_word_diffs

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def format_hunk_header(old_start: int, old_lines: int, new_start: int, new_lines: int) -> str:
    return f"@@ -{old_start},{old_lines} +{new_start},{new_lines} @@"


def parse_patch_lines(patch_text: str) -> list[DiffLine]:
    """Classify unified-diff rows into header/context/addition/deletion lines.

    File-level headers before the first hunk are skipped. Line numbers are
    counted forward from each hunk header; trailing whitespace is stripped.
    """
    lines: list[DiffLine] = []
    in_hunk = False
    old_line = 0
    new_line = 0

    for raw_line in patch_text.split("\n"):
        match = _HUNK_RE.match(raw_line)
        if match:
            in_hunk = True
            old_line = int(match.group(1))
            new_line = int(match.group(3))
            old_count = int(match.group(2) or "1")
            new_count = int(match.group(4) or "1")
            lines.append(
                DiffLine(
                    content=format_hunk_header(old_line, old_count, new_line, new_count),
                    line_type=DiffLineType.HEADER,
                )
            )
            continue

        if not in_hunk or not raw_line:
            continue

        origin = raw_line[0]
        content = raw_line[1:].rstrip()
        if origin == "+":
            lines.append(DiffLine(content=content, line_type=DiffLineType.ADDITION, new_line_num=new_line))
            new_line += 1
        elif origin == "-":
            lines.append(DiffLine(content=content, line_type=DiffLineType.DELETION, old_line_num=old_line))
            old_line += 1
        elif origin == " ":
            lines.append(
                DiffLine(
                    content=content,
                    line_type=DiffLineType.CONTEXT,
                    old_line_num=old_line,
                    new_line_num=new_line,
                )
            )
            old_line += 1
            new_line += 1
        elif origin == "\\":
            # "\ No newline at end of file"
            continue
        else:
            # Next file header ("diff --git ...") ends the current hunk.
            in_hunk = False

    return lines


def build_untracked_preview(content: str, max_lines: int = MAX_UNTRACKED_DIFF_PREVIEW_LINES) -> list[DiffLine]:
    """Render a new file as a single all-additions hunk, truncated to ``max_lines``."""
    source_lines = split_lines(content)
    total_lines = len(source_lines)
    lines = [
        DiffLine(
            content=f"@@ -0,0 +1,{total_lines} @@ (new file)",
            line_type=DiffLineType.HEADER,
        )
    ]
    for line_no, text in enumerate(source_lines[:max_lines], start=1):
        lines.append(DiffLine(content=text, line_type=DiffLineType.ADDITION, new_line_num=line_no))
    if total_lines > max_lines:
        lines.append(
            DiffLine(
                content=f"... truncated to first {max_lines} lines ({total_lines} total)",
                line_type=DiffLineType.HEADER,
            )
        )
    return lines


def collect_diff(tab_id: int, repo_path: Path, file_path: str, is_staged: bool) -> DiffSnapshot:
    """Collect the diff of ``file_path`` (repository-relative) for one tab.

    Repository or patch failures produce a snapshot with no lines.
    """
    started = time.perf_counter()
    note = ""
    lines: list[DiffLine] = []

    repo_root = discover_repository(repo_path)
    if repo_root is None:
        note = " (repo open failed)"
    elif is_untracked(repo_root, file_path):
        note = " (untracked preview)"
        try:
            content = read_text(repo_root / file_path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug(f"Could not read untracked file {file_path}: {exc}")
        else:
            lines = build_untracked_preview(content)
    else:
        patch_text = diff_patch(repo_root, file_path, staged=is_staged)
        if patch_text is None:
            note = " (patch failed)"
        else:
            lines = add_word_diffs(parse_patch_lines(patch_text))

    snapshot = DiffSnapshot(tab_id=tab_id, file_path=file_path, is_staged=is_staged, lines=tuple(lines))
    perf_log(
        f"diff tab={tab_id} file={file_path} staged={is_staged} lines={len(lines)} "
        f"took={(time.perf_counter() - started) * 1000:.0f}ms{note}"
    )
    return snapshot


__all__ = ["build_untracked_preview", "collect_diff", "format_hunk_header", "parse_patch_lines"]
