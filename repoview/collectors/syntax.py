"""Syntax highlighting of already-loaded file text."""

from __future__ import annotations

import time
from pathlib import Path

from ..file_kinds import classify_file
from ..highlight import Highlighter, highlight_lines
from ..log import perf_log
from ..snapshots import FileSyntaxSnapshot, FileVersionSignature
from ..textio import split_lines


def content_prefix(file_content: str, max_lines: int) -> str:
    """Return the first ``max_lines`` lines joined by newlines."""
    if max_lines <= 0:
        return ""
    return "\n".join(split_lines(file_content)[:max_lines])


def collect_file_syntax_highlight(
    tab_id: int,
    path: Path,
    file_content: str,
    is_dark_theme: bool,
    file_signature: FileVersionSignature | None,
    max_lines: int,
    highlighter: Highlighter | None = None,
) -> FileSyntaxSnapshot:
    """Highlight the first ``max_lines`` lines of ``file_content``.

    Blank text and markup shown through the web preview are skipped. The
    caller's ``file_signature`` is forwarded untouched so the result can be
    matched against the load it came from.
    """
    started = time.perf_counter()
    highlighter = highlighter or highlight_lines
    prefix = content_prefix(file_content, max_lines)
    if not prefix.strip() or classify_file(path).is_rich_markup:
        lines, notice = None, None
    else:
        lines, notice = highlighter(path, prefix, is_dark_theme)

    perf_log(
        f"syntax_load tab={tab_id} path={path} bytes={len(prefix)} requested_lines={max_lines} "
        f"highlighted_lines={len(lines) if lines is not None else 0} notice={notice is not None} "
        f"took={(time.perf_counter() - started) * 1000:.0f}ms"
    )
    return FileSyntaxSnapshot(
        tab_id=tab_id,
        path=path,
        syntax_highlight_lines=lines,
        syntax_highlight_notice=notice,
        file_signature=file_signature,
    )


__all__ = ["collect_file_syntax_highlight", "content_prefix"]
