"""Size-tiered file loading for the file viewer.

The file is classified once and each kind has its own representation:
rich markup goes to the web preview, images are referenced by path, and plain
text is either read in full or, past ``MAX_FULL_TEXT_LOAD_BYTES``, as a
bounded head preview with a notice.
"""

from __future__ import annotations

import os
import time
from dataclasses import replace
from pathlib import Path

from loguru import logger

from ..file_kinds import FileKind, classify_file
from ..limits import (
    LARGE_TEXT_PREVIEW_BYTES,
    LARGE_TEXT_PREVIEW_LINES,
    MAX_FULL_TEXT_LOAD_BYTES,
    MAX_INLINE_WEBVIEW_BYTES,
)
from ..log import perf_log
from ..renderers import DEFAULT_RENDERER, PreviewRenderer
from ..signature import signature_from_stat
from ..snapshots import FileLoadSnapshot
from ..textio import format_bytes, read_text, read_text_preview

_KIND_LABELS = {
    FileKind.DIAGRAM: "Excalidraw",
    FileKind.MARKDOWN: "Markdown",
    FileKind.HTML: "HTML",
}


def inline_preview_skipped_notice(kind: FileKind, file_size: int) -> str:
    return (
        f"Inline preview skipped for large {_KIND_LABELS[kind]} file ({format_bytes(file_size)}). "
        'Click "View in Browser".'
    )


def large_text_notice(file_size: int) -> str:
    return (
        f"Large file ({format_bytes(file_size)}): showing first {LARGE_TEXT_PREVIEW_LINES} lines "
        f"(~{LARGE_TEXT_PREVIEW_BYTES // 1024} KB)."
    )


def _read_or_none(path: Path) -> str | None:
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug(f"Could not read {path}: {exc}")
        return None


def _load_markup(
    snapshot: FileLoadSnapshot,
    kind: FileKind,
    file_size: int,
    is_dark_theme: bool,
    renderer: PreviewRenderer,
) -> FileLoadSnapshot:
    if file_size > MAX_INLINE_WEBVIEW_BYTES:
        return replace(snapshot, file_preview_notice=inline_preview_skipped_notice(kind, file_size))

    content = _read_or_none(snapshot.path)
    if content is None:
        return snapshot

    if kind is FileKind.DIAGRAM:
        if not renderer.validate_diagram(content):
            return snapshot
        return replace(snapshot, webview_content=renderer.render_diagram(content, is_dark_theme))
    if kind is FileKind.MARKDOWN:
        return replace(snapshot, webview_content=renderer.render_markdown(content, is_dark_theme))
    return replace(snapshot, webview_content=content)


def _load_text(snapshot: FileLoadSnapshot, file_size: int) -> FileLoadSnapshot:
    if file_size <= MAX_FULL_TEXT_LOAD_BYTES:
        content = _read_or_none(snapshot.path)
        return snapshot if content is None else replace(snapshot, file_content=content)

    try:
        content = read_text_preview(snapshot.path, LARGE_TEXT_PREVIEW_BYTES, LARGE_TEXT_PREVIEW_LINES)
    except UnicodeDecodeError as exc:
        logger.debug(f"Not UTF-8 text: {snapshot.path}: {exc}")
        return snapshot
    except OSError as exc:
        logger.debug(f"Bounded read failed for {snapshot.path}, trying full read: {exc}")
        content = _read_or_none(snapshot.path)
        if content is None:
            return snapshot
    return replace(snapshot, file_content=content, file_preview_notice=large_text_notice(file_size))


def collect_file_load(
    tab_id: int,
    path: Path,
    is_dark_theme: bool,
    renderer: PreviewRenderer | None = None,
) -> FileLoadSnapshot:
    """Load ``path`` into the representation its kind and size call for.

    The version signature is taken from the same ``stat`` that decides the
    size tier. Missing metadata leaves the signature empty and the read is
    still attempted; read and decode failures leave the content empty without a notice.
    """
    started = time.perf_counter()
    renderer = renderer or DEFAULT_RENDERER
    try:
        stat = os.stat(path)
    except OSError:
        stat = None
    file_size = int(stat.st_size) if stat is not None else 0
    snapshot = FileLoadSnapshot(
        tab_id=tab_id,
        path=path,
        file_signature=signature_from_stat(stat) if stat is not None else None,
    )

    kind = classify_file(path)
    if kind is FileKind.DIAGRAM or kind is FileKind.MARKDOWN or kind is FileKind.HTML:
        snapshot = _load_markup(snapshot, kind, file_size, is_dark_theme, renderer)
    elif kind is FileKind.IMAGE:
        snapshot = replace(snapshot, image_path=path)
    else:
        snapshot = _load_text(snapshot, file_size)

    perf_log(
        f"file_load tab={tab_id} path={path} kind={snapshot.kind} size={file_size}B "
        f"text={len(snapshot.file_content)}B webview={len(snapshot.webview_content or '')}B "
        f"notice={snapshot.file_preview_notice is not None} "
        f"took={(time.perf_counter() - started) * 1000:.0f}ms"
    )
    return snapshot


__all__ = ["collect_file_load", "inline_preview_skipped_notice", "large_text_notice"]
