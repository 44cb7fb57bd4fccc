"""Single-directory listing for the file explorer."""

from __future__ import annotations

import os
import time
from pathlib import Path

from loguru import logger

from ..log import perf_log
from ..snapshots import FileTreeEntry, FileTreeSnapshot

ALWAYS_EXCLUDED_NAMES = frozenset({"node_modules", "target"})


def _sort_key(entry: FileTreeEntry) -> str:
    return entry.name.lower()


def list_directory_entries(directory: Path, show_hidden: bool) -> list[FileTreeEntry]:
    """List immediate children, directories first, each group sorted case-insensitively.

    Dot-prefixed names are skipped unless ``show_hidden``; dependency and
    build output directories are always skipped. An unreadable directory
    yields an empty list.
    """
    dirs: list[FileTreeEntry] = []
    files: list[FileTreeEntry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                if name in ALWAYS_EXCLUDED_NAMES:
                    continue

                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False

                entry = FileTreeEntry(name=name, path=Path(child.path), is_dir=is_dir)
                if is_dir:
                    dirs.append(entry)
                else:
                    files.append(entry)
    except OSError as exc:
        logger.debug(f"Could not list directory {directory}: {exc}")
        return []

    dirs.sort(key=_sort_key)
    files.sort(key=_sort_key)
    return dirs + files


def collect_file_tree(tab_id: int, current_dir: Path, show_hidden: bool) -> FileTreeSnapshot:
    """Collect the explorer listing for ``current_dir`` (non-recursive)."""
    started = time.perf_counter()
    entries = list_directory_entries(current_dir, show_hidden)
    snapshot = FileTreeSnapshot(tab_id=tab_id, current_dir=current_dir, entries=tuple(entries))
    perf_log(
        f"file_tree tab={tab_id} dir={current_dir} entries={len(entries)} hidden={show_hidden} "
        f"took={(time.perf_counter() - started) * 1000:.0f}ms"
    )
    return snapshot


__all__ = ["ALWAYS_EXCLUDED_NAMES", "collect_file_tree", "list_directory_entries"]
