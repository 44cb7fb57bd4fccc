"""Repository status collection.

Classifies every changed path into staged, unstaged and untracked lists
from the two porcelain status columns. A path may land in more than one list.
"""

from __future__ import annotations

import time
from pathlib import Path

from ..git import UNTRACKED_STATUS, discover_repository, head_branch_name, status_records
from ..log import perf_log
from ..snapshots import FileEntry, FileStatus, GitStatusSnapshot

STAGED_CODES = frozenset("AMDR")
UNSTAGED_CODES = frozenset("MDR")

_STAGED_STATUS = {
    "A": FileStatus.ADDED,
    "M": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
}
_UNSTAGED_STATUS = {
    "M": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
}


def status_char(code: str, staged: bool) -> FileStatus:
    """Map one porcelain column to a badge using that column's own table."""
    mapping = _STAGED_STATUS if staged else _UNSTAGED_STATUS
    return mapping.get(code, FileStatus.UNKNOWN)


def _repo_name(repo_path: Path) -> str:
    return repo_path.name or "repo"


def classify_records(records: list[tuple[str, str]]) -> tuple[list[FileEntry], list[FileEntry], list[FileEntry]]:
    """Split porcelain ``(XY, path)`` records into staged/unstaged/untracked entries."""
    staged: list[FileEntry] = []
    unstaged: list[FileEntry] = []
    untracked: list[FileEntry] = []
    for status, path in records:
        if status == UNTRACKED_STATUS:
            untracked.append(FileEntry(path=path, status=FileStatus.UNKNOWN, is_staged=False))
            continue

        index_code, worktree_code = status[0], status[1]
        if index_code in STAGED_CODES:
            staged.append(FileEntry(path=path, status=status_char(index_code, True), is_staged=True))
        if worktree_code in UNSTAGED_CODES:
            unstaged.append(FileEntry(path=path, status=status_char(worktree_code, False), is_staged=False))
    return staged, unstaged, untracked


def collect_git_status(tab_id: int, repo_path: Path) -> GitStatusSnapshot:
    """Collect categorized status for the repository at or above ``repo_path``.

    Never raises: when no repository can be opened the snapshot reports
    ``is_git_repo=False`` with empty lists. Untracked directories are listed
    one level deep only.
    """
    started = time.perf_counter()
    repo_root = discover_repository(repo_path)
    if repo_root is None:
        snapshot = GitStatusSnapshot(tab_id=tab_id, repo_name=_repo_name(repo_path), repo_path=repo_path)
        perf_log(
            f"git_status tab={tab_id} repo={repo_path} git=False changed=0 "
            f"took={(time.perf_counter() - started) * 1000:.0f}ms"
        )
        return snapshot

    branch_name = head_branch_name(repo_root) or "main"
    records = status_records(repo_root, untracked_files="normal") or []
    staged, unstaged, untracked = classify_records(records)
    snapshot = GitStatusSnapshot(
        tab_id=tab_id,
        repo_name=_repo_name(repo_path),
        repo_path=repo_path,
        branch_name=branch_name,
        is_git_repo=True,
        staged=tuple(staged),
        unstaged=tuple(unstaged),
        untracked=tuple(untracked),
    )
    perf_log(
        f"git_status tab={tab_id} repo={repo_path} git=True changed={snapshot.total_changes} "
        f"took={(time.perf_counter() - started) * 1000:.0f}ms"
    )
    return snapshot


__all__ = ["classify_records", "collect_git_status", "status_char"]
