"""Thin read-only wrapper around the ``git`` command line.

Every helper is tolerant: a missing ``git`` binary, a timeout, or a non-zero
exit status yields ``None`` (or an empty result) instead of an exception, so
collectors can degrade to empty snapshots.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger

from .limits import GIT_TIMEOUT_SECONDS

UNTRACKED_STATUS = "??"
IGNORED_STATUS = "!!"


def run_git(
    repo_root: Path,
    args: list[str],
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str] | None:
    """Execute a git subcommand in ``repo_root`` with literal pathspecs.

    Returns ``None`` when git cannot be started or times out. Callers check
    ``returncode`` themselves.
    """
    try:
        return subprocess.run(
            ["git", "--literal-pathspecs", "-C", str(repo_root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"git {' '.join(args[:2])} failed in {repo_root}: {exc}")
        return None


def run_git_ok(repo_root: Path, args: list[str], timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> str | None:
    """Run git and return stdout only when the command succeeded."""
    proc = run_git(repo_root, args, timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    return proc.stdout


def discover_repository(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the work-tree root containing ``path``, walking upward.

    ``None`` means ``path`` is not inside a git work tree (or git is missing).
    """
    try:
        start = path.resolve()
    except OSError:
        return None
    if not start.is_dir():
        start = start.parent
    if not start.is_dir():
        return None

    stdout = run_git_ok(start, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if stdout is None:
        return None
    lines = [line.strip() for line in stdout.splitlines() if line.strip()]
    if not lines:
        return None
    return Path(lines[0]).resolve()


def head_branch_name(repo_root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> str | None:
    """Return the short name of ``HEAD``.

    Works for unborn branches; a detached ``HEAD`` reports ``"HEAD"``.
    """
    stdout = run_git_ok(repo_root, ["symbolic-ref", "--short", "-q", "HEAD"], timeout_seconds)
    if stdout is not None and stdout.strip():
        return stdout.strip()
    detached = run_git_ok(repo_root, ["rev-parse", "--verify", "-q", "HEAD"], timeout_seconds)
    if detached is not None and detached.strip():
        return "HEAD"
    return None


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``status --porcelain=v1 -z`` output into ``(XY, path)`` records."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        path_text = token[3:]
        records.append((status, path_text))

        # For renamed/copied entries, porcelain -z appends an extra token
        # containing the source path; the first path token is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def status_records(
    repo_root: Path,
    pathspec: str | None = None,
    untracked_files: str = "normal",
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> list[tuple[str, str]] | None:
    """Query porcelain status records, or ``None`` when the query failed.

    Ignored files and submodules are excluded and rename detection is off.
    """
    args = [
        "status",
        "--porcelain=v1",
        "-z",
        f"--untracked-files={untracked_files}",
        "--ignore-submodules=all",
        "--no-renames",
    ]
    if pathspec is not None:
        args.extend(["--", pathspec])
    stdout = run_git_ok(repo_root, args, timeout_seconds)
    if stdout is None:
        return None
    return [record for record in iter_porcelain_records(stdout) if record[0] != IGNORED_STATUS]


def is_untracked(repo_root: Path, rel_path: str, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> bool:
    """Return whether ``rel_path`` exists in the work tree but not in the index."""
    records = status_records(repo_root, pathspec=rel_path, untracked_files="all", timeout_seconds=timeout_seconds)
    if not records:
        return False
    wanted = rel_path.rstrip("/")
    return any(status == UNTRACKED_STATUS and path.rstrip("/") == wanted for status, path in records)


def diff_patch(
    repo_root: Path,
    rel_path: str,
    staged: bool,
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> str | None:
    """Return the unified patch for one path.

    ``staged`` compares the ``HEAD`` tree with the index (an unborn ``HEAD``
    counts as the empty tree); otherwise the index is compared with the work
    tree.
    """
    args = ["diff", "--no-color", "--no-ext-diff", "--no-renames"]
    if staged:
        args.append("--cached")
    args.extend(["--", rel_path])
    return run_git_ok(repo_root, args, timeout_seconds)


__all__ = [
    "IGNORED_STATUS",
    "UNTRACKED_STATUS",
    "diff_patch",
    "discover_repository",
    "head_branch_name",
    "is_untracked",
    "iter_porcelain_records",
    "run_git",
    "run_git_ok",
    "status_records",
]
