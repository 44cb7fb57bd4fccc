"""Stateless snapshot collectors.

Each collector is a plain function of its arguments that returns one
snapshot and never raises for repository or filesystem problems. They are
safe to run on any worker thread.
"""

from __future__ import annotations

from .diff import collect_diff
from .file_load import collect_file_load
from .status import collect_git_status
from .syntax import collect_file_syntax_highlight
from .tree import collect_file_tree

__all__ = [
    "collect_diff",
    "collect_file_load",
    "collect_file_syntax_highlight",
    "collect_file_tree",
    "collect_git_status",
]
