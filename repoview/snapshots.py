"""Immutable snapshot datatypes produced by collectors.

Every collector returns exactly one of these values, tagged with the tab it
was requested for. Snapshots are never edited in place: a tab replaces the
whole value of a kind or drops the newcomer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileStatus(str, Enum):
    """One-letter git status badge shown next to a changed path."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    UNKNOWN = "?"


@dataclass(frozen=True)
class FileEntry:
    """Changed path as reported by one status category."""

    path: str
    status: FileStatus
    is_staged: bool


@dataclass(frozen=True)
class GitStatusSnapshot:
    """Categorized repository status for one tab at one poll."""

    tab_id: int
    repo_name: str
    repo_path: Path
    branch_name: str = "main"
    is_git_repo: bool = False
    staged: tuple[FileEntry, ...] = ()
    unstaged: tuple[FileEntry, ...] = ()
    untracked: tuple[FileEntry, ...] = ()

    @property
    def total_changes(self) -> int:
        return len(self.staged) + len(self.unstaged) + len(self.untracked)

    def all_files(self) -> list[FileEntry]:
        """Return staged, unstaged, then untracked entries in display order."""
        return [*self.staged, *self.unstaged, *self.untracked]


@dataclass(frozen=True)
class FileTreeEntry:
    name: str
    path: Path
    is_dir: bool


@dataclass(frozen=True)
class FileTreeSnapshot:
    """Immediate children of ``current_dir``, directories first."""

    tab_id: int
    current_dir: Path
    entries: tuple[FileTreeEntry, ...] = ()


class DiffLineType(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"
    HEADER = "header"


@dataclass(frozen=True)
class WordSpan:
    """Slice of a diff line flagged as changed or shared with its partner line."""

    text: str
    changed: bool


@dataclass(frozen=True)
class DiffLine:
    """One classified diff row.

    ``old_line_num`` is set for context and deletion rows, ``new_line_num``
    for context and addition rows. Header rows carry neither.
    """

    content: str
    line_type: DiffLineType
    old_line_num: int | None = None
    new_line_num: int | None = None
    inline_changes: tuple[WordSpan, ...] | None = None


@dataclass(frozen=True)
class DiffSnapshot:
    tab_id: int
    file_path: str
    is_staged: bool
    lines: tuple[DiffLine, ...] = ()


@dataclass(frozen=True)
class FileVersionSignature:
    """Cheap fingerprint of a file's on-disk state (mtime + length).

    Equal signatures mean "probably unchanged since the last read"; this is
    not a content hash.
    """

    modified_ns: int
    byte_length: int


@dataclass(frozen=True)
class HighlightSpan:
    text: str
    color: str | None = None
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class HighlightedLine:
    spans: tuple[HighlightSpan, ...] = ()

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(frozen=True)
class FileLoadSnapshot:
    """Loaded representation of one file.

    At most one of ``file_content``, ``image_path`` or ``webview_content`` is
    live; the others stay empty. ``file_preview_notice`` carries user-facing
    information about skipped or truncated content.
    """

    tab_id: int
    path: Path
    file_content: str = ""
    image_path: Path | None = None
    webview_content: str | None = None
    file_preview_notice: str | None = None
    file_signature: FileVersionSignature | None = None

    @property
    def kind(self) -> str:
        """Short label of the live representation, used for logging."""
        if self.image_path is not None:
            return "image"
        if self.webview_content is not None:
            return "inline_webview"
        if self.file_preview_notice is not None:
            return "text_preview"
        if self.file_content:
            return "text"
        return "empty"


@dataclass(frozen=True)
class FileSyntaxSnapshot:
    tab_id: int
    path: Path
    syntax_highlight_lines: tuple[HighlightedLine, ...] | None = None
    syntax_highlight_notice: str | None = None
    file_signature: FileVersionSignature | None = None


Snapshot = (
    GitStatusSnapshot
    | FileTreeSnapshot
    | DiffSnapshot
    | FileLoadSnapshot
    | FileSyntaxSnapshot
)


__all__ = [
    "DiffLine",
    "DiffLineType",
    "DiffSnapshot",
    "FileEntry",
    "FileLoadSnapshot",
    "FileStatus",
    "FileSyntaxSnapshot",
    "FileTreeEntry",
    "FileTreeSnapshot",
    "FileVersionSignature",
    "GitStatusSnapshot",
    "HighlightSpan",
    "HighlightedLine",
    "Snapshot",
    "WordSpan",
]
