"""Per-tab state and the freshness rules for merging collector results.

Tab state lives on the interactive thread only. Workers never touch it; their
snapshots are handed to :meth:`TabRegistry.apply_result`, which either
replaces the tab's value of that kind wholesale or drops the snapshot.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .dispatch import DiffRequest, FileLoadRequest, StatusRequest, SyntaxRequest, TreeRequest
from .signature import file_version_signature
from .snapshots import (
    DiffSnapshot,
    FileLoadSnapshot,
    FileSyntaxSnapshot,
    FileTreeSnapshot,
    FileVersionSignature,
    GitStatusSnapshot,
    Snapshot,
)

SignatureProvider = Callable[[Path], FileVersionSignature | None]


@dataclass
class TabState:
    tab_id: int
    repo_path: Path
    repo_name: str
    current_dir: Path
    git_status: GitStatusSnapshot | None = None
    file_tree: FileTreeSnapshot | None = None
    diff: DiffSnapshot | None = None
    file_load: FileLoadSnapshot | None = None
    file_syntax: FileSyntaxSnapshot | None = None
    selected_file: str | None = None
    selected_is_staged: bool = False
    viewing_file_path: Path | None = None

    def select_file(self, path: str, is_staged: bool) -> None:
        """Select a changed path for the diff view; leaves the file viewer."""
        self.selected_file = path
        self.selected_is_staged = is_staged
        self.viewing_file_path = None
        self.file_load = None
        self.file_syntax = None

    def view_file(self, path: Path) -> None:
        """Open ``path`` in the file viewer, dropping the previous preview."""
        self.viewing_file_path = path
        self.selected_file = None
        self.file_load = None
        self.file_syntax = None

    def change_directory(self, path: Path) -> None:
        self.current_dir = path

    def status_request(self) -> StatusRequest:
        return StatusRequest(tab_id=self.tab_id, repo_path=self.repo_path)

    def tree_request(self, show_hidden: bool) -> TreeRequest:
        return TreeRequest(tab_id=self.tab_id, current_dir=self.current_dir, show_hidden=show_hidden)

    def diff_request(self) -> DiffRequest | None:
        if self.selected_file is None:
            return None
        return DiffRequest(
            tab_id=self.tab_id,
            repo_path=self.repo_path,
            file_path=self.selected_file,
            is_staged=self.selected_is_staged,
        )

    def file_load_request(self, is_dark_theme: bool) -> FileLoadRequest | None:
        if self.viewing_file_path is None:
            return None
        return FileLoadRequest(tab_id=self.tab_id, path=self.viewing_file_path, is_dark_theme=is_dark_theme)

    def syntax_request(self, is_dark_theme: bool, max_lines: int) -> SyntaxRequest | None:
        """Build the highlight follow-up for the accepted text load, if any."""
        load = self.file_load
        if load is None or not load.file_content:
            return None
        return SyntaxRequest(
            tab_id=self.tab_id,
            path=load.path,
            file_content=load.file_content,
            is_dark_theme=is_dark_theme,
            file_signature=load.file_signature,
            max_lines=max_lines,
        )


class TabRegistry:
    """Open tabs keyed by id, plus the result merge rules.

    ``signature_for`` reads a file's current on-disk signature; tests inject a
    fake to simulate edits racing a load.
    """

    def __init__(self, signature_for: SignatureProvider = file_version_signature) -> None:
        self._tabs: dict[int, TabState] = {}
        self._next_id = 1
        self._signature_for = signature_for

    def open_tab(self, repo_path: Path) -> TabState:
        repo_path = Path(repo_path)
        tab = TabState(
            tab_id=self._next_id,
            repo_path=repo_path,
            repo_name=repo_path.name or str(repo_path),
            current_dir=repo_path,
        )
        self._next_id += 1
        self._tabs[tab.tab_id] = tab
        return tab

    def close_tab(self, tab_id: int) -> TabState | None:
        return self._tabs.pop(tab_id, None)

    def get(self, tab_id: int) -> TabState | None:
        return self._tabs.get(tab_id)

    def __contains__(self, tab_id: object) -> bool:
        return tab_id in self._tabs

    def __iter__(self) -> Iterator[TabState]:
        return iter(list(self._tabs.values()))

    def __len__(self) -> int:
        return len(self._tabs)

    def _is_current_file_version(self, tab: TabState, path: Path, signature: FileVersionSignature | None) -> bool:
        if path != tab.viewing_file_path:
            return False
        return signature == self._signature_for(path)

    def apply_result(self, snapshot: Snapshot) -> bool:
        """Merge ``snapshot`` into its tab; return whether it was accepted."""
        tab = self._tabs.get(snapshot.tab_id)
        if tab is None:
            logger.debug(f"Dropping {type(snapshot).__name__} for closed tab {snapshot.tab_id}")
            return False

        if isinstance(snapshot, GitStatusSnapshot):
            tab.git_status = snapshot
            return True
        if isinstance(snapshot, FileTreeSnapshot):
            tab.file_tree = snapshot
            return True
        if isinstance(snapshot, DiffSnapshot):
            tab.diff = snapshot
            return True

        if isinstance(snapshot, FileLoadSnapshot):
            if not self._is_current_file_version(tab, snapshot.path, snapshot.file_signature):
                logger.debug(f"Dropping stale file load for {snapshot.path} on tab {tab.tab_id}")
                return False
            tab.file_load = snapshot
            if tab.file_syntax is not None and tab.file_syntax.file_signature != snapshot.file_signature:
                tab.file_syntax = None
            return True

        if isinstance(snapshot, FileSyntaxSnapshot):
            if not self._is_current_file_version(tab, snapshot.path, snapshot.file_signature):
                logger.debug(f"Dropping stale syntax result for {snapshot.path} on tab {tab.tab_id}")
                return False
            if tab.file_load is None or tab.file_load.file_signature != snapshot.file_signature:
                logger.debug(f"Dropping syntax result for {snapshot.path}: no matching file load")
                return False
            tab.file_syntax = snapshot
            return True

        raise TypeError(f"unsupported snapshot type: {type(snapshot).__name__}")


__all__ = ["SignatureProvider", "TabRegistry", "TabState"]
