"""Interactive-thread driver tying tabs, dispatcher and preview surface together.

A front end owns one :class:`Session`. It forwards user actions to the
session, calls :meth:`Session.tick` from its timer and :meth:`Session.pump`
whenever results may be waiting. Everything here runs on that one thread.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from loguru import logger

from .config import Settings
from .dispatch import Request, TaskDispatcher
from .snapshots import FileLoadSnapshot
from .tabs import TabRegistry, TabState


class PreviewSurface(Protocol):
    """Embedded HTML view; thread-affine, so only the session calls it."""

    def show(self, html: str) -> None: ...

    def hide(self) -> None: ...


class Session:
    def __init__(
        self,
        dispatcher: TaskDispatcher,
        registry: TabRegistry,
        config: Settings,
        surface: PreviewSurface | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.dispatcher = dispatcher
        self.registry = registry
        self.config = config
        self.surface = surface
        self.clock = clock
        self.show_hidden = config.show_hidden
        self.active_tab_id: int | None = None
        self._last_status_at: dict[int, float] = {}

    @property
    def active_tab(self) -> TabState | None:
        if self.active_tab_id is None:
            return None
        return self.registry.get(self.active_tab_id)

    def _dispatch(self, request: Request | None) -> None:
        if request is not None:
            self.dispatcher.submit(request)

    def _dispatch_status(self, tab: TabState) -> None:
        self._last_status_at[tab.tab_id] = self.clock()
        self._dispatch(tab.status_request())

    def _require_tab(self, tab_id: int) -> TabState:
        tab = self.registry.get(tab_id)
        if tab is None:
            raise KeyError(f"no open tab with id {tab_id}")
        return tab

    def _sync_surface(self, tab: TabState) -> None:
        if self.surface is None or tab.tab_id != self.active_tab_id:
            return
        load = tab.file_load
        if load is not None and load.webview_content is not None:
            self.surface.show(load.webview_content)
        else:
            self.surface.hide()

    def open_tab(self, path: Path) -> TabState:
        """Open a tab on ``path``, make it active and request its first snapshots."""
        tab = self.registry.open_tab(Path(path))
        logger.info(f"Opened tab {tab.tab_id} on {tab.repo_path}")
        self.active_tab_id = tab.tab_id
        self._dispatch_status(tab)
        self._dispatch(tab.tree_request(self.show_hidden))
        self._sync_surface(tab)
        return tab

    def close_tab(self, tab_id: int) -> None:
        if self.registry.close_tab(tab_id) is None:
            return
        self._last_status_at.pop(tab_id, None)
        if self.active_tab_id != tab_id:
            return
        remaining = list(self.registry)
        self.active_tab_id = remaining[-1].tab_id if remaining else None
        if self.active_tab is not None:
            self._sync_surface(self.active_tab)
        elif self.surface is not None:
            self.surface.hide()

    def activate(self, tab_id: int) -> None:
        tab = self._require_tab(tab_id)
        self.active_tab_id = tab_id
        self._sync_surface(tab)

    def select_file(self, tab_id: int, path: str, is_staged: bool) -> None:
        tab = self._require_tab(tab_id)
        tab.select_file(path, is_staged)
        self._sync_surface(tab)
        self._dispatch(tab.diff_request())

    def view_file(self, tab_id: int, path: Path) -> None:
        tab = self._require_tab(tab_id)
        tab.view_file(Path(path))
        self._sync_surface(tab)
        self._dispatch(tab.file_load_request(self.config.dark_theme))

    def change_directory(self, tab_id: int, path: Path) -> None:
        tab = self._require_tab(tab_id)
        tab.change_directory(Path(path))
        self._dispatch(tab.tree_request(self.show_hidden))

    def toggle_hidden(self) -> bool:
        """Flip hidden-file visibility and re-list every tab's directory."""
        self.show_hidden = not self.show_hidden
        for tab in self.registry:
            self._dispatch(tab.tree_request(self.show_hidden))
        return self.show_hidden

    def refresh(self, tab_id: int) -> None:
        """Re-request every snapshot the tab currently displays."""
        tab = self._require_tab(tab_id)
        self._dispatch_status(tab)
        self._dispatch(tab.tree_request(self.show_hidden))
        self._dispatch(tab.diff_request())
        self._dispatch(tab.file_load_request(self.config.dark_theme))

    def tick(self) -> bool:
        """Issue a status poll for the active tab when the interval has elapsed."""
        tab = self.active_tab
        if tab is None:
            return False
        last = self._last_status_at.get(tab.tab_id)
        if last is not None and self.clock() - last < self.config.status_poll_seconds:
            return False
        self._dispatch_status(tab)
        return True

    def pump(self) -> int:
        """Apply all finished results; return how many were accepted."""
        applied = 0
        for result in self.dispatcher.drain_results():
            snapshot = result.snapshot
            if not self.registry.apply_result(snapshot):
                continue
            applied += 1
            if isinstance(snapshot, FileLoadSnapshot):
                tab = self._require_tab(snapshot.tab_id)
                self._dispatch(tab.syntax_request(self.config.dark_theme, self.config.syntax_max_lines))
                self._sync_surface(tab)
        return applied

    def shutdown(self) -> None:
        self.dispatcher.shutdown(wait=False)
        if self.surface is not None:
            self.surface.hide()


__all__ = ["PreviewSurface", "Session"]
