"""Background execution of collectors for the interactive thread.

Requests are plain frozen values tagged with their tab id. The dispatcher
runs the matching collector on a worker pool and queues the snapshot; the
interactive thread drains the queue whenever it likes and decides what to
keep. Completion order is not guaranteed, and nothing is cancelled.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

from loguru import logger

from .collectors import (
    collect_diff,
    collect_file_load,
    collect_file_syntax_highlight,
    collect_file_tree,
    collect_git_status,
)
from .highlight import Highlighter
from .renderers import PreviewRenderer
from .snapshots import FileVersionSignature, Snapshot

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class StatusRequest:
    tab_id: int
    repo_path: Path


@dataclass(frozen=True)
class TreeRequest:
    tab_id: int
    current_dir: Path
    show_hidden: bool


@dataclass(frozen=True)
class DiffRequest:
    tab_id: int
    repo_path: Path
    file_path: str
    is_staged: bool


@dataclass(frozen=True)
class FileLoadRequest:
    tab_id: int
    path: Path
    is_dark_theme: bool


@dataclass(frozen=True)
class SyntaxRequest:
    """Highlight request derived from an accepted file load.

    ``file_signature`` is the signature of that load and comes back on the
    result unchanged.
    """

    tab_id: int
    path: Path
    file_content: str
    is_dark_theme: bool
    file_signature: FileVersionSignature | None
    max_lines: int


Request = StatusRequest | TreeRequest | DiffRequest | FileLoadRequest | SyntaxRequest


@dataclass(frozen=True)
class DispatchResult:
    """Completed collector payload from a worker."""

    request: Request
    snapshot: Snapshot


def run_request(
    request: Request,
    renderer: PreviewRenderer | None = None,
    highlighter: Highlighter | None = None,
) -> Snapshot:
    """Run the collector matching ``request`` synchronously on the calling thread."""
    if isinstance(request, StatusRequest):
        return collect_git_status(request.tab_id, request.repo_path)
    if isinstance(request, TreeRequest):
        return collect_file_tree(request.tab_id, request.current_dir, request.show_hidden)
    if isinstance(request, DiffRequest):
        return collect_diff(request.tab_id, request.repo_path, request.file_path, request.is_staged)
    if isinstance(request, FileLoadRequest):
        return collect_file_load(request.tab_id, request.path, request.is_dark_theme, renderer=renderer)
    if isinstance(request, SyntaxRequest):
        return collect_file_syntax_highlight(
            request.tab_id,
            request.path,
            request.file_content,
            request.is_dark_theme,
            request.file_signature,
            request.max_lines,
            highlighter=highlighter,
        )
    raise TypeError(f"unsupported request type: {type(request).__name__}")


class TaskDispatcher:
    """Run collector requests on a thread pool and queue their snapshots.

    ``on_result`` is called from the worker thread after each result is
    queued; use it only to wake the interactive loop, never to touch tab
    state.
    """

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        renderer: PreviewRenderer | None = None,
        highlighter: Highlighter | None = None,
        on_result: Callable[[], None] | None = None,
    ) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="repoview-collector")
        self._renderer = renderer
        self._highlighter = highlighter
        self._on_result = on_result
        self._results: Queue[DispatchResult] = Queue()
        self._lock = threading.Lock()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def _worker(self, request: Request) -> None:
        try:
            snapshot = run_request(request, renderer=self._renderer, highlighter=self._highlighter)
        except Exception:
            logger.exception(f"Collector failed for {type(request).__name__} on tab {request.tab_id}")
        else:
            self._results.put(DispatchResult(request=request, snapshot=snapshot))
            if self._on_result is not None:
                self._on_result()
        finally:
            with self._lock:
                self._in_flight -= 1

    def submit(self, request: Request) -> None:
        """Queue ``request`` for background collection."""
        with self._lock:
            self._in_flight += 1
        logger.debug(f"Dispatching {type(request).__name__} for tab {request.tab_id}")
        try:
            self._executor.submit(self._worker, request)
        except RuntimeError:
            with self._lock:
                self._in_flight -= 1
            logger.warning(f"Dispatcher is shut down; dropped {type(request).__name__}")

    def drain_results(self) -> list[DispatchResult]:
        """Return all completed results without blocking."""
        out: list[DispatchResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


__all__ = [
    "DiffRequest",
    "DispatchResult",
    "FileLoadRequest",
    "Request",
    "StatusRequest",
    "SyntaxRequest",
    "TaskDispatcher",
    "TreeRequest",
    "run_request",
]
