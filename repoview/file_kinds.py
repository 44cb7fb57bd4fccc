"""Closed classification of files by how they are previewed.

A file is classified once per load request and every branch of the loader
matches on the resulting :class:`FileKind`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class FileKind(Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    DIAGRAM = "diagram"
    IMAGE = "image"
    PLAIN_TEXT = "plain_text"

    @property
    def is_rich_markup(self) -> bool:
        """True for kinds shown through the web preview instead of as text."""
        return self in (FileKind.MARKDOWN, FileKind.HTML, FileKind.DIAGRAM)


MARKDOWN_EXTENSIONS = frozenset({"md", "markdown"})
HTML_EXTENSIONS = frozenset({"html", "htm"})
DIAGRAM_EXTENSIONS = frozenset({"excalidraw"})
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "bmp", "ico"})


def _extension(path: Path) -> str:
    return path.suffix[1:].lower() if path.suffix else ""


def classify_file(path: Path) -> FileKind:
    """Map ``path`` to its preview kind using a case-insensitive extension."""
    ext = _extension(path)
    if ext in DIAGRAM_EXTENSIONS:
        return FileKind.DIAGRAM
    if ext in MARKDOWN_EXTENSIONS:
        return FileKind.MARKDOWN
    if ext in HTML_EXTENSIONS:
        return FileKind.HTML
    if ext in IMAGE_EXTENSIONS:
        return FileKind.IMAGE
    return FileKind.PLAIN_TEXT


def is_markdown_file(path: Path) -> bool:
    return classify_file(path) is FileKind.MARKDOWN


def is_image_file(path: Path) -> bool:
    return classify_file(path) is FileKind.IMAGE


__all__ = [
    "FileKind",
    "classify_file",
    "is_image_file",
    "is_markdown_file",
]
