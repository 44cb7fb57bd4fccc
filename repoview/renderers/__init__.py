"""Preview renderers consumed by the file-load collector.

Renderers turn markup into HTML strings and never touch the display surface;
showing the HTML is the interactive thread's job.
"""

from __future__ import annotations

from typing import Protocol

from .excalidraw import render_excalidraw_html, validate_excalidraw
from .markdown import render_markdown_to_html


class PreviewRenderer(Protocol):
    def render_markdown(self, content: str, is_dark_theme: bool) -> str: ...

    def validate_diagram(self, content: str) -> bool: ...

    def render_diagram(self, content: str, is_dark_theme: bool) -> str: ...


class DefaultPreviewRenderer:
    """Renderer backed by the bundled markdown and Excalidraw helpers."""

    def render_markdown(self, content: str, is_dark_theme: bool) -> str:
        return render_markdown_to_html(content, is_dark_theme)

    def validate_diagram(self, content: str) -> bool:
        return validate_excalidraw(content)

    def render_diagram(self, content: str, is_dark_theme: bool) -> str:
        return render_excalidraw_html(content, is_dark_theme)


DEFAULT_RENDERER = DefaultPreviewRenderer()


__all__ = [
    "DEFAULT_RENDERER",
    "DefaultPreviewRenderer",
    "PreviewRenderer",
    "render_excalidraw_html",
    "render_markdown_to_html",
    "validate_excalidraw",
]
