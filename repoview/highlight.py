"""Pygments tokenization into per-line colored spans.

The syntax collector treats this as an external tokenizer: it hands over a
path, the text and a theme flag, and gets back highlighted lines plus an
optional notice when the language is not recognized.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol

from pygments.lexers import get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .snapshots import HighlightedLine, HighlightSpan

DARK_STYLE = "monokai"
LIGHT_STYLE = "default"


class Highlighter(Protocol):
    def __call__(
        self,
        path: Path,
        text: str,
        is_dark_theme: bool,
    ) -> tuple[tuple[HighlightedLine, ...] | None, str | None]: ...


def style_name_for_theme(is_dark_theme: bool) -> str:
    return DARK_STYLE if is_dark_theme else LIGHT_STYLE


@lru_cache(maxsize=8)
def _style(style_name: str):
    try:
        return get_style_by_name(style_name)
    except ClassNotFound:
        return get_style_by_name(DARK_STYLE)


def _span(style, token_type, text: str) -> HighlightSpan:
    token_style = style.style_for_token(token_type)
    color = token_style.get("color")
    return HighlightSpan(
        text=text,
        color=f"#{color}" if color else None,
        bold=bool(token_style.get("bold")),
        italic=bool(token_style.get("italic")),
    )


def highlight_lines(
    path: Path,
    text: str,
    is_dark_theme: bool,
) -> tuple[tuple[HighlightedLine, ...] | None, str | None]:
    """Tokenize ``text`` as the language of ``path``.

    Returns one :class:`HighlightedLine` per line of ``text``, or ``None``
    and a notice when no lexer matches the file name.
    """
    try:
        lexer = get_lexer_for_filename(path.name, code=text, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None, f"No syntax highlighting available for {path.name}."

    style = _style(style_name_for_theme(is_dark_theme))
    lines: list[list[HighlightSpan]] = [[]]
    for token_type, value in lexer.get_tokens(text):
        parts = value.split("\n")
        for index, part in enumerate(parts):
            if index > 0:
                lines.append([])
            if part:
                lines[-1].append(_span(style, token_type, part))

    expected = text.count("\n") + 1
    if len(lines) > expected:
        lines = lines[:expected]
    while len(lines) < expected:
        lines.append([])
    return tuple(HighlightedLine(spans=tuple(spans)) for spans in lines), None


__all__ = ["Highlighter", "highlight_lines", "style_name_for_theme"]
