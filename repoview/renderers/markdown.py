"""Themed HTML documents for markdown files.

The default renderer shows Pygments-highlighted markdown source inside a
page styled for the active theme. Front ends wanting fully rendered markdown
inject their own :class:`~repoview.renderers.PreviewRenderer`.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import MarkdownLexer


@dataclass(frozen=True)
class ThemeColors:
    bg_base: str
    text_primary: str
    border: str
    pygments_style: str


DARK_THEME = ThemeColors(bg_base="#1e1e2e", text_primary="#cdd6f4", border="#45475a", pygments_style="monokai")
LIGHT_THEME = ThemeColors(bg_base="#eff1f5", text_primary="#4c4f69", border="#ccd0da", pygments_style="default")


def theme_colors(is_dark_theme: bool) -> ThemeColors:
    return DARK_THEME if is_dark_theme else LIGHT_THEME


def build_html_document(body: str, extra_css: str, theme: ThemeColors) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
            font-size: 14px;
            line-height: 1.6;
            color: {theme.text_primary};
            background-color: {theme.bg_base};
            margin: 0;
            padding: 8px 24px 16px 24px;
        }}
        .highlight pre {{
            white-space: pre-wrap;
            border-left: 3px solid {theme.border};
            padding-left: 12px;
        }}
{extra_css}
    </style>
</head>
<body>
{body}
</body>
</html>
"""


def render_markdown_to_html(content: str, is_dark_theme: bool) -> str:
    """Render markdown ``content`` to a complete HTML document for the given theme."""
    theme = theme_colors(is_dark_theme)
    formatter = HtmlFormatter(style=theme.pygments_style, cssclass="highlight", nobackground=True)
    body = highlight(content, MarkdownLexer(), formatter)
    return build_html_document(body, formatter.get_style_defs(".highlight"), theme)


__all__ = ["ThemeColors", "build_html_document", "render_markdown_to_html", "theme_colors"]
