"""Strict text reading, line splitting and size formatting helpers."""

from __future__ import annotations

import codecs
from pathlib import Path


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without newline translation.

    Raises ``OSError`` when the file cannot be read and
    ``UnicodeDecodeError`` when it is not valid UTF-8.
    """
    return path.read_bytes().decode("utf-8")


def read_text_preview(path: Path, max_bytes: int, max_lines: int) -> str:
    """Read at most ``max_bytes`` bytes and ``max_lines`` lines from the head of ``path``.

    A multi-byte character split by the byte ceiling is dropped. Invalid
    UTF-8 before that point raises ``UnicodeDecodeError``.
    """
    with path.open("rb") as handle:
        data = handle.read(max(0, max_bytes))
    decoder = codecs.getincrementaldecoder("utf-8")()
    text = decoder.decode(data, final=False)
    parts = text.split("\n")
    if len(parts) > max_lines:
        text = "\n".join(parts[:max_lines]) + "\n"
    return text


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line.

    A final newline does not start an extra empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def format_bytes(size: int) -> str:
    """Format a byte count as ``B``/``KB``/``MB``/``GB`` with one decimal above bytes."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in ("KB", "MB", "GB"):
        value /= 1024.0
        if value < 1024.0 or unit == "GB":
            return f"{value:.1f} {unit}"
    return f"{value:.1f} GB"


__all__ = ["format_bytes", "read_text", "read_text_preview", "split_lines"]
