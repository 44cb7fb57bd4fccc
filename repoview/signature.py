"""File version signatures built from filesystem metadata."""

from __future__ import annotations

import os
from pathlib import Path

from .snapshots import FileVersionSignature


def signature_from_stat(stat: os.stat_result) -> FileVersionSignature:
    """Build a signature from an existing ``stat`` result."""
    return FileVersionSignature(modified_ns=int(stat.st_mtime_ns), byte_length=int(stat.st_size))


def file_version_signature(path: Path) -> FileVersionSignature | None:
    """Return the current signature for ``path`` or ``None`` on stat failure."""
    try:
        return signature_from_stat(path.stat())
    except OSError:
        return None


__all__ = ["file_version_signature", "signature_from_stat"]
