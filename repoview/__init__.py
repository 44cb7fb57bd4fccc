"""Public package surface for repoview.

Exports ``main`` for programmatic CLI invocation. Collectors, the dispatcher
and the session live in submodules. Package log records stay disabled until
:func:`repoview.log.setup_logging` turns them on.
"""

from __future__ import annotations

from loguru import logger

__version__ = "0.1.0"

logger.disable("repoview")


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["__version__", "main"]
