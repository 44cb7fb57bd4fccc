"""Module entrypoint for ``python -m repoview``.

All argument parsing and logging setup happen in ``repoview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
