"""Module entrypoint for ``python -m fsdocs``.

All argument parsing and runtime setup happen in ``fsdocs.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
