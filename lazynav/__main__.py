"""Module entrypoint for ``python -m lazynav``.

Argument parsing and runtime setup happen in ``lazynav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
