"""Module entrypoint for ``python -m vcstree``.

All argument parsing and output happen in ``vcstree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
