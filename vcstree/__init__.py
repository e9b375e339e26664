"""Public package surface for vcstree.

Exports ``main`` for programmatic CLI invocation.
The tree model lives in ``vcstree.file_tree`` and VCS status in ``vcstree.vcs``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
