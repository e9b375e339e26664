"""Filesystem-backed tree model.

This package contains the VCS-agnostic tree primitives:
- ``Node`` entries with owned children and ghost markers
- directory scanning helpers and the ``TreeNotFoundError`` failure
- ``FileTree`` with expand/collapse, flattening, refresh and ghost insertion
"""

from __future__ import annotations

from .fs import TreeNotFoundError, load_children, stat_node
from .tree import FileTree
from .types import Node, child_sort_key

__all__ = [
    "Node",
    "child_sort_key",
    "TreeNotFoundError",
    "load_children",
    "stat_node",
    "FileTree",
]
