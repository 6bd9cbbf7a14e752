"""Core components of TreeFileLib.

This package holds the node model, the lock manager and the classes that
move trees between memory and disk.
"""

from .node import Pending, TreeContext, TreeFileNode, is_branch
from .lock import LockManager
from .loader import TreeLoader
from .writer import TreeWriter

__all__ = [
    "Pending",
    "TreeContext",
    "TreeFileNode",
    "is_branch",
    "LockManager",
    "TreeLoader",
    "TreeWriter",
]
