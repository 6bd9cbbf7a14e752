"""TreeFileLib - store a nested data structure in a file tree.

A tree is loaded from a single file or a directory of files. Each branch
can live on disk as a directory (one entry per child) or as one file
holding the whole sub-tree, and can be converted between the two when the
tree is written back.

    from treefilelib import load_tree, JsonCodec

    tree = load_tree("/etc/myapp", JsonCodec())
    name = tree.get("/login/user/name")
    tree.set("/login/user/lastlogin", 1700000000)
    tree.write()
"""

__version__ = "0.1.0"

from .api import create_tree, load_tree
from .codecs import Codec, JsonCodec
from .config import RepresentationType, TreeFileConfig
from .core import LockManager, Pending, TreeContext, TreeFileNode, TreeLoader, TreeWriter, is_branch
from .errors import (
    DecodeError,
    InvalidNameError,
    InvalidTypeError,
    MissingIdentifierError,
    NotABranchError,
    ReadOnlyError,
    TreeFileError,
    TreeIOError,
    UnimplementedError,
)

__all__ = [
    "__version__",
    # API
    "load_tree",
    "create_tree",
    # Core
    "TreeFileNode",
    "TreeContext",
    "Pending",
    "is_branch",
    "LockManager",
    "TreeLoader",
    "TreeWriter",
    # Codecs
    "Codec",
    "JsonCodec",
    # Config
    "RepresentationType",
    "TreeFileConfig",
    # Errors
    "TreeFileError",
    "UnimplementedError",
    "ReadOnlyError",
    "MissingIdentifierError",
    "TreeIOError",
    "InvalidNameError",
    "InvalidTypeError",
    "DecodeError",
    "NotABranchError",
]
