"""High-level API for TreeFileLib.

These functions assemble the collaborators a tree needs (lock manager,
codec, writer, options) and hand back its root node.
"""

from typing import Any, Mapping, Optional

from .codecs.base import Codec
from .config import RepresentationType, TreeFileConfig
from .core.loader import TreeLoader
from .core.lock import LockManager
from .core.node import TreeContext, TreeFileNode
from .core.writer import TreeWriter


def _build_context(root: str, codec: Codec, config: TreeFileConfig) -> TreeContext:
    return TreeContext(
        basedir=root,
        codec=codec,
        lock_manager=LockManager(root, lock_name=config.lock_name),
        writer=TreeWriter(),
        config=config,
    )


def load_tree(
    root: str,
    codec: Codec,
    config: Optional[TreeFileConfig] = None,
    **options
) -> Any:
    """Load the tree stored at root.

    root may be a single file or a directory. Directory entries are read
    lazily unless preload asks for more.

    Args:
        root: File or directory holding the tree
        codec: Codec used to read and write the tree's files
        config: Options; keyword options override its fields
        **options: TreeFileConfig fields (readonly, preload, not_found,
            skip, lock_name)

    Returns:
        The root TreeFileNode. If root is a file that does not hold a
        mapping, its decoded value.

    Raises:
        TreeIOError: If root is neither a file nor a directory

    Example:
        >>> tree = load_tree("/etc/myapp", JsonCodec())
        >>> print("Hello,", tree.get("/login/user/name"))
        >>> tree.set("/login/user/lastlogin", int(time.time()))
        >>> tree.write()
    """
    config = TreeFileConfig.from_options(config, **options)
    context = _build_context(str(root), codec, config)
    return TreeLoader(context).load("", config.preload)


def create_tree(
    root: str,
    codec: Codec,
    data: Optional[Mapping] = None,
    config: Optional[TreeFileConfig] = None,
    **options
) -> TreeFileNode:
    """Create a new in-memory tree that will be written to root.

    Nothing is read from or written to disk until write() is called. The
    root branch is written as a directory unless collapse() is called.

    Args:
        root: Path the tree will be written to
        codec: Codec used to write the tree's files
        data: Initial contents
        config: Options; keyword options override its fields
        **options: TreeFileConfig fields

    Returns:
        The root TreeFileNode
    """
    config = TreeFileConfig.from_options(config, **options)
    context = _build_context(str(root), codec, config)
    node = TreeFileNode.from_data("", dict(data or {}), context, readonly=config.readonly)
    node.type(RepresentationType.DIR)
    return node
