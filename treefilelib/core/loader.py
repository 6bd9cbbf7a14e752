"""Loading trees from disk.

A file is decoded by the tree's codec and turned into nodes in one go.
A directory becomes a node with one child per entry. Entries are loaded
right away down to the requested preload depth and deferred with Pending
slots below it.
"""

import logging
import os
from functools import partial

from ..config import RepresentationType
from ..errors import TreeIOError
from .node import Pending, TreeContext, TreeFileNode, child_location

logger = logging.getLogger(__name__)


class TreeLoader:
    """Builds TreeFileNodes from files and directories under a base directory."""

    def __init__(self, context: TreeContext):
        """Initialize a loader.

        Args:
            context: Collaborators shared by the tree being loaded; its
                basedir is the directory (or file) locations are relative to
        """
        self.context = context

    def disk_path(self, location: str) -> str:
        """Return the filesystem path of a location."""
        basedir = self.context.basedir
        if not location:
            return basedir
        return os.path.join(basedir, location.lstrip("/"))

    def load(self, location: str = "", preload: int = 0):
        """Load the branch or leaf at location.

        Args:
            location: Path from the tree root ("" for the root itself)
            preload: Directory levels to read now; -1 reads everything

        Returns:
            A TreeFileNode, or the decoded value of a file that does not
            hold a mapping

        Raises:
            TreeIOError: If the path is neither a file nor a directory, or
                a directory cannot be listed
        """
        lock_manager = self.context.lock_manager
        path = self.disk_path(location)

        lock_manager.lock()
        try:
            if os.path.isfile(path):
                logger.debug("loading file branch %s", path)
                data = self.context.codec.load_file(path)
                return TreeFileNode.from_data(
                    location, data, self.context, readonly=self.context.config.readonly)

            if os.path.isdir(path):
                return self._load_dir(location, path, preload)
        finally:
            lock_manager.unlock()

        raise TreeIOError(f"{path} doesn't exist or isn't a normal file or directory")

    def _load_dir(self, location: str, path: str, preload: int) -> TreeFileNode:
        config = self.context.config
        try:
            names = os.listdir(path)
        except OSError as e:
            raise TreeIOError(f"can't open branch directory {path}: {e.strerror}") from e

        # -1 stays -1 so every level below is read eagerly too
        next_preload = preload if preload < 0 else max(preload - 1, 0)

        children = {}
        for name in sorted(names):
            if config.should_skip(name, os.path.join(path, name)):
                continue
            location_of_child = child_location(location, name)
            if preload:
                children[name] = self.load(location_of_child, next_preload)
            else:
                children[name] = Pending(partial(self._load_pending, location_of_child))

        logger.debug("loaded directory branch %s (%d entries, preload=%d)",
                     path, len(children), preload)
        return TreeFileNode(location, children, self.context,
                            readonly=config.readonly,
                            representation_type=RepresentationType.DIR)

    def _load_pending(self, location: str):
        logger.debug("loading deferred branch %s", location)
        return self.load(location, 0)
