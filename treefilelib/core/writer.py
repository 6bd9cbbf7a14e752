"""Writing trees back to disk.

A branch is written either as a directory (one entry per child, branches
recursing) or as a single file holding its whole data(). Whatever shape
the branch had on disk before is removed first.
"""

import logging
import os
import shutil
from typing import Optional

from ..config import RepresentationType
from .node import TreeFileNode, is_branch

logger = logging.getLogger(__name__)


class TreeWriter:
    """Writes TreeFileNodes using the codec and lock of their tree."""

    def disk_path(self, node: TreeFileNode, basedir: Optional[str] = None) -> str:
        """Return where node is written.

        Args:
            node: Node to locate
            basedir: Directory to write under, defaults to the tree's basedir
        """
        basedir = basedir or node.context.basedir
        location = node.location.lstrip("/")
        if not basedir:
            return location
        if not location:
            return basedir
        return os.path.join(basedir, location)

    def representation(self, node: TreeFileNode, path: str) -> RepresentationType:
        """Decide how node is written.

        An explicit type() wins. Otherwise a branch that already exists as a
        directory stays one and everything else becomes a file.
        """
        forced = node.type()
        if forced is not None:
            return forced
        if os.path.isdir(path):
            return RepresentationType.DIR
        return RepresentationType.FILE

    def write(self, node: TreeFileNode, basedir: Optional[str] = None) -> str:
        """Write node and everything below it.

        Args:
            node: Branch to write
            basedir: Directory to write under instead of the tree's basedir

        Returns:
            The path written
        """
        path = self.disk_path(node, basedir)
        lock_manager = node.context.lock_manager

        node.data()  # load every pending child before anything is removed

        lock_manager.lock()
        try:
            if self.representation(node, path) is RepresentationType.DIR:
                self._write_dir(node, path, basedir)
            else:
                self._write_file(node, path)
        finally:
            lock_manager.unlock()
        return path

    def _write_dir(self, node: TreeFileNode, path: str, basedir: Optional[str]) -> None:
        logger.debug("writing directory branch %s", path)
        _remove(path)
        os.makedirs(path)
        codec = node.context.codec
        for name in node.node_names():
            value = node.child(name)
            if is_branch(value):
                self.write(value, basedir)
            else:
                codec.write_file(os.path.join(path, name), value)

    def _write_file(self, node: TreeFileNode, path: str) -> None:
        logger.debug("writing file branch %s", path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        node.context.codec.write_file(path, node.data())


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)
