"""Advisory locking for a tree root.

Every load and write of a tree is bracketed by lock()/unlock() on the
tree's LockManager. The manager counts acquisitions, so nested brackets
(a write recursing into sub-branches) only release the OS lock at the
outermost unlock.
"""

import fcntl
import logging
import os
import time
from typing import IO, Optional

logger = logging.getLogger(__name__)


class LockManager:
    """Reference-counted exclusive lock on a sentinel file next to a root.

    One instance is shared by every node of a tree. The sentinel file is
    created on first use in the parent directory of the root and is never
    removed.

    Example:
        manager = LockManager("/srv/config/tree")
        with manager:
            ...  # /srv/config/.lock is flocked here
    """

    def __init__(self, root: str, lock_name: str = ".lock"):
        """Initialize a lock manager.

        Args:
            root: Path of the tree root (file or directory)
            lock_name: Name of the sentinel file in the root's parent
        """
        self.root = root
        self.lock_name = lock_name
        self._handle: Optional[IO] = None
        self._locks: int = 0

    @property
    def lock_path(self) -> str:
        """Path of the sentinel lock file."""
        parent = os.path.dirname(os.path.normpath(self.root)) or os.curdir
        return os.path.join(parent, self.lock_name)

    @property
    def count(self) -> int:
        """Number of lock() calls not yet matched by unlock()."""
        return self._locks

    @property
    def is_locked(self) -> bool:
        return self._locks > 0

    def _open(self) -> IO:
        path = self.lock_path
        if not os.path.exists(path):
            with open(path, "w") as lockfile:
                lockfile.write(f"{int(time.time())}\n")
            logger.debug("created lock file %s", path)
        self._locks = 0
        return open(path, "r+")

    def lock(self) -> int:
        """Take the exclusive lock, blocking until it is available.

        Returns:
            The acquisition count after this call
        """
        if self._handle is None:
            self._handle = self._open()
        if self._locks == 0:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_EX)
            logger.debug("acquired lock %s", self.lock_path)
        self._locks += 1
        return self._locks

    def unlock(self) -> Optional[int]:
        """Release one acquisition.

        The OS lock is released when the count reaches zero. Calling
        unlock() before any lock(), or more often than lock(), is a no-op.

        Returns:
            The acquisition count after this call, or None if the lock
            file was never opened
        """
        if self._handle is None:
            return None
        if self._locks == 0:
            return 0
        self._locks -= 1
        if self._locks == 0:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
            logger.debug("released lock %s", self.lock_path)
        return self._locks

    def close(self) -> None:
        """Close the lock file handle.

        Raises:
            RuntimeError: If the lock is still held
        """
        if self._locks:
            raise RuntimeError(f"cannot close {self.lock_path} while locked")
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "LockManager":
        self.lock()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unlock()

    def __repr__(self) -> str:
        return f"LockManager(root={self.root!r}, count={self._locks})"
