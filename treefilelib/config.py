"""Configuration for TreeFileLib.

This module defines the options recognized when a tree is loaded and the
representation types a branch can be written as.
"""

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional

from .errors import InvalidTypeError


class RepresentationType(str, Enum):
    """How a branch is stored on disk.

    A branch written as FILE is a single file holding the whole sub-tree.
    A branch written as DIR is a directory with one entry per child.
    """
    FILE = "file"   # One encoded file
    DIR = "dir"     # One entry per child

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "RepresentationType":
        """Convert a string or RepresentationType to a RepresentationType.

        Args:
            value: "dir", "file" or a RepresentationType

        Returns:
            The matching RepresentationType

        Raises:
            InvalidTypeError: If value names neither representation
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTypeError(value) from None


# Directory entries never loaded, whatever the user filter says.
IGNORED_NAMES = frozenset({"CVS"})


@dataclass
class TreeFileConfig:
    """Options recognized when loading a tree."""

    readonly: bool = False                  # set/delete/move raise ReadOnlyError
    preload: Optional[int] = 0              # Directory levels to load eagerly, -1 for all
    not_found: Optional[Callable[[str, str], Any]] = None  # (id, location) -> value
    skip: Optional[Callable[[str, str], bool]] = None      # (name, path) -> skip entry?
    lock_name: str = ".lock"                # Sentinel file next to the root

    def __post_init__(self):
        if self.preload is None:
            self.preload = 0
        self.validate()

    def validate(self) -> None:
        """Check that option values are usable.

        Raises:
            ValueError: If preload is below -1 or lock_name is empty
            TypeError: If a callback option is not callable
        """
        if self.preload < -1:
            raise ValueError(f"preload must be -1 or greater, got {self.preload}")
        if not self.lock_name:
            raise ValueError("lock_name must not be empty")
        for option in ("not_found", "skip"):
            callback = getattr(self, option)
            if callback is not None and not callable(callback):
                raise TypeError(f"{option} must be callable, got {type(callback).__name__}")

    def should_skip(self, name: str, path: str) -> bool:
        """Check if a directory entry should be left out of the tree.

        Hidden entries, symbolic links and CVS directories are always
        skipped. The user's skip callback can exclude more.

        Args:
            name: Entry name within its directory
            path: Full path of the entry on disk

        Returns:
            True if the entry should not be loaded
        """
        if name.startswith(".") or name in IGNORED_NAMES:
            return True
        if os.path.islink(path):
            return True
        if self.skip is not None:
            return bool(self.skip(name, path))
        return False

    @classmethod
    def from_options(cls, config: Optional["TreeFileConfig"] = None, **options) -> "TreeFileConfig":
        """Build a config from an existing one and/or keyword options.

        Keyword options override fields of the given config.
        """
        if config is None:
            return cls(**options)
        if not options:
            return config
        return replace(config, **options)

