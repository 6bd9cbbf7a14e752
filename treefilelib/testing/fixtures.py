"""Test fixtures for TreeFileLib consumers.

These fixtures lay out trees on disk directly, without going through
TreeWriter, so tests of loading do not depend on writing.
"""

import os
import shutil
import tempfile
from typing import Any, Mapping, Optional

from ..codecs.base import Codec


class TreeFixture:
    """Builds file trees in a temporary directory.

    Nested mappings passed to make_dir() become directories and every other
    value becomes a file encoded with the codec. make_file() stores a
    whole mapping in one file.

    Example:
        fixture = TreeFixture(JsonCodec())
        root = fixture.make_dir("tree", {"a": 1, "b": {"c": "x"}})
        tree = load_tree(root, fixture.codec)
        assert tree.get("b/c") == "x"
        fixture.cleanup()
    """

    def __init__(self, codec: Codec, base: Optional[str] = None):
        """Initialize the fixture.

        Args:
            codec: Codec used to encode and decode files
            base: Directory to build in; a new temporary directory by default
        """
        self.codec = codec
        self._owns_base = base is None
        self.base = base if base is not None else tempfile.mkdtemp(prefix="treefile-")

    def path(self, *parts: str) -> str:
        """Return a path below the fixture's base directory."""
        return os.path.join(self.base, *parts)

    def make_dir(self, name: str, layout: Mapping[str, Any]) -> str:
        """Create directory name holding layout.

        Returns:
            Path of the created directory
        """
        root = self.path(name)
        os.makedirs(root, exist_ok=True)
        for entry, value in layout.items():
            if isinstance(value, Mapping):
                self.make_dir(os.path.join(name, entry), value)
            else:
                self.codec.write_file(os.path.join(root, entry), value)
        return root

    def make_file(self, name: str, value: Any) -> str:
        """Create file name holding value.

        Returns:
            Path of the created file
        """
        path = self.path(name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        self.codec.write_file(path, value)
        return path

    def read(self, *parts: str) -> Any:
        """Decode the file at a path below the base directory."""
        return self.codec.load_file(self.path(*parts))

    def listing(self, *parts: str) -> list:
        """Return the sorted entries of a directory below the base, lock file excluded."""
        return sorted(name for name in os.listdir(self.path(*parts)) if name != ".lock")

    def cleanup(self) -> None:
        """Remove the base directory if the fixture created it."""
        if self._owns_base:
            shutil.rmtree(self.base, ignore_errors=True)

    def __enter__(self) -> "TreeFixture":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cleanup()
