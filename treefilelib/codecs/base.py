"""Codec base class for TreeFileLib."""

from typing import Any

from ..errors import UnimplementedError


class Codec:
    """Reads and writes the files a tree is stored in.

    Subclasses implement load_file and write_file for a concrete format.
    The codec is handed to load_tree() and shared by every node of the
    tree, so one codec class can serve any number of trees.

    Example:
        class LineCodec(Codec):
            def load_file(self, path):
                with open(path) as f:
                    return f.read().splitlines()

            def write_file(self, path, value):
                with open(path, "w") as f:
                    f.write("\\n".join(value) + "\\n")
    """

    def load_file(self, path: str) -> Any:
        """Return the value stored in the file at path.

        Args:
            path: File to read

        Returns:
            The decoded value; a mapping becomes a branch, anything else a leaf

        Raises:
            UnimplementedError: If the subclass does not implement it
        """
        raise UnimplementedError(self.__class__.__name__, "load_file")

    def write_file(self, path: str, value: Any) -> None:
        """Store value in the file at path, replacing it if present.

        Args:
            path: File to write
            value: Value to encode

        Raises:
            UnimplementedError: If the subclass does not implement it
        """
        raise UnimplementedError(self.__class__.__name__, "write_file")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
