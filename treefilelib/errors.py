"""Exceptions raised by TreeFileLib.

Every error derives from TreeFileError. Most also derive from the stdlib
exception a caller would naturally catch for that situation, so
``except OSError`` still sees a branch that cannot be read.
"""

from typing import Optional


class TreeFileError(Exception):
    """Base class for all TreeFileLib errors."""
    pass


class UnimplementedError(TreeFileError, NotImplementedError):
    """Raised when a codec method has not been provided."""

    def __init__(self, owner: str, method: str):
        self.owner = owner
        self.method = method
        super().__init__(f"{owner}.{method} method unimplemented")


class ReadOnlyError(TreeFileError):
    """Raised when set, delete or move is called on a readonly tree."""

    def __init__(self, operation: str, location: str = ""):
        self.operation = operation
        self.location = location
        super().__init__(f"{operation} called on readonly tree at {location or '/'!r}")


class MissingIdentifierError(TreeFileError, ValueError):
    """Raised when get, set or delete is called without an identifier."""

    def __init__(self, operation: str, location: str = ""):
        self.operation = operation
        self.location = location
        super().__init__(
            f"{operation} called on node {location or '/'!r} without property identifier"
        )


class TreeIOError(TreeFileError, OSError):
    """Raised when a branch cannot be read from disk."""
    pass


class InvalidTypeError(TreeFileError, ValueError):
    """Raised when a branch type other than 'dir' or 'file' is requested."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid branch type: {value!r}")


class DecodeError(TreeFileError, ValueError):
    """Raised by a codec when a file's contents cannot be decoded."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"can't decode {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotABranchError(TreeFileError, TypeError):
    """Raised when set needs to descend through a leaf value."""

    def __init__(self, name: str, location: str = ""):
        self.name = name
        self.location = location
        super().__init__(f"{name!r} at {location or '/'!r} is a leaf, not a branch")


class InvalidNameError(TreeFileError, ValueError):
    """Raised when a child name is empty or contains a slash."""

    def __init__(self, name, location: str = ""):
        self.name = name
        self.location = location
        super().__init__(f"invalid node name {name!r} below {location or '/'!r}")
