"""Testing utilities for TreeFileLib consumers."""

from .fixtures import TreeFixture

__all__ = ['TreeFixture']
