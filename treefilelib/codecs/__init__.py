"""Codecs read and write the files a tree is stored in.

A codec turns one file into a value and a value into one file. TreeFileLib
never looks inside files itself.
"""

from .base import Codec
from .json_codec import JsonCodec

__all__ = [
    "Codec",
    "JsonCodec",
]
