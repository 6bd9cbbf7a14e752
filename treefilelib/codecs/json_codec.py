"""JSON codec."""

import json
from typing import Any

from ..errors import DecodeError
from .base import Codec


class JsonCodec(Codec):
    """Stores each file as a JSON document."""

    def __init__(self, indent: int = 2, sort_keys: bool = True, encoding: str = "utf-8"):
        """Initialize the codec.

        Args:
            indent: Indentation passed to json.dump
            sort_keys: Whether objects are written with sorted keys
            encoding: Text encoding of the files
        """
        self.indent = indent
        self.sort_keys = sort_keys
        self.encoding = encoding

    def load_file(self, path: str) -> Any:
        with open(path, encoding=self.encoding) as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise DecodeError(path, str(e)) from e

    def write_file(self, path: str, value: Any) -> None:
        with open(path, "w", encoding=self.encoding) as f:
            json.dump(value, f, indent=self.indent, sort_keys=self.sort_keys)
            f.write("\n")

    def __repr__(self) -> str:
        return f"JsonCodec(indent={self.indent!r}, sort_keys={self.sort_keys!r})"
