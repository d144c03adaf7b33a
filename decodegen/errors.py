from __future__ import annotations

from typing import Iterable, Tuple


class DecodeGenError(Exception):
    """Base class for every build-time failure raised by decodegen."""


class CatalogError(DecodeGenError):
    pass


class MalformedPatternError(DecodeGenError):
    def __init__(self, name: str, pattern: str, reason: str) -> None:
        super().__init__(f"{name}: malformed encoding pattern {pattern!r} ({reason})")
        self.name = name
        self.pattern = pattern
        self.reason = reason


class AmbiguousEncodingError(DecodeGenError):
    def __init__(self, names: Iterable[str]) -> None:
        self.names: Tuple[str, ...] = tuple(names)
        super().__init__("Unable to distinguish " + ", ".join(self.names))


__all__ = [
    "AmbiguousEncodingError",
    "CatalogError",
    "DecodeGenError",
    "MalformedPatternError",
]
