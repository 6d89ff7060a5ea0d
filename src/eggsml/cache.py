"""Content-addressed parse cache for EggsML.

Maps a hash of the source text to its parsed root. Trees are immutable,
so a cached root can be handed out any number of times.

Thread Safety:
    DictParseCache is not thread-safe. For parallel parsing, use a cache
    implementation with internal locking (e.g. threading.Lock around get/put).

Example:
    >>> from eggsml import parse, DictParseCache
    >>> cache = DictParseCache()
    >>> root1 = parse("*Hello*", cache=cache)
    >>> root2 = parse("*Hello*", cache=cache)  # Cache hit, no re-parse
    >>> root1 is root2
    True
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from eggsml.nodes import Tag


class ParseCache(Protocol):
    """Protocol for content-addressed parse caches."""

    def get(self, content_hash: str) -> Tag | None:
        """Return the cached root if present, else None."""
        ...

    def put(self, content_hash: str, root: Tag) -> None:
        """Store a parsed root."""
        ...


class DictParseCache:
    """In-memory parse cache using a dict.

    Not thread-safe. Only successful parses are ever stored.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, Tag] = {}

    def get(self, content_hash: str) -> Tag | None:
        return self._data.get(content_hash)

    def put(self, content_hash: str, root: Tag) -> None:
        self._data[content_hash] = root

    def __len__(self) -> int:
        return len(self._data)


def hash_content(source: str, truncate: int | None = None) -> str:
    """Compute the SHA256 hex digest of ``source`` for use as a cache key.

    Lone surrogates, which text decoded from UTF-16 may carry, are hashed
    as-is rather than rejected.

    Example:
        >>> hash_content("hello", truncate=16)
        '2cf24dba5fb0a30e'
    """
    digest = hashlib.sha256(source.encode("utf-8", "surrogatepass")).hexdigest()
    return digest if truncate is None else digest[:truncate]


__all__ = [
    "DictParseCache",
    "ParseCache",
    "hash_content",
]
