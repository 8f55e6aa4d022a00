"""
Id Allocation

Ids are "{prefix}-{n}" strings drawn from one monotonic counter shared by
every prefix, so an id is never handed out twice for the lifetime of the
allocator, even after the entity it named is deleted.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable

FOLDER_PREFIX = "folder"
FILE_PREFIX = "file"
COMMENT_PREFIX = "comment"
PROPERTY_PREFIX = "prop"


class IdAllocator:
    """Hands out unique ids and remembers every id it has seen."""

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._counter = itertools.count(1)
        self._issued: set[str] = set(reserved)

    def reserve(self, node_id: str) -> None:
        """Mark an externally chosen id (e.g. "root") as taken."""
        self._issued.add(node_id)

    def is_taken(self, node_id: str) -> bool:
        return node_id in self._issued

    def allocate(self, prefix: str) -> str:
        """Return a fresh id with the given prefix."""
        while True:
            candidate = f"{prefix}-{next(self._counter)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
