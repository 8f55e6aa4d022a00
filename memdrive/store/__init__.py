"""
Storage Layer

In-memory ownership of the drive tree.

Modules:
    filesystem: FilesystemStore, the single mutation path
    ids: IdAllocator for unique, never-reused ids
"""

from memdrive.store.filesystem import FilesystemStore
from memdrive.store.ids import IdAllocator

__all__ = ["FilesystemStore", "IdAllocator"]
