"""
View Projection

Derives the ordered listing of a folder's immediate children.

Folders always come before files. Folders compare by case-folded name
whatever the key; files compare by case-folded name or by size. The
direction applies to both groups. Sorting is stable, so items with equal
keys keep their creation order in both directions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from memdrive.types.inputs import SortConfig, SortKey, SortOrder
from memdrive.types.nodes import File, Folder

if TYPE_CHECKING:
    from memdrive.store.filesystem import FilesystemStore


def _name_key(node: Folder | File) -> str:
    return node.name.casefold()


def _size_key(node: File) -> int:
    return node.size


def sort_nodes(
    folders: Iterable[Folder],
    files: Iterable[File],
    sort_key: SortKey = SortKey.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Folder | File]:
    """Order already-filtered children: folders first, then files."""
    reverse = SortOrder(sort_order) is SortOrder.DESC
    file_key = _size_key if SortKey(sort_key) is SortKey.SIZE else _name_key

    ordered: list[Folder | File] = []
    ordered.extend(sorted(folders, key=_name_key, reverse=reverse))
    ordered.extend(sorted(files, key=file_key, reverse=reverse))
    return ordered


def project_children(
    folders: Iterable[Folder],
    files: Iterable[File],
    folder_id: str,
    sort_key: SortKey = SortKey.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Folder | File]:
    """
    Pure listing over plain collections.

    Args:
        folders: All folders
        files: All files
        folder_id: Folder whose children to list
        sort_key: File comparison key
        sort_order: Direction for both groups

    Returns:
        Child folders then child files, each group sorted
    """
    return sort_nodes(
        (f for f in folders if f.parent_id == folder_id),
        (f for f in files if f.parent_id == folder_id),
        sort_key,
        sort_order,
    )


def list_children(
    store: "FilesystemStore",
    folder_id: str,
    sort_key: SortKey = SortKey.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Folder | File]:
    """
    Listing of a folder in the store, using its children index.

    Raises:
        FolderNotFoundError: If the folder does not exist.
    """
    child_folders, child_files = store.children_of(folder_id)
    return sort_nodes(child_folders, child_files, sort_key, sort_order)


def list_children_sorted(
    store: "FilesystemStore",
    folder_id: str,
    config: SortConfig,
) -> list[Folder | File]:
    """Same as list_children, taking a SortConfig."""
    return list_children(store, folder_id, config.key, config.order)
