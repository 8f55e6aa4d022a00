"""
Navigation State

Breadcrumb path from the root to the folder being viewed, plus the
currently selected item. Selection is cleared on every navigation change.

The path is a stack that is never empty: the root id always sits at
index 0 and the last element is the current folder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memdrive.store.filesystem import FilesystemStore
    from memdrive.types.nodes import Folder

logger = logging.getLogger(__name__)


class NavigationState:
    """Breadcrumb stack and selection for one viewer."""

    def __init__(self, root_id: str) -> None:
        self._path: list[str] = [root_id]
        self._selected_id: str | None = None

    # === Path ===

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    @property
    def root_id(self) -> str:
        return self._path[0]

    @property
    def current_folder_id(self) -> str:
        return self._path[-1]

    @property
    def is_at_root(self) -> bool:
        return len(self._path) == 1

    def navigate_into(self, folder_id: str) -> None:
        """Enter a child folder."""
        self._path.append(folder_id)
        self._selected_id = None

    def navigate_to_breadcrumb(self, index: int) -> None:
        """
        Jump to an ancestor on the path.

        Raises:
            IndexError: If index is outside the path.
        """
        if not 0 <= index < len(self._path):
            raise IndexError(f"Breadcrumb index {index} out of range (path length {len(self._path)})")
        del self._path[index + 1:]
        self._selected_id = None

    def navigate_back(self) -> bool:
        """Go up one level. Returns False (and changes nothing) at the root."""
        if self.is_at_root:
            return False
        self._path.pop()
        self._selected_id = None
        return True

    def breadcrumbs(self, store: "FilesystemStore") -> list["Folder"]:
        """Folders on the path, root first."""
        return [store.get_folder(folder_id) for folder_id in self._path]

    def prune(self, store: "FilesystemStore") -> bool:
        """
        Drop path entries and selection that no longer exist in the store.

        The path is cut at the first missing folder. Returns True if the
        path changed.
        """
        valid = 1
        while valid < len(self._path) and store.is_folder(self._path[valid]):
            valid += 1

        changed = valid < len(self._path)
        if changed:
            logger.debug(f"Pruning navigation path {self._path} to depth {valid}")
            del self._path[valid:]
            self._selected_id = None
        elif self._selected_id is not None and not store.has(self._selected_id):
            self._selected_id = None
        return changed

    # === Selection ===

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    def select(self, node_id: str) -> str | None:
        """Toggle selection of an item. Returns the new selection."""
        self._selected_id = None if self._selected_id == node_id else node_id
        return self._selected_id

    def clear_selection(self) -> None:
        self._selected_id = None
