"""
Drive - Primary Entry Point

The Drive class is one viewer's session over a FilesystemStore: it keeps
the breadcrumb path, the sort configuration, the selected item and the
set of files opened in a previewer, and routes every change through the
store.

Example:
    >>> drive = Drive()
    >>> drive.create_folder("Reports")
    >>> drive.upload_files([Upload(name="q1.pdf", type="application/pdf", size=52_000)])
    >>> [item.name for item in drive.items()]
    ['Documents', 'Reports', 'cat-photo.jpg', 'ocean-waves.mp4', 'q1.pdf', 'Welcome.txt']

    >>> # Open a folder, then go back up
    >>> drive.open_folder(drive.items()[0].id)
    >>> drive.go_back()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from uuid import uuid4

from memdrive.exceptions import NavigationError, NodeNotFoundError
from memdrive.navigation.state import NavigationState
from memdrive.store.filesystem import FilesystemStore
from memdrive.types.inputs import SortConfig, SortKey, SortOrder, Upload, UploadEntry
from memdrive.types.nodes import Comment, File, Folder, NodeKind, Property
from memdrive.types.results import (
    DeleteResult,
    ImportResult,
    ItemDetails,
    PreviewRequest,
    RenameStatus,
)
from memdrive.utils.media import format_bytes, is_previewable, preview_kind
from memdrive.view.projection import list_children

if TYPE_CHECKING:
    from memdrive.config.settings import DriveConfig

logger = logging.getLogger(__name__)


class Drive:
    """
    A viewer session over an in-memory drive.

    Args:
        config: Optional configuration. Uses defaults if not provided.
        store: Existing store to view. Built from config if not provided.
    """

    def __init__(
        self,
        config: "DriveConfig | None" = None,
        store: FilesystemStore | None = None,
    ) -> None:
        if config is None:
            from memdrive.config import DriveConfig
            config = DriveConfig()
        self._config = config

        self._store = store if store is not None else FilesystemStore.from_config(config)
        self._navigation = NavigationState(self._store.root_id)
        self._sort = config.sort
        self._opened: set[str] = set()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def config(self) -> "DriveConfig":
        return self._config

    @property
    def store(self) -> FilesystemStore:
        return self._store

    @property
    def navigation(self) -> NavigationState:
        return self._navigation

    @property
    def sort(self) -> SortConfig:
        return self._sort

    @property
    def current_folder_id(self) -> str:
        return self._navigation.current_folder_id

    @property
    def current_folder(self) -> Folder:
        return self._store.get_folder(self.current_folder_id)

    def breadcrumbs(self) -> list[Folder]:
        return self._navigation.breadcrumbs(self._store)

    def items(self) -> list[Folder | File]:
        """Sorted children of the current folder."""
        return list_children(self._store, self.current_folder_id, self._sort.key, self._sort.order)

    def set_sort(self, key: SortKey | str, order: SortOrder | str) -> SortConfig:
        self._sort = SortConfig(key=SortKey(key), order=SortOrder(order))
        return self._sort

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def open_folder(self, folder_id: str) -> Folder:
        """
        Enter a child folder of the current folder.

        Raises:
            FolderNotFoundError: If the folder does not exist.
            NavigationError: If it is not a child of the current folder.
        """
        folder = self._store.get_folder(folder_id)
        if folder.parent_id != self.current_folder_id:
            raise NavigationError(folder_id, self.current_folder_id)
        self._navigation.navigate_into(folder_id)
        return folder

    def go_to_breadcrumb(self, index: int) -> Folder:
        self._navigation.navigate_to_breadcrumb(index)
        return self.current_folder

    def go_back(self) -> bool:
        return self._navigation.navigate_back()

    # -------------------------------------------------------------------------
    # Mutations (current folder)
    # -------------------------------------------------------------------------

    def create_folder(self, name: str) -> Folder:
        return self._store.create_folder(self.current_folder_id, name)

    def _preview_url(self, upload: Upload) -> str | None:
        """Preview URL for an upload, only for image and video content."""
        if not is_previewable(upload.type):
            return None
        if upload.source_url:
            return upload.source_url
        return self._config.preview_url_template.format(token=uuid4().hex, name=upload.name)

    def upload_files(self, uploads: Iterable[Upload]) -> list[File]:
        """Add files to the current folder as one batch."""
        entries = [
            UploadEntry(
                name=upload.name,
                type=upload.type,
                size=upload.size,
                url=self._preview_url(upload),
            )
            for upload in uploads
        ]
        return self._store.create_folder_tree(self.current_folder_id, entries).files

    def upload_folder(self, uploads: Iterable[Upload]) -> ImportResult:
        """
        Add a folder tree to the current folder as one batch.

        Each upload's name is its path relative to the picked directory,
        e.g. "vacation/day1/beach.jpg". Entries without a file name (a
        trailing slash) are skipped.
        """
        entries: list[UploadEntry] = []
        for upload in uploads:
            entry = UploadEntry.from_path(
                upload.name,
                type=upload.type,
                size=upload.size,
            )
            if not entry.name.strip():
                logger.warning(f"Skipping folder upload entry without a file name: {upload.name!r}")
                continue
            entry.url = self._preview_url(upload.model_copy(update={"name": entry.name}))
            entries.append(entry)
        return self._store.create_folder_tree(self.current_folder_id, entries)

    def rename(self, node_id: str, new_name: str) -> RenameStatus:
        return self._store.rename_item(node_id, new_name)

    def delete(self, node_id: str) -> DeleteResult:
        """
        Delete an item, keeping navigation and selection valid.

        If the current folder or one of its ancestors was removed, the
        path is cut back to the deepest surviving folder.
        """
        result = self._store.delete_item(node_id)
        if self._navigation.selected_id in result.removed_ids:
            self._navigation.clear_selection()
        self._navigation.prune(self._store)
        self._opened -= result.file_ids
        return result

    def add_comment(self, file_id: str, text: str) -> Comment:
        return self._store.add_comment(file_id, text)

    def add_property(self, file_id: str, text: str) -> Property:
        return self._store.add_property(file_id, text)

    # -------------------------------------------------------------------------
    # Selection and details
    # -------------------------------------------------------------------------

    def select(self, node_id: str) -> Folder | File | None:
        """Toggle selection of an item. Returns the selected item, if any."""
        self._store.get(node_id)
        selected = self._navigation.select(node_id)
        return self._store.get(selected) if selected else None

    def clear_selection(self) -> None:
        self._navigation.clear_selection()

    def selected_item(self) -> Folder | File | None:
        selected = self._navigation.selected_id
        if selected is None or not self._store.has(selected):
            return None
        return self._store.get(selected)

    def details(self, node_id: str | None = None) -> ItemDetails | None:
        """
        Details panel content for an item (default: the selected item).

        Comments are newest first; properties keep insertion order.
        """
        if node_id is None:
            item = self.selected_item()
            if item is None:
                return None
        else:
            item = self._store.get(node_id)

        if isinstance(item, Folder):
            count = self._store.item_count(item.id)
            return ItemDetails(
                id=item.id,
                kind=NodeKind.FOLDER,
                name=item.name,
                type_label="Folder",
                size_label=f"{count} items",
                created_at=item.created_at,
            )

        # Reversed first so equal timestamps still list the latest comment first
        comments = sorted(
            reversed(self._store.comments_for(item.id)),
            key=lambda c: c.created_at,
            reverse=True,
        )
        return ItemDetails(
            id=item.id,
            kind=NodeKind.FILE,
            name=item.name,
            type_label=item.type,
            size_label=format_bytes(item.size),
            created_at=item.created_at,
            comments=comments,
            properties=self._store.properties_for(item.id),
            opened=item.id in self._opened,
        )

    # -------------------------------------------------------------------------
    # Preview
    # -------------------------------------------------------------------------

    def open_preview(self, file_id: str) -> PreviewRequest | None:
        """
        Request a preview of an image or video file and mark it opened.

        Returns None for files that have no preview URL or are not media.
        """
        file = self._store.get_file(file_id)
        kind = preview_kind(file.type)
        if file.url is None or kind is None:
            return None
        self._opened.add(file.id)
        return PreviewRequest(file_id=file.id, name=file.name, url=file.url, kind=kind)

    def is_opened(self, file_id: str) -> bool:
        return file_id in self._opened

    def find_child(self, name: str, folder_id: str | None = None) -> Folder | File:
        """
        First child (in current sort order) with exactly this name.

        Raises:
            FolderNotFoundError: If the folder does not exist.
            NodeNotFoundError: If no child has this name.
        """
        folder_id = folder_id or self.current_folder_id
        for item in list_children(self._store, folder_id, self._sort.key, self._sort.order):
            if item.name == name:
                return item
        raise NodeNotFoundError(name)

