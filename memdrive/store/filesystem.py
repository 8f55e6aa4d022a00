"""
Filesystem Store

Single owner of every folder, file, comment and property. All structural
changes go through this class so the tree stays consistent after every
operation:

    - every non-root folder and every file has an existing parent folder
    - comments and properties only exist for existing files
    - names are never blank
    - ids are unique across folders and files and never reused

Children are tracked in a parent -> children index that is updated on
every insert and delete, so listing a folder and computing a cascade
delete never scan the whole tree.

Example:
    >>> store = FilesystemStore()
    >>> docs = store.create_folder(store.root_id, "Documents")
    >>> store.create_file(docs.id, "notes.txt", "text/plain", 120)
    >>> result = store.delete_item(docs.id)
    >>> sorted(result.removed_ids)
    ['file-2', 'folder-1']
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from memdrive.exceptions import (
    EmptyNameError,
    EmptyTextError,
    FileNotFoundInStoreError,
    FolderNotFoundError,
    InvalidSizeError,
    InvariantViolationError,
    NodeNotFoundError,
    RootDeletionError,
)
from memdrive.store.ids import (
    COMMENT_PREFIX,
    FILE_PREFIX,
    FOLDER_PREFIX,
    PROPERTY_PREFIX,
    IdAllocator,
)
from memdrive.types.inputs import UploadEntry
from memdrive.types.nodes import Comment, File, Folder, Property, utc_now
from memdrive.types.results import DeleteResult, ImportResult, RenameStatus, StoreStats

if TYPE_CHECKING:
    from memdrive.config.settings import DriveConfig

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise EmptyNameError(name)
    return cleaned


def _clean_text(text: str) -> str:
    cleaned = text.strip()
    if not cleaned:
        raise EmptyTextError(text)
    return cleaned


class FilesystemStore:
    """
    In-memory folder/file tree with cascade-owned annotations.

    Args:
        root_name: Display name of the root folder.
        root_id: Id of the root folder.
        id_allocator: Source of fresh ids. A new allocator is created if
            not given; pass one to share an id space between stores.
    """

    def __init__(
        self,
        root_name: str = "Home",
        *,
        root_id: str = "root",
        id_allocator: IdAllocator | None = None,
    ) -> None:
        self._ids = id_allocator or IdAllocator()
        self._folders: dict[str, Folder] = {}
        self._files: dict[str, File] = {}
        self._comments: dict[str, list[Comment]] = {}
        self._properties: dict[str, list[Property]] = {}

        # parent id -> child ids; dicts used as insertion-ordered sets
        self._child_folders: dict[str, dict[str, None]] = {}
        self._child_files: dict[str, dict[str, None]] = {}

        root = Folder(id=root_id, name=_clean_name(root_name), parent_id=None)
        self._ids.reserve(root_id)
        self._insert_folder(root)
        self._root_id = root_id

    @classmethod
    def from_config(cls, config: "DriveConfig | None" = None) -> "FilesystemStore":
        """Create a store from configuration, seeding demo content if enabled."""
        if config is None:
            from memdrive.config import DriveConfig
            config = DriveConfig()

        store = cls(config.root_name, root_id=config.root_id)
        if config.seed_demo:
            from memdrive.seed import seed_demo
            seed_demo(store)
        return store

    # -------------------------------------------------------------------------
    # Index maintenance
    # -------------------------------------------------------------------------

    def _insert_folder(self, folder: Folder) -> None:
        self._folders[folder.id] = folder
        self._child_folders.setdefault(folder.id, {})
        self._child_files.setdefault(folder.id, {})
        if folder.parent_id is not None:
            self._child_folders[folder.parent_id][folder.id] = None

    def _insert_file(self, file: File) -> None:
        self._files[file.id] = file
        self._child_files[file.parent_id][file.id] = None

    def _require_folder(self, folder_id: str) -> Folder:
        try:
            return self._folders[folder_id]
        except KeyError:
            raise FolderNotFoundError(folder_id) from None

    def _require_file(self, file_id: str) -> File:
        try:
            return self._files[file_id]
        except KeyError:
            raise FileNotFoundInStoreError(file_id) from None

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_folder(self, parent_id: str, name: str) -> Folder:
        """
        Create a folder under an existing folder.

        Raises:
            EmptyNameError: If the name is blank.
            FolderNotFoundError: If the parent does not exist.
        """
        cleaned = _clean_name(name)
        self._require_folder(parent_id)

        folder = Folder(
            id=self._ids.allocate(FOLDER_PREFIX),
            name=cleaned,
            parent_id=parent_id,
        )
        self._insert_folder(folder)
        logger.debug(f"Created folder {folder.id} ({folder.name!r}) in {parent_id}")
        return folder

    def create_file(
        self,
        parent_id: str,
        name: str,
        type: str,
        size: int,
        url: str | None = None,
    ) -> File:
        """
        Create a file under an existing folder.

        Whether ``url`` is set is decided by the caller; the store does not
        classify content.

        Raises:
            EmptyNameError: If the name is blank.
            InvalidSizeError: If size is negative.
            FolderNotFoundError: If the parent does not exist.
        """
        cleaned = _clean_name(name)
        if size < 0:
            raise InvalidSizeError(size)
        self._require_folder(parent_id)

        file = File(
            id=self._ids.allocate(FILE_PREFIX),
            name=cleaned,
            type=type,
            size=size,
            url=url,
            parent_id=parent_id,
        )
        self._insert_file(file)
        logger.debug(f"Created file {file.id} ({file.name!r}, {size} bytes) in {parent_id}")
        return file

    def create_folder_tree(self, parent_id: str, entries: Iterable[UploadEntry]) -> ImportResult:
        """
        Import a batch of files together with their intermediate folders.

        Entries whose relative paths share a prefix share the folders for
        that prefix: "a/b/f1" and "a/b/f2" create "a" once and "b" once.
        Folders that already exist in the store are not merged with; the
        batch always creates its own folders.

        The whole batch is validated before anything is inserted, so a bad
        entry leaves the store untouched.

        Raises:
            FolderNotFoundError: If the parent does not exist.
            EmptyNameError: If any file name is blank.
            InvalidSizeError: If any size is negative.
        """
        self._require_folder(parent_id)
        entries = list(entries)
        for entry in entries:
            _clean_name(entry.name)
            if entry.size < 0:
                raise InvalidSizeError(entry.size)

        now = utc_now()
        path_to_id: dict[tuple[str, ...], str] = {}
        new_folders: list[Folder] = []
        new_files: list[File] = []

        for entry in entries:
            current_parent = parent_id
            parts = entry.folder_names
            for depth in range(len(parts)):
                prefix = tuple(parts[: depth + 1])
                existing = path_to_id.get(prefix)
                if existing is not None:
                    current_parent = existing
                    continue
                folder = Folder(
                    id=self._ids.allocate(FOLDER_PREFIX),
                    name=parts[depth],
                    parent_id=current_parent,
                    created_at=now,
                )
                new_folders.append(folder)
                path_to_id[prefix] = folder.id
                current_parent = folder.id

            new_files.append(
                File(
                    id=self._ids.allocate(FILE_PREFIX),
                    name=entry.name.strip(),
                    type=entry.type,
                    size=entry.size,
                    url=entry.url,
                    parent_id=current_parent,
                    created_at=now,
                )
            )

        # Folders are ordered parent-before-child, so the index can be
        # extended in one pass.
        for folder in new_folders:
            self._insert_folder(folder)
        for file in new_files:
            self._insert_file(file)

        logger.info(
            f"Imported {len(new_files)} files and {len(new_folders)} folders into {parent_id}"
        )
        return ImportResult(folders=new_folders, files=new_files)

    # -------------------------------------------------------------------------
    # Rename
    # -------------------------------------------------------------------------

    def rename_item(self, node_id: str, new_name: str) -> RenameStatus:
        """
        Rename a folder or file. Only the name changes.

        Returns:
            RenameStatus.UNCHANGED if the trimmed name equals the current one,
            RenameStatus.UPDATED otherwise.

        Raises:
            EmptyNameError: If the new name is blank.
            NodeNotFoundError: If no folder or file has this id.
        """
        cleaned = _clean_name(new_name)
        node = self.get(node_id)
        if node.name == cleaned:
            return RenameStatus.UNCHANGED

        old_name = node.name
        node.name = cleaned
        logger.debug(f"Renamed {node.kind.value} {node_id}: {old_name!r} -> {cleaned!r}")
        return RenameStatus.UPDATED

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def descendants(self, folder_id: str) -> tuple[set[str], set[str]]:
        """
        Compute the closure of a folder: (folder ids, file ids).

        The folder itself is included. Breadth-first over the children
        index; each folder is queued at most once.

        Raises:
            FolderNotFoundError: If the folder does not exist.
        """
        self._require_folder(folder_id)

        queue: deque[str] = deque([folder_id])
        folder_ids: set[str] = {folder_id}
        file_ids: set[str] = set()

        while queue:
            current = queue.popleft()
            for child_id in self._child_folders.get(current, ()):
                if child_id not in folder_ids:
                    folder_ids.add(child_id)
                    queue.append(child_id)
            file_ids.update(self._child_files.get(current, ()))

        return folder_ids, file_ids

    def delete_item(self, node_id: str) -> DeleteResult:
        """
        Delete a file, or a folder together with everything beneath it.

        Comments and properties of every removed file are removed too. The
        closure is computed before anything is removed.

        Raises:
            NodeNotFoundError: If no folder or file has this id.
            RootDeletionError: If the id names the root.
        """
        if node_id in self._files:
            folder_ids: set[str] = set()
            file_ids = {node_id}
        elif node_id in self._folders:
            if node_id == self._root_id:
                raise RootDeletionError(node_id)
            folder_ids, file_ids = self.descendants(node_id)
        else:
            raise NodeNotFoundError(node_id)

        comment_count = 0
        property_count = 0
        for file_id in file_ids:
            file = self._files.pop(file_id)
            self._child_files.get(file.parent_id, {}).pop(file_id, None)
            comment_count += len(self._comments.pop(file_id, ()))
            property_count += len(self._properties.pop(file_id, ()))

        for folder_id in folder_ids:
            folder = self._folders.pop(folder_id)
            self._child_folders.pop(folder_id, None)
            self._child_files.pop(folder_id, None)
            if folder.parent_id is not None and folder.parent_id not in folder_ids:
                self._child_folders[folder.parent_id].pop(folder_id, None)

        result = DeleteResult(
            folder_ids=frozenset(folder_ids),
            file_ids=frozenset(file_ids),
            comment_count=comment_count,
            property_count=property_count,
        )
        logger.info(
            f"Deleted {node_id}: {len(folder_ids)} folders, {len(file_ids)} files, "
            f"{comment_count} comments, {property_count} properties"
        )
        return result

    # -------------------------------------------------------------------------
    # Annotations
    # -------------------------------------------------------------------------

    def add_comment(self, file_id: str, text: str) -> Comment:
        """
        Append a comment to a file.

        Raises:
            EmptyTextError: If the text is blank.
            FileNotFoundInStoreError: If the file does not exist.
        """
        cleaned = _clean_text(text)
        self._require_file(file_id)
        comment = Comment(id=self._ids.allocate(COMMENT_PREFIX), file_id=file_id, text=cleaned)
        self._comments.setdefault(file_id, []).append(comment)
        logger.debug(f"Added comment {comment.id} to {file_id}")
        return comment

    def add_property(self, file_id: str, text: str) -> Property:
        """
        Append a property to a file.

        Raises:
            EmptyTextError: If the text is blank.
            FileNotFoundInStoreError: If the file does not exist.
        """
        cleaned = _clean_text(text)
        self._require_file(file_id)
        prop = Property(id=self._ids.allocate(PROPERTY_PREFIX), file_id=file_id, text=cleaned)
        self._properties.setdefault(file_id, []).append(prop)
        logger.debug(f"Added property {prop.id} to {file_id}")
        return prop

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def root(self) -> Folder:
        return self._folders[self._root_id]

    def has(self, node_id: str) -> bool:
        return node_id in self._folders or node_id in self._files

    def get(self, node_id: str) -> Folder | File:
        """Look up a folder or file by id."""
        node = self._folders.get(node_id) or self._files.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def get_folder(self, folder_id: str) -> Folder:
        return self._require_folder(folder_id)

    def get_file(self, file_id: str) -> File:
        return self._require_file(file_id)

    def is_folder(self, node_id: str) -> bool:
        return node_id in self._folders

    def is_file(self, node_id: str) -> bool:
        return node_id in self._files

    def folders(self) -> list[Folder]:
        """All folders, root first, in creation order."""
        return list(self._folders.values())

    def files(self) -> list[File]:
        """All files in creation order."""
        return list(self._files.values())

    def children_of(self, folder_id: str) -> tuple[list[Folder], list[File]]:
        """Immediate child folders and files of a folder, in creation order."""
        self._require_folder(folder_id)
        return (
            [self._folders[i] for i in self._child_folders[folder_id]],
            [self._files[i] for i in self._child_files[folder_id]],
        )

    def item_count(self, folder_id: str) -> int:
        """Number of immediate children of a folder."""
        self._require_folder(folder_id)
        return len(self._child_folders[folder_id]) + len(self._child_files[folder_id])

    def subtree_size(self, folder_id: str) -> int:
        """Total bytes of all files beneath a folder."""
        _, file_ids = self.descendants(folder_id)
        return sum(self._files[i].size for i in file_ids)

    def comments_for(self, file_id: str) -> list[Comment]:
        """Comments of a file in insertion order."""
        self._require_file(file_id)
        return list(self._comments.get(file_id, ()))

    def properties_for(self, file_id: str) -> list[Property]:
        """Properties of a file in insertion order."""
        self._require_file(file_id)
        return list(self._properties.get(file_id, ()))

    def path_to(self, node_id: str) -> list[Folder]:
        """
        Folders from the root down to the node's folder.

        For a folder the list ends with the folder itself; for a file it
        ends with the file's parent.
        """
        node = self.get(node_id)
        chain: list[Folder] = []
        current: str | None = node.id if isinstance(node, Folder) else node.parent_id
        while current is not None:
            folder = self._folders[current]
            chain.append(folder)
            current = folder.parent_id
        chain.reverse()
        return chain

    def walk(self, folder_id: str | None = None) -> Iterator[tuple[Folder, list[Folder], list[File]]]:
        """Depth-first (folder, child folders, child files), like os.walk."""
        start = self._require_folder(folder_id or self._root_id)
        stack = [start]
        while stack:
            folder = stack.pop()
            child_folders, child_files = self.children_of(folder.id)
            yield folder, child_folders, child_files
            stack.extend(reversed(child_folders))

    def stats(self) -> StoreStats:
        return StoreStats(
            folders=len(self._folders),
            files=len(self._files),
            comments=sum(len(v) for v in self._comments.values()),
            properties=sum(len(v) for v in self._properties.values()),
            total_bytes=sum(f.size for f in self._files.values()),
        )

    def check_invariants(self) -> None:
        """
        Verify the tree is consistent.

        Raises:
            InvariantViolationError: Listing every problem found.
        """
        problems: list[str] = []

        roots = [f.id for f in self._folders.values() if f.parent_id is None]
        if roots != [self._root_id]:
            problems.append(f"expected single root {self._root_id!r}, found {roots}")

        shared = self._folders.keys() & self._files.keys()
        if shared:
            problems.append(f"ids used by both folders and files: {sorted(shared)}")

        for folder in self._folders.values():
            if not folder.name.strip():
                problems.append(f"folder {folder.id} has a blank name")
            if folder.parent_id is not None:
                if folder.parent_id not in self._folders:
                    problems.append(f"folder {folder.id} has missing parent {folder.parent_id}")
                elif folder.id not in self._child_folders.get(folder.parent_id, {}):
                    problems.append(f"folder {folder.id} missing from children index")

        for file in self._files.values():
            if not file.name.strip():
                problems.append(f"file {file.id} has a blank name")
            if file.parent_id not in self._folders:
                problems.append(f"file {file.id} has missing parent {file.parent_id}")
            elif file.id not in self._child_files.get(file.parent_id, {}):
                problems.append(f"file {file.id} missing from children index")

        for label, owned in (("comments", self._comments), ("properties", self._properties)):
            for file_id in owned:
                if file_id not in self._files:
                    problems.append(f"{label} reference missing file {file_id}")

        # Every folder must reach the root without revisiting a folder
        for folder in self._folders.values():
            seen: set[str] = set()
            current: str | None = folder.id
            while current is not None and current in self._folders:
                if current in seen:
                    problems.append(f"cycle through folder {folder.id}")
                    break
                seen.add(current)
                current = self._folders[current].parent_id

        if problems:
            raise InvariantViolationError(problems)

    def __len__(self) -> int:
        return len(self._folders) + len(self._files)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.has(node_id)
