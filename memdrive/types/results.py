"""
Result Types

Outcomes of store operations and read models for the details panel.

Store Results:
    - RenameStatus: Whether a rename changed anything
    - DeleteResult: Ids removed by a (cascade) delete
    - ImportResult: Folders and files created by a folder-tree import
    - StoreStats: Entity counts

Session Read Models:
    - ItemDetails: What the details panel shows for the selected item
    - PreviewRequest: A file to open in the image/video viewer
    - PreviewKind, FileCategory: Media classification
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from memdrive.types.nodes import Comment, File, Folder, NodeKind, Property


class RenameStatus(str, Enum):
    """Outcome of an accepted rename."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"


class DeleteResult(BaseModel):
    """
    Everything removed by one delete.

    Attributes:
        folder_ids: Removed folders (target folder included)
        file_ids: Removed files
        comment_count: Comments removed with their files
        property_count: Properties removed with their files
    """

    folder_ids: frozenset[str] = frozenset()
    file_ids: frozenset[str] = frozenset()
    comment_count: int = 0
    property_count: int = 0

    @property
    def removed_ids(self) -> frozenset[str]:
        return self.folder_ids | self.file_ids


class ImportResult(BaseModel):
    """Folders and files created by one folder-tree import, in creation order."""

    folders: list[Folder] = []
    files: list[File] = []


class StoreStats(BaseModel):
    """Entity counts for a store."""

    folders: int
    files: int
    comments: int
    properties: int
    total_bytes: int


class PreviewKind(str, Enum):
    """Viewer used to preview a file."""

    IMAGE = "image"
    VIDEO = "video"


class FileCategory(str, Enum):
    """Coarse file classification used for icons and labels."""

    IMAGE = "image"
    PDF = "pdf"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    OTHER = "other"


class PreviewRequest(BaseModel):
    """A file to show in the image or video viewer."""

    file_id: str
    name: str
    url: str
    kind: PreviewKind


class ItemDetails(BaseModel):
    """
    Details panel content for the selected item.

    Attributes:
        id: Item id
        kind: Folder or file
        name: Current name
        type_label: MIME type for files, "Folder" for folders
        size_label: Human readable size for files, "N items" for folders
        created_at: Creation time
        comments: File comments, newest first
        properties: File properties, in insertion order
        opened: Whether the file was previewed in this session
    """

    id: str
    kind: NodeKind
    name: str
    type_label: str
    size_label: str
    created_at: datetime
    comments: list[Comment] = []
    properties: list[Property] = []
    opened: bool = False
