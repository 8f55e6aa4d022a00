"""
Input Types

Request shapes accepted by the store and the drive session.

    - Upload: A single file handed over by the host (browser, shell, test)
    - UploadEntry: One file of a folder-tree import, with its relative path
    - SortKey, SortOrder, SortConfig: Listing order for the view projection
"""

from enum import Enum

from pydantic import BaseModel, Field


class SortKey(str, Enum):
    """What files are compared by. Folders always compare by name."""

    NAME = "name"
    SIZE = "size"


class SortOrder(str, Enum):
    """Direction applied to the comparison."""

    ASC = "asc"
    DESC = "desc"


class SortConfig(BaseModel):
    """Sort key and direction for a listing."""

    key: SortKey = SortKey.NAME
    order: SortOrder = SortOrder.ASC


class Upload(BaseModel):
    """
    A file picked by the user for upload.

    The bytes themselves never reach the store; only metadata does.

    Attributes:
        name: File name as reported by the host
        type: MIME type as reported by the host (may be empty)
        size: Size in bytes
        source_url: Host-provided object URL usable for previews
    """

    name: str
    type: str = ""
    size: int = Field(default=0, ge=0)
    source_url: str | None = None


class UploadEntry(BaseModel):
    """
    One file of a folder-tree import.

    Attributes:
        relative_path: Slash-separated intermediate folder names ("" = none)
        name: File name
        type: MIME type
        size: Size in bytes
        url: Preview URL (already classified by the caller)
    """

    relative_path: str = ""
    name: str
    type: str = ""
    size: int = Field(default=0, ge=0)
    url: str | None = None

    @classmethod
    def from_path(
        cls,
        path: str,
        type: str = "",
        size: int = 0,
        url: str | None = None,
    ) -> "UploadEntry":
        """
        Build an entry from a full relative path such as "photos/2024/a.jpg".

        The last segment becomes the file name, the rest the folder chain.
        """
        directory, _, name = path.lstrip("/").rpartition("/")
        return cls(relative_path=directory, name=name, type=type, size=size, url=url)

    @property
    def folder_names(self) -> list[str]:
        """Intermediate folder names, trimmed, empty segments dropped."""
        return [part.strip() for part in self.relative_path.split("/") if part.strip()]
