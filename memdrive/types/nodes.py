"""
Node Types

Folders and files are the two kinds of node in the drive tree. Comments
and properties hang off files and are owned by them.

Storage Models:
    - Folder: Container node (root has parent_id=None)
    - File: Leaf node with content metadata
    - Comment: Timestamped note attached to a file
    - Property: Free-form attribute line attached to a file
    - NodeKind: Tag distinguishing folders from files
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


NodeName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
"""Display name; trimmed, never blank."""


class NodeKind(str, Enum):
    """Tag for the two node variants."""

    FOLDER = "folder"
    FILE = "file"


class Folder(BaseModel):
    """
    A container in the drive tree.

    Attributes:
        id: Unique identifier (shared id space with files)
        name: Display name, never blank
        parent_id: Containing folder, None only for the root
        created_at: Creation time, never changes
    """

    kind: Literal[NodeKind.FOLDER] = Field(default=NodeKind.FOLDER, frozen=True)
    id: str = Field(..., frozen=True)
    name: NodeName
    parent_id: str | None = Field(default=None, frozen=True)
    created_at: datetime = Field(default_factory=utc_now, frozen=True)

    model_config = ConfigDict(validate_assignment=True)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class File(BaseModel):
    """
    A leaf in the drive tree.

    Attributes:
        id: Unique identifier (shared id space with folders)
        name: Display name, never blank
        type: MIME type, e.g. "image/jpeg"
        size: Size in bytes
        url: Preview location, only set for previewable media
        parent_id: Containing folder
        created_at: Creation time, never changes
    """

    kind: Literal[NodeKind.FILE] = Field(default=NodeKind.FILE, frozen=True)
    id: str = Field(..., frozen=True)
    name: NodeName
    type: str = Field(..., frozen=True)
    size: int = Field(..., ge=0, frozen=True)
    url: str | None = Field(default=None, frozen=True)
    parent_id: str = Field(..., frozen=True)
    created_at: datetime = Field(default_factory=utc_now, frozen=True)

    model_config = ConfigDict(validate_assignment=True)


Node = Annotated[Union[Folder, File], Field(discriminator="kind")]
"""Either kind of node, discriminated by the ``kind`` tag."""


class Comment(BaseModel):
    """A note left on a file."""

    id: str
    file_id: str
    text: str
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)


class Property(BaseModel):
    """A free-form attribute line on a file (e.g. "Model: Imagen 4.0")."""

    id: str
    file_id: str
    text: str

    model_config = ConfigDict(frozen=True)
