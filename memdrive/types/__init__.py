"""
Type Definitions

Pydantic models for all data structures.

Node Models (held by the store):
    - Folder, File - The tree
    - Comment, Property - Append-only file annotations
    - NodeKind, Node - Tagged folder/file variant

Input Models:
    - Upload, UploadEntry - Upload and folder-tree import requests
    - SortKey, SortOrder, SortConfig - Listing order

Result Models:
    - RenameStatus, DeleteResult, ImportResult, StoreStats - Store outcomes
    - ItemDetails, PreviewRequest - Session read models
    - PreviewKind, FileCategory - Media classification
"""

from memdrive.types.inputs import SortConfig, SortKey, SortOrder, Upload, UploadEntry
from memdrive.types.nodes import Comment, File, Folder, Node, NodeKind, Property, utc_now
from memdrive.types.results import (
    DeleteResult,
    FileCategory,
    ImportResult,
    ItemDetails,
    PreviewKind,
    PreviewRequest,
    RenameStatus,
    StoreStats,
)

__all__ = [
    # Node Models
    "Folder",
    "File",
    "Comment",
    "Property",
    "NodeKind",
    "Node",
    "utc_now",
    # Input Models
    "Upload",
    "UploadEntry",
    "SortKey",
    "SortOrder",
    "SortConfig",
    # Result Models
    "RenameStatus",
    "DeleteResult",
    "ImportResult",
    "StoreStats",
    "ItemDetails",
    "PreviewRequest",
    "PreviewKind",
    "FileCategory",
]
