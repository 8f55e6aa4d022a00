"""
memdrive - In-Memory Drive Model

A hierarchical folder/file tree held entirely in memory, with cascade
delete, folder-tree import, sorted listings, breadcrumb navigation and
append-only file comments and properties.

Example:
    >>> from memdrive import Drive, Upload
    >>> drive = Drive()
    >>> drive.create_folder("Reports")
    >>> drive.upload_files([Upload(name="q1.pdf", type="application/pdf", size=52_000)])
    >>> [item.name for item in drive.items()]

Main Classes:
    Drive: Viewer session (navigation, sort, selection, previews)
    DriveShell: Filesystem-style command interface
    FilesystemStore: The tree and its mutation operations
    DriveConfig: Configuration management
"""

__version__ = "0.1.0"

# Public API - lazy imports keep `import memdrive` cheap
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "Drive":
        from memdrive.api.drive import Drive
        return Drive

    if name == "DriveShell":
        from memdrive.api.shell import DriveShell
        return DriveShell

    if name == "FilesystemStore":
        from memdrive.store.filesystem import FilesystemStore
        return FilesystemStore

    if name == "DriveConfig":
        from memdrive.config.settings import DriveConfig
        return DriveConfig

    if name in ("list_children", "project_children"):
        from memdrive import view
        return getattr(view, name)

    if name == "NavigationState":
        from memdrive.navigation.state import NavigationState
        return NavigationState

    # Types
    if name in (
        "Folder",
        "File",
        "Comment",
        "Property",
        "NodeKind",
        "Upload",
        "UploadEntry",
        "SortKey",
        "SortOrder",
        "SortConfig",
        "DeleteResult",
        "ImportResult",
        "RenameStatus",
    ):
        from memdrive import types
        return getattr(types, name)

    raise AttributeError(f"module 'memdrive' has no attribute {name!r}")


__all__ = [
    # Main classes
    "Drive",
    "DriveShell",
    "FilesystemStore",
    "DriveConfig",
    "NavigationState",

    # View
    "list_children",
    "project_children",

    # Types
    "Folder",
    "File",
    "Comment",
    "Property",
    "NodeKind",
    "Upload",
    "UploadEntry",
    "SortKey",
    "SortOrder",
    "SortConfig",
    "DeleteResult",
    "ImportResult",
    "RenameStatus",

    # Version
    "__version__",
]
