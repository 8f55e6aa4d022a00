"""Exceptions raised by the drive store and session."""


class DriveError(Exception):
    """Base class for every rejected drive operation."""


class EmptyNameError(DriveError, ValueError):
    """Raised when a folder or file name is blank after trimming."""

    def __init__(self, name: str) -> None:
        """
        Initialize EmptyNameError.

        Args:
            name: The rejected submission.
        """
        self.name = name
        super().__init__(f"Name must not be empty (got {name!r})")


class EmptyTextError(DriveError, ValueError):
    """Raised when a comment or property text is blank after trimming."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Text must not be empty (got {text!r})")


class InvalidSizeError(DriveError, ValueError):
    """Raised when a file size is negative."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"File size must be >= 0 (got {size})")


class NodeNotFoundError(DriveError, KeyError):
    """Raised when an id does not name any folder or file in the store."""

    label = "Item"

    def __init__(self, node_id: str) -> None:
        """
        Initialize NodeNotFoundError.

        Args:
            node_id: The id that failed to resolve.
        """
        self.node_id = node_id
        super().__init__(f"{self.label} not found: {node_id}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class FolderNotFoundError(NodeNotFoundError):
    """Raised when an id does not name a folder."""

    label = "Folder"


class FileNotFoundInStoreError(NodeNotFoundError):
    """Raised when an id does not name a file."""

    label = "File"


class RootDeletionError(DriveError):
    """Raised on an attempt to delete the root folder."""

    def __init__(self, root_id: str) -> None:
        self.root_id = root_id
        super().__init__(f"The root folder cannot be deleted: {root_id}")


class InvariantViolationError(DriveError):
    """Raised by consistency checks when the tree is inconsistent."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Store invariants violated: " + "; ".join(problems))


class NavigationError(DriveError):
    """Raised when a folder cannot be entered from the current location."""

    def __init__(self, folder_id: str, current_folder_id: str) -> None:
        self.folder_id = folder_id
        self.current_folder_id = current_folder_id
        super().__init__(f"Folder {folder_id} is not a child of {current_folder_id}")
