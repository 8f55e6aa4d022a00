"""
Public API Layer

User-facing session and shell classes.

Modules:
    drive: Drive class - main entry point for one viewer's session
    shell: DriveShell class - filesystem-style command interface

Design Principles:
    - Single entry point (Drive) for most operations
    - All tree changes go through the FilesystemStore
    - Navigation and selection stay valid after deletes
"""

from memdrive.api.drive import Drive
from memdrive.api.shell import DriveShell

__all__ = ["Drive", "DriveShell"]
