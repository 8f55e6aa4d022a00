"""
DriveShell - Filesystem-Style Navigation Interface

Presents a drive session through familiar shell commands. Paths are
slash-separated folder names, absolute from the root ("/Documents/2024")
or relative to the current folder ("..", "./Reports").

Commands:
    pwd                         - Print working directory
    cd PATH | cd -              - Change directory (cd - returns to previous)
    back                        - Go up one level
    ls [PATH] [-l]              - List directory contents
    tree [PATH]                 - Show the subtree
    mkdir NAME                  - Create a folder here
    touch NAME [SIZE] [TYPE]    - Simulate uploading a file here
    import RELPATH[:SIZE] ...   - Simulate uploading a folder tree here
    mv PATH NEW_NAME            - Rename
    rm PATH                     - Delete (folders recursively)
    info [PATH]                 - Show details (default: selection)
    select PATH                 - Toggle selection
    open PATH                   - Preview an image or video
    comment PATH TEXT...        - Add a comment to a file
    prop PATH TEXT...           - Add a property to a file
    sort KEY [ORDER]            - Change listing order (name|size, asc|desc)
    stats                       - Count folders, files and annotations
    history                     - Show executed commands
    help                        - List commands

Example:
    >>> shell = DriveShell(Drive())
    >>> shell.execute("mkdir Reports")
    'created folder Reports'
    >>> shell.execute("cd Reports")
    '/Reports'
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from memdrive.api.drive import Drive
from memdrive.exceptions import DriveError, FolderNotFoundError
from memdrive.types.inputs import SortKey, SortOrder, Upload
from memdrive.types.nodes import File, Folder, NodeKind
from memdrive.utils.media import format_bytes, format_date, format_time_ago, guess_mime_type
from memdrive.view.projection import list_children

logger = logging.getLogger(__name__)


def parse_command(command: str) -> tuple[str, list[str]]:
    """Parse a command string into (cmd_name, args)."""
    stripped = command.strip()
    if not stripped:
        raise ValueError("Empty command")
    parts = stripped.split(maxsplit=1)
    cmd_name = parts[0].lower()
    arg_text = parts[1] if len(parts) > 1 else ""
    return cmd_name, shlex.split(arg_text)


def _parse_sized_path(arg: str) -> tuple[str, int]:
    """Split "a/b/file.txt:2048" into ("a/b/file.txt", 2048)."""
    path, sep, size = arg.rpartition(":")
    if sep and size.isdigit():
        return path, int(size)
    return arg, 0


class DriveShell:
    """
    Interactive shell for navigating a drive.

    Every command returns its output as a string. Rejected operations
    produce a line starting with "error:" instead of raising, so an
    interactive loop can keep going.
    """

    def __init__(self, drive: Drive) -> None:
        """Initialize shell for a drive session."""
        self._drive = drive
        self._history: list[str] = []
        self._prev_path: tuple[str, ...] | None = None
        self._commands: dict[str, Callable[[list[str]], str]] = {
            "pwd": self._cmd_pwd,
            "cd": self._cmd_cd,
            "back": self._cmd_back,
            "ls": self._cmd_ls,
            "tree": self._cmd_tree,
            "mkdir": self._cmd_mkdir,
            "touch": self._cmd_touch,
            "import": self._cmd_import,
            "mv": self._cmd_mv,
            "rm": self._cmd_rm,
            "info": self._cmd_info,
            "select": self._cmd_select,
            "open": self._cmd_open,
            "comment": self._cmd_comment,
            "prop": self._cmd_prop,
            "sort": self._cmd_sort,
            "stats": self._cmd_stats,
            "history": self._cmd_history,
            "help": self._cmd_help,
        }

    @property
    def drive(self) -> Drive:
        return self._drive

    # === Paths ===

    def _display_path(self, folder_ids: tuple[str, ...] | None = None) -> str:
        store = self._drive.store
        ids = folder_ids if folder_ids is not None else self._drive.navigation.path
        names = [store.get_folder(folder_id).name for folder_id in ids[1:]]
        return "/" + "/".join(names)

    def resolve(self, path: str) -> Folder | File:
        """
        Resolve a shell path to a folder or file.

        Raises:
            FolderNotFoundError: If an intermediate segment is not a folder.
            NodeNotFoundError: If a segment names nothing.
        """
        store = self._drive.store
        if path.startswith("/"):
            current: Folder | File = store.root
        else:
            current = self._drive.current_folder

        for segment in path.split("/"):
            if segment in ("", "."):
                continue
            if not isinstance(current, Folder):
                raise FolderNotFoundError(current.id)
            if segment == "..":
                if current.parent_id is not None:
                    current = store.get_folder(current.parent_id)
                continue
            current = self._drive.find_child(segment, current.id)
        return current

    def _resolve_folder(self, path: str) -> Folder:
        node = self.resolve(path)
        if not isinstance(node, Folder):
            raise FolderNotFoundError(node.id)
        return node

    def _resolve_file(self, path: str) -> File:
        node = self.resolve(path)
        if not isinstance(node, File):
            raise DriveError(f"Not a file: {path}")
        return node

    def _go_to(self, folder: Folder) -> None:
        """Point the breadcrumb path at a folder."""
        chain = self._drive.store.path_to(folder.id)
        self._prev_path = self._drive.navigation.path
        self._drive.go_to_breadcrumb(0)
        for ancestor in chain[1:]:
            self._drive.open_folder(ancestor.id)

    # === Navigation ===

    def pwd(self) -> str:
        """Print working directory."""
        return self._display_path()

    def cd(self, path: str = "/") -> str:
        """
        Change directory.

        Args:
            path: Absolute (/Documents) or relative (../Photos) path, or "-"
                for the previous directory

        Returns:
            New working directory path
        """
        if path == "-":
            return self.back_to_previous()
        self._go_to(self._resolve_folder(path))
        return self.pwd()

    def back_to_previous(self) -> str:
        """Go to previous directory (cd -)."""
        if self._prev_path is None:
            return self.pwd()
        store = self._drive.store
        target = next(
            (store.get_folder(i) for i in reversed(self._prev_path) if store.is_folder(i)),
            store.root,
        )
        self._go_to(target)
        return self.pwd()

    def ls(self, path: str | None = None, *, long: bool = False) -> str:
        """
        List directory contents.

        Args:
            path: Path to list (default: current directory)
            long: Show type, size and date (-l flag)
        """
        folder = self._resolve_folder(path) if path else self._drive.current_folder
        sort = self._drive.sort
        items = list_children(self._drive.store, folder.id, sort.key, sort.order)
        if not items:
            return "(empty)"

        lines = []
        for item in items:
            label = f"{item.name}/" if isinstance(item, Folder) else item.name
            if not long:
                lines.append(label)
            elif isinstance(item, Folder):
                count = self._drive.store.item_count(item.id)
                lines.append(f"d  {f'{count} items':>12}  {format_date(item.created_at)}  {label}")
            else:
                lines.append(f"-  {format_bytes(item.size):>12}  {format_date(item.created_at)}  {label}")
        return "\n".join(lines)

    def tree(self, path: str | None = None) -> str:
        """Indented subtree listing."""
        root = self._resolve_folder(path) if path else self._drive.current_folder
        sort = self._drive.sort
        lines = [f"{root.name}/"]

        def _walk(folder_id: str, depth: int) -> None:
            for item in list_children(self._drive.store, folder_id, sort.key, sort.order):
                indent = "    " * depth
                if isinstance(item, Folder):
                    lines.append(f"{indent}{item.name}/")
                    _walk(item.id, depth + 1)
                else:
                    lines.append(f"{indent}{item.name}")

        _walk(root.id, 1)
        return "\n".join(lines)

    # === Session Management ===

    def history(self, limit: int = 20) -> list[str]:
        """Get command history for this session."""
        return self._history[-limit:]

    def back(self) -> str:
        """Go up one level."""
        self._drive.go_back()
        return self.pwd()

    # === Execution ===

    def execute(self, command: str) -> str:
        """
        Execute a shell command string such as "ls -l Documents".

        Returns:
            Command output, or an "error: ..." line if it was rejected
        """
        self._history.append(command)
        try:
            cmd_name, args = parse_command(command)
        except ValueError as e:
            return f"error: {e}"

        handler = self._commands.get(cmd_name)
        if handler is None:
            return f"error: unknown command: {cmd_name} (try 'help')"

        try:
            return handler(args)
        except (DriveError, ValueError, IndexError) as e:
            logger.debug(f"Command {command!r} rejected: {e}")
            return f"error: {e}"

    def execute_batch(self, commands: list[str]) -> list[str]:
        """Execute multiple commands, returning all outputs."""
        return [self.execute(cmd) for cmd in commands]

    # -------------------------------------------------------------------------
    # Command handlers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_args(args: list[str], count: int, usage: str) -> None:
        if len(args) < count:
            raise ValueError(f"usage: {usage}")

    def _cmd_pwd(self, args: list[str]) -> str:
        return self.pwd()

    def _cmd_cd(self, args: list[str]) -> str:
        return self.cd(args[0] if args else "/")

    def _cmd_back(self, args: list[str]) -> str:
        return self.back()

    def _cmd_ls(self, args: list[str]) -> str:
        long = "-l" in args
        paths = [a for a in args if a != "-l"]
        return self.ls(paths[0] if paths else None, long=long)

    def _cmd_tree(self, args: list[str]) -> str:
        return self.tree(args[0] if args else None)

    def _cmd_mkdir(self, args: list[str]) -> str:
        self._require_args(args, 1, "mkdir NAME")
        folder = self._drive.create_folder(args[0])
        return f"created folder {folder.name}"

    def _cmd_touch(self, args: list[str]) -> str:
        self._require_args(args, 1, "touch NAME [SIZE] [TYPE]")
        name = args[0]
        size = int(args[1]) if len(args) > 1 else 0
        mime_type = args[2] if len(args) > 2 else guess_mime_type(name)
        (file,) = self._drive.upload_files([Upload(name=name, type=mime_type, size=size)])
        return f"created file {file.name} ({format_bytes(file.size)}, {file.type})"

    def _cmd_import(self, args: list[str]) -> str:
        self._require_args(args, 1, "import RELPATH[:SIZE] ...")
        uploads = []
        for arg in args:
            path, size = _parse_sized_path(arg)
            name = path.rpartition("/")[2]
            uploads.append(Upload(name=path, type=guess_mime_type(name), size=size))
        result = self._drive.upload_folder(uploads)
        return f"imported {len(result.files)} files, {len(result.folders)} folders"

    def _cmd_mv(self, args: list[str]) -> str:
        self._require_args(args, 2, "mv PATH NEW_NAME")
        node = self.resolve(args[0])
        status = self._drive.rename(node.id, args[1])
        return f"{status.value}: {node.name}"

    def _cmd_rm(self, args: list[str]) -> str:
        self._require_args(args, 1, "rm PATH")
        node = self.resolve(args[0])
        result = self._drive.delete(node.id)
        return (
            f"removed {len(result.folder_ids)} folders, {len(result.file_ids)} files, "
            f"{result.comment_count} comments, {result.property_count} properties"
        )

    def _cmd_info(self, args: list[str]) -> str:
        node_id = self.resolve(args[0]).id if args else None
        details = self._drive.details(node_id)
        if details is None:
            return "nothing selected"

        lines = [
            f"name:     {details.name}",
            f"type:     {details.type_label}",
            f"size:     {details.size_label}",
            f"created:  {format_date(details.created_at)}",
        ]
        if details.kind is NodeKind.FILE:
            lines.append(f"opened:   {'yes' if details.opened else 'no'}")
            for prop in details.properties:
                lines.append(f"property: {prop.text}")
            for comment in details.comments:
                lines.append(f"comment:  {comment.text} ({format_time_ago(comment.created_at)})")
        return "\n".join(lines)

    def _cmd_select(self, args: list[str]) -> str:
        self._require_args(args, 1, "select PATH")
        selected = self._drive.select(self.resolve(args[0]).id)
        return f"selected {selected.name}" if selected else "selection cleared"

    def _cmd_open(self, args: list[str]) -> str:
        self._require_args(args, 1, "open PATH")
        file = self._resolve_file(args[0])
        preview = self._drive.open_preview(file.id)
        if preview is None:
            return f"no preview available for {file.name}"
        return f"{preview.kind.value} preview: {preview.url}"

    def _cmd_comment(self, args: list[str]) -> str:
        self._require_args(args, 2, "comment PATH TEXT...")
        file = self._resolve_file(args[0])
        self._drive.add_comment(file.id, " ".join(args[1:]))
        return f"commented on {file.name}"

    def _cmd_prop(self, args: list[str]) -> str:
        self._require_args(args, 2, "prop PATH TEXT...")
        file = self._resolve_file(args[0])
        self._drive.add_property(file.id, " ".join(args[1:]))
        return f"added property to {file.name}"

    def _cmd_sort(self, args: list[str]) -> str:
        self._require_args(args, 1, "sort name|size [asc|desc]")
        key = SortKey(args[0].lower())
        order = SortOrder(args[1].lower()) if len(args) > 1 else self._drive.sort.order
        sort = self._drive.set_sort(key, order)
        return f"sorting by {sort.key.value} {sort.order.value}"

    def _cmd_stats(self, args: list[str]) -> str:
        stats = self._drive.store.stats()
        return (
            f"folders: {stats.folders}\nfiles: {stats.files}\n"
            f"comments: {stats.comments}\nproperties: {stats.properties}\n"
            f"total size: {format_bytes(stats.total_bytes)}"
        )

    def _cmd_history(self, args: list[str]) -> str:
        return "\n".join(self.history())

    def _cmd_help(self, args: list[str]) -> str:
        return "commands: " + ", ".join(sorted(self._commands))
