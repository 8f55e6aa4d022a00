"""
Command-Line Interface

CLI commands for exploring an in-memory drive. Nothing is persisted: each
invocation starts from a fresh drive (with the demo content unless
seeding is disabled).

Commands:
    memdrive demo   - List the root folder of a fresh drive
    memdrive tree   - Show the whole tree
    memdrive shell  - Interactive navigation shell

Usage:
    # Listing sorted by size, largest first
    memdrive demo --sort size --order desc

    # Start from an empty drive with a custom root name
    MEMDRIVE_SEED_DEMO=false memdrive shell --config ./memdrive.toml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from memdrive.api.drive import Drive
from memdrive.api.shell import DriveShell
from memdrive.config.settings import DriveConfig
from memdrive.types.inputs import SortKey, SortOrder
from memdrive.types.nodes import Folder
from memdrive.utils.media import file_category, format_bytes, format_date
from memdrive.view.projection import list_children

__all__ = ["main", "app"]

app = typer.Typer(
    name="memdrive",
    help="In-memory drive: folders, files, comments and properties",
    no_args_is_help=True,
)
console = Console()

_EXIT_COMMANDS = {"exit", "quit"}


def _build_drive(config_path: Optional[Path]) -> Drive:
    load_dotenv()
    config = DriveConfig.from_file(config_path) if config_path else DriveConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return Drive(config=config)


def _config_option() -> Any:
    return typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    )


@app.command()
def demo(
    sort: Optional[SortKey] = typer.Option(
        None,
        "--sort", "-s",
        help="Sort files by name or size",
    ),
    order: Optional[SortOrder] = typer.Option(
        None,
        "--order", "-o",
        help="Sort direction",
    ),
    config: Optional[Path] = _config_option(),
) -> None:
    """List the root folder of a fresh drive."""
    drive = _build_drive(config)
    drive.set_sort(sort or drive.sort.key, order or drive.sort.order)

    table = Table(title=f"{drive.current_folder.name} (sorted by {drive.sort.key.value} {drive.sort.order.value})")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Created", style="dim")

    for item in drive.items():
        if isinstance(item, Folder):
            table.add_row(
                f"{item.name}/",
                "folder",
                f"{drive.store.item_count(item.id)} items",
                format_date(item.created_at),
            )
        else:
            table.add_row(
                item.name,
                file_category(item.type).value,
                format_bytes(item.size),
                format_date(item.created_at),
            )

    console.print(table)


@app.command()
def tree(
    sort: Optional[SortKey] = typer.Option(
        None,
        "--sort", "-s",
        help="Sort files by name or size",
    ),
    order: Optional[SortOrder] = typer.Option(
        None,
        "--order", "-o",
        help="Sort direction",
    ),
    config: Optional[Path] = _config_option(),
) -> None:
    """Show the whole tree of a fresh drive."""
    drive = _build_drive(config)
    drive.set_sort(sort or drive.sort.key, order or drive.sort.order)

    def _add(branch: Tree, folder_id: str) -> None:
        for item in list_children(drive.store, folder_id, drive.sort.key, drive.sort.order):
            if isinstance(item, Folder):
                _add(branch.add(f"[bold blue]{item.name}/[/]"), item.id)
            else:
                branch.add(f"{item.name} [dim]({format_bytes(item.size)})[/]")

    root = drive.store.root
    rich_tree = Tree(f"[bold]{root.name}/[/]")
    _add(rich_tree, root.id)
    console.print(rich_tree)

    stats = drive.store.stats()
    console.print(
        f"\n[dim]{stats.folders} folders, {stats.files} files, "
        f"{format_bytes(stats.total_bytes)}[/]"
    )


@app.command()
def shell(
    config: Optional[Path] = _config_option(),
) -> None:
    """Interactive navigation shell."""
    drive_shell = DriveShell(_build_drive(config))
    console.print(Panel(
        "Type [bold]help[/] for commands, [bold]exit[/] to leave.\n"
        "Changes live in memory only and are lost on exit.",
        title="memdrive shell",
    ))

    while True:
        try:
            line = console.input(f"[cyan]{drive_shell.pwd()}[/] $ ")
        except EOFError:
            break
        command = line.strip()
        if not command:
            continue
        if command.lower() in _EXIT_COMMANDS:
            break

        output = drive_shell.execute(command)
        if output.startswith("error:"):
            console.print(output, style="red", markup=False)
        else:
            console.print(output, markup=False)


def main() -> None:
    """Entry point for the CLI."""
    app()
