"""Terminal output for the filekit CLI."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from filekit.types import FileStat


class ConsoleOutput:
    """Formats CLI results with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm_overwrite(self, source: Path, destination: Path) -> bool:
        """Ask whether ``destination`` may be replaced by ``source``.

        Returns:
            True to overwrite.
        """
        return Confirm.ask(
            f"Overwrite [cyan]{destination}[/cyan] with [cyan]{source}[/cyan]?",
            default=False,
            console=self.console,
        )

    def show_paths(self, title: str, paths: list[Path]) -> None:
        """Display paths touched by a recursive operation.

        Args:
            title: Verb shown in the summary line, e.g. "Copied".
            paths: Paths in processing order.
        """
        if not paths:
            self.console.print(f"[yellow]{title} nothing[/yellow]")
            return
        for path in paths:
            self.console.print(f"  {path}", highlight=False)
        noun = "entry" if len(paths) == 1 else "entries"
        self.show_success(f"{title} {len(paths)} {noun}")

    def show_listing(self, names: list[str]) -> None:
        for name in sorted(names):
            self.console.print(name, highlight=False, markup=False)

    def show_stat(self, path: Path, info: FileStat) -> None:
        """Display file information as a table."""
        table = Table(title=str(path))
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Type", info.type.value)
        table.add_row("Size", str(info.size))
        table.add_row("Mode", oct(info.permissions))
        table.add_row("Access", info.access.value)
        table.add_row("Links", str(info.links))
        table.add_row("Owner", f"{info.uid}:{info.gid}")
        table.add_row("Inode", str(info.inode))
        for label, value in (("Accessed", info.atime), ("Modified", info.mtime), ("Changed", info.ctime)):
            table.add_row(label, str(value) if isinstance(value, int) else value.isoformat())

        self.console.print(table)

    def show_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")
