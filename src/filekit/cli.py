"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from filekit.config import ConflictCallback
    from filekit.context import AppContext

import typer
from rich.logging import RichHandler

from filekit import __version__
from filekit.config import never_overwrite
from filekit.console import ConsoleOutput
from filekit.context import create_context
from filekit.errors import FilekitError

app = typer.Typer(
    name="filekit",
    help="Copy, remove, list and stream files",
    no_args_is_help=True,
)

output = ConsoleOutput()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"filekit v{__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Route library debug logging to the terminal."""
    if value:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=output.console, show_path=False)],
        )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", callback=verbose_callback, help="Log every filesystem step"),
    ] = False,
) -> None:
    """Copy, remove, list and stream files."""
    pass


def _fail(error: FilekitError) -> typer.Exit:
    output.show_error(str(error))
    return typer.Exit(1)


def _conflict_callback(skip_existing: bool, interactive: bool) -> ConflictCallback | None:
    """Pick the overwrite decision from CLI flags; None means config default."""
    if interactive:
        return output.confirm_overwrite
    if skip_existing:
        return never_overwrite
    return None


# ============================================================================
# Copy / Remove
# ============================================================================


@app.command()
def cp(
    source: Annotated[Path, typer.Argument(help="File or directory to copy")],
    destination: Annotated[Path, typer.Argument(help="Target file or directory")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Copy directories recursively")] = False,
    skip_existing: Annotated[
        bool, typer.Option("--skip-existing", "-n", help="Never overwrite existing files")
    ] = False,
    interactive: Annotated[
        bool, typer.Option("--interactive", "-i", help="Ask before overwriting")
    ] = False,
    _context=None,
) -> None:
    """Copy files, or directory trees with -r."""
    ctx: AppContext = _context or create_context()
    on_conflict = _conflict_callback(skip_existing, interactive)

    try:
        if recursive:
            copied = ctx.files.cp_r_or_raise(source, destination, on_conflict)
            output.show_paths("Copied", copied)
        else:
            ctx.files.cp_or_raise(source, destination, on_conflict)
            output.show_success(f"Copied {source} to {destination}")
    except FilekitError as e:
        raise _fail(e) from e


@app.command()
def rm(
    path: Annotated[Path, typer.Argument(help="Path to remove")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Remove directories and their contents")
    ] = False,
    _context=None,
) -> None:
    """Remove a file, or a whole tree with -r."""
    ctx: AppContext = _context or create_context()

    try:
        if recursive:
            removed = ctx.files.rm_rf_or_raise(path)
            output.show_paths("Removed", removed)
        else:
            ctx.files.rm_or_raise(path)
            output.show_success(f"Removed {path}")
    except FilekitError as e:
        raise _fail(e) from e


# ============================================================================
# Inspection
# ============================================================================


@app.command()
def ls(
    path: Annotated[Path, typer.Argument(help="Directory to list")] = Path("."),
    _context=None,
) -> None:
    """List directory entries."""
    ctx: AppContext = _context or create_context()
    try:
        output.show_listing(ctx.files.ls_or_raise(path))
    except FilekitError as e:
        raise _fail(e) from e


@app.command()
def cat(
    path: Annotated[Path, typer.Argument(help="File to print")],
    binary: Annotated[bool, typer.Option("--binary", "-b", help="Pass bytes through undecoded")] = False,
    _context=None,
) -> None:
    """Stream a file to stdout line by line."""
    ctx: AppContext = _context or create_context()
    try:
        lines = ctx.files.biniterator_or_raise(path) if binary else ctx.files.iterator_or_raise(path)
        with lines:
            for line in lines:
                typer.echo(line, nl=False)
    except FilekitError as e:
        raise _fail(e) from e


@app.command()
def stat(
    path: Annotated[Path, typer.Argument(help="Path to inspect")],
    _context=None,
) -> None:
    """Show file information."""
    ctx: AppContext = _context or create_context()
    try:
        output.show_stat(path, ctx.files.stat_or_raise(path))
    except FilekitError as e:
        raise _fail(e) from e


# ============================================================================
# Creation
# ============================================================================


@app.command()
def touch(
    path: Annotated[Path, typer.Argument(help="File to touch")],
    _context=None,
) -> None:
    """Update file times, creating the file if needed."""
    ctx: AppContext = _context or create_context()
    try:
        ctx.files.touch_or_raise(path)
    except FilekitError as e:
        raise _fail(e) from e


@app.command()
def mkdir(
    path: Annotated[Path, typer.Argument(help="Directory to create")],
    parents: Annotated[bool, typer.Option("--parents", "-p", help="Create missing parents")] = False,
    _context=None,
) -> None:
    """Create a directory."""
    ctx: AppContext = _context or create_context()
    try:
        if parents:
            ctx.files.mkdir_p_or_raise(path)
        else:
            ctx.files.mkdir_or_raise(path)
        output.show_success(f"Created {path}")
    except FilekitError as e:
        raise _fail(e) from e


if __name__ == "__main__":
    app()
