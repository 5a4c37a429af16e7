"""CLI entry point for inode-util.

Invoked as::

    inode-util [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m inode_util.cli.main

Commands
--------
inode     Print the inode number of a path
tail      Follow a file across rotation, printing each line
version   Show version information
"""
from __future__ import annotations

import logging
import sys
import threading

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from inode_util.native.lookup import stat_inode
from inode_util.tailer.config import DEFAULT_BUFFER_SIZE, DEFAULT_DELAY_SECONDS
from inode_util.tailer.helper import create_tailer
from inode_util.tailer.listener import TailerListener
from inode_util.tailer.tailer import Tailer

console = Console()
err_console = Console(stderr=True)


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="inode-util")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level.",
)
def cli(log_level: str) -> None:
    """Inode lookup and rotation-aware file tailing"""
    logging.basicConfig(level=getattr(logging, log_level.upper()))


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from inode_util import __version__

    console.print(f"[bold]inode-util[/bold] v{__version__}")


# ------------------------------------------------------------------
# inode
# ------------------------------------------------------------------


@cli.command(name="inode")
@click.argument("path")
@click.option(
    "--no-follow",
    is_flag=True,
    default=False,
    help="Report the inode of a symbolic link itself instead of its target.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show a result table.")
def inode_command(path: str, no_follow: bool, verbose: bool) -> None:
    """Print the inode number of PATH.

    Exits with status 1 when PATH cannot be statted.
    """
    result = stat_inode(path, follow_symlinks=not no_follow)

    if not result.ok:
        err_console.print(f"[red]Error:[/red] {escape(result.path)}: {result.failure.value}")
        if verbose and result.message:
            err_console.print(f"  {escape(result.message)}")
        sys.exit(1)

    if not verbose:
        console.print(str(result.inode), highlight=False)
        return

    table = Table(title="Inode lookup", show_header=True)
    table.add_column("Path", style="cyan")
    table.add_column("Inode", justify="right")
    table.add_column("Follows links", justify="center")
    table.add_row(result.path, str(result.inode), "no" if no_follow else "yes")
    console.print(table)


# ------------------------------------------------------------------
# tail
# ------------------------------------------------------------------


class _ConsoleListener(TailerListener):
    """Prints each line; stops the tailer after ``max_lines`` if set."""

    def __init__(self, max_lines: int | None) -> None:
        self._max_lines = max_lines
        self._count = 0
        self._tailer: Tailer | None = None
        self.error: Exception | None = None

    def init(self, tailer: Tailer) -> None:
        self._tailer = tailer

    def file_rotated(self) -> None:
        err_console.print("[yellow]-- file rotated --[/yellow]")

    def handle(self, line: str, position: int, last_modified: float) -> None:
        if self._max_lines is not None and self._count >= self._max_lines:
            return
        console.print(line, markup=False, highlight=False, soft_wrap=True)
        self._count += 1
        if self._max_lines is not None and self._count >= self._max_lines and self._tailer:
            self._tailer.stop()

    def handle_error(self, exc: Exception) -> None:
        self.error = exc


@cli.command(name="tail")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--delay",
    type=float,
    default=DEFAULT_DELAY_SECONDS,
    show_default=True,
    help="Seconds between checks for new content.",
)
@click.option(
    "--position",
    type=int,
    default=0,
    show_default=True,
    help="Byte offset to start from.",
)
@click.option(
    "--buffer-size",
    type=int,
    default=DEFAULT_BUFFER_SIZE,
    show_default=True,
    help="Bytes read per call.",
)
@click.option(
    "--reopen",
    is_flag=True,
    default=False,
    help="Close and reopen the file between checks.",
)
@click.option(
    "--max-lines",
    type=int,
    default=None,
    help="Exit after printing this many lines.",
)
def tail_command(
    path: str,
    delay: float,
    position: int,
    buffer_size: int,
    reopen: bool,
    max_lines: int | None,
) -> None:
    """Follow PATH, printing new lines until interrupted."""
    from pydantic import ValidationError

    listener = _ConsoleListener(max_lines)
    try:
        tailer = create_tailer(
            path,
            listener,
            position=position,
            delay=delay,
            buffer_size=buffer_size,
            reopen=reopen,
        )
    except ValidationError as exc:
        err_console.print(f"[red]Error:[/red] invalid tail settings: {exc.error_count()} error(s)")
        for error in exc.errors():
            err_console.print(f"  {'.'.join(str(p) for p in error['loc'])}: {error['msg']}")
        sys.exit(2)

    if max_lines is not None and max_lines <= 0:
        return

    thread = threading.Thread(target=tailer.run, name="inode-util-tail", daemon=True)
    thread.start()
    try:
        while thread.is_alive():
            thread.join(0.5)
    except KeyboardInterrupt:
        tailer.stop()
        thread.join()

    if listener.error is not None:
        err_console.print(f"[red]Error:[/red] {escape(str(listener.error))}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
