"""Main CLI entry point for merkledag."""

import logging
import sys
from pathlib import Path
from typing import Iterator, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from merkledag.constants import (
    EXIT_DATA_ERROR,
    EXIT_USER_ERROR,
    HASH_LENGTH,
    OBJECTS_DIR,
    STORE_DIR,
    STORE_ENV_VAR,
)
from merkledag.core import DagBuilder, NodeType, PathResolver
from merkledag.errors import MerkleDagError, SerializationError
from merkledag.storage import FileBlobStore

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="merkledag",
    help="Content-addressed Merkle DAG storage for files and directories",
    add_completion=False,
)

STORE_OPTION = typer.Option(
    Path(STORE_DIR),
    "--store",
    "-s",
    envvar=STORE_ENV_VAR,
    help="Blob store directory",
)


class PathFile:
    """File node backed by a path on disk."""

    type = NodeType.FILE

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class PathDirectory:
    """Directory node backed by a path on disk.

    Children are listed in name order; symlinks and special files are
    skipped, as is the store directory itself.
    """

    type = NodeType.DIRECTORY

    def __init__(self, path: Path, exclude: Optional[Path] = None) -> None:
        self.path = path
        self.exclude = exclude

    def children(self) -> Iterator[Tuple[str, object]]:
        for entry in sorted(self.path.iterdir(), key=lambda p: p.name):
            if entry.is_symlink():
                continue
            if self.exclude is not None and entry.resolve() == self.exclude:
                continue
            if entry.is_dir():
                yield entry.name, PathDirectory(entry, self.exclude)
            elif entry.is_file():
                yield entry.name, PathFile(entry)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _open_store(store_dir: Path) -> FileBlobStore:
    if not (store_dir / OBJECTS_DIR).exists():
        err_console.print(
            "[bold red]Error:[/bold red] Not a merkledag store",
            style="red",
        )
        err_console.print(
            f"  No {OBJECTS_DIR}/ directory found in {store_dir}",
            style="dim",
        )
        err_console.print(
            "\nRun [bold]merkledag init[/bold] to create a store",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)
    return FileBlobStore(store_dir)


def _parse_digest(value: str) -> bytes:
    if len(value) != HASH_LENGTH:
        err_console.print(
            f"[bold red]Error:[/bold red] Digest must be {HASH_LENGTH} hex characters, got {len(value)}",
            style="red",
        )
        raise typer.Exit(EXIT_USER_ERROR)
    try:
        return bytes.fromhex(value)
    except ValueError:
        err_console.print(
            f"[bold red]Error:[/bold red] Digest is not hexadecimal: {value}",
            style="red",
        )
        raise typer.Exit(EXIT_USER_ERROR)


@app.command()
def version() -> None:
    """Show merkledag version."""
    from merkledag import __version__
    typer.echo(f"merkledag version {__version__}")


@app.command()
def init(
    store: Path = STORE_OPTION,
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Create a blob store directory."""
    try:
        blob_store = FileBlobStore.init(store)
    except OSError as e:
        err_console.print(
            f"[bold red]Error:[/bold red] Failed to create store: {e}",
            style="red",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    if not quiet:
        console.print(
            Panel(
                f"[bold green]✓[/bold green] Initialized merkledag store\n\n"
                f"[dim]Objects:[/dim] {blob_store.objects_dir}\n\n"
                f"[bold]Next:[/bold] [cyan]merkledag add <path>[/cyan]",
                border_style="green",
                title="merkledag",
            )
        )


@app.command()
def add(
    path: Path = typer.Argument(..., help="File or directory to add"),
    store: Path = STORE_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every stored object"),
) -> None:
    """Add a file or directory and print its root digest."""
    _setup_logging(verbose)
    blob_store = _open_store(store)

    if path.is_dir():
        node = PathDirectory(path, exclude=store.resolve())
    elif path.is_file():
        node = PathFile(path)
    else:
        err_console.print(
            f"[bold red]Error:[/bold red] Path not found: {path}",
            style="red",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    try:
        digest = DagBuilder(blob_store).add(node)
    except (MerkleDagError, OSError) as e:
        err_console.print(
            f"[bold red]Error:[/bold red] {e}",
            style="red",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    typer.echo(digest.hex())


@app.command()
def cat(
    root: str = typer.Argument(..., help="Root tree digest (hex)"),
    path: str = typer.Argument(..., help="Path below the root, '/'-separated"),
    store: Path = STORE_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Write the stored bytes at PATH under ROOT to stdout."""
    _setup_logging(verbose)
    blob_store = _open_store(store)
    root_digest = _parse_digest(root)

    try:
        content = PathResolver(blob_store).resolve_path(root_digest, path)
    except SerializationError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}", style="red")
        raise typer.Exit(EXIT_DATA_ERROR)
    except MerkleDagError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}", style="red")
        raise typer.Exit(EXIT_USER_ERROR)

    if content is None:
        err_console.print(
            f"[bold yellow]Not found:[/bold yellow] {path}",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    sys.stdout.buffer.write(content)
    sys.stdout.buffer.flush()


@app.command("ls")
def list_links(
    root: str = typer.Argument(..., help="Tree digest (hex)"),
    store: Path = STORE_OPTION,
) -> None:
    """List the links of a stored tree."""
    blob_store = _open_store(store)
    digest = _parse_digest(root)

    try:
        links = PathResolver(blob_store).links(digest)
    except SerializationError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}", style="red")
        raise typer.Exit(EXIT_DATA_ERROR)
    except MerkleDagError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}", style="red")
        raise typer.Exit(EXIT_USER_ERROR)

    table = Table(title=f"Tree {root[:12]}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Hash", style="dim", overflow="fold")
    table.add_column("Size", justify="right")
    for link in links:
        table.add_row(link.name or "-", link.hash.hex(), str(link.size))
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
