"""Copy, move, clean, remove and mkdir commands.

Directories are merged into existing destinations; files only present at
the destination are never deleted.
"""

from typing import Annotated

import typer

from treefs.cli.types import fail, get_filesystem
from treefs.models import FileType
from treefs.storage import Filesystem
from treefs.utils.formatting import print_success, print_warning


def _require(fs: Filesystem, path: str) -> FileType:
    """Get the type of an existing entry or exit with an error."""
    file_type = fs.get_filetype(path)
    if file_type is None:
        fail(f"No such file or directory: {path}")
    return file_type


def cp(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to copy.")],
    destination: Annotated[str, typer.Argument(help="Target path.")],
    no_overwrite: Annotated[
        bool,
        typer.Option("--no-overwrite", help="Keep files that already exist at the target."),
    ] = False,
) -> None:
    """Copy a file, or merge-copy a directory into the target."""
    fs = get_filesystem(ctx)
    if _require(fs, source) is FileType.DIR:
        ok = fs.cpdir(source, destination, overwrite=not no_overwrite)
    else:
        ok = fs.copy(source, destination, overwrite=not no_overwrite)
    if not ok:
        fail(f"Copy failed: {source} -> {destination}")
    print_success(f"Copied {source} -> {destination}")


def mv(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to move.")],
    destination: Annotated[str, typer.Argument(help="Target path.")],
    no_overwrite: Annotated[
        bool,
        typer.Option(
            "--no-overwrite",
            help="Keep files that already exist at the target (they stay in the source).",
        ),
    ] = False,
) -> None:
    """Move a file, or merge-move a directory into the target."""
    fs = get_filesystem(ctx)
    if _require(fs, source) is FileType.DIR:
        ok = fs.mvdir(source, destination, overwrite=not no_overwrite)
    else:
        ok = fs.rename(source, destination, overwrite=not no_overwrite)
    if not ok:
        fail(f"Move failed: {source} -> {destination}")
    print_success(f"Moved {source} -> {destination}")
    if fs.has(source):
        print_warning(f"Files that already existed at {destination} were kept in {source}")


def clean(
    ctx: typer.Context,
    directory: Annotated[str, typer.Argument(help="Directory to clean.")],
    include_self: Annotated[
        bool,
        typer.Option("--include-self", help="Also remove the directory if it ends up empty."),
    ] = False,
) -> None:
    """Remove empty subdirectories, deepest first."""
    if not get_filesystem(ctx).cleandir(directory, include_self=include_self):
        fail(f"Clean failed: {directory}")
    print_success(f"Cleaned {directory}")


def rm(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to remove.")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-R", help="Remove directories and their contents."),
    ] = False,
) -> None:
    """Remove a file or directory. Missing paths are not an error."""
    fs = get_filesystem(ctx)
    if fs.get_filetype(path) is FileType.DIR:
        ok = fs.rmdir(path, recursive=recursive)
    else:
        ok = fs.unlink(path)
    if not ok:
        hint = "" if recursive else " (directory not empty? use --recursive)"
        fail(f"Remove failed: {path}{hint}")
    print_success(f"Removed {path}")


def mkdir(
    ctx: typer.Context,
    directory: Annotated[str, typer.Argument(help="Directory to create.")],
    parents: Annotated[
        bool,
        typer.Option("--parents/--no-parents", "-p", help="Create missing parent directories."),
    ] = True,
) -> None:
    """Create a directory."""
    if not get_filesystem(ctx).mkdir(directory, recursive=parents):
        fail(f"Cannot create directory: {directory}")
    print_success(f"Created {directory}")
