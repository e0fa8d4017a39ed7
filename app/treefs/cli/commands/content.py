"""File content commands: cat, put, append, prepend."""

from typing import Annotated

import typer

from treefs.cli.types import fail, get_config, get_filesystem
from treefs.utils.formatting import print_success

LockOption = Annotated[
    bool | None,
    typer.Option(
        "--lock/--no-lock",
        help="Hold an advisory lock during I/O (defaults to the config setting).",
    ),
]


def _use_lock(ctx: typer.Context, lock: bool | None) -> bool:
    return get_config(ctx).lock if lock is None else lock


def cat(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to print.")],
    lock: LockOption = None,
) -> None:
    """Print a file's content to stdout."""
    data = get_filesystem(ctx).get_content(path, lock=_use_lock(ctx, lock))
    if data is None:
        fail(f"Cannot read file: {path}")
    typer.echo(data, nl=False)


def put(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to write.")],
    text: Annotated[str, typer.Argument(help="Content to write.")],
    lock: LockOption = None,
) -> None:
    """Replace a file's content."""
    written = get_filesystem(ctx).put(path, text, lock=_use_lock(ctx, lock))
    if written is None:
        fail(f"Cannot write file: {path}")
    print_success(f"Wrote {written} bytes to {path}")


def append(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to extend.")],
    text: Annotated[str, typer.Argument(help="Content to append.")],
    lock: LockOption = None,
) -> None:
    """Append content to the end of a file."""
    written = get_filesystem(ctx).append(path, text, lock=_use_lock(ctx, lock))
    if written is None:
        fail(f"Cannot append to file: {path}")
    print_success(f"Appended {written} bytes to {path}")


def prepend(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to extend.")],
    text: Annotated[str, typer.Argument(help="Content to insert at the start.")],
    lock: LockOption = None,
) -> None:
    """Insert content at the start of a file."""
    written = get_filesystem(ctx).prepend(path, text, lock=_use_lock(ctx, lock))
    if written is None:
        fail(f"Cannot prepend to file: {path}")
    print_success(f"Prepended {written} bytes to {path}")
