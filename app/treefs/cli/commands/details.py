"""Entry inspection commands: info and acl."""

import json
from typing import Annotated

import typer

from treefs.cli.types import OutputFormat, fail, get_filesystem
from treefs.models import Acl
from treefs.utils.formatting import console, create_metadata_table, print_success


def info(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to describe.")],
    with_hash: Annotated[
        bool,
        typer.Option("--hash", help="Include the MD5 digest of a file."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show type, size, modification time and MIME type of an entry."""
    fs = get_filesystem(ctx)
    meta = fs.get_metadata(path)
    if meta is None:
        fail(f"No such file or directory: {path}")

    digest = fs.get_hash(path) if with_hash else None

    if output_format == OutputFormat.JSON:
        data = meta.to_dict()
        if with_hash:
            data["md5"] = digest
        console.print_json(json.dumps(data))
        return

    console.print(create_metadata_table(meta, digest))


def acl(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory.")],
    level: Annotated[
        str | None,
        typer.Argument(help="New level: default, private, read or write. Omit to show."),
    ] = None,
) -> None:
    """Show or change the access level of an entry.

    Examples:
        treefs acl docs/a.txt           # Show current level
        treefs acl docs/a.txt private   # Owner-only access
        treefs acl docs/a.txt default   # Inherit from parent directory
    """
    fs = get_filesystem(ctx)
    if not fs.has(path):
        fail(f"No such file or directory: {path}")

    if level is None:
        current = fs.get_acl(path)
        console.print(current.name.lower() if current is not None else "custom")
        return

    try:
        wanted = Acl[level.upper()]
    except KeyError:
        fail(f"Unknown access level: {level}")

    if not fs.set_acl(path, wanted):
        fail(f"Cannot set access level on {path}")
    print_success(f"Set {path} to {wanted.name.lower()}")
