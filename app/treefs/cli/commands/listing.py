"""Directory listing command.

Lists one page of a directory, or every page with --all, following the
marker of each page until the listing is no longer truncated.
"""

import json
from typing import Annotated

import typer

from treefs.cli.types import OutputFormat, fail, get_config, get_filesystem
from treefs.models import FileType, ListingPage
from treefs.utils.formatting import console, create_listing_table, print_info


def ls(
    ctx: typer.Context,
    directory: Annotated[
        str,
        typer.Argument(help="Directory to list (virtual path)."),
    ] = "",
    expand: Annotated[
        bool,
        typer.Option("--expand", "-e", help="Include subdirectory contents."),
    ] = False,
    marker: Annotated[
        str | None,
        typer.Option("--marker", "-m", help="Resume after this entry."),
    ] = None,
    max_items: Annotated[
        int | None,
        typer.Option("--max", "-n", help="Entries per page (1-1000)."),
    ] = None,
    all_pages: Annotated[
        bool,
        typer.Option("--all", "-a", help="Fetch every page."),
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
    """List a directory, one page at a time.

    Examples:
        treefs ls docs              # First page of docs/
        treefs ls docs -e -n 50     # Recursive, 50 entries per page
        treefs ls docs -m docs/b/   # Continue after docs/b/
        treefs ls docs -e --all     # Everything, page by page
    """
    fs = get_filesystem(ctx)
    if fs.get_filetype(directory) is not FileType.DIR:
        fail(f"Not a directory: {directory or '.'}")

    page_size = max_items if max_items is not None else get_config(ctx).page_size
    page = fs.lists(directory, expand=expand, marker=marker, max_items=page_size)

    if all_pages:
        contents = list(page.contents)
        while page.truncated and page.last is not None:
            page = fs.lists(directory, expand=expand, marker=page.last, max_items=page_size)
            contents.extend(page.contents)
        page = ListingPage(truncated=False, contents=contents)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(page.to_dict()))
        return

    if not page.contents:
        print_info("No entries.")
        return

    console.print(create_listing_table(page, title=directory or "."))
    if page.truncated and not ctx.find_root().obj.get("quiet"):
        console.print(f"[dim]Next page: treefs ls {directory} --marker {page.last}[/dim]")
