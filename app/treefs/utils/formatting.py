"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from treefs.core.theme import get_theme
from treefs.models import ListingPage, Metadata


def _detect_color_system() -> str | None:
    """Use truecolor for interactive terminals, otherwise let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_time=True, show_path=False)],
        force=True,
    )


def create_listing_table(page: ListingPage, title: str = "Listing") -> Table:
    """Build a table for one listing page.

    Directories are styled differently from files; a trailing caption
    tells whether more entries remain.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        caption="more entries available" if page.truncated else None,
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Type", style="muted", width=5)
    for entry in page.contents:
        if entry.endswith("/"):
            table.add_row(f"[entry.dir]{escape(entry)}[/]", "dir")
        else:
            table.add_row(f"[entry.file]{escape(entry)}[/]", "file")
    return table


def create_metadata_table(meta: Metadata, digest: str | None = None) -> Table:
    """Build a two-column key/value table for one entry's metadata."""
    table = Table(show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value", style="text")
    table.add_row("Path", meta.path)
    table.add_row("Type", meta.type.value)
    table.add_row("Size", str(meta.size))
    table.add_row("Modified", str(meta.last_modified))
    table.add_row("MIME type", meta.mime_type or "-")
    if digest is not None:
        table.add_row("MD5", digest)
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
