"""Configuration commands.

Shows the effective settings and writes a starter config file.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from treefs.cli.types import OutputFormat, fail, get_config
from treefs.config import TreefsConfig, save_config
from treefs.core.xdg import get_config_path
from treefs.errors import ConfigError
from treefs.utils.formatting import console, print_success

app = typer.Typer(
    help="Show and initialize treefs configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    ctx: typer.Context,
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
    """Show the effective configuration (file values plus overrides)."""
    settings = get_config(ctx)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(settings.model_dump(mode="json")))
        return

    table = Table(show_header=False, border_style="border")
    table.add_column("Setting", style="bold_header")
    table.add_column("Value", style="text")
    for key, value in settings.model_dump(mode="json").items():
        table.add_row(key, str(value))
    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Root directory to store (defaults to the current one)."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    target: Path = ctx.find_root().obj.get("config_path") or get_config_path()
    if target.exists() and not force:
        fail(f"Config already exists: {target} (use --force to overwrite)")

    settings = TreefsConfig(root=root.resolve()) if root is not None else TreefsConfig()
    try:
        saved = save_config(settings, target)
    except ConfigError as e:
        fail(str(e))
    print_success(f"Config written to {saved}")
