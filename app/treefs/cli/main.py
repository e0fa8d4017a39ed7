"""Main CLI application entry point.

Defines the Typer application, global options, and command registration.
"""

from pathlib import Path
from typing import Annotated

import typer

from treefs import __version__
from treefs.cli.commands import config, content, details, listing, tree
from treefs.config import load_config_or_default
from treefs.errors import ConfigError
from treefs.storage import Filesystem
from treefs.utils.formatting import print_error, setup_logging

# Create main Typer app
app = typer.Typer(
    name="treefs",
    help="Local filesystem operations with merge-copy, pruning and paginated listing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"treefs version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Root directory (overrides the config file).",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to use instead of ~/.config/treefs/config.toml.",
        ),
    ] = None,
) -> None:
    """treefs - local filesystem operations.

    Paths are virtual: they are resolved against the configured root
    directory, and directories in listings end with "/".
    """
    setup_logging(verbose)

    try:
        settings = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if root is not None:
        settings = settings.model_copy(update={"root": root})

    # Store shared state in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = settings
    ctx.obj["config_path"] = config_path
    ctx.obj["fs"] = Filesystem.from_config(settings)


# Register commands
app.command("ls")(listing.ls)
app.command("cp")(tree.cp)
app.command("mv")(tree.mv)
app.command("clean")(tree.clean)
app.command("rm")(tree.rm)
app.command("mkdir")(tree.mkdir)
app.command("cat")(content.cat)
app.command("put")(content.put)
app.command("append")(content.append)
app.command("prepend")(content.prepend)
app.command("info")(details.info)
app.command("acl")(details.acl)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
