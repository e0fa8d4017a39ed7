"""Shared types and helpers for CLI commands.

This module provides the output-format enum and the accessors commands
use to reach the facade and configuration stored on the Typer context.
"""

from enum import Enum
from typing import NoReturn

import typer

from treefs.config import TreefsConfig
from treefs.storage import Filesystem
from treefs.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> TreefsConfig:
    """Get the effective configuration loaded by the main callback."""
    return ctx.find_root().obj["config"]


def get_filesystem(ctx: typer.Context) -> Filesystem:
    """Get the facade built by the main callback."""
    return ctx.find_root().obj["fs"]


def fail(message: str) -> NoReturn:
    """Print an error and exit with code 1.

    Raises:
        typer.Exit: Always.
    """
    print_error(message)
    raise typer.Exit(code=1)
