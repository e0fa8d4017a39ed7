"""CLI commands for treefs.

This package contains all subcommand implementations.
"""

from treefs.cli.commands import config, content, details, listing, tree

__all__ = ["config", "content", "details", "listing", "tree"]
