"""Utility modules for treefs.

This module exports commonly used console helpers.
"""

from treefs.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
