"""Unconditional recursive deletion of directory trees."""

import logging
import os

from treefs.core import files
from treefs.core.walker import iter_dir

logger = logging.getLogger(__name__)


def remove_tree(directory: str) -> bool:
    """Delete a directory and everything below it.

    Files (and links) are unlinked, subdirectories removed recursively,
    and ``directory`` itself removed last. The first failure aborts; what
    was already deleted stays deleted. A link to a directory is unlinked
    without touching its target.

    Args:
        directory: Directory to delete. Missing directories succeed.

    Returns:
        True if the whole tree is gone.
    """
    if os.path.islink(directory.rstrip("/")):
        return files.unlink(directory.rstrip("/"))
    if not os.path.isdir(directory):
        return True
    try:
        for entry in iter_dir(directory):
            if entry.is_dir:
                if not remove_tree(entry.path):
                    return False
                continue
            try:
                os.unlink(entry.path)
            except OSError as e:
                logger.debug("Cannot unlink %s: %s", entry.path, e)
                return False
    except OSError as e:
        logger.debug("Cannot enumerate %s: %s", directory, e)
        return False

    try:
        os.rmdir(directory)
    except OSError as e:
        logger.debug("Cannot remove directory %s: %s", directory, e)
        return False
    return True


def remove_dir(directory: str, recursive: bool = False) -> bool:
    """Remove a directory.

    Args:
        directory: Directory to remove. Missing directories succeed.
        recursive: Delete contents too. Otherwise the directory must
            already be empty.

    Returns:
        True on success.
    """
    if recursive:
        return remove_tree(directory)
    return files.rmdir(directory)
