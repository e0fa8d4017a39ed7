"""Bottom-up pruning of empty subdirectories."""

import logging
import os
from enum import Enum

from treefs.core.paths import normalize
from treefs.core.walker import iter_dir

logger = logging.getLogger(__name__)


class PruneResult(Enum):
    """Outcome of pruning one directory.

    Attributes:
        FAILED: A deletion or enumeration failed; abort.
        EMPTY_AND_REMOVED: The directory ended up empty (and was removed,
            unless it is the root of the clean).
        NON_EMPTY: Pruning succeeded but entries remain.
    """

    FAILED = "failed"
    EMPTY_AND_REMOVED = "empty_and_removed"
    NON_EMPTY = "non_empty"


def _prune(directory: str, top: bool = False) -> PruneResult:
    """Prune empty subdirectories of ``directory``, children first.

    Args:
        directory: Directory to prune.
        top: True for the root of the clean, which is never removed here.
    """
    remaining = 0
    try:
        for entry in iter_dir(directory):
            remaining += 1
            if not entry.is_dir:
                continue
            result = _prune(entry.path)
            if result is PruneResult.FAILED:
                return PruneResult.FAILED
            if result is PruneResult.EMPTY_AND_REMOVED:
                remaining -= 1
    except OSError as e:
        logger.debug("Cannot enumerate %s: %s", directory, e)
        return PruneResult.FAILED

    if remaining:
        return PruneResult.NON_EMPTY
    if not top:
        try:
            os.rmdir(directory)
        except OSError as e:
            logger.debug("Cannot remove empty directory %s: %s", directory, e)
            return PruneResult.FAILED
        logger.debug("Removed empty directory %s", directory)
    return PruneResult.EMPTY_AND_REMOVED


def clean(directory: str, include_self: bool = False) -> bool:
    """Remove every empty subdirectory below ``directory``.

    Subdirectories are cleaned before their parents, so a directory that
    only contained empty directories is removed too. Files and non-empty
    directories are never touched.

    Args:
        directory: Directory to clean. Missing directories succeed.
        include_self: Also remove ``directory`` if it ends up empty.

    Returns:
        True on success; False if any deletion failed partway.
    """
    if not os.path.isdir(directory):
        return True
    result = _prune(normalize(directory, "/"), top=True)
    if result is PruneResult.FAILED:
        return False
    if include_self and result is PruneResult.EMPTY_AND_REMOVED:
        try:
            os.rmdir(directory)
        except OSError as e:
            logger.debug("Cannot remove %s: %s", directory, e)
            return False
    return True
