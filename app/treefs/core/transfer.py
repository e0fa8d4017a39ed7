"""Merge-copy and merge-move of directory trees.

A transfer merges the source tree into the destination: entries that
exist only in the destination are never deleted. Transfers are best
effort and not transactional; the first failing entry aborts the run and
everything transferred before it stays transferred.
"""

import logging
import os

from treefs.core import files
from treefs.core.cleaner import clean
from treefs.core.paths import normalize
from treefs.core.walker import iter_dir

logger = logging.getLogger(__name__)


def _rename(source: str, destination: str) -> bool:
    try:
        os.rename(source, destination)
    except OSError as e:
        logger.debug("Cannot rename %s to %s: %s", source, destination, e)
        return False
    return True


def _merge(source: str, destination: str, overwrite: bool, move: bool) -> bool:
    """Merge the children of ``source`` into ``destination``, recursively."""
    if not os.path.isdir(destination):
        try:
            os.mkdir(destination, mode=0o755)
        except OSError as e:
            logger.debug("Cannot create %s: %s", destination, e)
            return False

    try:
        for entry in iter_dir(source):
            target = f"{destination}/{entry.name}"
            if entry.is_dir:
                if move and not os.path.isdir(target):
                    ok = _rename(entry.path.rstrip("/"), target)
                else:
                    ok = _merge(entry.path.rstrip("/"), target, overwrite, move)
            elif not overwrite and os.path.isfile(target):
                logger.debug("Skipping existing file %s", target)
                ok = True
            elif move:
                ok = files.rename(entry.path, target)
            else:
                ok = files.copy(entry.path, target)

            if not ok:
                logger.debug("Transfer aborted at %s", entry.path)
                return False
    except OSError as e:
        logger.debug("Cannot enumerate %s: %s", source, e)
        return False
    return True


def transfer(source: str, destination: str, overwrite: bool = True, move: bool = False) -> bool:
    """Copy or move a directory tree into a possibly existing destination.

    When moving into a destination that does not exist yet, the whole
    tree is renamed in one step. Otherwise the trees are merged; during a
    move, subdirectories missing at the destination are renamed across
    instead of being copied entry by entry, and the emptied source tree is
    pruned afterwards.

    Args:
        source: Directory to transfer.
        destination: Directory to merge into.
        overwrite: Replace files that already exist at the destination.
            Otherwise such files are skipped and left in the source.
        move: Move instead of copy.

    Returns:
        True on success; False if ``source`` is not a directory or any
        entry fails.
    """
    source = normalize(source, "/").rstrip("/")
    if not os.path.isdir(source):
        return False
    destination = normalize(destination, "/").rstrip("/")
    # Compare resolved paths so relative, absolute and linked spellings agree
    real_source = os.path.realpath(source)
    real_destination = os.path.realpath(destination)
    if real_source == real_destination:
        return True
    if real_destination.startswith(real_source.rstrip("/") + "/"):
        logger.warning("Cannot transfer %s into its own subtree %s", source, destination)
        return False

    if move and not os.path.isdir(destination):
        logger.debug("Renaming %s to %s", source, destination)
        return _rename(source, destination)

    if not _merge(source, destination, overwrite, move):
        return False
    if move:
        clean(source, include_self=True)
    return True


def copy_tree(source: str, destination: str, overwrite: bool = True) -> bool:
    """Merge-copy ``source`` into ``destination``. See :func:`transfer`."""
    return transfer(source, destination, overwrite=overwrite, move=False)


def move_tree(source: str, destination: str, overwrite: bool = True) -> bool:
    """Merge-move ``source`` into ``destination``. See :func:`transfer`."""
    return transfer(source, destination, overwrite=overwrite, move=True)
