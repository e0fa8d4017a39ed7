"""Single-level directory enumeration with early-exit decisions.

Every recursive tree operation in treefs is built on ``iter_dir``, which
lists exactly one directory level. Recursion is the caller's job.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from enum import Enum

from treefs.core.paths import normalize
from treefs.models import DirEntry

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Outcome of a traversal filter for one entry.

    Attributes:
        KEEP: Include the entry and continue.
        SKIP: Exclude the entry and continue.
        STOP: Halt enumeration; the entry is not included.
    """

    KEEP = "keep"
    SKIP = "skip"
    STOP = "stop"


def dir_prefix(directory: str) -> str:
    """Normalize a directory path and give it exactly one trailing "/".

    The current directory normalizes to "" so that children come out as
    bare names.
    """
    path = normalize(directory, "/")
    if not path.strip("/"):
        return "/" if path.startswith("/") else ""
    return path.rstrip("/") + "/"


def iter_dir(directory: str) -> Iterator[DirEntry]:
    """Lazily yield the immediate children of a directory.

    Children come in whatever order the OS returns them. Directories get a
    trailing "/". Symbolic links are reported as plain entries even when
    they point at a directory, so no caller ever descends through one.

    Args:
        directory: Directory to enumerate.

    Yields:
        DirEntry for each child.

    Raises:
        OSError: If the directory cannot be opened.
    """
    prefix = dir_prefix(directory)
    with os.scandir(prefix or ".") as entries:
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            path = prefix + entry.name
            yield DirEntry(path=path + "/" if is_dir else path, is_dir=is_dir)


def select(
    entries: Iterable[DirEntry],
    decide: Callable[[DirEntry], Decision] | None = None,
) -> Iterator[DirEntry]:
    """Apply a KEEP/SKIP/STOP filter to a stream of entries.

    Enumeration ends at the first STOP, so entries after it are never
    pulled from ``entries``.

    Args:
        entries: Entries in traversal order.
        decide: Filter returning KEEP, SKIP or STOP per entry. Keeps
            everything when omitted.

    Yields:
        Kept entries in traversal order.
    """
    for entry in entries:
        decision = decide(entry) if decide else Decision.KEEP
        if decision is Decision.STOP:
            return
        if decision is Decision.KEEP:
            yield entry


def walk(
    directory: str,
    decide: Callable[[DirEntry], Decision] | None = None,
) -> list[DirEntry] | None:
    """List one directory level, filtered by ``decide``.

    This is the eager form of ``select(iter_dir(directory), decide)``.

    Args:
        directory: Directory to enumerate.
        decide: Filter returning KEEP, SKIP or STOP per entry. Keeps
            everything when omitted.

    Returns:
        Kept entries in enumeration order, or None if the directory
        cannot be opened.
    """
    try:
        return list(select(iter_dir(directory), decide))
    except OSError as e:
        logger.debug("Cannot enumerate %s: %s", directory, e)
        return None


def iter_tree(directory: str, expand: bool = False) -> Iterator[DirEntry]:
    """Yield entries in pre-order depth-first order.

    A directory entry is yielded before its children. Children are only
    visited when ``expand`` is set. Subdirectories that cannot be opened
    contribute no children.

    Args:
        directory: Root directory (not itself yielded).
        expand: Whether to descend into subdirectories.

    Yields:
        DirEntry for each visited entry.

    Raises:
        OSError: If the root directory cannot be opened.
    """
    for entry in iter_dir(directory):
        yield entry
        if expand and entry.is_dir:
            try:
                yield from iter_tree(entry.path, expand)
            except OSError as e:
                logger.warning("Cannot enumerate %s: %s", entry.path, e)
