"""Path string normalization.

Collapses ``.``, ``..`` and repeated separators into a canonical segment
sequence without touching the filesystem, and provides ``pathinfo``-style
helpers for slash-separated strings.
"""

import os
import re

_REPEATED_SLASHES = re.compile(r"/+")


def normalize(path: str, separator: str | None = None) -> str:
    """Normalize a path string.

    Backslashes are treated as separators on backslash-native platforms.
    A ``..`` that has nothing left to consume is kept as a leading segment,
    so relative paths may still escape their root (``../x`` stays ``../x``).
    A leading separator is preserved as an empty first segment.

    Args:
        path: Path string to normalize. May be empty.
        separator: Separator to join with. Defaults to ``os.sep``.

    Returns:
        Normalized path string. Empty input yields an empty string.

    Example:
        >>> normalize("a/./b/../c", "/")
        'a/c'
    """
    if os.sep == "\\":
        path = path.replace("\\", "/")
    path = _REPEATED_SLASHES.sub("/", path)

    stack: list[str] = []
    for segment in path.split("/"):
        if segment == ".":
            continue
        if segment == "..":
            if not stack or stack[-1] == "..":
                stack.append(segment)
            else:
                stack.pop()
            continue
        stack.append(segment)

    return (separator or os.sep).join(stack)


def dirname(path: str) -> str:
    """Return the directory portion of a slash-separated path."""
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/" if path.startswith("/") else "."
    head, sep, _ = trimmed.rpartition("/")
    if not sep:
        return "."
    return head or "/"


def basename(path: str) -> str:
    """Return the last segment of a path, including its extension."""
    return path.rstrip("/").rpartition("/")[2]


def filename(path: str) -> str:
    """Return the last segment of a path without its extension."""
    name = basename(path)
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def extension(path: str) -> str:
    """Return the extension of the last segment, without the dot."""
    name = basename(path)
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""
