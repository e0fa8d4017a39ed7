"""Translation between simplified access levels and POSIX permission bits.

Real POSIX permissions are richer than this; the four levels cover what
resource files typically need and what cloud stores commonly offer. Use
``os.chmod`` directly for anything finer grained.
"""

import logging
import os
import stat

from treefs.models import Acl

logger = logging.getLogger(__name__)

# (directory mode, file mode) per level
_ACL_MODES: dict[Acl, tuple[int, int]] = {
    Acl.WRITE: (0o777, 0o666),
    Acl.READ: (0o755, 0o644),
    Acl.PRIVATE: (0o700, 0o600),
}


def acl_to_mode(acl: Acl | int, is_dir: bool) -> int | None:
    """Map an access level to permission bits.

    Returns:
        Permission bits, or None for DEFAULT and unknown levels.
    """
    try:
        modes = _ACL_MODES[Acl(acl)]
    except (KeyError, ValueError):
        return None
    return modes[0] if is_dir else modes[1]


def mode_to_acl(mode: int) -> Acl | None:
    """Classify permission bits as an access level.

    Returns None when the owner itself lacks read and write access (plus
    execute for directories), since no level describes that state.
    """
    is_dir = stat.S_ISDIR(mode)
    if not (mode & stat.S_IRUSR and mode & stat.S_IWUSR):
        return None
    if is_dir and not mode & stat.S_IXUSR:
        return None
    if is_dir and not mode & stat.S_IXOTH:
        return Acl.PRIVATE
    readable = mode & stat.S_IROTH
    writable = mode & stat.S_IWOTH
    if readable and writable:
        return Acl.WRITE
    if readable:
        return Acl.READ
    return Acl.PRIVATE


def get_acl(path: str) -> Acl | None:
    """Get the access level of a file or directory.

    Returns:
        Acl, or None if permissions cannot be read or do not map to a level.
    """
    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None
    return mode_to_acl(mode)


def set_acl(path: str, acl: Acl | int) -> bool:
    """Apply an access level to a file or directory.

    DEFAULT (or any unknown level) copies the parent directory's level.

    Returns:
        True on success; False if the parent level cannot be determined
        or chmod fails.
    """
    is_dir = os.path.isdir(path)
    mode = acl_to_mode(acl, is_dir)
    if mode is None:
        parent = get_acl(os.path.dirname(os.path.abspath(path)))
        if parent is None:
            return False
        mode = acl_to_mode(parent, is_dir)
    if mode is None:
        return False
    try:
        os.chmod(path, mode)
    except OSError as e:
        logger.debug("Cannot chmod %s: %s", path, e)
        return False
    return True
