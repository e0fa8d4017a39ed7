"""Single-file primitives for the local filesystem.

Every function here reports failure through its return value (False or
None) rather than raising; OSError is caught where it happens and logged.
Locking uses advisory ``flock`` held only for one file's I/O.
"""

import contextlib
import fcntl
import hashlib
import logging
import mimetypes
import os
import shutil
import stat
from collections.abc import Iterator
from typing import BinaryIO

from treefs.core.paths import normalize
from treefs.models import FileType, Metadata

logger = logging.getLogger(__name__)

# Bytes per read when streaming data between handles
CHUNK_SIZE = 8192

# Suffix of the scratch file used by prepend()
PREPEND_SUFFIX = "._tmp_"

Data = bytes | str | BinaryIO

_MODE_TYPES: tuple[tuple[int, FileType], ...] = (
    (stat.S_IFREG, FileType.FILE),
    (stat.S_IFDIR, FileType.DIR),
    (stat.S_IFLNK, FileType.LINK),
    (stat.S_IFIFO, FileType.FIFO),
    (stat.S_IFCHR, FileType.CHAR),
    (stat.S_IFBLK, FileType.BLOCK),
    (stat.S_IFSOCK, FileType.SOCKET),
)


@contextlib.contextmanager
def _locked(handle: BinaryIO, operation: int, enabled: bool) -> Iterator[None]:
    """Hold an advisory lock on ``handle`` for the duration of the block."""
    if not enabled:
        yield
        return
    fcntl.flock(handle.fileno(), operation)
    try:
        yield
    finally:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _write_data(handle: BinaryIO, data: Data) -> int:
    """Write bytes, text, or a binary stream to ``handle``.

    Returns:
        Number of bytes written.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(data, bytes | bytearray):
        return handle.write(data)
    written = 0
    while chunk := data.read(CHUNK_SIZE):
        written += handle.write(chunk)
    return written


def has(path: str) -> bool:
    """Check whether a file or directory exists (dangling links count)."""
    return os.path.lexists(path)


def filetype(path: str) -> FileType | None:
    """Get the entry type without following symbolic links.

    Returns:
        FileType, or None if the path does not exist.
    """
    try:
        mode = os.lstat(path).st_mode
    except OSError:
        return None
    kind = stat.S_IFMT(mode)
    for flag, file_type in _MODE_TYPES:
        if kind == flag:
            return file_type
    return FileType.UNKNOWN


def last_modified(path: str) -> int | None:
    """Get the modification time as epoch seconds, or None."""
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return None


def size(path: str) -> int | None:
    """Get the size in bytes, or None."""
    try:
        return os.stat(path).st_size
    except OSError:
        return None


def mime_type(path: str) -> str:
    """Guess the MIME type from the file name.

    Falls back to ``application/octet-stream`` when the extension is
    unknown.
    """
    guessed, _ = mimetypes.guess_type(path, strict=False)
    return guessed or "application/octet-stream"


def md5(path: str) -> str | None:
    """Compute the hex MD5 digest of a file, or None if unreadable."""
    digest = hashlib.md5()  # nosec: B324 - content fingerprint, not security
    try:
        with open(path, "rb") as f:
            while chunk := f.read(CHUNK_SIZE):
                digest.update(chunk)
    except OSError as e:
        logger.debug("Cannot hash %s: %s", path, e)
        return None
    return digest.hexdigest()


def metadata(path: str) -> Metadata | None:
    """Collect type, path, size, mtime and MIME type in one call.

    Directories report size 0, an empty MIME type, and a path with a
    trailing "/".

    Returns:
        Metadata, or None if the path does not exist.
    """
    path = normalize(path, "/").rstrip("/")
    file_type = filetype(path)
    if file_type is None:
        return None
    if file_type is FileType.LINK and os.path.isdir(path):
        file_type = FileType.DIR
    is_directory = file_type is FileType.DIR
    return Metadata(
        type=file_type,
        path=path + "/" if is_directory else path,
        size=0 if is_directory else (size(path) or 0),
        last_modified=last_modified(path) or 0,
        mime_type="" if is_directory else mime_type(path),
    )


def read(path: str, lock: bool = False) -> bytes | None:
    """Read a whole file.

    Args:
        path: File to read.
        lock: Hold a shared lock while reading.

    Returns:
        File content, or None if ``path`` is not a readable regular file.
    """
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "rb") as f, _locked(f, fcntl.LOCK_SH, lock):
            return f.read()
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def open_stream(path: str) -> BinaryIO | None:
    """Open a file for binary reading. The caller closes the handle."""
    try:
        return open(path, "rb")
    except OSError as e:
        logger.debug("Cannot open %s: %s", path, e)
        return None


def _write(path: str, data: Data, append: bool, lock: bool) -> int | None:
    if not mkdir(os.path.dirname(path) or "."):
        return None
    # Truncate only while holding the lock
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else 0)
    try:
        fd = os.open(path, flags, 0o666)
        with os.fdopen(fd, "ab" if append else "wb") as f, _locked(f, fcntl.LOCK_EX, lock):
            if not append:
                f.truncate(0)
            return _write_data(f, data)
    except OSError as e:
        logger.debug("Cannot write %s: %s", path, e)
        return None


def put(path: str, data: Data, lock: bool = False) -> int | None:
    """Replace a file's content, creating parent directories.

    Args:
        path: File to write.
        data: Bytes, text (UTF-8 encoded), or a binary stream.
        lock: Hold an exclusive lock while writing.

    Returns:
        Number of bytes written, or None on failure.
    """
    return _write(path, data, False, lock)


def append(path: str, data: Data, lock: bool = False) -> int | None:
    """Append to a file, creating it and its parents if needed.

    Returns:
        Number of bytes written, or None on failure.
    """
    return _write(path, data, True, lock)


def prepend(path: str, data: Data, lock: bool = False) -> int | None:
    """Insert data at the start of a file.

    The new data and the old content are written to a scratch file next
    to ``path`` which then replaces it. With ``lock`` the target is opened
    (and created if missing) under an exclusive lock for the whole swap.

    Returns:
        Number of prepended bytes, or None on failure.
    """
    if not mkdir(os.path.dirname(path) or "."):
        return None
    temp = path + PREPEND_SUFFIX
    with contextlib.ExitStack() as stack:
        try:
            if lock:
                source: BinaryIO | None = stack.enter_context(open(path, "a+b"))
                stack.enter_context(_locked(source, fcntl.LOCK_EX, True))
                source.seek(0)
            else:
                source = stack.enter_context(open(path, "rb")) if os.path.isfile(path) else None
            with open(temp, "wb") as tmp:
                written = _write_data(tmp, data)
                if source is not None:
                    shutil.copyfileobj(source, tmp, CHUNK_SIZE)
            os.replace(temp, path)
        except OSError as e:
            logger.debug("Cannot prepend to %s: %s", path, e)
            with contextlib.suppress(OSError):
                os.unlink(temp)
            return None
    return written


def rename(source: str, destination: str, overwrite: bool = True) -> bool:
    """Rename a file or directory.

    Args:
        source: Existing path.
        destination: New path.
        overwrite: If False, fail when ``destination`` is an existing file.

    Returns:
        True on success.
    """
    if not overwrite and os.path.isfile(destination):
        return False
    try:
        os.replace(source, destination)
    except OSError as e:
        logger.debug("Cannot rename %s to %s: %s", source, destination, e)
        return False
    return True


def copy(source: str, destination: str, overwrite: bool = True) -> bool:
    """Copy a file's bytes and permission bits.

    Symbolic links are copied as links.

    Args:
        source: File to copy.
        destination: Target path.
        overwrite: If False, fail when ``destination`` is an existing file.

    Returns:
        True on success.
    """
    if not overwrite and os.path.isfile(destination):
        return False
    try:
        if os.path.islink(source) and os.path.lexists(destination):
            os.unlink(destination)
        shutil.copy2(source, destination, follow_symlinks=False)
    except OSError as e:
        logger.debug("Cannot copy %s to %s: %s", source, destination, e)
        return False
    return True


def unlink(path: str) -> bool:
    """Delete a file or link. Succeeds if there is nothing to delete."""
    if not os.path.islink(path) and not os.path.isfile(path):
        return True
    try:
        os.unlink(path)
    except OSError as e:
        logger.debug("Cannot unlink %s: %s", path, e)
        return False
    return True


def mkdir(path: str, recursive: bool = True) -> bool:
    """Create a directory with mode 0o755.

    Args:
        path: Directory to create.
        recursive: Create missing parents too.

    Returns:
        True if the directory exists afterwards.
    """
    if os.path.isdir(path):
        return True
    try:
        if recursive:
            os.makedirs(path, mode=0o755, exist_ok=True)
        else:
            os.mkdir(path, mode=0o755)
    except OSError as e:
        logger.debug("Cannot create directory %s: %s", path, e)
        return False
    return True


def rmdir(path: str) -> bool:
    """Remove an empty directory. Succeeds if it does not exist."""
    if not os.path.isdir(path):
        return True
    try:
        os.rmdir(path)
    except OSError as e:
        logger.debug("Cannot remove directory %s: %s", path, e)
        return False
    return True
