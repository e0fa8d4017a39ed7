"""Abstract base class for storage drivers.

This module defines the Driver interface that every storage backend
implements. Paths given to a driver are already normalized virtual paths
("dir/file.txt", no leading slash).
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from treefs.core.files import Data
from treefs.models import Acl, FileType, ListingPage, Metadata


class Driver(ABC):
    """Abstract base class for all storage drivers.

    Example:
        >>> driver = LocalDriver().configure({"root": "/srv/files"})
        >>> driver.put("notes/today.txt", "hello")
        5
        >>> driver.lists("notes").contents
        ['notes/today.txt']
    """

    #: Registry name used by :func:`treefs.drivers.get_driver_class`.
    name: str = ""

    @abstractmethod
    def configure(self, config: dict[str, Any] | None = None) -> "Driver":
        """Apply driver settings and return the driver itself."""

    @abstractmethod
    def has(self, path: str) -> bool:
        """Check whether a file or directory exists."""

    @abstractmethod
    def get_filetype(self, path: str) -> FileType | None:
        """Get the entry type, or None if missing."""

    @abstractmethod
    def get_last_modified(self, path: str) -> int | None:
        """Get the modification time as epoch seconds."""

    @abstractmethod
    def get_size(self, path: str) -> int | None:
        """Get the size in bytes."""

    @abstractmethod
    def get_mime_type(self, path: str) -> str | None:
        """Get the MIME type."""

    @abstractmethod
    def get_metadata(self, path: str) -> Metadata | None:
        """Get type, path, size, mtime and MIME type at once."""

    @abstractmethod
    def get_hash(self, path: str) -> str | None:
        """Get a content digest, or None if unsupported or unreadable."""

    @abstractmethod
    def get_acl(self, path: str) -> Acl | None:
        """Get the access level."""

    @abstractmethod
    def set_acl(self, path: str, acl: Acl | int) -> bool:
        """Set the access level."""

    @abstractmethod
    def get_content(self, path: str, lock: bool = False) -> bytes | None:
        """Read a whole file."""

    @abstractmethod
    def get_stream(self, path: str) -> BinaryIO | None:
        """Open a file for binary reading."""

    @abstractmethod
    def put(self, path: str, data: Data, lock: bool = False) -> int | None:
        """Replace a file's content; returns bytes written."""

    @abstractmethod
    def append(self, path: str, data: Data, lock: bool = False) -> int | None:
        """Append to a file; returns bytes written."""

    @abstractmethod
    def prepend(self, path: str, data: Data, lock: bool = False) -> int | None:
        """Insert at the start of a file; returns bytes written."""

    @abstractmethod
    def rename(self, source: str, destination: str, overwrite: bool = True) -> bool:
        """Rename a file."""

    @abstractmethod
    def copy(self, source: str, destination: str, overwrite: bool = True) -> bool:
        """Copy a file."""

    @abstractmethod
    def unlink(self, path: str) -> bool:
        """Delete a file; succeeds if absent."""

    @abstractmethod
    def mkdir(self, path: str, recursive: bool = True) -> bool:
        """Create a directory."""

    @abstractmethod
    def mvdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        """Merge-move a directory tree."""

    @abstractmethod
    def cpdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        """Merge-copy a directory tree."""

    @abstractmethod
    def cleandir(self, path: str, include_self: bool = False) -> bool:
        """Remove empty subdirectories."""

    @abstractmethod
    def rmdir(self, path: str, recursive: bool = False) -> bool:
        """Remove a directory; succeeds if absent."""

    @abstractmethod
    def lists(
        self,
        directory: str,
        expand: bool = False,
        marker: str | None = None,
        max_items: int = 100,
    ) -> ListingPage:
        """List a directory one page at a time."""
