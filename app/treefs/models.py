"""Data models for treefs.

This module defines the transient data structures produced by tree
traversal, listing, and metadata lookups. None of them outlive the call
that produced them.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class FileType(str, Enum):
    """Type of a filesystem entry.

    Attributes:
        FILE: Regular file.
        DIR: Directory.
        LINK: Symbolic link (never followed for typing).
        FIFO: Named pipe.
        CHAR: Character device.
        BLOCK: Block device.
        SOCKET: Unix domain socket.
        UNKNOWN: Anything else.
    """

    FILE = "file"
    DIR = "dir"
    LINK = "link"
    FIFO = "fifo"
    CHAR = "char"
    BLOCK = "block"
    SOCKET = "socket"
    UNKNOWN = "unknown"


class Acl(IntEnum):
    """Simplified access levels shared by every storage driver.

    Attributes:
        DEFAULT: Inherit the parent directory's level.
        PRIVATE: Owner read/write only.
        READ: Public read, owner write.
        WRITE: Public read/write.
    """

    DEFAULT = 0
    PRIVATE = 1
    READ = 2
    WRITE = 3


@dataclass(frozen=True, slots=True)
class DirEntry:
    """One item yielded during directory traversal.

    Attributes:
        path: Slash-separated path; directories carry a trailing "/".
        is_dir: Whether the entry is a directory.
    """

    path: str
    is_dir: bool

    @property
    def name(self) -> str:
        """Last path segment without the trailing separator."""
        return self.path.rstrip("/").rpartition("/")[2]


@dataclass(frozen=True, slots=True)
class ListingPage:
    """A single page of a paginated listing.

    Attributes:
        truncated: True if more entries exist beyond ``contents``.
        contents: Entry paths in pre-order traversal order.
    """

    truncated: bool = False
    contents: list[str] = field(default_factory=list)

    @property
    def last(self) -> str | None:
        """Marker to pass when requesting the next page."""
        return self.contents[-1] if self.contents else None

    def to_dict(self) -> dict[str, object]:
        """Serialize the page for JSON output."""
        return {"truncated": self.truncated, "contents": list(self.contents)}


@dataclass(frozen=True, slots=True)
class Metadata:
    """Summary information for a file or directory.

    Attributes:
        type: Entry type.
        path: Entry path; directories carry a trailing "/".
        size: Size in bytes (0 for directories).
        last_modified: Modification time as epoch seconds.
        mime_type: Detected MIME type ("" for directories).
    """

    type: FileType
    path: str
    size: int
    last_modified: int
    mime_type: str

    def to_dict(self) -> dict[str, object]:
        """Serialize the metadata for JSON output."""
        return {
            "type": self.type.value,
            "path": self.path,
            "size": self.size,
            "last_modified": self.last_modified,
            "mime_type": self.mime_type,
        }
