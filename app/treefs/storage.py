"""Filesystem facade.

Normalizes virtual paths and forwards every operation to a pluggable
storage driver. Virtual paths are slash-separated and relative to the
driver's root; a leading "/" is ignored.
"""

import logging
from typing import Any, BinaryIO

from treefs.config import TreefsConfig
from treefs.core.files import Data
from treefs.core.lister import DEFAULT_PAGE_SIZE
from treefs.core.paths import normalize
from treefs.drivers import Driver, get_driver_class
from treefs.errors import DriverArgumentError, InvalidDriverError
from treefs.models import Acl, FileType, ListingPage, Metadata

logger = logging.getLogger(__name__)


def virtual_path(path: str) -> str:
    """Normalize a virtual path with "/" and drop leading separators."""
    return normalize(path, "/").lstrip("/")


class Filesystem:
    """Facade over a storage driver.

    The driver may be given as an instance (configured immediately) or as
    a registered name or class (resolved and configured on first use).

    Example:
        >>> fs = Filesystem("local", {"root": "/srv/files"})
        >>> fs.put("/docs/a.txt", "hi")
        2
        >>> fs.lists("docs").contents
        ['docs/a.txt']
    """

    def __init__(
        self,
        driver: Driver | str | type[Driver] | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            driver: Driver instance, registered name, or Driver subclass.
            config: Settings passed to the driver's configure().
        """
        self._driver: Driver | None = None
        self._pending: tuple[str | type[Driver], dict[str, Any]] | None = None
        if driver:
            self.set_driver(driver, config)

    @classmethod
    def from_config(cls, config: TreefsConfig) -> "Filesystem":
        """Build a facade from a loaded TreefsConfig."""
        return cls(config.driver, config.driver_config())

    def instance(
        self,
        driver: Driver | str | type[Driver] | None = None,
        config: dict[str, Any] | None = None,
    ) -> "Filesystem":
        """Create a new facade, reusing this one's driver by default."""
        if driver:
            return type(self)(driver, config)
        clone = type(self)()
        clone._driver = self._driver
        clone._pending = self._pending
        return clone

    def set_driver(
        self,
        driver: Driver | str | type[Driver],
        config: dict[str, Any] | None = None,
    ) -> "Filesystem":
        """Set the storage driver.

        Raises:
            DriverArgumentError: If ``driver`` is neither an instance, a
                name, nor a Driver subclass.
        """
        if isinstance(driver, Driver):
            self._driver = driver.configure(config or {})
            self._pending = None
        elif isinstance(driver, str) or (isinstance(driver, type) and issubclass(driver, Driver)):
            self._driver = None
            self._pending = (driver, config or {})
        else:
            msg = "driver must be a name, a Driver subclass, or a Driver instance"
            raise DriverArgumentError(msg)
        return self

    def get_driver(self) -> Driver:
        """Get the configured driver, resolving it on first use.

        Raises:
            InvalidDriverError: If no driver is configured or the name is
                unknown.
        """
        if self._driver is not None:
            return self._driver
        if self._pending is None:
            raise InvalidDriverError("Filesystem driver not configured")
        driver, config = self._pending
        self._driver = get_driver_class(driver)().configure(config)
        self._pending = None
        logger.debug("Resolved driver %s", type(self._driver).__name__)
        return self._driver

    def has(self, path: str) -> bool:
        return self.get_driver().has(virtual_path(path))

    def get_filetype(self, path: str) -> FileType | None:
        return self.get_driver().get_filetype(virtual_path(path))

    def get_last_modified(self, path: str) -> int | None:
        return self.get_driver().get_last_modified(virtual_path(path))

    def get_size(self, path: str) -> int | None:
        return self.get_driver().get_size(virtual_path(path))

    def get_mime_type(self, path: str) -> str | None:
        return self.get_driver().get_mime_type(virtual_path(path))

    def get_metadata(self, path: str) -> Metadata | None:
        return self.get_driver().get_metadata(virtual_path(path))

    def get_hash(self, path: str) -> str | None:
        return self.get_driver().get_hash(virtual_path(path))

    def get_acl(self, path: str) -> Acl | None:
        return self.get_driver().get_acl(virtual_path(path))

    def set_acl(self, path: str, acl: Acl | int) -> bool:
        return self.get_driver().set_acl(virtual_path(path), acl)

    def get_content(self, path: str, lock: bool = False) -> bytes | None:
        return self.get_driver().get_content(virtual_path(path), lock)

    def get_stream(self, path: str) -> BinaryIO | None:
        return self.get_driver().get_stream(virtual_path(path))

    def put(self, path: str, data: Data, lock: bool = False) -> int | None:
        return self.get_driver().put(virtual_path(path), data, lock)

    def append(self, path: str, data: Data, lock: bool = False) -> int | None:
        return self.get_driver().append(virtual_path(path), data, lock)

    def prepend(self, path: str, data: Data, lock: bool = False) -> int | None:
        return self.get_driver().prepend(virtual_path(path), data, lock)

    def rename(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return self.get_driver().rename(virtual_path(source), virtual_path(destination), overwrite)

    def copy(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return self.get_driver().copy(virtual_path(source), virtual_path(destination), overwrite)

    def unlink(self, path: str) -> bool:
        return self.get_driver().unlink(virtual_path(path))

    def mkdir(self, path: str, recursive: bool = True) -> bool:
        return self.get_driver().mkdir(virtual_path(path), recursive)

    def mvdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return self.get_driver().mvdir(virtual_path(source), virtual_path(destination), overwrite)

    def cpdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return self.get_driver().cpdir(virtual_path(source), virtual_path(destination), overwrite)

    def cleandir(self, path: str, include_self: bool = False) -> bool:
        return self.get_driver().cleandir(virtual_path(path), include_self)

    def rmdir(self, path: str, recursive: bool = False) -> bool:
        return self.get_driver().rmdir(virtual_path(path), recursive)

    def lists(
        self,
        directory: str,
        expand: bool = False,
        marker: str | None = None,
        max_items: int = DEFAULT_PAGE_SIZE,
    ) -> ListingPage:
        """List a directory one page at a time.

        Entry paths are virtual; directories carry a trailing "/". Pass
        the last entry of a page as ``marker`` to get the next one.
        """
        return self.get_driver().lists(virtual_path(directory), expand, marker, max_items)
