"""Local filesystem driver.

Maps virtual paths onto a root directory and delegates to the core
engine. Listings and metadata are reported relative to the root.
"""

import logging
from dataclasses import replace
from typing import Any, BinaryIO

from treefs.core import acl as acl_ops
from treefs.core import files
from treefs.core.cleaner import clean
from treefs.core.lister import list_tree
from treefs.core.paths import normalize
from treefs.core.remover import remove_dir
from treefs.core.transfer import copy_tree, move_tree
from treefs.drivers.base import Driver
from treefs.models import Acl, FileType, ListingPage, Metadata

logger = logging.getLogger(__name__)


class LocalDriver(Driver):
    """Driver backed by a directory on the local filesystem.

    Attributes:
        root: Normalized root directory with a trailing "/", or "" to
            resolve virtual paths against the working directory.
    """

    name = "local"

    def __init__(self) -> None:
        """Initialize an unrooted driver."""
        self.root = ""

    def configure(self, config: dict[str, Any] | None = None) -> "LocalDriver":
        """Apply settings.

        Args:
            config: Mapping with an optional "root" directory.

        Returns:
            The driver itself.
        """
        config = config or {}
        if config.get("root"):
            self.root = normalize(str(config["root"]), "/").rstrip("/") + "/"
            logger.debug("Local driver rooted at %s", self.root)
        return self

    def path(self, path: str = "") -> str:
        """Map a virtual path onto the local filesystem."""
        return self.root + path

    def _relative(self, path: str) -> str:
        return path[len(self.root) :] if path.startswith(self.root) else path

    def has(self, path: str) -> bool:
        return files.has(self.path(path))

    def get_filetype(self, path: str) -> FileType | None:
        return files.filetype(self.path(path))

    def get_last_modified(self, path: str) -> int | None:
        return files.last_modified(self.path(path))

    def get_size(self, path: str) -> int | None:
        return files.size(self.path(path))

    def get_mime_type(self, path: str) -> str | None:
        return files.mime_type(self.path(path))

    def get_metadata(self, path: str) -> Metadata | None:
        meta = files.metadata(self.path(path))
        if meta is None:
            return None
        return replace(meta, path=self._relative(meta.path))

    def get_hash(self, path: str) -> str | None:
        return files.md5(self.path(path))

    def get_acl(self, path: str) -> Acl | None:
        return acl_ops.get_acl(self.path(path))

    def set_acl(self, path: str, acl: Acl | int) -> bool:
        return acl_ops.set_acl(self.path(path), acl)

    def get_content(self, path: str, lock: bool = False) -> bytes | None:
        return files.read(self.path(path), lock)

    def get_stream(self, path: str) -> BinaryIO | None:
        return files.open_stream(self.path(path))

    def put(self, path: str, data: files.Data, lock: bool = False) -> int | None:
        return files.put(self.path(path), data, lock)

    def append(self, path: str, data: files.Data, lock: bool = False) -> int | None:
        return files.append(self.path(path), data, lock)

    def prepend(self, path: str, data: files.Data, lock: bool = False) -> int | None:
        return files.prepend(self.path(path), data, lock)

    def rename(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return files.rename(self.path(source), self.path(destination), overwrite)

    def copy(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return files.copy(self.path(source), self.path(destination), overwrite)

    def unlink(self, path: str) -> bool:
        return files.unlink(self.path(path))

    def mkdir(self, path: str, recursive: bool = True) -> bool:
        return files.mkdir(self.path(path), recursive)

    def mvdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return move_tree(self.path(source), self.path(destination), overwrite)

    def cpdir(self, source: str, destination: str, overwrite: bool = True) -> bool:
        return copy_tree(self.path(source), self.path(destination), overwrite)

    def cleandir(self, path: str, include_self: bool = False) -> bool:
        return clean(self.path(path), include_self)

    def rmdir(self, path: str, recursive: bool = False) -> bool:
        return remove_dir(self.path(path), recursive)

    def lists(
        self,
        directory: str,
        expand: bool = False,
        marker: str | None = None,
        max_items: int = 100,
    ) -> ListingPage:
        """List a directory with root-relative entry paths.

        The marker is given in the same root-relative form the previous
        page returned.
        """
        page = list_tree(
            self.path(directory),
            expand=expand,
            marker=self.path(marker) if marker else None,
            max_items=max_items,
        )
        return ListingPage(
            truncated=page.truncated,
            contents=[self._relative(entry) for entry in page.contents],
        )
