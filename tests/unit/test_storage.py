"""Unit tests for the Filesystem facade.

Tests for driver resolution, virtual path normalization, and delegation
of every operation to the driver.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from treefs.config import TreefsConfig
from treefs.drivers import Driver, LocalDriver
from treefs.errors import DriverArgumentError, InvalidDriverError
from treefs.models import ListingPage
from treefs.storage import Filesystem, virtual_path


class TestVirtualPath:
    """Tests for virtual_path."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/docs/a.txt", "docs/a.txt"),
            ("docs//./a.txt", "docs/a.txt"),
            ("docs/sub/../a.txt", "docs/a.txt"),
            ("/", ""),
            ("", ""),
            ("docs/", "docs/"),
        ],
    )
    def test_normalizes(self, path: str, expected: str) -> None:
        """Virtual paths are normalized with '/' and lose leading separators."""
        assert virtual_path(path) == expected


class TestDriverResolution:
    """Tests for set_driver, get_driver and instance."""

    def test_name_resolved_lazily(self, tmp_path: Path) -> None:
        """A driver name is resolved and configured on first use."""
        fs = Filesystem("local", {"root": str(tmp_path)})

        assert fs._driver is None
        driver = fs.get_driver()

        assert isinstance(driver, LocalDriver)
        assert driver.root == f"{tmp_path}/"
        assert fs.get_driver() is driver

    def test_class_accepted(self) -> None:
        """A Driver subclass is accepted like a name."""
        fs = Filesystem(LocalDriver)

        assert isinstance(fs.get_driver(), LocalDriver)

    def test_instance_configured_immediately(self, tmp_path: Path) -> None:
        """A driver instance is configured when it is set."""
        driver = LocalDriver()
        fs = Filesystem(driver, {"root": str(tmp_path)})

        assert fs.get_driver() is driver
        assert driver.root == f"{tmp_path}/"

    def test_invalid_argument(self) -> None:
        """Anything but a name, class or instance is rejected."""
        with pytest.raises(DriverArgumentError):
            Filesystem().set_driver(42)  # type: ignore[arg-type]

        with pytest.raises(DriverArgumentError):
            Filesystem().set_driver(dict)  # type: ignore[arg-type]

    def test_unconfigured(self) -> None:
        """Using a facade without a driver raises InvalidDriverError."""
        with pytest.raises(InvalidDriverError, match="not configured"):
            Filesystem().has("x")

    def test_unknown_name_fails_on_use(self) -> None:
        """Unknown names are reported when the driver is first needed."""
        fs = Filesystem("ftp")

        with pytest.raises(InvalidDriverError):
            fs.get_driver()

    def test_instance_shares_driver(self, tmp_path: Path) -> None:
        """instance() without arguments reuses the same driver."""
        fs = Filesystem("local", {"root": str(tmp_path)})
        driver = fs.get_driver()

        clone = fs.instance()

        assert clone is not fs
        assert clone.get_driver() is driver

    def test_instance_with_new_driver(self, tmp_path: Path) -> None:
        """instance(driver) builds an independent facade."""
        fs = Filesystem("local", {"root": str(tmp_path)})

        other = fs.instance("local", {"root": str(tmp_path / "other")})

        assert other.get_driver() is not fs.get_driver()
        assert other.get_driver().root == f"{tmp_path}/other/"  # type: ignore[attr-defined]

    def test_from_config(self, tmp_path: Path) -> None:
        """from_config roots the local driver at the configured directory."""
        fs = Filesystem.from_config(TreefsConfig(root=tmp_path))

        assert fs.get_driver().root == f"{tmp_path}/"  # type: ignore[attr-defined]


class TestDelegation:
    """Tests for path normalization before delegation."""

    @pytest.fixture
    def mock_driver(self) -> MagicMock:
        """Driver double that records delegated calls."""
        driver = MagicMock(spec=Driver)
        driver.configure.return_value = driver
        return driver

    def test_paths_normalized(self, mock_driver: MagicMock) -> None:
        """Every path argument is normalized before reaching the driver."""
        fs = Filesystem(mock_driver)

        fs.has("/a/./b")
        fs.put("//a/../c.txt", "x", lock=True)
        fs.cpdir("/src/", "/dst//x/..", overwrite=False)
        fs.rmdir("/gone", recursive=True)
        fs.cleandir("/d", include_self=True)

        mock_driver.has.assert_called_once_with("a/b")
        mock_driver.put.assert_called_once_with("c.txt", "x", True)
        mock_driver.cpdir.assert_called_once_with("src/", "dst", False)
        mock_driver.rmdir.assert_called_once_with("gone", True)
        mock_driver.cleandir.assert_called_once_with("d", True)

    def test_lists_passes_marker_unchanged(self, mock_driver: MagicMock) -> None:
        """The marker is handed to the driver exactly as given."""
        mock_driver.lists.return_value = ListingPage()
        fs = Filesystem(mock_driver)

        page = fs.lists("/docs/", expand=True, marker="docs/b/", max_items=5)

        mock_driver.lists.assert_called_once_with("docs/", True, "docs/b/", 5)
        assert page == ListingPage()


class TestEndToEnd:
    """Tests for the facade over the local driver."""

    def test_round_trip(self, fs: Filesystem) -> None:
        """Writes, listings and tree operations work through the facade."""
        assert fs.put("/docs/a.txt", "hi") == 2
        assert fs.put("/docs/sub/b.txt", "there") == 5

        assert fs.get_content("docs/a.txt") == b"hi"
        assert sorted(fs.lists("docs", expand=True).contents) == [
            "docs/a.txt",
            "docs/sub/",
            "docs/sub/b.txt",
        ]

        assert fs.cpdir("docs", "backup") is True
        assert fs.rmdir("docs", recursive=True) is True
        assert fs.has("docs") is False
        assert fs.get_content("backup/sub/b.txt") == b"there"

    def test_listing_pages(self, fs: Filesystem) -> None:
        """Paging through the facade returns every entry once."""
        for name in "abcde":
            fs.put(f"d/{name}.txt", name)

        seen: list[str] = []
        page = fs.lists("d", max_items=2)
        seen.extend(page.contents)
        while page.truncated:
            page = fs.lists("d", marker=page.last, max_items=2)
            seen.extend(page.contents)

        assert sorted(seen) == [f"d/{name}.txt" for name in "abcde"]
