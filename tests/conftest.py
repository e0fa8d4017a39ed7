"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from treefs.storage import Filesystem


def make_tree(base: Path, layout: dict[str, str | None]) -> Path:
    """Create files and directories below ``base``.

    Keys ending in "/" are directories; other keys are files whose value
    is their text content.
    """
    for rel, content in layout.items():
        target = base / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content or "")
    return base


def snapshot(base: Path) -> dict[str, str | None]:
    """Map every path below ``base`` to its content (None for directories)."""
    result: dict[str, str | None] = {}
    for path in sorted(base.rglob("*")):
        rel = path.relative_to(base).as_posix()
        if path.is_dir() and not path.is_symlink():
            result[rel + "/"] = None
        else:
            result[rel] = path.read_text()
    return result


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small tree with nested files and one empty directory."""
    return make_tree(
        tmp_path / "src",
        {
            "a.txt": "alpha",
            "sub/b.txt": "bravo",
            "sub/deep/c.txt": "charlie",
            "empty/": None,
        },
    )


@pytest.fixture
def fs(tmp_path: Path) -> Filesystem:
    """Facade using the local driver rooted at a fresh directory."""
    root = tmp_path / "root"
    root.mkdir()
    return Filesystem("local", {"root": str(root)})
