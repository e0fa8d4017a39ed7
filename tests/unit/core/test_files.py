"""Unit tests for single-file primitives.

Tests for type and metadata queries, locked and unlocked reads and
writes, prepend through a scratch file, and rename/copy/unlink/mkdir.
"""

import fcntl
import io
import os
import threading
from pathlib import Path
from unittest.mock import patch

import pytest
from treefs.core import files
from treefs.models import FileType


class TestQueries:
    """Tests for existence, type and metadata queries."""

    def test_has(self, tmp_path: Path) -> None:
        """has is true for files, directories and dangling links."""
        (tmp_path / "f").write_text("x")
        (tmp_path / "dangling").symlink_to(tmp_path / "nowhere")

        assert files.has(str(tmp_path / "f")) is True
        assert files.has(str(tmp_path)) is True
        assert files.has(str(tmp_path / "dangling")) is True
        assert files.has(str(tmp_path / "missing")) is False

    def test_filetype(self, tmp_path: Path) -> None:
        """filetype reports files, directories and links without following them."""
        (tmp_path / "f").write_text("x")
        (tmp_path / "d").mkdir()
        (tmp_path / "l").symlink_to(tmp_path / "d")
        os.mkfifo(tmp_path / "p")

        assert files.filetype(str(tmp_path / "f")) is FileType.FILE
        assert files.filetype(str(tmp_path / "d")) is FileType.DIR
        assert files.filetype(str(tmp_path / "l")) is FileType.LINK
        assert files.filetype(str(tmp_path / "p")) is FileType.FIFO
        assert files.filetype(str(tmp_path / "missing")) is None

    def test_size_and_mtime(self, tmp_path: Path) -> None:
        """size and last_modified come from stat."""
        target = tmp_path / "f"
        target.write_bytes(b"12345")
        os.utime(target, (1_700_000_000, 1_700_000_000))

        assert files.size(str(target)) == 5
        assert files.last_modified(str(target)) == 1_700_000_000
        assert files.size(str(tmp_path / "missing")) is None
        assert files.last_modified(str(tmp_path / "missing")) is None

    def test_mime_type(self) -> None:
        """MIME types are guessed from the extension."""
        assert files.mime_type("notes.txt") == "text/plain"
        assert files.mime_type("index.html") == "text/html"
        assert files.mime_type("blob.unknownext") == "application/octet-stream"

    def test_md5(self, tmp_path: Path) -> None:
        """md5 returns the hex digest of the content."""
        target = tmp_path / "f"
        target.write_bytes(b"hello")

        assert files.md5(str(target)) == "5d41402abc4b2a76b9719d911017c592"
        assert files.md5(str(tmp_path / "missing")) is None

    def test_metadata_for_file(self, tmp_path: Path) -> None:
        """File metadata includes size and MIME type."""
        target = tmp_path / "doc.txt"
        target.write_text("hello")

        meta = files.metadata(str(target))

        assert meta is not None
        assert meta.type is FileType.FILE
        assert meta.path == str(target)
        assert meta.size == 5
        assert meta.mime_type == "text/plain"
        assert meta.last_modified > 0

    def test_metadata_for_directory(self, tmp_path: Path) -> None:
        """Directory metadata has a trailing slash, size 0 and no MIME type."""
        meta = files.metadata(f"{tmp_path}//./")

        assert meta is not None
        assert meta.type is FileType.DIR
        assert meta.path == f"{tmp_path}/"
        assert meta.size == 0
        assert meta.mime_type == ""

    def test_metadata_missing(self, tmp_path: Path) -> None:
        """Missing paths have no metadata."""
        assert files.metadata(str(tmp_path / "missing")) is None


class TestReadWrite:
    """Tests for read, put, append and prepend."""

    def test_put_creates_parents(self, tmp_path: Path) -> None:
        """put creates missing parent directories."""
        target = tmp_path / "a" / "b" / "c.txt"

        assert files.put(str(target), "héllo") == len("héllo".encode())
        assert target.read_text(encoding="utf-8") == "héllo"

    def test_put_replaces(self, tmp_path: Path) -> None:
        """put truncates existing content."""
        target = tmp_path / "f"
        target.write_text("long old content")

        files.put(str(target), b"new")

        assert target.read_bytes() == b"new"

    def test_put_from_stream(self, tmp_path: Path) -> None:
        """Binary streams are copied in chunks."""
        payload = b"x" * (files.CHUNK_SIZE * 2 + 10)

        written = files.put(str(tmp_path / "f"), io.BytesIO(payload))

        assert written == len(payload)
        assert (tmp_path / "f").read_bytes() == payload

    def test_put_into_directory_fails(self, tmp_path: Path) -> None:
        """Writing over a directory returns None."""
        assert files.put(str(tmp_path), "x") is None

    def test_read(self, tmp_path: Path) -> None:
        """read returns bytes, with or without a lock."""
        target = tmp_path / "f"
        target.write_bytes(b"data")

        assert files.read(str(target)) == b"data"
        assert files.read(str(target), lock=True) == b"data"

    def test_read_not_a_file(self, tmp_path: Path) -> None:
        """Directories and missing paths read as None."""
        assert files.read(str(tmp_path)) is None
        assert files.read(str(tmp_path / "missing")) is None

    def test_locked_read_takes_shared_lock(self, tmp_path: Path) -> None:
        """A locked read holds LOCK_SH and releases it."""
        target = tmp_path / "f"
        target.write_bytes(b"data")

        with patch("treefs.core.files.fcntl.flock") as mock_flock:
            files.read(str(target), lock=True)

        operations = [call.args[1] for call in mock_flock.call_args_list]
        assert operations == [files.fcntl.LOCK_SH, files.fcntl.LOCK_UN]

    def test_locked_put_takes_exclusive_lock(self, tmp_path: Path) -> None:
        """A locked write holds LOCK_EX; an unlocked one takes no lock."""
        with patch("treefs.core.files.fcntl.flock") as mock_flock:
            files.put(str(tmp_path / "f"), "x", lock=True)
            files.put(str(tmp_path / "g"), "x")

        operations = [call.args[1] for call in mock_flock.call_args_list]
        assert operations == [files.fcntl.LOCK_EX, files.fcntl.LOCK_UN]

    def test_locked_put_waits_for_shared_lock(self, tmp_path: Path) -> None:
        """A locked put leaves the file intact until a reader's lock is released."""
        target = tmp_path / "f"
        target.write_bytes(b"original content")
        results: list[int | None] = []

        with open(target, "rb") as reader:
            fcntl.flock(reader.fileno(), fcntl.LOCK_SH)
            writer = threading.Thread(
                target=lambda: results.append(files.put(str(target), b"new", lock=True))
            )
            writer.start()
            writer.join(timeout=0.3)

            assert writer.is_alive()
            assert target.read_bytes() == b"original content"

            fcntl.flock(reader.fileno(), fcntl.LOCK_UN)
            writer.join(timeout=5)

        assert not writer.is_alive()
        assert results == [3]
        assert target.read_bytes() == b"new"

    def test_append(self, tmp_path: Path) -> None:
        """append adds to the end, creating the file if needed."""
        target = tmp_path / "f"

        assert files.append(str(target), "a") == 1
        assert files.append(str(target), "bc", lock=True) == 2
        assert target.read_text() == "abc"

    @pytest.mark.parametrize("lock", [False, True])
    def test_prepend(self, tmp_path: Path, lock: bool) -> None:
        """prepend puts data first and keeps the old content after it."""
        target = tmp_path / "f"
        target.write_text("world")

        assert files.prepend(str(target), "hello ", lock=lock) == 6
        assert target.read_text() == "hello world"
        assert not (tmp_path / f"f{files.PREPEND_SUFFIX}").exists()

    @pytest.mark.parametrize("lock", [False, True])
    def test_prepend_creates_file(self, tmp_path: Path, lock: bool) -> None:
        """prepend on a missing file behaves like put."""
        target = tmp_path / "new" / "f"

        assert files.prepend(str(target), "x", lock=lock) == 1
        assert target.read_text() == "x"

    def test_prepend_failure_removes_scratch_file(self, tmp_path: Path) -> None:
        """A failed swap leaves the original and no scratch file."""
        target = tmp_path / "f"
        target.write_text("world")

        with patch("treefs.core.files.os.replace", side_effect=OSError("boom")):
            assert files.prepend(str(target), "hello ") is None

        assert target.read_text() == "world"
        assert not (tmp_path / f"f{files.PREPEND_SUFFIX}").exists()

    def test_open_stream(self, tmp_path: Path) -> None:
        """open_stream returns a readable handle or None."""
        (tmp_path / "f").write_bytes(b"abc")

        stream = files.open_stream(str(tmp_path / "f"))
        assert stream is not None
        with stream:
            assert stream.read() == b"abc"
        assert files.open_stream(str(tmp_path / "missing")) is None


class TestFileOperations:
    """Tests for rename, copy, unlink, mkdir and rmdir."""

    def test_rename(self, tmp_path: Path) -> None:
        """rename moves a file and replaces an existing destination."""
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")

        assert files.rename(str(tmp_path / "a"), str(tmp_path / "b")) is True

        assert (tmp_path / "b").read_text() == "a"
        assert not (tmp_path / "a").exists()

    def test_rename_no_overwrite(self, tmp_path: Path) -> None:
        """Without overwrite an existing destination file is a conflict."""
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")

        assert files.rename(str(tmp_path / "a"), str(tmp_path / "b"), overwrite=False) is False

        assert (tmp_path / "a").exists()
        assert (tmp_path / "b").read_text() == "b"

    def test_rename_missing_source(self, tmp_path: Path) -> None:
        """Renaming a missing file fails."""
        assert files.rename(str(tmp_path / "missing"), str(tmp_path / "b")) is False

    def test_copy(self, tmp_path: Path) -> None:
        """copy duplicates bytes and permission bits."""
        source = tmp_path / "a"
        source.write_text("a")
        source.chmod(0o640)

        assert files.copy(str(source), str(tmp_path / "b")) is True

        assert (tmp_path / "b").read_text() == "a"
        assert (tmp_path / "b").stat().st_mode & 0o777 == 0o640
        assert source.exists()

    def test_copy_no_overwrite(self, tmp_path: Path) -> None:
        """Without overwrite an existing destination file is a conflict."""
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")

        assert files.copy(str(tmp_path / "a"), str(tmp_path / "b"), overwrite=False) is False
        assert (tmp_path / "b").read_text() == "b"

    def test_copy_link_as_link(self, tmp_path: Path) -> None:
        """Links are copied as links, replacing an existing destination link."""
        (tmp_path / "target").write_text("t")
        (tmp_path / "link").symlink_to(tmp_path / "target")
        (tmp_path / "dest").symlink_to(tmp_path / "elsewhere")

        assert files.copy(str(tmp_path / "link"), str(tmp_path / "dest")) is True

        assert (tmp_path / "dest").is_symlink()
        assert os.readlink(tmp_path / "dest") == str(tmp_path / "target")

    def test_unlink(self, tmp_path: Path) -> None:
        """unlink deletes files and succeeds on missing paths."""
        (tmp_path / "f").write_text("x")

        assert files.unlink(str(tmp_path / "f")) is True
        assert not (tmp_path / "f").exists()
        assert files.unlink(str(tmp_path / "f")) is True

    def test_unlink_ignores_directories(self, tmp_path: Path) -> None:
        """unlink leaves directories alone."""
        (tmp_path / "d").mkdir()

        assert files.unlink(str(tmp_path / "d")) is True
        assert (tmp_path / "d").is_dir()

    def test_mkdir(self, tmp_path: Path) -> None:
        """mkdir creates directories with mode 0o755 (before umask)."""
        target = tmp_path / "a" / "b"

        assert files.mkdir(str(target)) is True
        assert target.is_dir()
        assert files.mkdir(str(target)) is True

    def test_mkdir_non_recursive(self, tmp_path: Path) -> None:
        """Without recursive a missing parent fails."""
        assert files.mkdir(str(tmp_path / "a" / "b"), recursive=False) is False
        assert files.mkdir(str(tmp_path / "a"), recursive=False) is True

    def test_rmdir(self, tmp_path: Path) -> None:
        """rmdir removes empty directories only."""
        (tmp_path / "empty").mkdir()
        (tmp_path / "full").mkdir()
        (tmp_path / "full" / "f").write_text("x")

        assert files.rmdir(str(tmp_path / "empty")) is True
        assert files.rmdir(str(tmp_path / "full")) is False
        assert files.rmdir(str(tmp_path / "missing")) is True
