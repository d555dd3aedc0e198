"""Tests for error messages and context."""

from pathlib import Path

from minigit.errors import (
    BlobWriteError,
    IndexParseError,
    MiniGitError,
    NotARepositoryError,
    RepositoryIOError,
    UsageError,
)


def test_context_is_appended():
    err = MiniGitError("Something failed", path="a.txt", digest=None)
    assert str(err) == "Something failed (path=a.txt)"
    assert err.context == {"path": "a.txt", "digest": None}


def test_no_context():
    assert str(UsageError("Usage: minigit add <files-or-dirs>")) == "Usage: minigit add <files-or-dirs>"


def test_not_a_repository():
    err = NotARepositoryError(Path("/work/.minigit"))
    assert "missing .minigit" in str(err)
    assert "minigit init" in str(err)
    assert err.control_dir == Path("/work/.minigit")


def test_io_error_carries_path():
    err = RepositoryIOError("reading", Path("/work/a.txt"), "Permission denied")
    assert str(err) == "Failed reading /work/a.txt: Permission denied"
    assert err.path == Path("/work/a.txt")


def test_blob_write_error():
    digest = "a" * 40
    err = BlobWriteError(digest, Path("/work/.minigit/objects") / digest, "No space left on device")
    assert isinstance(err, RepositoryIOError)
    assert err.digest == digest
    assert str(err).startswith("Failed writing blob /work/.minigit/objects/")
    assert str(err).endswith(f"(digest={digest})")


def test_index_parse_error():
    err = IndexParseError(Path("/work/.minigit/index.json"), "Invalid JSON")
    assert str(err) == "Could not parse staging index /work/.minigit/index.json: Invalid JSON"
    assert isinstance(err, MiniGitError)
