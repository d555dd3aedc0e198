"""Tests for the write-once blob store."""

from __future__ import annotations

from pathlib import Path

import pytest

from minigit.errors import BlobWriteError, RepositoryIOError
from minigit.hashing import hash_bytes
from minigit.storage import BlobStore

from conftest import HELLO_DIGEST


class TestBlobStore:
    """Tests for content-addressed blob store."""

    def test_put_writes_raw_bytes(self, blob_store: BlobStore):
        """Objects are named by digest and hold content verbatim."""
        assert blob_store.put(HELLO_DIGEST, b"hello") is True

        blob_path = blob_store.objects_dir / HELLO_DIGEST
        assert blob_path.read_bytes() == b"hello"
        assert blob_store.get(HELLO_DIGEST) == b"hello"

    def test_put_is_idempotent(self, blob_store: BlobStore):
        assert blob_store.put(HELLO_DIGEST, b"hello") is True
        assert blob_store.put(HELLO_DIGEST, b"hello") is False
        assert list(blob_store.digests()) == [HELLO_DIGEST]

    def test_existing_object_is_never_rewritten(self, blob_store: BlobStore):
        """Digest equality is trusted; a second put does not compare bytes."""
        blob_store.put(HELLO_DIGEST, b"hello")
        assert blob_store.put(HELLO_DIGEST, b"something else") is False
        assert blob_store.get(HELLO_DIGEST) == b"hello"

    def test_binary_and_empty_content(self, blob_store: BlobStore):
        for data in (b"", b"\x00\x01\xfe\xff", bytes(range(256))):
            digest = hash_bytes(data)
            blob_store.put(digest, data)
            assert blob_store.get(digest) == data

    def test_get_nonexistent(self, blob_store: BlobStore):
        assert blob_store.get("0" * 40) is None
        assert not blob_store.exists("0" * 40)

    def test_exists(self, blob_store: BlobStore):
        blob_store.put(HELLO_DIGEST, b"hello")
        assert blob_store.exists(HELLO_DIGEST)

    def test_no_temp_files_left_behind(self, blob_store: BlobStore):
        blob_store.put(HELLO_DIGEST, b"hello")
        assert [p.name for p in blob_store.objects_dir.iterdir()] == [HELLO_DIGEST]

    def test_digests_ignores_stray_files(self, blob_store: BlobStore):
        blob_store.put(HELLO_DIGEST, b"hello")
        (blob_store.objects_dir / f"{HELLO_DIGEST}.tmp.42").write_bytes(b"partial")
        (blob_store.objects_dir / "README").write_text("not an object")

        assert list(blob_store.digests()) == [HELLO_DIGEST]
        assert len(blob_store) == 1

    def test_missing_objects_dir_is_an_error(self, tmp_path: Path):
        """The store does not create its own directory."""
        store = BlobStore(tmp_path / "missing" / "objects")

        with pytest.raises(BlobWriteError) as exc_info:
            store.put(HELLO_DIGEST, b"hello")

        err = exc_info.value
        assert isinstance(err, RepositoryIOError)
        assert err.digest == HELLO_DIGEST
        assert err.path == store.objects_dir / HELLO_DIGEST
        assert HELLO_DIGEST in str(err)
        assert not store.objects_dir.exists()

    def test_digests_on_missing_dir_is_empty(self, tmp_path: Path):
        assert list(BlobStore(tmp_path / "nope").digests()) == []
