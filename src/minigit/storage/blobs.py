"""Content-addressed blob store for mini-git.

Layout: {objects_dir}/{digest}

Each object holds the raw bytes of one staged file, verbatim. Objects are
write-once: a digest that already exists on disk is never rewritten or
re-validated.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from minigit.errors import BlobWriteError
from minigit.hashing import is_digest
from minigit.logging_config import StructuredLogger

logger = StructuredLogger(__name__)


class BlobStore:
    """Write-once blob storage keyed by digest.

    The objects directory must already exist; creating it is the caller's
    job (see Repository.init and Repository.add).
    """

    def __init__(self, objects_dir: Path):
        self.objects_dir = objects_dir

    def path_for(self, digest: str) -> Path:
        """Location of the object for ``digest``."""
        return self.objects_dir / digest

    def put(self, digest: str, data: bytes) -> bool:
        """Store ``data`` under ``digest`` unless an object already exists.

        Bytes go to a temp file beside the target and are renamed into
        place, so an object path never holds a partial write.

        Args:
            digest: Hex digest of ``data``
            data: Raw content to store

        Returns:
            True if the object was written, False if it was already present

        Raises:
            BlobWriteError: If the object cannot be written
        """
        blob_path = self.path_for(digest)

        if blob_path.exists():
            logger.debug("Blob already present", operation="blob.put", digest=digest)
            return False

        tmp_path = blob_path.with_name(f"{digest}.tmp.{os.getpid()}")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, blob_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            logger.error(
                f"Failed to write blob {digest}: {e}",
                operation="blob.put",
                digest=digest,
                error=str(e),
            )
            raise BlobWriteError(digest, blob_path, e.strerror or str(e)) from e

        logger.debug(
            "Blob written",
            operation="blob.put",
            digest=digest,
            size=len(data),
        )
        return True

    def get(self, digest: str) -> bytes | None:
        """Retrieve raw content by digest, or None if not stored."""
        blob_path = self.path_for(digest)

        if not blob_path.exists():
            return None

        return blob_path.read_bytes()

    def exists(self, digest: str) -> bool:
        """Check if an object exists for ``digest``."""
        return self.path_for(digest).exists()

    def digests(self) -> Iterator[str]:
        """Yield the digest of every stored object.

        Leftover temp files from interrupted writes are not objects and are
        not reported.
        """
        if not self.objects_dir.is_dir():
            return
        for entry in sorted(self.objects_dir.iterdir()):
            if entry.is_file() and is_digest(entry.name):
                yield entry.name

    def __len__(self) -> int:
        return sum(1 for _ in self.digests())
