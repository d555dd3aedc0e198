"""Staging index persistence with atomic whole-file rewrites.

The index is a single JSON object mapping repository-relative paths to blob
digests. It is always loaded in full and saved in full; there is no
incremental update, so every save costs O(number of staged paths).
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from minigit.errors import IndexParseError, RepositoryIOError
from minigit.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

# path -> blob digest (e.g. "src/main.py" -> "a94a8fe5...")
Index = dict[str, str]

_index_adapter = TypeAdapter(Index)


class IndexPersistence:
    """Loads and saves the staging index file.

    Features:
    - Missing file loads as an empty index (fresh repository)
    - Shape validation on load (object of string -> string)
    - Atomic writes (temp file + os.replace()) so a crash mid-save leaves
      the previous index intact
    """

    def __init__(self, index_path: Path):
        self.index_path = index_path

    def _tmp_path(self) -> Path:
        return self.index_path.with_name(f"{self.index_path.name}.tmp.{os.getpid()}")

    def load(self) -> Index:
        """Load the full index from disk.

        Returns:
            Mapping of path -> digest; empty if no index file exists

        Raises:
            RepositoryIOError: If the file exists but cannot be read
            IndexParseError: If the contents are not a string -> string object
        """
        if not self.index_path.exists():
            logger.debug(
                "No staging index found, starting empty",
                operation="index.load",
                path=str(self.index_path),
            )
            return {}

        try:
            raw = self.index_path.read_bytes()
        except OSError as e:
            raise RepositoryIOError("reading", self.index_path, e.strerror or str(e)) from e

        try:
            index = _index_adapter.validate_json(raw)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            detail = f"{first['msg']} at {location}" if location else first["msg"]
            logger.error(
                f"Staging index is corrupted: {detail}",
                operation="index.load",
                path=str(self.index_path),
            )
            raise IndexParseError(self.index_path, detail) from e

        logger.debug(
            "Loaded staging index",
            operation="index.load",
            entries=len(index),
        )
        return index

    def save(self, index: Index) -> None:
        """Persist the complete index, replacing the previous file atomically.

        Args:
            index: Full mapping to write

        Raises:
            RepositoryIOError: If the index cannot be written
        """
        data = json.dumps(index, indent=2, sort_keys=True) + "\n"
        tmp_path = self._tmp_path()

        try:
            tmp_path.write_text(data, encoding="utf-8")
            os.replace(tmp_path, self.index_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            logger.error(
                f"Failed to save staging index: {e}",
                operation="index.save",
                path=str(self.index_path),
                error=str(e),
            )
            raise RepositoryIOError("writing", self.index_path, e.strerror or str(e)) from e

        logger.info(
            "Saved staging index",
            operation="index.save",
            entries=len(index),
        )
