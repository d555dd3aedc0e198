"""Repository handle: initialization, opening and staging.

A Repository is an explicit value carrying the root directory and every
derived control-area path. Operations never consult the process working
directory except when a handle is built without a root.

Concurrency Model:
- Single process, single staging invocation at a time
- The index is owned by one add() call from load to save; concurrent
  invocations against the same repository are not coordinated and the last
  save wins
- Concurrent writers of the same blob are harmless (identical bytes,
  atomic rename)
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from minigit.config import RepoConfig
from minigit.errors import NotARepositoryError, RepositoryIOError, UsageError
from minigit.hashing import hash_bytes
from minigit.index import Index, IndexPersistence
from minigit.logging_config import StructuredLogger
from minigit.models import AddResult, SkippedPath, StagedFile
from minigit.paths import current_root, normalize
from minigit.storage import BlobStore
from minigit.walker import walk

logger = StructuredLogger(__name__)

PathArg = str | os.PathLike[str]


class Repository:
    """A mini-git working tree and its control area."""

    def __init__(self, root: PathArg | None = None, config: RepoConfig | None = None):
        self.config = config or RepoConfig()
        self.root = Path(os.path.abspath(root)) if root is not None else current_root()

        self.control_dir = self.root / self.config.control_dir
        self.objects_dir = self.control_dir / self.config.objects_dir
        self.index_path = self.control_dir / self.config.index_file
        # Reserved for commit history; nothing reads or writes it yet
        self.history_path = self.control_dir / self.config.history_file

        self.blobs = BlobStore(self.objects_dir)
        self.index_persistence = IndexPersistence(self.index_path)

    def __repr__(self) -> str:
        return f"Repository(root={str(self.root)!r})"

    # --- Lifecycle ---

    @classmethod
    def init(
        cls, root: PathArg | None = None, config: RepoConfig | None = None
    ) -> tuple[Repository, bool]:
        """Create the control area, blob area and an empty index.

        Idempotent: if the control area already exists nothing is touched.

        Returns:
            (repository, created) where created is False if it already existed
        """
        repo = cls(root, config)

        if repo.exists():
            logger.info(
                "Repository already initialized",
                operation="minigit.init",
                control_dir=str(repo.control_dir),
            )
            return repo, False

        repo._ensure_objects_dir()
        repo.save_index({})

        logger.info(
            "Initialized empty repository",
            operation="minigit.init",
            control_dir=str(repo.control_dir),
        )
        return repo, True

    @classmethod
    def open(cls, root: PathArg | None = None, config: RepoConfig | None = None) -> Repository:
        """Open an initialized repository.

        Raises:
            NotARepositoryError: If the control area is missing
        """
        repo = cls(root, config)
        repo.require()
        return repo

    def exists(self) -> bool:
        return self.control_dir.exists()

    def require(self) -> None:
        if not self.exists():
            raise NotARepositoryError(self.control_dir)

    def _ensure_objects_dir(self) -> None:
        try:
            self.objects_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RepositoryIOError("creating", self.objects_dir, e.strerror or str(e)) from e

    # --- Index ---

    def load_index(self) -> Index:
        return self.index_persistence.load()

    def save_index(self, index: Index) -> None:
        self.index_persistence.save(index)

    # --- Staging ---

    def normalize(self, path: PathArg) -> str:
        """Index key for ``path`` (see minigit.paths.normalize)."""
        return normalize(path, self.root)

    def _resolve(self, path: PathArg) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.root / candidate

    def _in_control_area(self, path: Path) -> bool:
        absolute = Path(os.path.normpath(path))
        return absolute == self.control_dir or self.control_dir in absolute.parents

    def stage_file(self, path: PathArg, index: Index) -> StagedFile:
        """Store one file's content and record it in ``index``.

        Mutates ``index`` in place; persisting it is the caller's job so a
        batch of files costs one index rewrite.

        Raises:
            RepositoryIOError: If the file cannot be read
            BlobWriteError: If its blob cannot be written
        """
        file_path = self._resolve(path)

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise RepositoryIOError("reading", file_path, e.strerror or str(e)) from e

        digest = hash_bytes(data)
        written = self.blobs.put(digest, data)

        rel = self.normalize(file_path)
        index[rel] = digest

        logger.debug(
            f"Staged {rel}",
            operation="minigit.stage",
            path=rel,
            digest=digest,
            new_blob=written,
        )
        return StagedFile(path=rel, digest=digest, new_blob=written)

    def _skip(self, arg: PathArg, reason: str) -> SkippedPath:
        logger.info(f"Skipping ({reason}): {arg}", operation="minigit.add", path=arg)
        return SkippedPath(path=str(arg), reason=reason)

    def add(self, paths: Sequence[PathArg]) -> AddResult:
        """Stage files and directories, then rewrite the index once.

        Directories are expanded recursively (never into the control area).
        Arguments that are neither a file nor a directory are skipped and
        reported in the result; the caller decides how to warn about them.

        Raises:
            UsageError: If no paths are given
            NotARepositoryError: If the repository is not initialized
        """
        if not paths:
            raise UsageError("Nothing specified, nothing added. Usage: minigit add <files-or-dirs>")

        self.require()

        with logger.timed("minigit.add", "Staged {staged} file(s)") as fields:
            self._ensure_objects_dir()
            index = self.load_index()

            result = AddResult()
            for arg in paths:
                target = self._resolve(arg)

                if self._in_control_area(target):
                    result.skipped.append(self._skip(arg, f"inside {self.config.control_dir}"))
                elif target.is_dir():
                    for file_path in walk(target, exclude=[self.control_dir]):
                        result.staged.append(self.stage_file(file_path, index))
                elif target.is_file():
                    result.staged.append(self.stage_file(target, index))
                else:
                    result.skipped.append(self._skip(arg, "not found"))

            self.save_index(index)
            result.total_entries = len(index)

            fields.update(
                staged=len(result.staged),
                new_blobs=result.new_blobs,
                skipped=len(result.skipped),
                total_entries=result.total_entries,
            )
        return result
