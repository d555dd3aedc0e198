"""Repository-relative path normalization."""

from __future__ import annotations

import os
from pathlib import Path

from minigit.errors import RepositoryIOError


def current_root() -> Path:
    """Absolute path of the process working directory."""
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise RepositoryIOError("determining", "working directory", e.strerror or str(e)) from e


def normalize(path: str | os.PathLike[str], root: Path | None = None) -> str:
    """Express ``path`` relative to ``root`` as a forward-slash string.

    Relative inputs are resolved against ``root`` (default: cwd). The
    result is lexical: ``..`` segments are collapsed but symlinks are not
    followed. A path outside ``root`` is returned as an absolute path
    verbatim, which makes that index entry machine-specific.

    Filename bytes that are not valid UTF-8 become U+FFFD so every key can
    be written to and read back from the JSON index.
    """
    if root is None:
        root = current_root()

    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root / candidate
    candidate = Path(os.path.normpath(candidate))

    try:
        rel = candidate.relative_to(root)
    except ValueError:
        return _lossy(candidate.as_posix())
    return _lossy(rel.as_posix())


def _lossy(text: str) -> str:
    return os.fsencode(text).decode("utf-8", "replace")
