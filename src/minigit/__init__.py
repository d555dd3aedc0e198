"""mini-git: a minimal content-addressed staging store.

Hashes file contents with SHA-1, keeps each unique blob once under
.minigit/objects/, and maintains the path -> digest staging index in
.minigit/index.json.

Key features:
- Write-once, deduplicated blob store
- Whole-file atomic index rewrites, one per staging operation
- Explicit Repository handle instead of implicit working-directory state
"""

__version__ = "0.1.0"

from minigit.errors import (
    BlobWriteError,
    IndexParseError,
    MiniGitError,
    NotARepositoryError,
    RepositoryIOError,
    UsageError,
)
from minigit.hashing import hash_bytes
from minigit.repository import Repository

__all__ = [
    "BlobWriteError",
    "IndexParseError",
    "MiniGitError",
    "NotARepositoryError",
    "Repository",
    "RepositoryIOError",
    "UsageError",
    "hash_bytes",
    "__version__",
]
