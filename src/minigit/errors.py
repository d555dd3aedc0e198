"""Custom exceptions for mini-git with user-friendly context."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class MiniGitError(Exception):
    """Base error for mini-git."""

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        parts = [self.message]

        if self.context:
            ctx_parts = [f"{k}={v}" for k, v in self.context.items() if v is not None]
            if ctx_parts:
                parts.append(f"({', '.join(ctx_parts)})")

        return " ".join(parts)


class NotARepositoryError(MiniGitError):
    """Control area is missing; the repository was never initialized."""

    def __init__(self, control_dir: Path, **context: Any):
        self.control_dir = control_dir
        super().__init__(
            f"Not a mini-git repository (missing {control_dir.name}). "
            f"Run `minigit init` first.",
            control_dir=str(control_dir),
            **context
        )


class RepositoryIOError(MiniGitError):
    """A file or directory could not be read or written."""

    def __init__(
        self,
        action: str,
        path: Path | str,
        reason: str | None = None,
        **context: Any
    ):
        self.path = Path(path)
        msg = f"Failed {action} {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, **context)


class BlobWriteError(RepositoryIOError):
    """A blob could not be written to the object store."""

    def __init__(self, digest: str, path: Path, reason: str | None = None, **context: Any):
        self.digest = digest
        super().__init__("writing blob", path, reason, digest=digest, **context)


class IndexParseError(MiniGitError):
    """Persisted staging index exists but is not a path -> digest object."""

    def __init__(self, path: Path, detail: str | None = None, **context: Any):
        self.path = path
        msg = f"Could not parse staging index {path}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg, **context)


class UsageError(MiniGitError):
    """Command was invoked with missing or invalid arguments."""
    pass
