"""Core data models for mini-git.

Identifier semantics:
- digest: SHA-1 hex of a file's raw bytes; the sole identity of a blob
- path: repository-relative, forward-slash path used as an index key
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StagedFile(BaseModel):
    """One file staged during an add."""
    path: str  # Index key
    digest: str
    new_blob: bool  # False when the object was already in the store


class SkippedPath(BaseModel):
    """A staging argument that was not staged."""
    path: str  # As given on the command line
    reason: str  # "not found" or "inside <control dir>"


class AddResult(BaseModel):
    """Outcome of one staging operation."""
    staged: list[StagedFile] = Field(default_factory=list)
    skipped: list[SkippedPath] = Field(default_factory=list)
    total_entries: int = 0  # Size of the index after the save

    @property
    def new_blobs(self) -> int:
        return sum(1 for f in self.staged if f.new_blob)
