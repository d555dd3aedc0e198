"""Staging index for mini-git."""

from minigit.index.persistence import Index, IndexPersistence

__all__ = ["Index", "IndexPersistence"]
