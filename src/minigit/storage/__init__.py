"""Storage layer for mini-git."""

from minigit.storage.blobs import BlobStore

__all__ = ["BlobStore"]
