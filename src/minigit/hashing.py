"""Content hashing: the identity function for blobs.

Digests are SHA-1 over the raw file bytes with no header, rendered as
40 lowercase hex characters. Objects written by other implementations of
the same layout hash identically.
"""

from __future__ import annotations

import hashlib
import re

DIGEST_HEX_LENGTH = 40

_DIGEST_RE = re.compile(r"[0-9a-f]{40}")


def hash_bytes(data: bytes) -> str:
    """Return the lowercase hex SHA-1 digest of ``data``."""
    return hashlib.sha1(data).hexdigest()


def is_digest(value: str) -> bool:
    """Check whether ``value`` is a well-formed 40-char lowercase hex digest."""
    return _DIGEST_RE.fullmatch(value) is not None
