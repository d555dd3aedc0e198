"""Depth-first expansion of directory arguments into files to stage.

Symlink policy: a symlink to a regular file is yielded (its target's bytes
get staged under the link's path); a symlink to a directory is not
descended, which keeps the walk free of cycles. Broken links, sockets,
FIFOs and device nodes are skipped.
"""

from __future__ import annotations

import os
from collections.abc import Collection
from pathlib import Path

from minigit.errors import RepositoryIOError


def walk(root: Path, exclude: Collection[Path] = ()) -> list[Path]:
    """Return every regular file under ``root``, depth first.

    Entries within a directory are visited in name order so repeated walks
    of an unchanged tree give the same sequence.

    Args:
        root: Directory to expand
        exclude: Absolute directory paths that are never entered

    Raises:
        RepositoryIOError: If any directory cannot be read; no partial
            result is returned
    """
    skip = {Path(os.path.abspath(p)) for p in exclude}
    files: list[Path] = []
    _walk_into(Path(root), skip, files)
    return files


def _walk_into(directory: Path, skip: set[Path], files: list[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise RepositoryIOError("reading directory", directory, e.strerror or str(e)) from e

    for entry in entries:
        entry_path = directory / entry.name
        try:
            if entry.is_dir(follow_symlinks=False):
                if Path(os.path.abspath(entry_path)) not in skip:
                    _walk_into(entry_path, skip, files)
            elif entry.is_file():
                files.append(entry_path)
        except OSError as e:
            raise RepositoryIOError("reading directory", directory, e.strerror or str(e)) from e
