"""Test fixtures for mini-git."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from minigit.config import RepoConfig
from minigit.repository import Repository
from minigit.storage import BlobStore


HELLO_DIGEST = "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user config out of tests and drop handlers the CLI installs."""
    monkeypatch.setenv("MINIGIT_CONFIG", str(tmp_path / "no-such-config.yaml"))
    yield
    logger = logging.getLogger("minigit")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Empty working tree."""
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def config() -> RepoConfig:
    return RepoConfig()


@pytest.fixture
def repo(repo_root: Path, config: RepoConfig) -> Repository:
    """Initialized repository rooted at repo_root."""
    repository, created = Repository.init(repo_root, config)
    assert created
    return repository


@pytest.fixture
def blob_store(tmp_path: Path) -> BlobStore:
    """Blob store over an existing objects directory."""
    objects_dir = tmp_path / "objects"
    objects_dir.mkdir()
    return BlobStore(objects_dir)


def write_file(root: Path, rel: str, content: bytes | str) -> Path:
    """Create ``root/rel`` (and parents) with ``content``."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode("utf-8")
    path.write_bytes(content)
    return path
