"""Configuration loading for mini-git."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


DEFAULT_CONFIG_PATH = Path.home() / ".config" / "minigit" / "config.yaml"
CONFIG_ENV_VAR = "MINIGIT_CONFIG"


class RepoConfig(BaseModel):
    """Repository layout and logging configuration."""
    # Layout of the control area, relative to the repository root
    control_dir: str = Field(default=".minigit", min_length=1)
    objects_dir: str = Field(default="objects", min_length=1)
    index_file: str = Field(default="index.json", min_length=1)
    history_file: str = Field(default="commits.jsonl", min_length=1)  # Reserved, never written

    # Logging configuration
    log_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR
    structured_logging: bool = True  # JSON format vs human-readable
    log_file: str | None = None  # Optional file path for logs


def load_config(config_path: Path | None = None) -> RepoConfig:
    """Load configuration from a YAML file.

    Lookup order: explicit path, then $MINIGIT_CONFIG, then
    ~/.config/minigit/config.yaml. A missing file yields defaults.

    Args:
        config_path: Path to config file

    Returns:
        RepoConfig instance
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return RepoConfig.model_validate(data)

    return RepoConfig()
