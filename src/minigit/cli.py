"""Command-line interface for mini-git."""

from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path

import yaml
from pydantic import ValidationError

from minigit.config import RepoConfig, load_config
from minigit.errors import MiniGitError, UsageError
from minigit.logging_config import configure_logging, correlation_id_var
from minigit.repository import Repository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minigit", description="Minimal content-addressed staging store.")
    parser.add_argument("--config", type=Path, help="Path to a YAML config file.")
    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("init", help="Create an empty repository in the current directory.")

    p_add = sub.add_parser("add", help="Stage files and directories.")
    p_add.add_argument("paths", nargs="*", metavar="path")

    return parser


def cmd_init(config: RepoConfig) -> int:
    repo, created = Repository.init(config=config)
    if created:
        print(f"Initialized empty mini-git repository in {repo.control_dir}")
    else:
        print(f"{repo.config.control_dir} already exists")
    return 0


def cmd_add(config: RepoConfig, paths: list[str]) -> int:
    if not paths:
        raise UsageError("Usage: minigit add <files-or-dirs>")
    repo = Repository.open(config=config)
    result = repo.add(paths)
    for skipped in result.skipped:
        print(f"Skipping ({skipped.reason}): {skipped.path}", file=sys.stderr)
    print(f"Staged {result.total_entries} path(s).")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.cmd is None:
        parser.print_help()
        return 2

    try:
        config = load_config(args.config)
        configure_logging(config.log_level, config.structured_logging, config.log_file)
        correlation_id_var.set(uuid.uuid4().hex)

        if args.cmd == "init":
            return cmd_init(config)
        if args.cmd == "add":
            return cmd_add(config, args.paths)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (ValidationError, yaml.YAMLError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 1
    except MiniGitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        correlation_id_var.set(None)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
