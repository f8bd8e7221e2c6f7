"""Environment utilities for SVCS."""

from __future__ import annotations

import os
import sys
from pathlib import Path


REPO_DIR_NAME = "vcs"


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if SVCS_DEBUG is set to a truthy value
    """
    val = os.environ.get("SVCS_DEBUG", "").lower()
    return val in ("1", "true", "yes", "on")


def log_debug(message: str) -> None:
    """Log debug message to stderr.

    Only outputs if SVCS_DEBUG is enabled.
    """
    if is_debug_mode():
        print(f"[svcs] {message}", file=sys.stderr)


def get_work_tree() -> Path:
    """Get the working directory that tracked paths are relative to.

    Returns:
        SVCS_WORK_TREE if set, else the current directory
    """
    val = os.environ.get("SVCS_WORK_TREE")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return Path.cwd()


def get_repo_dir(work_tree: Path | None = None) -> Path:
    """Get the repository directory holding state files and snapshots.

    Args:
        work_tree: Working directory (defaults to get_work_tree())

    Returns:
        SVCS_DIR if set, else <work_tree>/vcs
    """
    val = os.environ.get("SVCS_DIR")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return (work_tree or get_work_tree()) / REPO_DIR_NAME
