"""Utility modules for SVCS."""

from .fs import atomic_write, durable_copy, fsync_dir, load_json_file
from .env import get_repo_dir, get_work_tree, is_debug_mode, log_debug

__all__ = [
    "atomic_write",
    "durable_copy",
    "fsync_dir",
    "load_json_file",
    "get_repo_dir",
    "get_work_tree",
    "is_debug_mode",
    "log_debug",
]
