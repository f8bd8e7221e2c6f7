"""Commit storage for SVCS.

Each commit is a directory named by its hash holding a full copy of every
tracked file at its relative path.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePath
from typing import Iterable

from ..utils.env import log_debug
from ..utils.fs import durable_copy
from .state import SvcsError


PARENT_PLACEHOLDER = "__parent__"
ROOT_PLACEHOLDER = "__root__"
RESERVED_NAME = re.compile(r"_*__(parent|root)__")


class SnapshotMissingError(SvcsError):
    """Raised when a snapshot directory or one of its files is missing."""


def snapshot_relpath(path: str) -> Path:
    """Map a tracked path to its location inside a snapshot directory.

    Relative paths are kept as is. Absolute paths are placed under
    ROOT_PLACEHOLDER and '..' components become PARENT_PLACEHOLDER, so the
    result always stays inside the snapshot directory. A literal component
    matching RESERVED_NAME gets one more '_', so distinct tracked paths
    never share a snapshot file.
    """
    pure = PurePath(path)
    parts = [ROOT_PLACEHOLDER] if pure.anchor else []
    for part in pure.parts:
        if part == pure.anchor or part == ".":
            continue
        if part == "..":
            parts.append(PARENT_PLACEHOLDER)
        elif RESERVED_NAME.fullmatch(part):
            parts.append("_" + part)
        else:
            parts.append(part)
    return Path(*parts)


class CommitStore:
    """Creates and restores commit snapshots."""

    def __init__(self, commits_dir: Path | str, working_dir: Path | str):
        """Initialize commit store.

        Args:
            commits_dir: Directory holding one subdirectory per commit
            working_dir: Directory tracked paths are relative to
        """
        self.commits_dir = Path(commits_dir)
        self.working_dir = Path(working_dir)

    def snapshot_dir(self, commit_hash: str) -> Path:
        return self.commits_dir / commit_hash

    def exists(self, commit_hash: str) -> bool:
        return self.snapshot_dir(commit_hash).is_dir()

    def snapshot(self, commit_hash: str, paths: Iterable[str]) -> int:
        """Copy the current content of tracked files into a snapshot.

        An existing directory for the same hash is reused and its files
        are overwritten one by one. Every copy is fsynced before return.

        Args:
            commit_hash: Commit id naming the snapshot directory
            paths: Tracked file paths

        Returns:
            Number of files copied

        Raises:
            OSError: If a tracked file cannot be read or the snapshot written
        """
        target = self.snapshot_dir(commit_hash)
        target.mkdir(parents=True, exist_ok=True)

        count = 0
        for path in paths:
            durable_copy(self.working_dir / path, target / snapshot_relpath(path))
            count += 1

        log_debug(f"Snapshot {commit_hash}: {count} files")
        return count

    def restore(self, commit_hash: str, paths: Iterable[str]) -> int:
        """Overwrite tracked files with their content from a snapshot.

        Every expected file is checked before anything is written, so a
        missing snapshot leaves the working directory untouched.

        Args:
            commit_hash: Commit id to restore
            paths: Tracked file paths

        Returns:
            Number of files restored

        Raises:
            SnapshotMissingError: If the snapshot or any expected file is missing
            OSError: If a file cannot be copied
        """
        source = self.snapshot_dir(commit_hash)
        if not source.is_dir():
            raise SnapshotMissingError(f"Snapshot not found: {commit_hash}")

        pairs = [(source / snapshot_relpath(p), self.working_dir / p) for p in paths]
        for src, _ in pairs:
            if not src.is_file():
                raise SnapshotMissingError(f"Snapshot {commit_hash} is missing {src}")

        for src, dst in pairs:
            durable_copy(src, dst)

        log_debug(f"Restored {commit_hash}: {len(pairs)} files")
        return len(pairs)
