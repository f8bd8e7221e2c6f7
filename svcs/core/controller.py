"""SVCS controller - main orchestrator.

Coordinates the state store, hasher, and commit store for each verb.
Every method returns a result dictionary; user errors come back as
``{"success": False, "reason": ...}`` and leave state untouched, while
environment failures raise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..utils.env import get_repo_dir, log_debug
from .commit_store import CommitStore
from .hasher import content_hash
from .state import Commit, RepositoryState, StateStore


class VcsController:
    """Main controller for SVCS operations."""

    COMMITS_DIR_NAME = "commits"

    def __init__(
        self,
        working_dir: Path | str | None = None,
        repo_dir: Path | str | None = None,
        state: RepositoryState | None = None,
    ):
        """Initialize controller and load repository state.

        Args:
            working_dir: Directory tracked paths are relative to (defaults to cwd)
            repo_dir: Repository directory (defaults to <working_dir>/vcs)
            state: Preloaded state (loaded from disk when omitted)
        """
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.repo_dir = Path(repo_dir) if repo_dir else get_repo_dir(self.working_dir)
        self.state_store = StateStore(self.repo_dir)
        self.commit_store = CommitStore(
            commits_dir=self.repo_dir / self.COMMITS_DIR_NAME,
            working_dir=self.working_dir,
        )
        self.state = state if state is not None else self.state_store.load()

    def config(self, name: str | None = None) -> dict[str, Any]:
        """Get or set the username."""
        user = self.state.user
        if name:
            user.name = name
            self.state_store.save_user(user)
            log_debug(f"Username set to {name!r}")

        if not user.name:
            return {"success": False, "reason": "no_user"}
        return {"success": True, "name": user.name}

    def add(self, path: str | None = None) -> dict[str, Any]:
        """Track a file, or list tracked files when no path is given."""
        index = self.state.index
        if not path:
            return {"success": True, "files": list(index.files)}

        target = self.working_dir / path
        if not target.is_file() or self._inside_repo(target):
            return {"success": False, "reason": "not_found", "path": path}

        index.files.append(path)
        self.state_store.save_index(index)
        return {"success": True, "path": path}

    def log(self) -> dict[str, Any]:
        """List commits, most recent first."""
        return {"success": True, "commits": self.state.log.newest_first()}

    def current_hash(self) -> str:
        """Hash the tracked files as they are now."""
        return content_hash(self.state.index.files, base_dir=self.working_dir)

    def commit(self, message: str | None = None) -> dict[str, Any]:
        """Snapshot tracked files and append a commit.

        Only the most recent commit is compared, so returning to an older
        state creates a new entry.
        """
        if message is None:
            return {"success": False, "reason": "no_message"}

        commit_hash = self.current_hash()
        latest = self.state.log.latest
        if latest is not None and latest.hash == commit_hash:
            return {"success": False, "reason": "nothing_to_commit", "hash": commit_hash}

        file_count = self.commit_store.snapshot(commit_hash, self.state.index.files)
        commit = Commit(hash=commit_hash, author=self.state.user.name, message=message)
        self.state.log = self.state_store.append_commit(commit)

        return {"success": True, "hash": commit_hash, "fileCount": file_count}

    def checkout(self, commit_id: str | None = None) -> dict[str, Any]:
        """Restore tracked files from a commit in the log."""
        if not commit_id:
            return {"success": False, "reason": "no_commit_id"}

        if not self.state.log.contains(commit_id):
            return {"success": False, "reason": "unknown_commit", "hash": commit_id}

        file_count = self.commit_store.restore(commit_id, self.state.index.files)
        return {"success": True, "hash": commit_id, "fileCount": file_count}

    def _inside_repo(self, target: Path) -> bool:
        """Files under the repository directory can never be tracked."""
        return target.resolve().is_relative_to(self.repo_dir.resolve())
