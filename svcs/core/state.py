"""Repository state for SVCS.

Three independent records (user, tracked-file index, commit log) are each
stored as a JSON file under the repository directory. Saves replace the
whole file; nothing is appended at the file level.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..utils.env import log_debug
from ..utils.fs import atomic_write, load_json_file


class SvcsError(Exception):
    """Base class for fatal repository errors."""


class StateDecodeError(SvcsError):
    """Raised when a state file cannot be decoded into its record."""


def _require_dict(data: Any, record: str) -> dict:
    if not isinstance(data, dict):
        raise StateDecodeError(f"{record}: expected a JSON object")
    return data


def _require_str(value: Any, record: str, key: str) -> str:
    if not isinstance(value, str):
        raise StateDecodeError(f"{record}: '{key}' must be a string")
    return value


@dataclass
class User:
    """Registered identity used as commit author."""
    name: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> User:
        data = _require_dict(data, "config")
        return cls(name=_require_str(data.get("name", ""), "config", "name"))


@dataclass
class TrackedFileIndex:
    """Ordered list of tracked paths. Duplicates are kept as added."""
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"files": list(self.files)}

    @classmethod
    def from_dict(cls, data: Any) -> TrackedFileIndex:
        data = _require_dict(data, "index")
        files = data.get("files") or []
        if not isinstance(files, list):
            raise StateDecodeError("index: 'files' must be a list")
        return cls(files=[_require_str(f, "index", "files") for f in files])


@dataclass(frozen=True)
class Commit:
    """A single immutable log entry."""
    hash: str
    author: str
    message: str

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "author": self.author,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Commit:
        data = _require_dict(data, "log")
        return cls(
            hash=_require_str(data.get("hash", ""), "log", "hash"),
            author=_require_str(data.get("author", ""), "log", "author"),
            message=_require_str(data.get("message", ""), "log", "message"),
        )


@dataclass
class CommitLog:
    """Commits in insertion (chronological) order."""
    commits: list[Commit] = field(default_factory=list)

    @property
    def latest(self) -> Commit | None:
        return self.commits[-1] if self.commits else None

    def contains(self, commit_hash: str) -> bool:
        return any(c.hash == commit_hash for c in self.commits)

    def newest_first(self) -> list[Commit]:
        return list(reversed(self.commits))

    def to_dict(self) -> dict:
        return {"commits": [c.to_dict() for c in self.commits]}

    @classmethod
    def from_dict(cls, data: Any) -> CommitLog:
        data = _require_dict(data, "log")
        commits = data.get("commits") or []
        if not isinstance(commits, list):
            raise StateDecodeError("log: 'commits' must be a list")
        return cls(commits=[Commit.from_dict(c) for c in commits])


@dataclass
class RepositoryState:
    """All persisted records, loaded once per invocation."""
    user: User = field(default_factory=User)
    index: TrackedFileIndex = field(default_factory=TrackedFileIndex)
    log: CommitLog = field(default_factory=CommitLog)


class StateStore:
    """Loads and saves the repository records."""

    CONFIG_NAME = "config.txt"
    INDEX_NAME = "index.txt"
    LOG_NAME = "log.txt"

    def __init__(self, repo_dir: Path | str):
        """Initialize state store.

        Args:
            repo_dir: Repository directory holding the record files
        """
        self.repo_dir = Path(repo_dir)

    @property
    def config_path(self) -> Path:
        return self.repo_dir / self.CONFIG_NAME

    @property
    def index_path(self) -> Path:
        return self.repo_dir / self.INDEX_NAME

    @property
    def log_path(self) -> Path:
        return self.repo_dir / self.LOG_NAME

    def load(self) -> RepositoryState:
        """Load all three records.

        Raises:
            StateDecodeError: If any record file is corrupt
            OSError: If any record file exists but cannot be read
        """
        return RepositoryState(
            user=self.load_user(),
            index=self.load_index(),
            log=self.load_log(),
        )

    def load_user(self) -> User:
        data = self._read(self.config_path)
        return User() if data is None else User.from_dict(data)

    def load_index(self) -> TrackedFileIndex:
        data = self._read(self.index_path)
        return TrackedFileIndex() if data is None else TrackedFileIndex.from_dict(data)

    def load_log(self) -> CommitLog:
        data = self._read(self.log_path)
        return CommitLog() if data is None else CommitLog.from_dict(data)

    def save_user(self, user: User) -> None:
        self._write(self.config_path, user.to_dict())

    def save_index(self, index: TrackedFileIndex) -> None:
        self._write(self.index_path, index.to_dict())

    def save_log(self, log: CommitLog) -> None:
        self._write(self.log_path, log.to_dict())

    def append_commit(self, commit: Commit) -> CommitLog:
        """Append a commit to the persisted log.

        Reads the full log from disk, appends in memory, and writes the
        full log back.

        Args:
            commit: Commit to append

        Returns:
            The log as written
        """
        log = self.load_log()
        log.commits.append(commit)
        self.save_log(log)
        log_debug(f"Appended commit {commit.hash} ({len(log.commits)} total)")
        return log

    def _read(self, path: Path) -> Any:
        try:
            return load_json_file(path)
        except json.JSONDecodeError as e:
            raise StateDecodeError(f"{path}: {e}") from e

    def _write(self, path: Path, data: dict) -> None:
        atomic_write(path, json.dumps(data, indent=2), mode="w")
        log_debug(f"Wrote {path}")
