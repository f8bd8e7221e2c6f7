"""Core modules for SVCS."""

from .commit_store import CommitStore, SnapshotMissingError
from .controller import VcsController
from .hasher import content_hash
from .state import (
    Commit,
    CommitLog,
    RepositoryState,
    StateDecodeError,
    StateStore,
    SvcsError,
    TrackedFileIndex,
    User,
)

__all__ = [
    "Commit",
    "CommitLog",
    "CommitStore",
    "RepositoryState",
    "SnapshotMissingError",
    "StateDecodeError",
    "StateStore",
    "SvcsError",
    "TrackedFileIndex",
    "User",
    "VcsController",
    "content_hash",
]
