"""Content hashing for SVCS.

A commit id is the SHA-256 digest of the concatenated bytes of every
tracked file, in index order, truncated to HASH_PREFIX_BYTES and
hex-encoded. Truncation keeps ids short at the cost of collision
resistance; the commit log, not the hash, decides whether a commit exists.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable


HASH_PREFIX_BYTES = 16
CHUNK_SIZE = 64 * 1024


def content_hash(paths: Iterable[str], base_dir: Path | str | None = None) -> str:
    """Compute the commit id for the given tracked files.

    Order matters and duplicate paths are hashed once per occurrence.

    Args:
        paths: Tracked file paths, in index order
        base_dir: Directory relative paths are resolved against

    Returns:
        Lowercase hex string of HASH_PREFIX_BYTES bytes

    Raises:
        OSError: If any tracked file cannot be read
    """
    base = Path(base_dir) if base_dir is not None else None
    digest = hashlib.sha256()

    for path in paths:
        file_path = base / path if base is not None else Path(path)
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)

    return digest.digest()[:HASH_PREFIX_BYTES].hex()
