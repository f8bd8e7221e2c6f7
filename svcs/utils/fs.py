"""File system utilities for SVCS.

Provides durable atomic writes, durable file copies, and JSON record loading.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any


def atomic_write(file_path: Path | str, content: str | bytes, mode: str = "w") -> None:
    """Write content atomically using tempfile + fsync + rename pattern.

    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode ('w' for text, 'wb' for binary)
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory for atomic rename
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, mode) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    fsync_dir(path.parent)


def durable_copy(src: Path | str, dst: Path | str) -> None:
    """Copy a file's bytes to dst, fsyncing before the copy becomes visible.

    The destination is replaced in one step, so readers never observe a
    half-written file. Permission bits follow the source.

    Args:
        src: File to read
        dst: File to create or overwrite
    """
    src_path = Path(src)
    dst_path = Path(dst)
    dst_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=dst_path.parent,
        prefix=f".{dst_path.name}.",
        suffix=".tmp"
    )

    try:
        with open(src_path, "rb") as fsrc, os.fdopen(fd, "wb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
            fdst.flush()
            os.fsync(fdst.fileno())
        shutil.copymode(src_path, tmp_path)
        os.replace(tmp_path, dst_path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    fsync_dir(dst_path.parent)


def fsync_dir(dir_path: Path | str) -> None:
    """Flush a directory entry so a completed rename survives a crash.

    No-op on platforms that cannot open directories (Windows).
    """
    if os.name != "posix":
        return
    fd = os.open(dir_path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def load_json_file(file_path: Path | str) -> Any:
    """Load a JSON file, treating a missing or blank file as absent.

    Decode errors propagate to the caller.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON, or None if the file is missing or blank

    Raises:
        json.JSONDecodeError: If the file holds invalid JSON
        OSError: If the file exists but cannot be read
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        return None

    if not text.strip():
        return None
    return json.loads(text)
