"""
File utility functions for crash-safe JSON writes
"""
import json
import os
import time
import uuid
from pathlib import Path
from typing import Any

REPLACE_ATTEMPTS = 6


def dump_json(payload: Any) -> str:
    """Serialize a document the way presets are stored on disk"""
    return json.dumps(payload, indent=4, ensure_ascii=False)


def _temp_path_for(path: Path) -> Path:
    return path.with_name(f".{path.name}.{os.getpid()}.{uuid.uuid4().hex[:8]}.tmp")


def _write_temp(path: Path, text: str) -> Path:
    """Write text next to `path` and flush it to disk; returns the temp file"""
    tmp = _temp_path_for(path)
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    return tmp


def _fsync_directory(folder: Path) -> None:
    """Persist a directory entry change; Windows cannot open directories"""
    if os.name == "nt":
        return
    fd = os.open(folder, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink()
    except FileNotFoundError:
        pass


def write_file_atomic(path: Path, text: str) -> None:
    """
    Replace `path` with `text` in a single rename.

    Readers see either the old file or the complete new one. On Windows,
    os.replace() can briefly fail with PermissionError while another process
    holds the destination open, so it is retried a few times.
    """
    tmp = _write_temp(path, text)
    try:
        for attempt in range(REPLACE_ATTEMPTS):
            try:
                os.replace(tmp, path)
                _fsync_directory(path.parent)
                return
            except PermissionError:
                if attempt == REPLACE_ATTEMPTS - 1:
                    raise
                time.sleep(0.03 * (attempt + 1))
    finally:
        if tmp.exists():
            _discard(tmp)


def create_file_atomic(path: Path, text: str) -> None:
    """
    Publish `text` at `path` only if nothing is there yet.

    Uses a hard link so the existence check and the publish are one
    filesystem operation; raises FileExistsError when `path` is taken.
    Filesystems without hard links fall back to check-then-replace, which
    leaves a window for two writers to race on the same name.
    """
    tmp = _write_temp(path, text)
    try:
        try:
            os.link(tmp, path)
        except FileExistsError:
            raise
        except OSError:
            if path.exists():
                raise FileExistsError(str(path))
            os.replace(tmp, path)
        _fsync_directory(path.parent)
    finally:
        if tmp.exists():
            _discard(tmp)
