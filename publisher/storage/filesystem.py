from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_CHUNK_SIZE = 1024 * 1024


def ensure_dir(path: PathLike) -> Path:
    """Create `path` and every missing ancestor."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def copy_file(source: PathLike, target: PathLike, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Path:
    """Stream the bytes of `source` into `target`, replacing any existing file.

    Parent directories of `target` are created first. Both handles are closed
    on every exit path; a partially written target is left in place when the
    copy fails midway.
    """
    destination = Path(target)
    ensure_dir(destination.parent)
    with open(source, "rb") as reader, open(destination, "wb") as writer:
        shutil.copyfileobj(reader, writer, chunk_size)
    return destination


def remove_tree(path: PathLike) -> bool:
    """Delete a directory and everything under it. Returns False when nothing was there."""
    directory = Path(path)
    if not directory.exists() and not directory.is_symlink():
        return False
    if directory.is_symlink() or not directory.is_dir():
        directory.unlink()
        return True
    shutil.rmtree(directory)
    return True


def list_subdirectories(path: PathLike) -> List[str]:
    """Return names of the immediate subdirectories of `path`.

    A missing or unreadable directory yields an empty list.
    """
    try:
        with os.scandir(path) as entries:
            return [entry.name for entry in entries if entry.is_dir()]
    except OSError:
        return []


class FileSystemStorage:
    """Simple storage backend writing build artifacts to the host filesystem."""

    def __init__(self, root: PathLike, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.root = Path(root)
        self.chunk_size = chunk_size

    def resolve_build_path(self, build_id: str) -> Path:
        """Return the directory where a build's artifacts are stored."""
        return self.root / build_id

    def store(self, source: PathLike, build_id: str, file_name: str) -> Path:
        target = self.resolve_build_path(build_id) / file_name
        copy_file(source, target, chunk_size=self.chunk_size)
        logger.debug("Copied %s to %s", source, target)
        return target

    def remove(self, build_id: str) -> bool:
        removed = remove_tree(self.resolve_build_path(build_id))
        if removed:
            logger.debug("Removed build directory %s", self.resolve_build_path(build_id))
        return removed

    def list_builds(self) -> List[str]:
        return list_subdirectories(self.root)

    def write_json(self, name: str, data: Any) -> Path:
        ensure_dir(self.root)
        target = self.root / name
        payload = json.dumps(data, indent=2)
        target.write_text(payload, encoding="utf-8")
        return target

    def read_json(self, name: str, default: Any = None) -> Any:
        target = self.root / name
        if not target.exists():
            return default
        return json.loads(target.read_text(encoding="utf-8"))
