"""Storage backends for MiniGit.

All repository state (objects, refs, index, config) and the working tree
are reached through a Storage. Paths are relative to the storage root and
always use '/' as separator.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Set

from loguru import logger

from .errors import NotFoundError, StorageError


def _normalize(path: str) -> str:
    """Normalize a relative path to forward-slash form without leading './'."""
    parts = [p for p in path.replace('\\', '/').split('/') if p and p != '.']
    return '/'.join(parts)


class Storage(ABC):
    """Byte-oriented filesystem capability used by the repository."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file or directory exists."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a file, raising NotFoundError if it is missing."""

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        """Write a file, creating parent directories as needed."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file if present."""

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create a directory (and its parents) if missing."""

    @abstractmethod
    def list_files_under(self, root: str = '') -> List[str]:
        """
        List regular files below a directory.

        Args:
            root: Directory relative to the storage root ('' for the root)

        Returns:
            Sorted paths relative to the storage root
        """

    def read_text(self, path: str) -> str:
        """Read a file as UTF-8 text."""
        return self.read(path).decode('utf-8')

    def write_text(self, path: str, text: str) -> None:
        """Write UTF-8 text to a file."""
        self.write(path, text.encode('utf-8'))


class FileStorage(Storage):
    """Storage backed by a directory on the local filesystem."""

    def __init__(self, root):
        """
        Initialize file storage.

        Args:
            root: Directory all relative paths are resolved against
        """
        self.root = Path(root)

    def _path(self, path: str) -> Path:
        rel = _normalize(path)
        return self.root / rel if rel else self.root

    def exists(self, path: str) -> bool:
        return self._path(path).exists()

    def read(self, path: str) -> bytes:
        full = self._path(path)
        if not full.is_file():
            raise NotFoundError(f"File not found: {path}")
        try:
            return full.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, path: str, data: bytes) -> None:
        full = self._path(path)
        try:
            full.parent.mkdir(parents=True, exist_ok=True)
            full.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def remove(self, path: str) -> None:
        full = self._path(path)
        if not full.is_file():
            return
        try:
            full.unlink()
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
        logger.debug("removed {}", path)

    def mkdir(self, path: str) -> None:
        try:
            self._path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directory {path}: {e}") from e

    def list_files_under(self, root: str = '') -> List[str]:
        base = self._path(root)
        if not base.is_dir():
            return []

        files = []
        for item in base.rglob('*'):
            if item.is_file():
                files.append(item.relative_to(self.root).as_posix())
        return sorted(files)

    def __repr__(self) -> str:
        return f"FileStorage(root={self.root})"


class MemoryStorage(Storage):
    """A memory-backed storage, mostly useful for tests."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.dirs: Set[str] = set()

    def exists(self, path: str) -> bool:
        rel = _normalize(path)
        if rel in self.files or rel in self.dirs or not rel:
            return True
        prefix = rel + '/'
        return any(name.startswith(prefix) for name in self.files)

    def read(self, path: str) -> bytes:
        try:
            return self.files[_normalize(path)]
        except KeyError:
            raise NotFoundError(f"File not found: {path}") from None

    def write(self, path: str, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        self.files[_normalize(path)] = data

    def remove(self, path: str) -> None:
        self.files.pop(_normalize(path), None)

    def mkdir(self, path: str) -> None:
        self.dirs.add(_normalize(path))

    def list_files_under(self, root: str = '') -> List[str]:
        rel = _normalize(root)
        if not rel:
            return sorted(self.files)
        prefix = rel + '/'
        return sorted(name for name in self.files if name.startswith(prefix))

    def __repr__(self) -> str:
        return f"MemoryStorage(files={len(self.files)})"
