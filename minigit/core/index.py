"""Index (staging area) implementation."""

from typing import Dict, Optional

from loguru import logger

from .errors import CorruptObjectError


class Index:
    """
    MiniGit index (staging area).

    Maps file paths to the blob digests that will be recorded by the next
    commit. Persisted as one '<digest> <path>' line per entry.
    """

    def __init__(self):
        """Initialize empty index."""
        self.entries: Dict[str, str] = {}

    def add_entry(self, path: str, digest: str) -> None:
        """Add or update an entry."""
        self.entries[path] = digest

    def add_file(self, repo, path: str) -> str:
        """
        Stage a working-tree file.

        Args:
            repo: Repository instance
            path: File path relative to the work tree

        Returns:
            str: Digest of the staged content

        Raises:
            NotFoundError: If the file does not exist
        """
        content = repo.storage.read(path)
        digest = repo.objects.put(content)
        self.add_entry(path, digest)
        logger.debug("staged {} as {}", path, digest[:7])
        return digest

    def remove_entry(self, path: str) -> None:
        self.entries.pop(path, None)

    def get_entry(self, path: str) -> Optional[str]:
        return self.entries.get(path)

    def clear(self) -> None:
        """Clear all entries from index."""
        self.entries.clear()

    def serialize(self) -> bytes:
        lines = [f"{self.entries[path]} {path}\n" for path in sorted(self.entries)]
        return ''.join(lines).encode('utf-8')

    def write(self, storage, index_path: str) -> None:
        """
        Write index to storage.

        Args:
            storage: Storage to write to
            index_path: Path of the index file
        """
        storage.write(index_path, self.serialize())

    def read(self, storage, index_path: str) -> None:
        """
        Read index from storage. A missing file gives an empty index.

        Raises:
            CorruptObjectError: If a line cannot be parsed
        """
        self.entries.clear()
        if not storage.exists(index_path):
            return

        for line in storage.read_text(index_path).splitlines():
            if not line:
                continue
            digest, sep, path = line.partition(' ')
            if not sep or not path:
                raise CorruptObjectError(f"Invalid index line: {line!r}")
            self.entries[path] = digest

    @classmethod
    def load(cls, repo) -> 'Index':
        """Read the repository's index."""
        index = cls()
        index.read(repo.storage, repo.index_file)
        return index

    def save(self, repo) -> None:
        """Write the index back to the repository."""
        self.write(repo.storage, repo.index_file)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
