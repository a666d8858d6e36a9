"""Stored objects for MiniGit."""

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .errors import CorruptObjectError
from .hash import hash_object


class MiniGitObject(ABC):
    """Base class for all objects kept in the object store."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """Object type name ('blob' or 'commit')."""
        return self.__class__.__name__.lower()

    @property
    def hash(self) -> str:
        """
        Digest of the serialized form, computed once and cached.

        Objects are content addressed: the digest is the hash of exactly
        the bytes returned by serialize().
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash


class Blob(MiniGitObject):
    """Raw file content, without name or metadata."""

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    def text(self) -> str:
        """Decode content as UTF-8, replacing undecodable bytes."""
        return self.data.decode('utf-8', errors='replace')

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class Commit(MiniGitObject):
    """
    Immutable snapshot of the tracked files.

    A commit captures:
    - Commit message
    - Creation timestamp (Unix seconds)
    - Parent commits (none for a root, two for a merge; first is "ours")
    - The complete path -> blob digest mapping
    """

    def __init__(self):
        """Initialize empty commit."""
        super().__init__()
        self.message: str = ''
        self.timestamp: int = 0
        self.parents: List[str] = []
        self.files: Dict[str, str] = {}

    def serialize(self) -> bytes:
        """
        Serialize commit to its canonical text form.

        Format:
        timestamp <unix-seconds>
        parent <digest>          (zero or more, in order)
        file <digest> <path>     (zero or more, sorted by path)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'timestamp {self.timestamp}']

        for parent in self.parents:
            lines.append(f'parent {parent}')

        for path in sorted(self.files):
            lines.append(f'file {self.files[path]} {path}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from its text form.

        Args:
            data: Serialized commit data

        Raises:
            CorruptObjectError: If the record is malformed
        """
        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"Commit is not valid UTF-8: {e}") from e

        header, sep, message = content.partition('\n\n')
        if not sep:
            raise CorruptObjectError("Commit has no message separator")

        timestamp = None
        parents = []
        files = {}

        for line in header.split('\n'):
            key, _, value = line.partition(' ')

            if key == 'timestamp':
                try:
                    timestamp = int(value)
                except ValueError:
                    raise CorruptObjectError(f"Invalid commit timestamp: {value!r}") from None

            elif key == 'parent' and value:
                parents.append(value)

            elif key == 'file':
                digest, _, path = value.partition(' ')
                if not digest or not path:
                    raise CorruptObjectError(f"Invalid file entry: {line!r}")
                files[path] = digest

            else:
                raise CorruptObjectError(f"Unknown commit header line: {line!r}")

        if timestamp is None:
            raise CorruptObjectError("Commit has no timestamp")

        self.timestamp = timestamp
        self.parents = parents
        self.files = files
        self.message = message
        self._hash = None

    @classmethod
    def create(
        cls,
        files: Dict[str, str],
        parent_hashes: List[str],
        message: str,
        timestamp: Optional[int] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            files: Mapping of path to blob digest (complete snapshot)
            parent_hashes: List of parent commit digests
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.files = dict(files)
        commit.parents = list(parent_hashes)
        commit.message = message
        commit.timestamp = int(time.time()) if timestamp is None else timestamp
        return commit

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
