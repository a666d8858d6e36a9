"""Content-addressed object store for MiniGit."""

import zlib
from typing import Tuple

from loguru import logger

from .errors import CorruptObjectError, ObjectNotFoundError
from .hash import hash_object
from .objects import MiniGitObject, Blob, Commit
from .storage import Storage

OBJECT_TYPES = {
    'blob': Blob,
    'commit': Commit,
}


class ObjectStore:
    """
    Append-only store of immutable objects keyed by content digest.

    Objects are stored compressed with zlib under
    objects/<first 2 digest chars>/<remaining 38 chars>, with a
    '<type> <size>\\0' header in front of the content. The digest covers
    the content only, so equal bytes always map to the same key.
    """

    def __init__(self, storage: Storage, objects_dir: str):
        """
        Initialize object store.

        Args:
            storage: Storage the objects live in
            objects_dir: Directory of the object database, relative to storage
        """
        self.storage = storage
        self.objects_dir = objects_dir

    def object_path(self, digest: str) -> str:
        """Get storage path for an object."""
        return f"{self.objects_dir}/{digest[:2]}/{digest[2:]}"

    def exists(self, digest: str) -> bool:
        """Check if an object is stored under digest."""
        if not digest:
            return False
        return self.storage.exists(self.object_path(digest))

    def put(self, content: bytes, obj_type: str = 'blob') -> str:
        """
        Store content and return its digest.

        Writing content that is already present is a no-op.

        Args:
            content: Raw object content
            obj_type: Object type recorded in the header

        Returns:
            str: Digest of content
        """
        digest = hash_object(content)
        path = self.object_path(digest)

        if self.storage.exists(path):
            return digest

        header = f"{obj_type} {len(content)}\0".encode()
        self.storage.write(path, zlib.compress(header + content))
        logger.debug("stored {} {} ({} bytes)", obj_type, digest[:7], len(content))

        return digest

    def read(self, digest: str) -> Tuple[str, bytes]:
        """
        Read an object and its type.

        Args:
            digest: Object digest

        Returns:
            Tuple of (object type, content)

        Raises:
            ObjectNotFoundError: If nothing is stored under digest
            CorruptObjectError: If the stored data cannot be decoded
        """
        path = self.object_path(digest) if digest else ''
        if not digest or not self.storage.exists(path):
            raise ObjectNotFoundError(digest)

        try:
            raw = zlib.decompress(self.storage.read(path))
        except zlib.error as e:
            raise CorruptObjectError(f"Object {digest} is not readable: {e}") from e

        null_idx = raw.find(b'\0')
        if null_idx < 0:
            raise CorruptObjectError(f"Object {digest} has no header")

        header = raw[:null_idx].decode('utf-8', errors='replace')
        content = raw[null_idx + 1:]

        try:
            obj_type, size_str = header.split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise CorruptObjectError(f"Invalid object header: {header}") from None

        if len(content) != size:
            raise CorruptObjectError(
                f"Object size mismatch: expected {size}, got {len(content)}"
            )

        return obj_type, content

    def get(self, digest: str) -> bytes:
        """Return the content stored under digest."""
        return self.read(digest)[1]

    def write_object(self, obj: MiniGitObject) -> str:
        """Store a Blob or Commit and return its digest."""
        return self.put(obj.serialize(), obj.type)

    def read_object(self, digest: str) -> MiniGitObject:
        """
        Read and deserialize an object.

        Returns:
            MiniGitObject: Blob or Commit
        """
        obj_type, content = self.read(digest)

        cls = OBJECT_TYPES.get(obj_type)
        if cls is None:
            raise CorruptObjectError(f"Unknown object type: {obj_type}")

        obj = cls()
        obj.deserialize(content)
        obj._hash = digest
        return obj

    def __repr__(self) -> str:
        return f"ObjectStore({self.objects_dir})"
