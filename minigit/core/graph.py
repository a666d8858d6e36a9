"""Read-only traversal of the commit graph."""

from collections import deque
from typing import Deque, Dict, Iterator, Optional, Tuple

from loguru import logger

from .errors import CorruptObjectError, NotFoundError, ObjectNotFoundError
from .objects import Commit
from .store import ObjectStore


class CommitGraph:
    """
    Walks parent links between commits in an object store.

    Handles:
    - Loading commit records
    - Linear history (first-parent chain)
    - Common ancestor discovery for merges
    """

    def __init__(self, store: ObjectStore):
        """
        Initialize commit graph.

        Args:
            store: Object store holding the commits
        """
        self.store = store

    def load(self, digest: str) -> Commit:
        """
        Load a commit record.

        Args:
            digest: Commit digest

        Returns:
            Commit: The deserialized commit

        Raises:
            ObjectNotFoundError: If no object exists under digest
            CorruptObjectError: If the object is not a well-formed commit
        """
        try:
            obj_type, content = self.store.read(digest)
        except ObjectNotFoundError:
            raise ObjectNotFoundError(digest, 'Commit') from None

        if obj_type != 'commit':
            raise CorruptObjectError(f"Object {digest} is a {obj_type}, not a commit")

        commit = Commit()
        commit.deserialize(content)
        commit._hash = digest
        return commit

    def first_parent_chain(self, start: str) -> Iterator[Commit]:
        """
        Yield start's commit, then each first parent until a root commit.

        Args:
            start: Digest to start from

        Yields:
            Commit objects, newest first
        """
        current = start
        while current:
            commit = self.load(current)
            yield commit
            current = commit.parents[0] if commit.parents else None

    def find_common_ancestor(self, a: Optional[str], b: Optional[str]) -> Optional[str]:
        """
        Find a common ancestor with an alternating bidirectional BFS.

        One node is popped from each side per round, side A first. The first
        popped node already seen by the other side is returned. With several
        merge paths this need not be the lowest common ancestor.

        Commits that cannot be loaded during the search are not expanded.

        Args:
            a: First commit digest (empty for no history)
            b: Second commit digest (empty for no history)

        Returns:
            Digest of the common ancestor, or None if the histories are disjoint
        """
        visited_a: Dict[str, int] = {}
        visited_b: Dict[str, int] = {}
        queue_a: Deque[Tuple[str, int]] = deque()
        queue_b: Deque[Tuple[str, int]] = deque()

        if a:
            visited_a[a] = 0
            queue_a.append((a, 0))
        if b:
            visited_b[b] = 0
            queue_b.append((b, 0))

        while queue_a or queue_b:
            if queue_a:
                found = self._expand(queue_a, visited_a, visited_b)
                if found:
                    return found

            if queue_b:
                found = self._expand(queue_b, visited_b, visited_a)
                if found:
                    return found

        logger.debug("no common ancestor for {} and {}", a, b)
        return None

    def _expand(
        self,
        queue: Deque[Tuple[str, int]],
        visited: Dict[str, int],
        other_visited: Dict[str, int]
    ) -> Optional[str]:
        """Pop one node from a frontier; return it if the other side has seen it."""
        current, depth = queue.popleft()

        if current in other_visited:
            logger.debug(
                "common ancestor {} at depths {}/{}",
                current[:7], depth, other_visited[current]
            )
            return current

        try:
            commit = self.load(current)
        except (NotFoundError, CorruptObjectError) as e:
            logger.warning("skipping unreadable commit during ancestor search: {}", e)
            return None

        for parent in commit.parents:
            if parent not in visited:
                visited[parent] = depth + 1
                queue.append((parent, depth + 1))

        return None

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """
        Check whether ancestor is reachable from descendant via parent links.

        A commit counts as its own ancestor.
        """
        to_visit = deque([descendant])
        seen = set()

        while to_visit:
            current = to_visit.popleft()
            if current == ancestor:
                return True
            if current in seen:
                continue
            seen.add(current)

            try:
                commit = self.load(current)
            except (NotFoundError, CorruptObjectError):
                continue
            to_visit.extend(commit.parents)

        return False
