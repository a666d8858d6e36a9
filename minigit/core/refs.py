"""Reference management for MiniGit."""

from typing import List, Optional, Tuple

from loguru import logger

from .errors import BranchExistsError, BranchNotFoundError
from .hash import is_digest


class RefManager:
    """
    Manages references (branches and HEAD).

    Handles:
    - Symbolic HEAD (pointing to a branch)
    - Detached HEAD (pointing to a commit digest)
    - Branch references (refs/heads/*)
    - Resolution of user-supplied names to commit digests
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.storage = repo.storage
        self.heads_dir = f"{repo.meta_dir}/refs/heads"
        self.head_file = f"{repo.meta_dir}/HEAD"

    def branch_path(self, name: str) -> str:
        return f"{self.heads_dir}/{name}"

    def _read(self, path: str) -> Optional[str]:
        if not self.storage.exists(path):
            return None
        content = self.storage.read_text(path).strip()
        return content or None

    def read_head(self) -> Optional[str]:
        """Return the raw HEAD content, or None if HEAD is missing."""
        return self._read(self.head_file)

    def read_branch(self, name: str) -> Optional[str]:
        """
        Read a branch tip.

        Returns:
            Commit digest, or None if the branch does not exist or has no commits
        """
        return self._read(self.branch_path(name))

    def branch_exists(self, name: str) -> bool:
        return self.read_branch(name) is not None

    def write_branch(self, name: str, digest: str) -> None:
        """Point a branch at a commit, creating it if needed."""
        self.storage.write_text(self.branch_path(name), digest + '\n')
        logger.debug("branch {} -> {}", name, digest[:7])

    def get_current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        content = self.read_head()
        if content and content.startswith('ref: refs/heads/'):
            return content[len('ref: refs/heads/'):]
        return None

    def is_detached_head(self) -> bool:
        content = self.read_head()
        return bool(content) and not content.startswith('ref: ')

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit digest.

        Returns:
            Commit digest, or None if the current branch has no commits yet
        """
        content = self.read_head()
        if not content:
            return None

        if content.startswith('ref: '):
            return self._read(f"{self.repo.meta_dir}/{content[5:]}")

        return content

    def set_head(self, target: str, symbolic: bool = True) -> None:
        """
        Set HEAD to point to a branch or commit.

        Args:
            target: Branch name (if symbolic) or commit digest (if detached)
            symbolic: If True, write a symbolic reference
        """
        if symbolic:
            self.storage.write_text(self.head_file, f'ref: refs/heads/{target}\n')
        else:
            self.storage.write_text(self.head_file, target + '\n')

    def advance_head(self, digest: str) -> None:
        """Move the current branch, or a detached HEAD, to a new commit."""
        branch = self.get_current_branch()
        if branch:
            self.write_branch(branch, digest)
        else:
            self.set_head(digest, symbolic=False)

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_digest) tuples sorted by name
        """
        prefix = self.heads_dir + '/'
        branches = []
        for path in self.storage.list_files_under(self.heads_dir):
            digest = self._read(path)
            if digest:
                branches.append((path[len(prefix):], digest))
        return sorted(branches)

    def create_branch(self, name: str, digest: str) -> None:
        """
        Create a new branch at a commit.

        Raises:
            BranchExistsError: If the branch already exists
            NotFoundError: If the commit does not exist
        """
        if self.branch_exists(name):
            raise BranchExistsError(name)

        self.repo.graph.load(digest)
        self.write_branch(name, digest)

    def require_branch(self, name: str) -> str:
        """Return a branch tip, raising BranchNotFoundError if it is missing."""
        digest = self.read_branch(name)
        if digest is None:
            raise BranchNotFoundError(name)
        return digest

    def resolve_reference(self, ref: str) -> Optional[str]:
        """
        Resolve HEAD, a branch name or a full commit digest.

        Returns:
            Commit digest or None if the reference can't be resolved
        """
        if ref == 'HEAD':
            return self.resolve_head()

        digest = self.read_branch(ref)
        if digest:
            return digest

        if is_digest(ref) and self.repo.objects.exists(ref):
            return ref

        return None
