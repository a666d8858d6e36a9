"""Checkout logic: switch branches or detach HEAD at a commit."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from loguru import logger

from minigit.core.errors import NotFoundError
from minigit.core.hash import is_digest
from minigit.core.index import Index


@dataclass
class CheckoutResult:
    """What a checkout did."""
    target: str
    commit: str
    branch: Optional[str]
    written: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def detached(self) -> bool:
        return self.branch is None


def update_working_tree(
    repo,
    old_files: Dict[str, str],
    new_files: Dict[str, str]
) -> Tuple[List[str], List[str]]:
    """
    Make the working tree match a snapshot.

    Paths of old_files missing from new_files are removed; every file of
    new_files is written. Other files are left alone.

    Returns:
        Tuple of (written paths, removed paths), both sorted
    """
    removed = []
    for path in sorted(old_files):
        if path not in new_files:
            repo.storage.remove(path)
            removed.append(path)

    written = []
    for path, digest in sorted(new_files.items()):
        repo.storage.write(path, repo.objects.get(digest))
        written.append(path)

    return written, removed


def checkout(repo, target: str) -> CheckoutResult:
    """
    Check out a branch or a commit.

    Every file of the target snapshot is written to the working tree. Files
    tracked by the previous HEAD that the target lacks are removed; untracked
    files are left alone. HEAD is updated and the staging map cleared.

    Args:
        repo: Repository instance
        target: Branch name or full commit digest

    Returns:
        CheckoutResult

    Raises:
        NotFoundError: If target is neither a branch nor a stored commit
    """
    refs = repo.refs
    branch = target if refs.branch_exists(target) else None

    if branch:
        commit_hash = refs.read_branch(branch)
    elif is_digest(target):
        commit_hash = target
    else:
        raise NotFoundError(f"Invalid branch or commit: {target}")

    new_commit = repo.graph.load(commit_hash)

    previous = refs.resolve_head()
    old_files = repo.graph.load(previous).files if previous else {}

    written, removed = update_working_tree(repo, old_files, new_commit.files)
    result = CheckoutResult(
        target=target, commit=commit_hash, branch=branch,
        written=written, removed=removed
    )

    if branch:
        refs.set_head(branch, symbolic=True)
    else:
        refs.set_head(commit_hash, symbolic=False)

    Index().save(repo)

    logger.debug(
        "checked out {} ({} written, {} removed)",
        target, len(result.written), len(result.removed)
    )
    return result
