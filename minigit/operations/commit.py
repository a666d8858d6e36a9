"""Staging, committing and history listing."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger

from minigit.core.errors import EmptyMessageError, NothingToCommitError
from minigit.core.index import Index
from minigit.core.objects import Commit


@dataclass(frozen=True)
class LogEntry:
    """One commit in a history listing."""
    digest: str
    message: str
    timestamp: int
    parents: tuple = ()


def stage(repo, path: str) -> str:
    """
    Add a working-tree file to the staging map.

    Args:
        repo: Repository instance
        path: Path relative to the work tree

    Returns:
        str: Digest of the staged blob
    """
    index = Index.load(repo)
    digest = index.add_file(repo, path)
    index.save(repo)
    return digest


def commit(
    repo,
    staging: Dict[str, str],
    message: str,
    parent: Optional[str] = None,
    timestamp: Optional[int] = None
) -> str:
    """
    Write a commit from a staging map and advance HEAD.

    The new snapshot is the parent's files overlaid with the staged entries.
    If a conflicted merge is pending, its target becomes the second parent,
    the partially merged snapshot replaces the parent's files as the base,
    and the merge state is cleared. The staging map is cleared afterwards.

    Args:
        repo: Repository instance
        staging: Mapping of path to blob digest
        message: Commit message
        parent: Parent commit digest (defaults to HEAD)
        timestamp: Commit time (defaults to now)

    Returns:
        str: Digest of the new commit

    Raises:
        NothingToCommitError: If nothing is staged outside of a merge
        EmptyMessageError: If the message is blank
    """
    if not message.strip():
        raise EmptyMessageError("Commit message cannot be empty")

    merge_head = repo.merge.get_merge_head()
    if not staging and not merge_head:
        raise NothingToCommitError("Nothing to commit (staging area is empty)")

    if parent is None:
        parent = repo.refs.resolve_head()

    files: Dict[str, str] = {}
    parents: List[str] = []
    if parent:
        files.update(repo.graph.load(parent).files)
        parents.append(parent)

    if merge_head and merge_head not in parents:
        parents.append(merge_head)
        merge_files = repo.merge.get_merge_files()
        if merge_files is not None:
            files = dict(merge_files)

    files.update(staging)

    new_commit = Commit.create(
        files=files,
        parent_hashes=parents,
        message=message,
        timestamp=timestamp
    )
    commit_hash = repo.objects.write_object(new_commit)
    repo.refs.advance_head(commit_hash)

    if merge_head:
        repo.merge.clear_merge_state()

    index = Index()
    index.save(repo)

    logger.debug("committed {} with {} file(s)", commit_hash[:7], len(files))
    return commit_hash


def commit_index(repo, message: str) -> str:
    """Commit whatever is currently in the repository's staging map."""
    return commit(repo, Index.load(repo).entries, message)


def log(repo, start: Optional[str] = None, max_count: Optional[int] = None) -> List[LogEntry]:
    """
    List history along the first-parent chain.

    Args:
        repo: Repository instance
        start: Commit to start from (defaults to HEAD)
        max_count: Stop after this many entries

    Returns:
        List of LogEntry, newest first
    """
    if start is None:
        start = repo.refs.resolve_head()
    if not start:
        return []

    entries = []
    for item in repo.graph.first_parent_chain(start):
        if max_count is not None and len(entries) >= max_count:
            break
        entries.append(LogEntry(item.hash, item.message, item.timestamp, tuple(item.parents)))
    return entries
