"""Merge operations for MiniGit."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from loguru import logger

from minigit.core.errors import MergeInProgressError, MiniGitError
from minigit.core.index import Index
from minigit.core.objects import Commit
from minigit.operations.checkout import update_working_tree


class MergeStatus(Enum):
    """Outcome of a merge."""
    ALREADY_UP_TO_DATE = 'already-up-to-date'
    CONFLICTED = 'conflicted'
    MERGED = 'merged'


# Conflict kinds
CONTENT = 'content'
DELETE_MODIFY = 'delete/modify'

# File actions
ADDED = 'added'
UPDATED = 'updated'
DELETED = 'deleted'


@dataclass
class MergeConflict:
    """Represents a merge conflict in a file."""
    path: str
    kind: str
    base_hash: Optional[str] = None
    ours_hash: Optional[str] = None
    theirs_hash: Optional[str] = None

    def __repr__(self) -> str:
        return f"MergeConflict({self.kind}: {self.path})"


@dataclass
class FileAction:
    """A change the merge applied to the working tree."""
    path: str
    kind: str


@dataclass
class MergeResult:
    """Result of a merge operation."""
    status: MergeStatus
    commit: Optional[str] = None
    base: Optional[str] = None
    conflicts: List[MergeConflict] = field(default_factory=list)
    actions: List[FileAction] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status is not MergeStatus.CONFLICTED

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.status is MergeStatus.MERGED:
            return f"MergeResult(merged {self.commit[:7]})"
        if self.status is MergeStatus.CONFLICTED:
            return f"MergeResult(conflicted, conflicts={len(self.conflicts)})"
        return "MergeResult(already up to date)"


def generate_conflict_markers(
    ours_content: Optional[bytes],
    theirs_content: Optional[bytes],
    label: str
) -> bytes:
    """
    Build the working-file body for a content conflict.

    Args:
        ours_content: Current side content (None when absent)
        theirs_content: Target side content (None when absent)
        label: Name shown after the closing marker

    Returns:
        File content with conflict markers
    """
    result = [b"<<<<<<< HEAD\n"]

    if ours_content:
        result.append(ours_content)
        if not ours_content.endswith(b'\n'):
            result.append(b'\n')

    result.append(b"=======\n")

    if theirs_content:
        result.append(theirs_content)
        if not theirs_content.endswith(b'\n'):
            result.append(b'\n')

    result.append(f">>>>>>> {label}\n".encode('utf-8'))

    return b''.join(result)


class MergeEngine:
    """
    Handles three-way merges for MiniGit.

    Supports:
    - Common ancestor discovery (via the commit graph)
    - Per-file three-way classification
    - Conflict markers in the working tree
    - Merge state tracking for conflicted merges
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.merge_head_file = f"{repo.meta_dir}/MERGE_HEAD"
        self.merge_msg_file = f"{repo.meta_dir}/MERGE_MSG"
        self.merge_files_file = f"{repo.meta_dir}/MERGE_FILES"

    def find_merge_base(self, commit1_hash: str, commit2_hash: str) -> Optional[str]:
        """Find the common ancestor used as the merge baseline."""
        return self.repo.graph.find_common_ancestor(commit1_hash, commit2_hash)

    def merge(self, current_tip: str, target_tip: str, target_label: str) -> MergeResult:
        """
        Merge target_tip into current_tip.

        Args:
            current_tip: Commit digest of the current side (first parent)
            target_tip: Commit digest being merged in
            target_label: Name of the target, used in markers and the message

        Returns:
            MergeResult with status, the new commit and any conflicts
        """
        if current_tip == target_tip:
            return MergeResult(MergeStatus.ALREADY_UP_TO_DATE, message="Already up to date")

        graph = self.repo.graph
        current_commit = graph.load(current_tip)
        target_commit = graph.load(target_tip)

        base = self.find_merge_base(current_tip, target_tip)
        base_files: Dict[str, str] = graph.load(base).files if base else {}
        logger.debug(
            "merging {} into {} (base {})",
            target_tip[:7], current_tip[:7], base[:7] if base else 'none'
        )

        merged, conflicts, actions = self._merge_files(
            base_files, current_commit.files, target_commit.files, target_label
        )

        if conflicts:
            self.save_merge_state(target_tip, conflicts, merged)
            return MergeResult(
                MergeStatus.CONFLICTED,
                base=base,
                conflicts=conflicts,
                actions=actions,
                message=f"Merge conflicts in {len(conflicts)} file(s)"
            )

        commit = Commit.create(
            files=merged,
            parent_hashes=[current_tip, target_tip],
            message=f"Merge branch '{target_label}'"
        )
        commit_hash = self.repo.objects.write_object(commit)
        self.repo.refs.advance_head(commit_hash)

        return MergeResult(
            MergeStatus.MERGED,
            commit=commit_hash,
            base=base,
            actions=actions,
            message=f"Merged {target_tip[:7]} into {current_tip[:7]}"
        )

    def _merge_files(
        self,
        base_files: Dict[str, str],
        ours_files: Dict[str, str],
        theirs_files: Dict[str, str],
        label: str
    ):
        """
        Classify every path across the three snapshots and apply the result.

        The first matching rule wins:
        - new on their side only: take theirs
        - only their side changed: take theirs
        - both changed differently: content conflict, markers in the file
        - they deleted, we kept it unchanged: delete
        - they deleted, we modified: delete/modify conflict, file untouched
        Anything else keeps our version.

        Returns:
            Tuple of (merged snapshot, conflicts, applied actions)
        """
        merged = dict(ours_files)
        conflicts: List[MergeConflict] = []
        actions: List[FileAction] = []

        for path in sorted(set(base_files) | set(ours_files) | set(theirs_files)):
            base = base_files.get(path)
            ours = ours_files.get(path)
            theirs = theirs_files.get(path)

            if base is None and ours is None:
                logger.debug("taking new file from {}: {}", label, path)
                self._write_blob(path, theirs)
                merged[path] = theirs
                actions.append(FileAction(path, ADDED))

            elif base is not None and ours == base and theirs is not None and theirs != base:
                logger.debug("taking changes from {} for {}", label, path)
                self._write_blob(path, theirs)
                merged[path] = theirs
                actions.append(FileAction(path, UPDATED))

            elif (base is not None and theirs is not None
                  and ours != base and theirs != base and ours != theirs):
                logger.debug("content conflict in {}", path)
                self._write_conflict(path, ours, theirs, label)
                conflicts.append(MergeConflict(path, CONTENT, base, ours, theirs))

            elif base is not None and ours is not None and theirs is None:
                if ours == base:
                    logger.debug("removing {} deleted in {}", path, label)
                    self.repo.storage.remove(path)
                    del merged[path]
                    actions.append(FileAction(path, DELETED))
                else:
                    logger.debug("delete/modify conflict in {}", path)
                    conflicts.append(MergeConflict(path, DELETE_MODIFY, base, ours, None))

        return merged, conflicts, actions

    def _write_blob(self, path: str, digest: str) -> None:
        self.repo.storage.write(path, self.repo.objects.get(digest))

    def _write_conflict(self, path: str, ours: Optional[str], theirs: Optional[str], label: str) -> None:
        store = self.repo.objects
        ours_content = store.get(ours) if ours else None
        theirs_content = store.get(theirs) if theirs else None
        self.repo.storage.write(path, generate_conflict_markers(ours_content, theirs_content, label))

    def merge_branch(self, branch: str) -> MergeResult:
        """
        Merge a branch into HEAD.

        Raises:
            MergeInProgressError: If a conflicted merge is still pending
            MiniGitError: If HEAD has no commits
            BranchNotFoundError: If the branch does not exist
        """
        if self.is_merge_in_progress():
            raise MergeInProgressError(
                "Merge already in progress; resolve conflicts and commit, "
                "or run 'minigit merge --abort'"
            )

        current_hash = self.repo.refs.resolve_head()
        if not current_hash:
            raise MiniGitError("No commits to merge from")

        target_hash = self.repo.refs.require_branch(branch)
        return self.merge(current_hash, target_hash, branch)

    def save_merge_state(
        self,
        theirs_hash: str,
        conflicts: List[MergeConflict],
        merged: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Record a conflicted merge so the next commit can complete it.

        Writes MERGE_HEAD (the commit being merged), MERGE_MSG and, when
        given, MERGE_FILES: the snapshot with every non-conflicting change
        already applied, in index format.
        """
        storage = self.repo.storage
        storage.write_text(self.merge_head_file, theirs_hash + '\n')

        msg_lines = ["Merge conflicts detected\n", "\n", "Conflicts:\n"]
        for conflict in conflicts:
            msg_lines.append(f"\t{conflict.path} ({conflict.kind})\n")
        storage.write_text(self.merge_msg_file, ''.join(msg_lines))

        if merged is not None:
            snapshot = Index()
            snapshot.entries.update(merged)
            snapshot.write(storage, self.merge_files_file)

    def clear_merge_state(self) -> None:
        """Clear merge state files."""
        self.repo.storage.remove(self.merge_head_file)
        self.repo.storage.remove(self.merge_msg_file)
        self.repo.storage.remove(self.merge_files_file)

    def is_merge_in_progress(self) -> bool:
        return self.repo.storage.exists(self.merge_head_file)

    def get_merge_head(self) -> Optional[str]:
        """Get the commit digest being merged (from MERGE_HEAD)."""
        if not self.is_merge_in_progress():
            return None
        return self.repo.storage.read_text(self.merge_head_file).strip() or None

    def get_merge_files(self) -> Optional[Dict[str, str]]:
        """Get the partially merged snapshot (from MERGE_FILES), if recorded."""
        storage = self.repo.storage
        if not self.is_merge_in_progress() or not storage.exists(self.merge_files_file):
            return None
        snapshot = Index()
        snapshot.read(storage, self.merge_files_file)
        return snapshot.entries

    def abort_merge(self) -> bool:
        """
        Abort an in-progress merge.

        Resets the working tree and index to HEAD, then clears merge state.
        Files the merge brought in from the other side are removed.

        Returns:
            True if merge was aborted, False if no merge in progress
        """
        merge_head = self.get_merge_head()
        if not merge_head:
            return False

        graph = self.repo.graph
        current_hash = self.repo.refs.resolve_head()
        head_files = graph.load(current_hash).files if current_hash else {}

        touched = dict(graph.load(merge_head).files)
        touched.update(self.get_merge_files() or {})
        touched.update(head_files)

        update_working_tree(self.repo, touched, head_files)
        Index().save(self.repo)
        self.clear_merge_state()

        logger.debug("aborted merge of {}", merge_head[:7])
        return True
