"""Diff engine for comparing file contents, commits and the working tree."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union

from colorama import Fore, Style
from loguru import logger

from minigit.core.hash import hash_object

CONTEXT = ' '
REMOVED = '-'
ADDED = '+'

ContentResolver = Callable[[str], bytes]


@dataclass(frozen=True)
class DiffLine:
    """A single line of a diff, tagged as context, removed or added."""
    tag: str
    text: str

    def __str__(self) -> str:
        return f"{self.tag} {self.text}"


def split_lines(text: str) -> List[str]:
    """
    Split text on '\\n'.

    A trailing newline ends the last line rather than starting an empty one,
    so 'a\\nb\\n' and 'a\\nb' both give ['a', 'b'].
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def diff_lines(old: Union[str, Sequence[str]], new: Union[str, Sequence[str]]) -> List[DiffLine]:
    """
    Compare two texts line by line with a greedy two-cursor walk.

    At each step, equal lines under both cursors are emitted as context and
    both cursors advance. Otherwise the old line (if any) is emitted as
    removed and the new line (if any) as added, both in the same step. The
    walk only resynchronizes when the cursors happen to meet equal lines, so
    an insertion shifts every following line into a removed/added pair.

    Args:
        old: Old text, or its lines
        new: New text, or its lines

    Returns:
        List of DiffLine
    """
    old_lines = split_lines(old) if isinstance(old, str) else list(old)
    new_lines = split_lines(new) if isinstance(new, str) else list(new)

    result = []
    i = j = 0
    while i < len(old_lines) or j < len(new_lines):
        if i < len(old_lines) and j < len(new_lines) and old_lines[i] == new_lines[j]:
            result.append(DiffLine(CONTEXT, old_lines[i]))
            i += 1
            j += 1
            continue

        if i < len(old_lines):
            result.append(DiffLine(REMOVED, old_lines[i]))
            i += 1
        if j < len(new_lines):
            result.append(DiffLine(ADDED, new_lines[j]))
            j += 1

    return result


def render_lines(lines: Sequence[DiffLine], path: Optional[str] = None) -> List[str]:
    """Render diff lines as text, preceded by a --- / +++ header when path is given."""
    output = []
    if path:
        output.append(f"--- a/{path}")
        output.append(f"+++ b/{path}")
    output.extend(str(line) for line in lines)
    return output


def _decode(content: Optional[bytes]) -> str:
    if content is None:
        return ''
    return content.decode('utf-8', errors='replace')


@dataclass
class FileDiff:
    """Represents the diff for a single file."""
    path: str
    old_content: Optional[bytes]
    new_content: Optional[bytes]
    lines: List[DiffLine] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.old_content is None

    @property
    def is_deleted(self) -> bool:
        return self.new_content is None

    @property
    def is_modified(self) -> bool:
        return self.old_content is not None and self.new_content is not None

    @property
    def status(self) -> str:
        if self.is_new:
            return 'added'
        if self.is_deleted:
            return 'removed'
        return 'modified'

    def compute_diff(self) -> 'FileDiff':
        self.lines = diff_lines(_decode(self.old_content), _decode(self.new_content))
        return self

    @property
    def added_count(self) -> int:
        return sum(1 for line in self.lines if line.tag == ADDED)

    @property
    def removed_count(self) -> int:
        return sum(1 for line in self.lines if line.tag == REMOVED)


class DiffEngine:
    """
    Engine for computing diffs between commits and the working tree.

    Supports:
    - Content diffing with the greedy line matcher
    - Snapshot (path -> digest map) diffing
    - Commit vs commit and commit vs working directory
    - Printable report output
    """

    def __init__(self, repo):
        """
        Initialize diff engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def diff_blobs(self, path: str, old_content: Optional[bytes], new_content: Optional[bytes]) -> FileDiff:
        """
        Compute diff between two contents.

        Args:
            path: File path
            old_content: Old file content (None for new files)
            new_content: New file content (None for deleted files)

        Returns:
            FileDiff object
        """
        return FileDiff(path, old_content, new_content).compute_diff()

    def diff_file_maps(
        self,
        old_files: Dict[str, str],
        new_files: Dict[str, str],
        resolve_old: Optional[ContentResolver] = None,
        resolve_new: Optional[ContentResolver] = None
    ) -> List[FileDiff]:
        """
        Compute diffs between two path -> digest snapshots.

        Args:
            old_files: Old snapshot
            new_files: New snapshot
            resolve_old: Returns old content for a path (defaults to the blob)
            resolve_new: Returns new content for a path (defaults to the blob)

        Returns:
            List of FileDiff objects for added, removed and modified paths
        """
        store = self.repo.objects

        def old_blob(path):
            return store.get(old_files[path])

        def new_blob(path):
            return store.get(new_files[path])

        resolve_old = resolve_old or old_blob
        resolve_new = resolve_new or new_blob

        diffs = []
        for path in sorted(set(old_files) | set(new_files)):
            in_old = path in old_files
            in_new = path in new_files

            if in_old and in_new and old_files[path] == new_files[path]:
                continue

            old_content = resolve_old(path) if in_old else None
            new_content = resolve_new(path) if in_new else None
            diffs.append(self.diff_blobs(path, old_content, new_content))

        logger.debug("{} file(s) differ", len(diffs))
        return diffs

    def commit_files(self, commit_hash: Optional[str]) -> Dict[str, str]:
        """Return the snapshot of a commit, or an empty one for None."""
        if not commit_hash:
            return {}
        return dict(self.repo.graph.load(commit_hash).files)

    def diff_commits(self, old_commit_hash: Optional[str], new_commit_hash: str) -> List[FileDiff]:
        """
        Compute diff between two commits.

        Args:
            old_commit_hash: Old commit digest (None for an empty baseline)
            new_commit_hash: New commit digest

        Returns:
            List of FileDiff objects
        """
        return self.diff_file_maps(
            self.commit_files(old_commit_hash),
            self.commit_files(new_commit_hash),
        )

    def working_tree_files(self) -> Dict[str, str]:
        """Hash every working-tree file outside the metadata directory."""
        storage = self.repo.storage
        return {path: hash_object(storage.read(path)) for path in self.repo.working_files()}

    def diff_working_tree(self, commit_hash: Optional[str]) -> List[FileDiff]:
        """
        Compute diff between a commit and the working directory.

        Args:
            commit_hash: Commit digest to compare against

        Returns:
            List of FileDiff objects
        """
        return self.diff_file_maps(
            self.commit_files(commit_hash),
            self.working_tree_files(),
            resolve_new=self.repo.storage.read,
        )

    def format_diff(self, diffs: List[FileDiff], color: bool = True) -> str:
        """
        Format diffs as a printable report.

        Args:
            diffs: List of FileDiff objects
            color: Whether to use color output

        Returns:
            Formatted diff string
        """
        headers = {
            'added': ('+++ Added', Fore.GREEN),
            'removed': ('--- Removed', Fore.RED),
            'modified': ('*** Modified', Fore.YELLOW),
        }
        line_colors = {ADDED: Fore.GREEN, REMOVED: Fore.RED}

        output = []
        for diff in diffs:
            label, header_color = headers[diff.status]
            header = f"{label}: {diff.path}"
            output.append(f"{header_color}{header}{Style.RESET_ALL}" if color else header)

            for text in render_lines([], diff.path):
                output.append(f"{Style.BRIGHT}{text}{Style.RESET_ALL}" if color else text)

            for line in diff.lines:
                line_color = line_colors.get(line.tag)
                if color and line_color:
                    output.append(f"{line_color}{line}{Style.RESET_ALL}")
                else:
                    output.append(str(line))

            output.append('')

        return '\n'.join(output)
