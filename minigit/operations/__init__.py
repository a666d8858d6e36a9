"""Operations module for high-level MiniGit operations.

This module contains the business logic for:
- Diff computation
- Three-way merge
- Staging, committing and history
- Checkout
"""

from minigit.operations.diff import DiffEngine, DiffLine, FileDiff, diff_lines, render_lines
from minigit.operations.merge import (
    MergeEngine, MergeResult, MergeStatus, MergeConflict, FileAction,
)
from minigit.operations.commit import LogEntry, stage, commit, commit_index, log
from minigit.operations.checkout import CheckoutResult, checkout

__all__ = [
    'DiffEngine', 'DiffLine', 'FileDiff', 'diff_lines', 'render_lines',
    'MergeEngine', 'MergeResult', 'MergeStatus', 'MergeConflict', 'FileAction',
    'LogEntry', 'stage', 'commit', 'commit_index', 'log',
    'CheckoutResult', 'checkout',
]
