"""Core functionality for MiniGit.

This module contains the core data structures:
- Stored objects (Blob, Commit) and the object store
- Commit graph traversal
- Repository management
- Index/staging area
- Reference management
- Configuration management
- Storage backends and digest utilities

For operations like diff, merge, commit and checkout, see minigit.operations
"""

from minigit.core.errors import (
    MiniGitError, NotFoundError, ObjectNotFoundError, BranchNotFoundError,
    CorruptObjectError, StorageError, RepositoryExistsError, NotARepositoryError,
    BranchExistsError, NothingToCommitError, EmptyMessageError, MergeInProgressError,
)
from minigit.core.hash import hash_object, is_digest
from minigit.core.storage import Storage, FileStorage, MemoryStorage
from minigit.core.objects import MiniGitObject, Blob, Commit
from minigit.core.store import ObjectStore
from minigit.core.graph import CommitGraph
from minigit.core.repository import Repository
from minigit.core.index import Index
from minigit.core.refs import RefManager
from minigit.core.config import Config, get_config

__all__ = [
    'MiniGitError', 'NotFoundError', 'ObjectNotFoundError', 'BranchNotFoundError',
    'CorruptObjectError', 'StorageError', 'RepositoryExistsError', 'NotARepositoryError',
    'BranchExistsError', 'NothingToCommitError', 'EmptyMessageError', 'MergeInProgressError',
    'hash_object', 'is_digest',
    'Storage', 'FileStorage', 'MemoryStorage',
    'MiniGitObject', 'Blob', 'Commit',
    'ObjectStore',
    'CommitGraph',
    'Repository',
    'Index',
    'RefManager',
    'Config',
    'get_config',
]
