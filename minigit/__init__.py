"""MiniGit - a minimal content-addressed version control system."""

from loguru import logger

from minigit.core.repository import Repository
from minigit.core.objects import MiniGitObject, Blob, Commit

__version__ = '0.1.0'

# Library code stays quiet unless the CLI (or the caller) enables it
logger.disable('minigit')

__all__ = [
    'Repository',
    'MiniGitObject',
    'Blob',
    'Commit',
]
