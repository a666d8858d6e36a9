"""Error types for MiniGit.

Every failure raised by the core derives from MiniGitError so the CLI can
report it and stop. Merge conflicts are not errors; they are reported
through MergeResult.
"""


class MiniGitError(Exception):
    """Base class for all MiniGit errors."""


class NotFoundError(MiniGitError):
    """Raised when an object, commit, branch or file does not exist."""


class ObjectNotFoundError(NotFoundError):
    """Raised when no object is stored under a digest.

    Attributes:
        digest: The digest that was looked up.
    """

    def __init__(self, digest: str, kind: str = 'Object'):
        self.digest = digest
        super().__init__(f"{kind} not found: {digest}")


class BranchNotFoundError(NotFoundError):
    """Raised when a branch reference does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Branch not found: {name}")


class CorruptObjectError(MiniGitError):
    """Raised when a stored object or commit record cannot be parsed."""


class StorageError(MiniGitError):
    """Raised when the underlying storage fails to read or write."""


class RepositoryExistsError(MiniGitError):
    """Raised by init when a repository is already present."""


class NotARepositoryError(MiniGitError):
    """Raised when no repository can be found."""


class BranchExistsError(MiniGitError):
    """Raised when creating a branch whose name is taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Branch already exists: {name}")


class NothingToCommitError(MiniGitError):
    """Raised when commit is called with an empty staging map."""


class EmptyMessageError(NothingToCommitError):
    """Raised when commit is called with a blank message."""


class MergeInProgressError(MiniGitError):
    """Raised when a merge is started while a conflicted one is pending."""
