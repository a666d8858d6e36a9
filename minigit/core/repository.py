"""Repository management for MiniGit."""

from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import NotARepositoryError, RepositoryExistsError
from .storage import Storage, FileStorage

META_DIR = '.minigit'


class Repository:
    """
    Represents a MiniGit repository.

    The repository is the context passed to every operation. It owns the
    Storage that holds both the .minigit metadata directory and the working
    tree, and hands out the managers that operate on them.
    """

    def __init__(self, path: str = '.', storage: Optional[Storage] = None):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
            storage: Storage to use instead of the local filesystem
        """
        self.work_tree = Path(path).resolve()
        self.storage = storage if storage is not None else FileStorage(self.work_tree)
        self.meta_dir = META_DIR
        self.objects_dir = f'{META_DIR}/objects'
        self.heads_dir = f'{META_DIR}/refs/heads'
        self.head_file = f'{META_DIR}/HEAD'
        self.index_file = f'{META_DIR}/index'
        self.config_file = f'{META_DIR}/config'

        # Initialize managers lazily (avoids circular imports)
        self._object_store = None
        self._graph = None
        self._ref_manager = None
        self._config = None
        self._diff_engine = None
        self._merge_engine = None

    @property
    def objects(self):
        """Get ObjectStore instance."""
        if self._object_store is None:
            from .store import ObjectStore
            self._object_store = ObjectStore(self.storage, self.objects_dir)
        return self._object_store

    @property
    def graph(self):
        """Get CommitGraph instance."""
        if self._graph is None:
            from .graph import CommitGraph
            self._graph = CommitGraph(self.objects)
        return self._graph

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import Config
            self._config = Config(self)
        return self._config

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from minigit.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from minigit.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    def exists(self) -> bool:
        """Check whether the metadata directory is present."""
        return self.storage.exists(self.meta_dir)

    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .minigit directory structure:
        .minigit/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch/commit
        ├── index          # Staging area
        └── config         # Repository configuration

        Args:
            default_branch: Initial branch name (defaults to init.defaultbranch)

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExistsError: If repository already exists
        """
        if self.exists():
            raise RepositoryExistsError(f"Repository already exists at {self.work_tree / self.meta_dir}")

        branch = default_branch or self.config.get('init', 'defaultbranch')

        self.storage.mkdir(self.meta_dir)
        self.storage.mkdir(self.objects_dir)
        self.storage.mkdir(self.heads_dir)

        self.storage.write_text(self.head_file, f'ref: refs/heads/{branch}\n')
        self.storage.write_text(self.index_file, '')
        self.storage.write_text(self.config_file, '[core]\n\trepositoryformatversion = 0\n')

        # Config read before init saw no repository file
        self._config = None

        logger.debug("initialized repository at {} on branch {}", self.work_tree, branch)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / META_DIR).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """Like find_repository, but raise NotARepositoryError when none is found."""
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepositoryError(f"Not a minigit repository: {Path(path).resolve()}")
        return repo

    def relative_path(self, path) -> str:
        """
        Convert a filesystem path to a work-tree relative path.

        Raises:
            ValueError: If the path lies outside the work tree
        """
        full = Path(path)
        if not full.is_absolute():
            full = Path.cwd() / full
        return full.resolve().relative_to(self.work_tree).as_posix()

    def working_files(self):
        """List work-tree files, excluding the metadata directory."""
        prefix = self.meta_dir + '/'
        return [p for p in self.storage.list_files_under('') if not p.startswith(prefix)]

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
