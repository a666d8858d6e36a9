"""Shared pytest fixtures for MiniGit tests."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from loguru import logger

from minigit.cli.main import cli
from minigit.core.config import Config
from minigit.core.index import Index
from minigit.core.repository import Repository
from minigit.core.storage import MemoryStorage
from minigit.operations.commit import commit


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point the global config at a scratch file and drop MINIGIT_* variables."""
    global_path = tmp_path_factory.mktemp('home') / '.minigitconfig'
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', global_path)
    for key in list(os.environ):
        if key.startswith('MINIGIT_'):
            monkeypatch.delenv(key)
    yield global_path
    # The CLI installs a sink on a stream that is gone after each invoke
    logger.remove()
    logger.disable('minigit')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository on disk."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def mem_repo():
    """Create an initialized repository backed by memory."""
    return Repository('.', storage=MemoryStorage()).init()


@pytest.fixture
def write_and_commit():
    """
    Return a helper that writes files, stages them and commits.

    Usage: write_and_commit(repo, {'a.txt': 'hello\\n'}, 'message')
    """
    counter = {'ts': 1000}

    def _write_and_commit(repo, files, message="Test commit", timestamp=None):
        index = Index.load(repo)
        for path, content in files.items():
            data = content.encode('utf-8') if isinstance(content, str) else content
            repo.storage.write(path, data)
            index.add_file(repo, path)
        index.save(repo)

        counter['ts'] += 1
        ts = counter['ts'] if timestamp is None else timestamp
        return commit(repo, index.entries, message, timestamp=ts)

    return _write_and_commit


@pytest.fixture
def diverged(mem_repo, write_and_commit):
    """
    Repository with 'master' and 'feature' branched from a common base.

    Returns (repo, base_hash). HEAD is on master at the base commit; both
    branches point at base until the test commits on them.
    """
    repo = mem_repo
    base = write_and_commit(repo, {'shared.txt': 'one\ntwo\n'}, "Base")
    repo.refs.create_branch('feature', base)
    return repo, base


@pytest.fixture
def cli_repo(temp_dir, monkeypatch):
    """Repository initialized through the CLI, with the cwd inside it."""
    monkeypatch.chdir(temp_dir)
    CliRunner().invoke(cli, ['init'])
    return Repository(str(temp_dir))


@pytest.fixture
def cli_commit():
    """Return a helper that writes files and commits them through the CLI."""

    def _cli_commit(repo, files, message):
        runner = CliRunner()
        for path, content in files.items():
            target = repo.work_tree / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            result = runner.invoke(cli, ['add', path])
            assert result.exit_code == 0, result.output
        result = runner.invoke(cli, ['commit', '-m', message])
        assert result.exit_code == 0, result.output
        return repo.refs.resolve_head()

    return _cli_commit
