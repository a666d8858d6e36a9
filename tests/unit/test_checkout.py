"""Tests for checkout."""

import pytest

from minigit.core.errors import NotFoundError
from minigit.core.index import Index
from minigit.operations.checkout import checkout


@pytest.fixture
def two_branches(mem_repo, write_and_commit):
    repo = mem_repo
    base = write_and_commit(repo, {'a.txt': 'a\n', 'b.txt': 'b\n'}, "Base")
    repo.refs.create_branch('feature', base)
    repo.refs.set_head('feature')
    tip = write_and_commit(repo, {'a.txt': 'A\n', 'f.txt': 'f\n'}, "Feature")
    return repo, base, tip


def test_checkout_branch(two_branches):
    repo, base, tip = two_branches

    result = checkout(repo, 'master')

    assert not result.detached
    assert result.branch == 'master'
    assert result.commit == base
    assert repo.refs.get_current_branch() == 'master'
    assert repo.storage.read('a.txt') == b'a\n'
    assert not repo.storage.exists('f.txt')
    assert result.removed == ['f.txt']
    assert result.written == ['a.txt', 'b.txt']


def test_checkout_back_and_forth(two_branches):
    repo, base, tip = two_branches
    checkout(repo, 'master')
    checkout(repo, 'feature')
    assert repo.storage.read('a.txt') == b'A\n'
    assert repo.storage.read('f.txt') == b'f\n'
    assert repo.refs.resolve_head() == tip


def test_checkout_commit_detaches(two_branches):
    repo, base, tip = two_branches

    result = checkout(repo, base)

    assert result.detached
    assert repo.refs.is_detached_head()
    assert repo.refs.resolve_head() == base
    assert repo.refs.read_branch('feature') == tip


def test_untracked_files_survive(two_branches):
    repo, base, tip = two_branches
    repo.storage.write('notes.txt', b'mine')
    checkout(repo, 'master')
    assert repo.storage.read('notes.txt') == b'mine'


def test_checkout_clears_staging(two_branches):
    repo, base, tip = two_branches
    repo.storage.write('new.txt', b'n')
    index = Index.load(repo)
    index.add_file(repo, 'new.txt')
    index.save(repo)

    checkout(repo, 'master')

    assert len(Index.load(repo)) == 0


def test_checkout_invalid_target(two_branches):
    repo, base, tip = two_branches
    with pytest.raises(NotFoundError):
        checkout(repo, 'nope')
    with pytest.raises(NotFoundError):
        checkout(repo, '0' * 40)
    assert repo.refs.get_current_branch() == 'feature'
