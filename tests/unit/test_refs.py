"""Tests for reference management."""

import pytest

from minigit.core.errors import BranchExistsError, BranchNotFoundError, NotFoundError


def test_initial_head_is_symbolic(mem_repo):
    refs = mem_repo.refs
    assert refs.read_head() == 'ref: refs/heads/master'
    assert refs.get_current_branch() == 'master'
    assert not refs.is_detached_head()
    assert refs.resolve_head() is None


def test_advance_head_moves_current_branch(mem_repo, write_and_commit):
    first = write_and_commit(mem_repo, {'a.txt': 'a'})
    assert mem_repo.refs.read_branch('master') == first
    assert mem_repo.refs.resolve_head() == first
    assert mem_repo.storage.read_text('.minigit/refs/heads/master') == first + '\n'


def test_advance_head_on_other_branch(diverged, write_and_commit):
    repo, base = diverged
    repo.refs.set_head('feature')
    tip = write_and_commit(repo, {'f.txt': 'f'})
    assert repo.refs.read_branch('feature') == tip
    assert repo.refs.read_branch('master') == base


def test_detached_head(diverged, write_and_commit):
    repo, base = diverged
    repo.refs.set_head(base, symbolic=False)
    assert repo.refs.is_detached_head()
    assert repo.refs.get_current_branch() is None
    assert repo.refs.resolve_head() == base

    tip = write_and_commit(repo, {'d.txt': 'd'})
    assert repo.refs.resolve_head() == tip
    assert repo.refs.read_branch('master') == base


def test_create_and_list_branches(diverged):
    repo, base = diverged
    repo.refs.create_branch('alpha', base)
    assert repo.refs.list_branches() == [('alpha', base), ('feature', base), ('master', base)]


def test_create_existing_branch(diverged):
    repo, base = diverged
    with pytest.raises(BranchExistsError):
        repo.refs.create_branch('feature', base)


def test_create_branch_at_missing_commit(diverged):
    repo, base = diverged
    with pytest.raises(NotFoundError):
        repo.refs.create_branch('ghost', '0' * 40)
    assert not repo.refs.branch_exists('ghost')


def test_require_branch(diverged):
    repo, base = diverged
    assert repo.refs.require_branch('feature') == base
    with pytest.raises(BranchNotFoundError):
        repo.refs.require_branch('nope')


def test_resolve_reference(diverged):
    repo, base = diverged
    assert repo.refs.resolve_reference('HEAD') == base
    assert repo.refs.resolve_reference('feature') == base
    assert repo.refs.resolve_reference(base) == base
    assert repo.refs.resolve_reference('f' * 40) is None
    assert repo.refs.resolve_reference('unknown') is None
    assert repo.refs.resolve_reference(base[:7]) is None
