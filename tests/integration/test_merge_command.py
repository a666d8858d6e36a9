"""Integration tests for the merge command."""

import pytest
from click.testing import CliRunner

from minigit.cli.main import cli


@pytest.fixture
def branched(cli_repo, cli_commit):
    """master and feature both at a base commit, HEAD on master."""
    base = cli_commit(cli_repo, {'shared.txt': 'line\n'}, 'Base')
    CliRunner().invoke(cli, ['branch', 'feature'])
    return cli_repo, base


def work_on(repo, cli_commit, branch, files, message):
    runner = CliRunner()
    runner.invoke(cli, ['checkout', branch])
    digest = cli_commit(repo, files, message)
    runner.invoke(cli, ['checkout', 'master'])
    return digest


class TestMergeCommand:
    """Tests for minigit merge."""

    def test_already_up_to_date(self, branched):
        result = CliRunner().invoke(cli, ['merge', 'feature'])
        assert result.exit_code == 0
        assert 'Already up to date' in result.output

    def test_clean_merge(self, branched, cli_commit):
        repo, base = branched
        theirs = work_on(repo, cli_commit, 'feature', {'feature.txt': 'new\n'}, 'Feature')
        ours = cli_commit(repo, {'master.txt': 'm\n'}, 'Master')

        result = CliRunner().invoke(cli, ['merge', 'feature'])

        assert result.exit_code == 0
        assert 'Merge successful' in result.output
        assert "Taking new file from branch 'feature': feature.txt" in result.output
        assert (repo.work_tree / 'feature.txt').read_text() == 'new\n'

        merged = repo.graph.load(repo.refs.resolve_head())
        assert merged.parents == [ours, theirs]
        assert merged.message == "Merge branch 'feature'"
        assert 'already contained' not in result.output

    def test_conflict_then_resolve(self, branched, cli_commit):
        repo, base = branched
        runner = CliRunner()
        theirs = work_on(repo, cli_commit, 'feature', {'shared.txt': 'theirs\n'}, 'Theirs')
        ours = cli_commit(repo, {'shared.txt': 'ours\n'}, 'Ours')

        result = runner.invoke(cli, ['merge', 'feature'])

        assert result.exit_code == 1
        assert 'CONFLICT (content): shared.txt' in result.output
        content = (repo.work_tree / 'shared.txt').read_text()
        assert '<<<<<<< HEAD' in content
        assert '>>>>>>> feature' in content
        assert repo.refs.resolve_head() == ours

        result = runner.invoke(cli, ['merge', 'feature'])
        assert result.exit_code != 0
        assert 'already in progress' in result.output

        (repo.work_tree / 'shared.txt').write_text('resolved\n')
        runner.invoke(cli, ['add', 'shared.txt'])
        result = runner.invoke(cli, ['commit', '-m', 'Resolve'])

        assert result.exit_code == 0
        assert 'Merge completed' in result.output
        assert repo.graph.load(repo.refs.resolve_head()).parents == [ours, theirs]

    def test_add_warns_about_markers(self, branched, cli_commit):
        repo, base = branched
        runner = CliRunner()
        work_on(repo, cli_commit, 'feature', {'shared.txt': 'theirs\n'}, 'Theirs')
        cli_commit(repo, {'shared.txt': 'ours\n'}, 'Ours')
        runner.invoke(cli, ['merge', 'feature'])

        result = runner.invoke(cli, ['add', 'shared.txt'])

        assert result.exit_code == 0
        assert 'conflict markers' in result.output

    def test_checkout_blocked_during_conflict(self, branched, cli_commit):
        repo, base = branched
        runner = CliRunner()
        work_on(repo, cli_commit, 'feature', {'shared.txt': 'theirs\n'}, 'Theirs')
        cli_commit(repo, {'shared.txt': 'ours\n'}, 'Ours')
        runner.invoke(cli, ['merge', 'feature'])

        result = runner.invoke(cli, ['checkout', 'feature'])
        assert result.exit_code != 0

    def test_merge_branch_behind_head(self, branched, cli_commit):
        repo, base = branched
        ours = cli_commit(repo, {'extra.txt': 'e\n'}, 'Ahead')

        result = CliRunner().invoke(cli, ['merge', 'feature'])

        assert result.exit_code == 0
        assert "already contained in the current history" in result.output
        assert repo.graph.load(repo.refs.resolve_head()).parents == [ours, base]

    def test_nonexistent_branch(self, branched):
        result = CliRunner().invoke(cli, ['merge', 'nonexistent'])
        assert result.exit_code != 0
        assert 'Branch not found: nonexistent' in result.output

    def test_missing_argument(self, branched):
        result = CliRunner().invoke(cli, ['merge'])
        assert result.exit_code == 2

    def test_resolve_keeps_new_file_from_feature(self, branched, cli_commit):
        repo, base = branched
        runner = CliRunner()
        work_on(repo, cli_commit, 'feature',
                {'shared.txt': 'theirs\n', 'new.txt': 'new\n'}, 'Theirs')
        cli_commit(repo, {'shared.txt': 'ours\n'}, 'Ours')
        runner.invoke(cli, ['merge', 'feature'])

        (repo.work_tree / 'shared.txt').write_text('resolved\n')
        runner.invoke(cli, ['add', 'shared.txt'])
        result = runner.invoke(cli, ['commit', '-m', 'Resolve'])

        assert result.exit_code == 0
        assert 'new.txt' in repo.graph.load(repo.refs.resolve_head()).files

    def test_abort(self, branched, cli_commit):
        repo, base = branched
        runner = CliRunner()
        work_on(repo, cli_commit, 'feature',
                {'shared.txt': 'theirs\n', 'new.txt': 'new\n'}, 'Theirs')
        ours = cli_commit(repo, {'shared.txt': 'ours\n'}, 'Ours')
        result = runner.invoke(cli, ['merge', 'feature'])
        assert 'minigit merge --abort' in result.output

        result = runner.invoke(cli, ['merge', '--abort'])

        assert result.exit_code == 0
        assert 'Merge aborted' in result.output
        assert (repo.work_tree / 'shared.txt').read_text() == 'ours\n'
        assert not (repo.work_tree / 'new.txt').exists()
        assert repo.refs.resolve_head() == ours

        result = runner.invoke(cli, ['checkout', 'feature'])
        assert result.exit_code == 0

    def test_abort_without_merge(self, branched):
        result = CliRunner().invoke(cli, ['merge', '--abort'])
        assert result.exit_code != 0
        assert 'No merge in progress' in result.output
