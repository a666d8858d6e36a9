"""Integration tests for branch and checkout."""

from click.testing import CliRunner

from minigit.cli.main import cli


def test_branch_without_commits(cli_repo):
    result = CliRunner().invoke(cli, ['branch', 'feature'])
    assert result.exit_code != 0
    assert 'No commits exist yet' in result.output


def test_create_and_list(cli_repo, cli_commit):
    runner = CliRunner()
    head = cli_commit(cli_repo, {'a.txt': 'a\n'}, 'First')

    result = runner.invoke(cli, ['branch', 'feature'])
    assert result.exit_code == 0
    assert "Created branch 'feature'" in result.output
    assert cli_repo.refs.read_branch('feature') == head

    result = runner.invoke(cli, ['branch'])
    assert result.exit_code == 0
    assert 'feature' in result.output
    assert '* ' in result.output
    assert 'master' in result.output


def test_create_duplicate(cli_repo, cli_commit):
    runner = CliRunner()
    cli_commit(cli_repo, {'a.txt': 'a\n'}, 'First')
    runner.invoke(cli, ['branch', 'feature'])

    result = runner.invoke(cli, ['branch', 'feature'])

    assert result.exit_code != 0
    assert 'already exists' in result.output


def test_branch_verbose(cli_repo, cli_commit):
    cli_commit(cli_repo, {'a.txt': 'a\n'}, 'Describe me')
    result = CliRunner().invoke(cli, ['branch', '-v'])
    assert 'Describe me' in result.output


def test_checkout_switches_files(cli_repo, cli_commit):
    runner = CliRunner()
    cli_commit(cli_repo, {'a.txt': 'master\n'}, 'First')
    runner.invoke(cli, ['branch', 'feature'])

    result = runner.invoke(cli, ['checkout', 'feature'])
    assert result.exit_code == 0
    assert "Switched to branch 'feature'" in result.output

    cli_commit(cli_repo, {'a.txt': 'feature\n', 'f.txt': 'f\n'}, 'Feature work')

    result = runner.invoke(cli, ['checkout', 'master'])
    assert result.exit_code == 0
    assert (cli_repo.work_tree / 'a.txt').read_text() == 'master\n'
    assert not (cli_repo.work_tree / 'f.txt').exists()
    assert cli_repo.refs.get_current_branch() == 'master'


def test_checkout_commit_detaches(cli_repo, cli_commit):
    first = cli_commit(cli_repo, {'a.txt': '1\n'}, 'First')
    cli_commit(cli_repo, {'a.txt': '2\n'}, 'Second')

    result = CliRunner().invoke(cli, ['checkout', first])

    assert result.exit_code == 0
    assert 'detached HEAD' in result.output
    assert (cli_repo.work_tree / 'a.txt').read_text() == '1\n'


def test_checkout_unknown(cli_repo, cli_commit):
    cli_commit(cli_repo, {'a.txt': 'a\n'}, 'First')
    result = CliRunner().invoke(cli, ['checkout', 'nowhere'])
    assert result.exit_code != 0
    assert 'Invalid branch or commit' in result.output
