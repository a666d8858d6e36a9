"""Integration tests for repository initialization."""

from click.testing import CliRunner

from minigit import __version__
from minigit.cli.main import cli


def test_init_current_directory(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    runner = CliRunner()

    result = runner.invoke(cli, ['init'])

    assert result.exit_code == 0
    assert 'Initialized empty MiniGit repository' in result.output
    assert 'On branch master' in result.output
    assert (temp_dir / '.minigit' / 'HEAD').exists()


def test_init_new_directory(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init', 'project'])

    assert result.exit_code == 0
    assert (temp_dir / 'project' / '.minigit' / 'objects').is_dir()


def test_init_with_branch(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init', '-b', 'main'])

    assert result.exit_code == 0
    assert (temp_dir / '.minigit' / 'HEAD').read_text() == 'ref: refs/heads/main\n'


def test_init_twice(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    runner = CliRunner()
    runner.invoke(cli, ['init'])

    result = runner.invoke(cli, ['init'])

    assert result.exit_code != 0
    assert 'already exists' in result.output


def test_command_outside_repository(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['log'])

    assert result.exit_code != 0
    assert 'Not a minigit repository' in result.output


def test_version():
    result = CliRunner().invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_shows_commands():
    result = CliRunner().invoke(cli, ['--help'])
    assert result.exit_code == 0
    for command in ('init', 'add', 'commit', 'log', 'branch', 'checkout', 'merge', 'diff', 'config'):
        assert command in result.output
