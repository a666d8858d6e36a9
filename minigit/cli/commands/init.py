"""Initialize a new MiniGit repository."""

from pathlib import Path

import click

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', help='Name of the initial branch')
def init_cmd(path, initial_branch):
    """
    Initialize a new MiniGit repository.

    Creates a .minigit directory with the necessary structure for version control.

    Examples:
        minigit init                    # Initialize in current directory
        minigit init my-project         # Initialize in my-project directory
        minigit init -b main            # Start on a branch named 'main'
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init(default_branch=initial_branch)
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()

    branch = repo.refs.get_current_branch()
    click.echo(success(f"Initialized empty MiniGit repository in {repo.work_tree / repo.meta_dir}"))
    click.echo(info(f"On branch {branch}"))
    click.echo(info("Start tracking files with: minigit add <file>"))
