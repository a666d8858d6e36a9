"""Branch command - list or create branches."""

import click
from colorama import Fore, Style

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.cli.output import success, error, warning, short


@click.command('branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit digest and message')
@click.argument('branch_name', required=False)
@click.argument('start_point', required=False)
def branch_cmd(verbose, branch_name, start_point):
    """
    List or create branches.

    With no arguments, lists all branches. Current branch is marked with *.
    With one argument, creates a new branch at HEAD.
    With two arguments, creates a new branch at START_POINT.

    Examples:
        minigit branch                    # List branches
        minigit branch feature            # Create 'feature' at HEAD
        minigit branch hotfix main        # Create 'hotfix' at main
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    refs = repo.refs

    if branch_name:
        if start_point:
            commit_hash = refs.resolve_reference(start_point)
            if not commit_hash:
                click.echo(error(f"Not a valid commit or reference: {start_point}"))
                raise click.Abort()
        else:
            commit_hash = refs.resolve_head()
            if not commit_hash:
                click.echo(error("No commits exist yet"))
                raise click.Abort()

        try:
            refs.create_branch(branch_name, commit_hash)
        except MiniGitError as e:
            click.echo(error(str(e)))
            raise click.Abort()

        click.echo(success(f"Created branch '{branch_name}' at {short(commit_hash)}"))
        return

    branches = refs.list_branches()
    if not branches:
        click.echo(warning("No branches found"))
        return

    current_branch = refs.get_current_branch()
    for name, commit_hash in branches:
        if name == current_branch:
            prefix = f"{Fore.GREEN}* {Style.RESET_ALL}"
            name_color = Fore.GREEN
        else:
            prefix = "  "
            name_color = ""

        if verbose:
            try:
                message = repo.graph.load(commit_hash).message.split('\n')[0][:50]
            except MiniGitError:
                message = "Invalid commit"
            click.echo(f"{prefix}{name_color}{name:<20}{Style.RESET_ALL} {short(commit_hash)} {message}")
        else:
            click.echo(f"{prefix}{name_color}{name}{Style.RESET_ALL}")
