"""Diff command - show changes between commits and the working tree."""

import click

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.cli.output import error, info


def _resolve(repo, name):
    commit_hash = repo.refs.resolve_reference(name)
    if not commit_hash:
        click.echo(error(f"Not a valid reference: {name}"))
        raise click.Abort()
    return commit_hash


@click.command('diff')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.argument('commit1', required=False)
@click.argument('commit2', required=False)
def diff_cmd(no_color, commit1, commit2):
    """
    Show changes between commits and the working tree.

    With no arguments, shows the working tree against HEAD.
    With one commit, shows the working tree against that commit.
    With two commits, shows changes between those commits.

    Examples:
        minigit diff                    # Working tree vs HEAD
        minigit diff feature            # Working tree vs branch 'feature'
        minigit diff main feature       # Changes between branches
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    diff_engine = repo.diff
    use_color = not no_color and repo.config.get_bool('color', 'ui', fallback=True)

    try:
        if commit2:
            hash1 = _resolve(repo, commit1)
            hash2 = _resolve(repo, commit2)
            click.echo(info(f"Comparing {commit1} -> {commit2}"))
            diffs = diff_engine.diff_commits(hash1, hash2)
        elif commit1:
            commit_hash = _resolve(repo, commit1)
            click.echo(info(f"Comparing {commit1} -> working tree"))
            diffs = diff_engine.diff_working_tree(commit_hash)
        else:
            click.echo(info("Comparing HEAD -> working tree"))
            diffs = diff_engine.diff_working_tree(repo.refs.resolve_head())
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if not diffs:
        click.echo(info("No changes to display"))
        return

    click.echo(diff_engine.format_diff(diffs, color=use_color))
