"""Checkout command - switch branches or detach HEAD at a commit."""

import click

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.operations.checkout import checkout
from minigit.cli.output import success, error, info, warning, short


@click.command('checkout')
@click.argument('target')
def checkout_cmd(target):
    """
    Switch branches or check out a commit.

    Updates the working directory to match TARGET and clears the staging
    area. A full commit digest gives a detached HEAD.

    Examples:
        minigit checkout main
        minigit checkout 3f1c2a...      # 40-character digest, detached HEAD
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    if repo.merge.is_merge_in_progress():
        click.echo(error("Cannot checkout during a conflicted merge"))
        click.echo(info("Commit the resolution, or run 'minigit merge --abort'"))
        raise click.Abort()

    try:
        result = checkout(repo, target)
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.detached:
        click.echo(warning(f"HEAD is now at {short(result.commit)} (detached HEAD)"))
    else:
        click.echo(success(f"Switched to branch '{result.branch}'"))

    click.echo(info(f"Updated {len(result.written)} file(s)"))
    if result.removed:
        click.echo(info(f"Removed {len(result.removed)} file(s)"))
