"""Commit command - create a commit from staged changes."""

import click

from minigit.core.errors import EmptyMessageError, MiniGitError, NothingToCommitError
from minigit.core.repository import Repository
from minigit.operations.commit import commit_index
from minigit.cli.output import success, error, info, short


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
def commit_cmd(message):
    """
    Record changes to the repository.

    Creates a commit whose snapshot is the current HEAD plus the staged
    files. While a conflicted merge is pending, the commit completes it and
    records the merged branch as second parent.

    Examples:
        minigit commit -m "Initial commit"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    message = message.strip()
    completing_merge = repo.merge.is_merge_in_progress()

    try:
        commit_hash = commit_index(repo, message)
        commit = repo.graph.load(commit_hash)
    except EmptyMessageError as e:
        click.echo(error(str(e)))
        raise click.Abort()
    except NothingToCommitError as e:
        click.echo(error(str(e)))
        click.echo(info("Use 'minigit add <file>' to stage changes"))
        raise click.Abort()
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if completing_merge:
        click.echo(success(f"Merge completed! Created merge commit {short(commit_hash)}"))
    else:
        click.echo(success(f"Committed {short(commit_hash)}: {message}"))

    if len(commit.parents) > 1:
        click.echo(info(f"Parents: {', '.join(short(p) for p in commit.parents)}"))
    elif commit.parents:
        click.echo(info(f"Parent: {short(commit.parents[0])}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Files: {len(commit.files)}"))
