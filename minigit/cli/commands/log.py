"""Log command - show commit history."""

from datetime import datetime

import click
from colorama import Fore, Style

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.operations.commit import log
from minigit.cli.output import error, info, short


def format_timestamp(timestamp):
    """Format Unix timestamp to readable date."""
    try:
        dt = datetime.fromtimestamp(int(timestamp))
        return dt.strftime("%a %b %d %H:%M:%S %Y")
    except (ValueError, OverflowError, OSError):
        return "Unknown date"


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit the number of commits shown')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@click.argument('start', required=False)
def log_cmd(max_count, oneline, start):
    """
    Show commit history.

    Follows first parents from HEAD (or START, a branch or commit digest)
    back to the root commit.

    Examples:
        minigit log
        minigit log -n 5
        minigit log --oneline feature
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    if start:
        start_hash = repo.refs.resolve_reference(start)
        if not start_hash:
            click.echo(error(f"Not a valid reference: {start}"))
            raise click.Abort()
    else:
        start_hash = repo.refs.resolve_head()

    if not start_hash:
        click.echo(info("No commits yet"))
        return

    try:
        entries = log(repo, start_hash, max_count=max_count)
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    for entry in entries:
        summary = entry.message.split('\n')[0]
        if oneline:
            click.echo(f"{Fore.YELLOW}{short(entry.digest)}{Style.RESET_ALL} {summary}")
            continue

        click.echo(f"{Fore.YELLOW}commit {entry.digest}{Style.RESET_ALL}")
        if len(entry.parents) > 1:
            click.echo(f"Merge: {' '.join(short(p) for p in entry.parents)}")
        click.echo(f"Date:   {format_timestamp(entry.timestamp)}")
        click.echo()
        for line in entry.message.split('\n'):
            click.echo(f"    {line}")
        click.echo()
