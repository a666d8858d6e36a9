"""Main CLI entry point for MiniGit."""

import sys

import click
from colorama import init
from loguru import logger

from minigit import __version__
from minigit.core.config import get_config
from minigit.core.repository import Repository
from minigit.cli.output import BANNER
from minigit.cli.commands import (init_cmd, add_cmd, commit_cmd, log_cmd, branch_cmd,
                                  checkout_cmd, merge_cmd, diff_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def configure_logging(verbose: bool = False) -> None:
    """Install a stderr sink at the configured level and enable library logs."""
    if verbose:
        level = 'DEBUG'
    else:
        repo = Repository.find_repository()
        config = get_config(repo)
        level = (config.get('core', 'loglevel') or 'WARNING').upper()
        if level not in LOG_LEVELS:
            level = 'WARNING'

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
    logger.enable('minigit')


class MiniGitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=MiniGitGroup)
@click.version_option(version=__version__, prog_name='minigit')
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
def cli(verbose):
    configure_logging(verbose)


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(merge_cmd)
cli.add_command(diff_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
