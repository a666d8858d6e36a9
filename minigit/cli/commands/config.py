"""Config command - manage repository and global configuration."""

import click

from minigit.core.config import Config, split_key
from minigit.core.repository import Repository
from minigit.cli.output import success, error, info, warning


def _load_config(is_global):
    """Return a Config for the current repository, or global-only."""
    repo = Repository.find_repository()
    if not is_global and not repo:
        click.echo(error("Not a minigit repository (use --global for global config)"))
        raise click.Abort()
    return Config(repo)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        minigit config set init.defaultbranch main
        minigit config set --global core.loglevel INFO
    """
    config = _load_config(is_global)
    section, option = split_key(key)
    config.set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {section}.{option} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Read global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Environment variables (MINIGIT_<SECTION>_<KEY>) override files.

    Examples:
        minigit config get init.defaultbranch
        minigit config get color.ui
    """
    section, option = split_key(key)

    if is_global:
        config = Config()
        if not config.global_config.has_option(section, option):
            click.echo(warning(f"Config key not found: {key}"))
            raise click.exceptions.Exit(1)
        click.echo(config.global_config.get(section, option))
        return

    repo = Repository.find_repository()
    value = Config(repo).get(section, option)
    if value is None:
        click.echo(warning(f"Config key not found: {key}"))
        raise click.exceptions.Exit(1)
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """
    Remove a config value.

    Examples:
        minigit config unset color.ui
    """
    config = _load_config(is_global)
    section, option = split_key(key)

    if not config.unset(section, option, global_config=is_global):
        click.echo(warning(f"Config key not found: {key}"))
        return

    click.echo(success(f"Removed config: {section}.{option}"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='Show global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        minigit config list
        minigit config list --global
    """
    repo = None if is_global else Repository.find_repository()
    values = Config(repo).list_all(global_only=is_global)

    if not values:
        click.echo(info("No configuration values set"))
        return

    for section in sorted(values):
        for option, value in sorted(values[section].items()):
            click.echo(f"{section}.{option}={value}")
