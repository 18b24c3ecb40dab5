"""Config command - manage repository configuration."""

import click

from twig.core.config import get_config
from twig.core.errors import NotInitialized, TwigError
from twig.core.repository import Repository
from twig.cli.output import success, info


def split_key(key):
    """Split 'section.key' into its parts; a bare key belongs to 'core'."""
    section, option = key.split('.', 1) if '.' in key else ('core', key)
    return section.lower(), option.lower()


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
        twig config set merge.base lowest
        twig config set --global init.defaultbranch main
    """
    repo = Repository.find_repository()
    if repo is None and not is_global:
        raise NotInitialized()

    section, option = split_key(key)
    get_config(repo).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {section}.{option} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Environment variables (TWIG_<SECTION>_<KEY>) override both files.

    Examples:
        twig config get merge.base
    """
    section, option = split_key(key)

    if is_global:
        config = get_config().global_config
        value = config.get(section, option, fallback=None)
    else:
        value = get_config(Repository.find_repository()).get(section, option)

    if value is None:
        raise TwigError(f"Config key not found: {key}")
    click.echo(value)


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        twig config list
        twig config list --global
    """
    repo = None if is_global else Repository.find_repository()
    config = get_config(repo)
    shown = False

    if repo is not None:
        click.echo(info("Repository config:"))
        for name, value in config.items():
            click.echo(f"  {name}={value}")
        shown = True

    global_items = config.items(global_config=True)
    if global_items:
        if shown:
            click.echo()
        click.echo(info("Global config:"))
        for name, value in global_items:
            click.echo(f"  {name}={value}")
        shown = True

    if not shown:
        click.echo(info("No configuration set"))
