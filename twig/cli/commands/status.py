"""Status command - show working tree status."""

import click
from colorama import Fore, Style

from twig.core.repository import Repository
from twig.cli.output import section


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Branches, with the current branch marked by *
    - Staged files (new or changed relative to HEAD)
    - Removed files (tracked by HEAD but unstaged)
    - Modifications not staged for commit
    - Untracked files

    Examples:
        twig status
    """
    repo = Repository.open()
    report = repo.status.report()

    click.echo(section("Branches"))
    for name, is_current in report.branches:
        if is_current:
            click.echo(f"{Fore.GREEN}*{name}{Style.RESET_ALL}")
        else:
            click.echo(name)
    click.echo()

    click.echo(section("Staged Files"))
    for path in report.staged:
        click.echo(f"{Fore.GREEN}{path}{Style.RESET_ALL}")
    click.echo()

    click.echo(section("Removed Files"))
    for path in report.removed:
        click.echo(f"{Fore.RED}{path}{Style.RESET_ALL}")
    click.echo()

    click.echo(section("Modifications Not Staged For Commit"))
    for path, change in report.modified:
        click.echo(f"{Fore.YELLOW}{path} ({change}){Style.RESET_ALL}")
    click.echo()

    click.echo(section("Untracked Files"))
    for path in report.untracked:
        click.echo(f"{Fore.RED}{path}{Style.RESET_ALL}")
    click.echo()
