"""Rm command - unstage a file and stop tracking it."""

import click
from twig.core.repository import Repository
from twig.cli.output import success


@click.command('rm')
@click.argument('path')
def rm_cmd(path):
    """
    Remove a file from the staging area.

    If the file is tracked by the current commit it is also deleted from
    the working directory.

    Examples:
        twig rm file.txt
    """
    repo = Repository.open()
    deleted = repo.remove(path)
    repo.store()

    rel_path = repo.relative_path(path)
    if deleted:
        click.echo(success(f"Removed {rel_path}"))
    else:
        click.echo(success(f"Unstaged {rel_path}"))
