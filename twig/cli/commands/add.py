"""Add command - stage a file for commit."""

import click
from twig.core.repository import Repository
from twig.cli.output import success


@click.command('add')
@click.argument('path')
def add_cmd(path):
    """
    Add a file's current contents to the staging area.

    Adding a file again replaces the previously staged version.

    Examples:
        twig add file.txt
    """
    repo = Repository.open()
    blob_hash = repo.add(path)
    repo.store()

    click.echo(success(f"Staged {repo.relative_path(path)} ({blob_hash[:7]})"))
