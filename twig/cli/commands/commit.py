"""Commit command - record the staging area."""

import click
from twig.core.repository import Repository
from twig.cli.output import success, info


@click.command('commit')
@click.argument('message', required=False, default='')
def commit_cmd(message):
    """
    Record changes to the repository.

    Creates a commit from the staging area. The staging area keeps the
    committed snapshot afterwards.

    Examples:
        twig commit "Add feature"
    """
    repo = Repository.open()
    commit = repo.commit(message)
    repo.store()

    click.echo(success(f"[{repo.current_branch} {commit.hash[:7]}] {commit.message}"))
    click.echo(info(f"Files: {len(commit.tree)}"))
