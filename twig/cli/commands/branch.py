"""Branch commands - create and delete branches."""

import click

from twig.core.repository import Repository
from twig.cli.output import success


@click.command('branch')
@click.argument('name')
def branch_cmd(name):
    """
    Create a new branch pointing at the current commit.

    The new branch is not checked out.

    Examples:
        twig branch feature
    """
    repo = Repository.open()
    commit_hash = repo.refs.create_branch(name)
    repo.store()

    click.echo(success(f"Created branch '{name}' at {commit_hash[:7]}"))


@click.command('rm-branch')
@click.argument('name')
def rm_branch_cmd(name):
    """
    Delete a branch.

    Only the branch pointer is removed; its commits are kept.

    Examples:
        twig rm-branch feature
    """
    repo = Repository.open()
    commit_hash = repo.refs.delete_branch(name)
    repo.store()

    click.echo(success(f"Deleted branch '{name}' (was {commit_hash[:7]})"))
