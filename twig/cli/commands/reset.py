"""Reset command - move the current branch to a commit."""

import click

from twig.core.repository import Repository
from twig.cli.output import success


@click.command('reset')
@click.argument('commit_id')
def reset_cmd(commit_id):
    """
    Check out a commit and move the current branch to it.

    COMMIT_ID may be abbreviated. Refuses to run while an untracked file
    is in the way.

    Examples:
        twig reset a1b2c3d
    """
    repo = Repository.open()
    commit = repo.checkout.reset(commit_id)
    repo.store()

    click.echo(success(f"HEAD is now at {commit.hash[:7]} {commit.message}"))
