"""Initialize a new Twig repository."""

import click
from twig.core.repository import Repository
from twig.cli.output import success, info


@click.command('init')
def init_cmd():
    """
    Initialize a new Twig repository in the current directory.

    Creates a .twig directory holding the repository state, with a single
    branch pointing at the initial commit.

    Examples:
        twig init
    """
    repo = Repository('.')
    repo.init()

    click.echo(success(f"Initialized empty Twig repository in {repo.twig_dir}"))
    click.echo(info(f"On branch {repo.current_branch}"))
