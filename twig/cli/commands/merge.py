"""Merge command for Twig VCS."""

import click

from twig.core.repository import Repository
from twig.cli.output import success, warning, info


@click.command('merge')
@click.argument('branch')
def merge_cmd(branch):
    """
    Merge a branch into the current branch.

    Fast-forwards when the current branch is behind. Otherwise performs a
    three-way merge against the common ancestor and records a merge
    commit. Files changed on both sides receive conflict markers and the
    merge commit is still made.

    Examples:
        twig merge feature
    """
    repo = Repository.open()
    result = repo.merge.merge(branch)

    if result.is_up_to_date:
        click.echo(info(result.message))
        return

    repo.store()

    if result.is_fast_forward:
        click.echo(success(result.message))
    elif result.has_conflicts:
        for conflict in result.conflicts:
            click.echo(warning(f"CONFLICT (content): Merge conflict in {conflict.path}"))
        click.echo(warning(result.message))
    elif result.commit_hash:
        click.echo(success(f"{result.message} ({result.commit_hash[:7]})"))
    else:
        click.echo(info("Nothing to merge."))
