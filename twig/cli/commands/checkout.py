"""Checkout command - switch branches or restore files."""

import click

from twig.core.repository import Repository
from twig.cli.output import success


class CheckoutCommand(click.Command):
    """Command that keeps the raw operands, including any '--' separator."""

    def parse_args(self, ctx, args):
        ctx.meta['twig.operands'] = list(args)
        return super().parse_args(ctx, args)


@click.command('checkout', cls=CheckoutCommand)
@click.argument('operands', nargs=-1)
@click.pass_context
def checkout_cmd(ctx, operands):
    """
    Switch branches or restore a file.

    \b
    twig checkout <branch>              Check out a whole branch
    twig checkout -- <file>             Restore a file from HEAD
    twig checkout <commit> -- <file>    Restore a file from a commit

    Checking out a branch replaces every file of the working directory
    with the branch's snapshot and refuses to run while an untracked
    file is in the way. Restoring a single file leaves the staging area
    and the current branch untouched.
    """
    raw = ctx.meta.get('twig.operands', list(operands))

    repo = Repository.open()

    if len(raw) == 1 and raw[0] != '--':
        commit = repo.checkout.checkout_branch(raw[0])
        repo.store()
        click.echo(success(f"Switched to branch '{raw[0]}' ({commit.hash[:7]})"))
    elif len(raw) == 2 and raw[0] == '--':
        path = repo.checkout.checkout_file(raw[1])
        repo.store()
        click.echo(success(f"Restored {path} from HEAD"))
    elif len(raw) == 3 and raw[1] == '--':
        path = repo.checkout.checkout_file(raw[2], commit_id=raw[0])
        repo.store()
        click.echo(success(f"Restored {path} from {raw[0]}"))
    else:
        raise click.UsageError("Incorrect operands.", ctx=ctx)
