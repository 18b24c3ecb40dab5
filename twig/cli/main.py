"""Main CLI entry point for Twig."""

import logging

import click
from colorama import init

from twig import __version__
from twig.core.errors import TwigError
from twig.cli.output import BANNER, error
from twig.cli.commands import (init_cmd, add_cmd, commit_cmd, rm_cmd, log_cmd, global_log_cmd,
                               find_cmd, status_cmd, checkout_cmd, branch_cmd, rm_branch_cmd,
                               reset_cmd, merge_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class TwigGroup(click.Group):
    """Custom Group class to display banner before help and report errors."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)

    def invoke(self, ctx):
        """Report any Twig error as a single line and exit with status 1."""
        try:
            return super().invoke(ctx)
        except TwigError as e:
            click.echo(error(str(e)))
            ctx.exit(1)


@click.group(cls=TwigGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s"
    )
    logging.getLogger('twig').setLevel(logging.DEBUG if verbose else logging.WARNING)


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(rm_cmd)
cli.add_command(log_cmd)
cli.add_command(global_log_cmd)
cli.add_command(find_cmd)
cli.add_command(status_cmd)
cli.add_command(checkout_cmd)
cli.add_command(branch_cmd)
cli.add_command(rm_branch_cmd)
cli.add_command(reset_cmd)
cli.add_command(merge_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
