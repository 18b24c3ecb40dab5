"""CLI commands for Twig."""

from twig.cli.commands.init import init_cmd
from twig.cli.commands.add import add_cmd
from twig.cli.commands.commit import commit_cmd
from twig.cli.commands.rm import rm_cmd
from twig.cli.commands.log import log_cmd, global_log_cmd, find_cmd
from twig.cli.commands.status import status_cmd
from twig.cli.commands.checkout import checkout_cmd
from twig.cli.commands.branch import branch_cmd, rm_branch_cmd
from twig.cli.commands.reset import reset_cmd
from twig.cli.commands.merge import merge_cmd
from twig.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'rm_cmd', 'log_cmd', 'global_log_cmd',
           'find_cmd', 'status_cmd', 'checkout_cmd', 'branch_cmd', 'rm_branch_cmd',
           'reset_cmd', 'merge_cmd', 'config_cmd']
