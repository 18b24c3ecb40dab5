"""Log commands - show commit history."""

from datetime import datetime

import click
from colorama import Fore, Style

from twig.core.repository import Repository
from twig.cli.output import error


def format_timestamp(timestamp: int, date_format: str) -> str:
    """Format a Unix timestamp in local time."""
    return datetime.fromtimestamp(timestamp).astimezone().strftime(date_format)


def display_commit(commit, date_format: str) -> None:
    """
    Display one log entry.

    Format:
    ===
    commit <hash>
    Merge: <parent1> <parent2>   (merge commits only)
    Date: <date>
    <message>
    """
    click.echo("===")
    click.echo(f"{Fore.YELLOW}commit {commit.hash}{Style.RESET_ALL}")
    if commit.is_merge:
        click.echo("Merge: " + " ".join(parent[:7] for parent in commit.parents))
    click.echo(f"Date: {format_timestamp(commit.timestamp, date_format)}")
    click.echo(commit.message)
    click.echo()


@click.command('log')
def log_cmd():
    """
    Show the history of the current branch.

    Starts at HEAD and follows first parents back to the initial commit.

    Examples:
        twig log
    """
    repo = Repository.open()
    date_format = repo.config.log_date_format

    for commit in repo.log():
        display_commit(commit, date_format)


@click.command('global-log')
def global_log_cmd():
    """
    Show every commit ever made, in creation order.

    Examples:
        twig global-log
    """
    repo = Repository.open()
    date_format = repo.config.log_date_format

    for commit in repo.all_commits():
        display_commit(commit, date_format)


@click.command('find')
@click.argument('message')
def find_cmd(message):
    """
    Print the ids of all commits with the given message.

    Examples:
        twig find "initial commit"
    """
    repo = Repository.open()
    commits = repo.find(message)

    if not commits:
        click.echo(error("Found no commit with that message."))
        return

    for commit in commits:
        click.echo(commit.hash)
