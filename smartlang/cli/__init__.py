"""SmartLang CLI - run, parse and tokenize contract scripts."""

import click

from smartlang import __version__
from smartlang.cli.run import run_command
from smartlang.cli.parse import parse_command, tokenize_command


@click.group()
def main():
    """SmartLang CLI - ledger smart contract interpreter."""
    pass


@click.command()
def version_command():
    """Show version info."""
    click.echo(f"SmartLang v{__version__}")


main.add_command(run_command, "run")
main.add_command(parse_command, "parse")
main.add_command(tokenize_command, "tokenize")
main.add_command(version_command, "version")

__all__ = [
    "main",
    "run_command",
    "parse_command",
    "tokenize_command",
    "version_command",
]
