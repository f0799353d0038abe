"""Parse and tokenize commands for SmartLang CLI."""

import json
import sys
from pathlib import Path

import click

from smartlang.errors import ParseError, ResourceExhausted
from smartlang.syntax.lexer import tokenize
from smartlang.syntax.nodes import ast_to_dict
from smartlang.syntax.parser import parse


@click.command()
@click.argument('script', type=click.Path(exists=True, dir_okay=False))
def parse_command(script):
    """Print the AST of a script as JSON."""
    tokens = tokenize(Path(script).read_text())
    try:
        forms = parse(tokens)
        dump = ast_to_dict(forms)
    except (ParseError, ResourceExhausted) as e:
        click.echo(f"Error [{e.kind}]: {e.message}", err=True)
        sys.exit(1)

    click.echo(json.dumps({"token_count": len(tokens), "forms": dump}, indent=2))


@click.command()
@click.argument('script', type=click.Path(exists=True, dir_okay=False))
def tokenize_command(script):
    """Print one KIND TEXT line per token."""
    for tok in tokenize(Path(script).read_text()):
        click.echo(f"{tok.kind.value} {tok.text}")
