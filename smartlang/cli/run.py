"""Run command for SmartLang CLI."""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, Tuple

import click

from smartlang.runtime.context import ExecutionConfig
from smartlang.runtime.interpreter import Interpreter, bind_accounts
from smartlang.runtime.ledger import Ledger


def parse_balances(ctx, param, values: Tuple[str, ...]) -> Dict[str, int]:
    """Click callback turning NAME=AMOUNT pairs into a dict."""
    balances: Dict[str, int] = {}
    for item in values:
        name, sep, amount = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=AMOUNT, got '{item}'")
        try:
            balances[name] = int(amount)
        except ValueError:
            raise click.BadParameter(f"amount for '{name}' is not an integer: '{amount}'")
        if balances[name] < 0:
            raise click.BadParameter(f"amount for '{name}' cannot be negative")
    return balances


@click.command()
@click.argument('script', type=click.Path(exists=True, dir_okay=False))
@click.option('--contract', '-c', required=True, help='Account the script executes as ($me)')
@click.option('--balance', '-b', 'balances', multiple=True, callback=parse_balances,
              help='Initial balance as NAME=AMOUNT (repeatable)')
@click.option('--json-output', '-j', 'json_output', is_flag=True, help='Output as JSON')
@click.option('--max-steps', type=int, default=ExecutionConfig.max_steps, show_default=True,
              help='Abort after this many evaluation steps')
@click.option('--legacy', is_flag=True, help='Use the original call and multiplication semantics')
@click.option('--trace', is_flag=True, help='Log each top-level form before evaluating it')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def run_command(script, contract, balances, json_output, max_steps, legacy, trace, verbose):
    """Execute a SmartLang script against an in-memory ledger."""
    if verbose or trace:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    source = Path(script).read_text()
    ledger = Ledger.from_mapping(balances)
    config = ExecutionConfig(max_steps=max_steps, legacy_semantics=legacy, trace=trace)

    interpreter = Interpreter(config)
    result = interpreter.interpret(source, contract, ledger, bind_accounts(ledger))

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for line in result.output:
            click.echo(line)
        if result.success:
            for value in result.results:
                click.echo(f"=> {'nil' if value is None else value}")
            click.echo(f"Balances: {json.dumps(result.balances, sort_keys=True)}")
        else:
            click.echo(f"Error [{result.error_kind}]: {'; '.join(result.errors)}", err=True)

    if not result.success:
        sys.exit(1)
