"""
SmartLang Interpreter

Runs a whole script: lex, parse, then evaluate every top-level form in order
against one shared root scope. The first error aborts the run.

Key classes:
- ExecutionResult: outcome of a run as reported to hosts
- Interpreter: script runner
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
import json
import logging
import time

from smartlang.errors import ResourceExhausted, SmartLangError
from smartlang.runtime.context import ExecutionConfig, ExecutionContext
from smartlang.runtime.environment import Environment
from smartlang.runtime.evaluator import NodeEvaluator
from smartlang.runtime.values import AccountId, Value, format_value, to_json_value
from smartlang.syntax.lexer import IDENTIFIER_RE, NUMBER_RE
from smartlang.syntax.nodes import Node
from smartlang.syntax.parser import parse_script

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result of a script run."""
    success: bool
    contract: str
    results: List[Any] = field(default_factory=list)
    output: List[str] = field(default_factory=list)
    balances: Dict[str, int] = field(default_factory=dict)
    steps: int = 0
    errors: List[str] = field(default_factory=list)
    error_kind: Optional[str] = None
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "contract": self.contract,
            "results": self.results,
            "output": self.output,
            "balances": self.balances,
            "steps": self.steps,
            "errors": self.errors,
            "error_kind": self.error_kind,
            "execution_time_ms": self.execution_time_ms,
        }


def bind_accounts(ledger: Any) -> Dict[str, AccountId]:
    """
    Name -> AccountId bindings for every ledger account whose address is a
    valid identifier, so scripts can name transfer destinations.
    """
    return {
        account.address: account
        for account in ledger.accounts()
        if IDENTIFIER_RE.fullmatch(account.address) and not NUMBER_RE.fullmatch(account.address)
    }


class Interpreter:
    """Main interpreter for SmartLang scripts."""

    def __init__(self, config: ExecutionConfig = None):
        self.config = config or ExecutionConfig()
        self.evaluator = NodeEvaluator()

    def create_context(self,
                       contract: Union[AccountId, str],
                       ledger: Any,
                       bindings: Optional[Mapping[str, Value]] = None,
                       sink: Optional[Callable[[str], None]] = None) -> ExecutionContext:
        """Fresh context and root scope for one run."""
        me = contract if isinstance(contract, AccountId) else AccountId(contract)
        ctx = ExecutionContext(
            me=me,
            ledger=ledger,
            environment=Environment(),
            config=self.config,
            sink=sink,
        )
        for name, value in (bindings or {}).items():
            ctx.environment.define(ctx.root_id, name, value)
        return ctx

    def execute(self, forms: Sequence[Node], ctx: ExecutionContext) -> List[Value]:
        """Evaluate parsed top-level forms against the context's root scope."""
        values: List[Value] = []
        for form in forms:
            if self.config.trace:
                self._trace_form(form)
            try:
                value = self.evaluator.evaluate(form, ctx.root_id, ctx)
            except RecursionError:
                raise ResourceExhausted("Maximum evaluation depth exceeded") from None
            logger.debug("Final value -> %s", format_value(value))
            if self.config.trace:
                logger.debug("Scopes are %s", json.dumps(ctx.environment.snapshot()))
            values.append(value)
        return values

    def _trace_form(self, form: Node) -> None:
        try:
            dump = form.to_dict()
        except ResourceExhausted as e:
            # Too deep to dump; evaluation decides whether the form itself fails.
            logger.debug("AST not dumped: %s", e.message)
            return
        logger.debug("AST is %s", json.dumps(dump))

    def run(self,
            script: str,
            contract: Union[AccountId, str],
            ledger: Any,
            bindings: Optional[Mapping[str, Value]] = None,
            sink: Optional[Callable[[str], None]] = None) -> List[Value]:
        """
        Run a script and return one value per top-level form.

        Raises:
            SmartLangError: the first error raised by any form
        """
        ctx = self.create_context(contract, ledger, bindings, sink)
        return self.execute(parse_script(script), ctx)

    def interpret(self,
                  script: str,
                  contract: Union[AccountId, str],
                  ledger: Any,
                  bindings: Optional[Mapping[str, Value]] = None,
                  sink: Optional[Callable[[str], None]] = None) -> ExecutionResult:
        """
        Run a script and report the outcome instead of raising.

        Only SmartLangError is captured; anything else is an internal error and
        propagates.
        """
        start = time.time()
        ctx = self.create_context(contract, ledger, bindings, sink)
        result = ExecutionResult(success=False, contract=str(ctx.me))

        try:
            values = self.execute(parse_script(script), ctx)
        except SmartLangError as e:
            logger.debug("Script for %s failed: %s: %s", ctx.me, e.kind, e.message)
            result.errors.append(e.message)
            result.error_kind = e.kind
        else:
            result.results = [to_json_value(v) for v in values]
            result.success = True

        result.output = list(ctx.output)
        result.steps = ctx.steps
        if hasattr(ledger, "to_dict"):
            result.balances = ledger.to_dict()
        result.execution_time_ms = (time.time() - start) * 1000
        return result


def run_script(script: str,
               contract: Union[AccountId, str],
               ledger: Any,
               bindings: Optional[Mapping[str, Value]] = None,
               config: ExecutionConfig = None,
               sink: Optional[Callable[[str], None]] = None) -> List[Value]:
    """Run a script with a one-off Interpreter."""
    return Interpreter(config).run(script, contract, ledger, bindings, sink)
