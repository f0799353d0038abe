"""
SmartLang Runtime Engine

This module provides the runtime for executing SmartLang scripts:
- Interpreter: script runner (lex, parse, evaluate each top-level form)
- NodeEvaluator: special forms and closure calls
- ExecutionContext / ExecutionConfig: per-run state and knobs
- Environment: scope arena with lexical lookup and capability whitelists
- Ledger: in-memory account balances
"""

from smartlang.runtime.context import ExecutionConfig, ExecutionContext
from smartlang.runtime.environment import Environment, Scope
from smartlang.runtime.evaluator import NodeEvaluator, SpecialForm
from smartlang.runtime.interpreter import ExecutionResult, Interpreter, bind_accounts, run_script
from smartlang.runtime.ledger import Ledger
from smartlang.runtime.values import AccountId, Closure, Value, format_value, to_json_value

__all__ = [
    "ExecutionConfig",
    "ExecutionContext",
    "Environment",
    "Scope",
    "NodeEvaluator",
    "SpecialForm",
    "ExecutionResult",
    "Interpreter",
    "bind_accounts",
    "run_script",
    "Ledger",
    "AccountId",
    "Closure",
    "Value",
    "format_value",
    "to_json_value",
]
