"""
SmartLang - a small S-expression language for ledger smart contracts.

Exports:
- tokenize / parse / parse_script: syntax front end
- Interpreter / run_script: script execution
- Ledger / AccountId: in-memory ledger and account keys
- SmartLangError and its subclasses
"""

from smartlang.errors import *  # noqa: F401,F403
from smartlang.errors import __all__ as _error_names
from smartlang.runtime import (
    AccountId,
    Closure,
    ExecutionConfig,
    ExecutionContext,
    ExecutionResult,
    Interpreter,
    Ledger,
    run_script,
)
from smartlang.syntax import ast_to_dict, parse, parse_script, tokenize, unparse

__version__ = "0.1.0"

__all__ = [
    "AccountId",
    "Closure",
    "ExecutionConfig",
    "ExecutionContext",
    "ExecutionResult",
    "Interpreter",
    "Ledger",
    "run_script",
    "ast_to_dict",
    "parse",
    "parse_script",
    "tokenize",
    "unparse",
] + list(_error_names)
