"""
SmartLang runtime values.

A value is one of:
- int: integer
- AccountId: opaque ledger key, never usable in arithmetic
- Closure: parameters, a single body node and the captured scope id
- None: result of forms with no meaningful value (define, provide, println, $transfer)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from smartlang.syntax.nodes import Node


@dataclass(frozen=True)
class AccountId:
    """Opaque ledger key."""
    address: str

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class Closure:
    """
    First-class function value.

    scope_id indexes the captured scope in the run's Environment, so a closure
    is only meaningful inside the run that created it.
    """
    params: Tuple[str, ...]
    body: Node
    scope_id: int

    def __str__(self) -> str:
        return f"<closure ({' '.join(self.params)})>"


Value = Union[int, AccountId, Closure, None]


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def format_value(value: Value) -> str:
    """Text written by println."""
    if value is None:
        return "nil"
    return str(value)


def to_json_value(value: Value) -> Any:
    """JSON-safe rendering used by ExecutionResult, the CLI and the API."""
    if value is None or is_integer(value):
        return value
    return str(value)
