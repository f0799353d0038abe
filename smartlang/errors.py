"""
SmartLang Error Model

Every failure raised while lexing, parsing or evaluating a script is a
SmartLangError. The `kind` attribute names the failure class and is what hosts
(CLI, API) surface next to the message.

Any error aborts the whole script run. Transfers applied by earlier forms are
kept; the failing transfer is never applied.
"""

from __future__ import annotations

from typing import Any, Dict


class SmartLangError(Exception):
    """Base class for all script errors."""
    kind = "SmartLangError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class LexError(SmartLangError):
    """Reserved for malformed characters. The lexer currently accepts any input."""
    kind = "LexError"


class ParseError(SmartLangError):
    kind = "ParseError"


class UnbalancedParens(ParseError):
    kind = "UnbalancedParens"


class UnboundVariable(SmartLangError):
    kind = "UnboundVariable"

    def __init__(self, name: str):
        super().__init__(f"Unbound variable: {name}")
        self.name = name


class InvalidOperand(SmartLangError):
    """Wrong operand shape or type for a special form."""
    kind = "InvalidOperand"


class MalformedLambda(SmartLangError):
    kind = "MalformedLambda"


class InsufficientBalance(SmartLangError):
    kind = "InsufficientBalance"

    def __init__(self, account: Any, balance: int, amount: int):
        super().__init__(
            f"Not enough balance: {account} holds {balance}, transfer needs {amount}"
        )
        self.account = account
        self.balance = balance
        self.amount = amount


class DivisionByZero(SmartLangError):
    kind = "DivisionByZero"


class CapabilityDenied(SmartLangError):
    kind = "CapabilityDenied"

    def __init__(self, name: str):
        super().__init__(f"Method not allowed: {name}. Try adding it in provide.")
        self.name = name


class ArityMismatch(SmartLangError):
    kind = "ArityMismatch"

    def __init__(self, name: str, expected: int, got: int):
        super().__init__(f"{name} expects {expected} argument(s), got {got}")
        self.name = name
        self.expected = expected
        self.got = got


class UnknownForm(SmartLangError):
    """Head of a form is neither a special form nor a bound closure."""
    kind = "UnknownForm"


class ResourceExhausted(SmartLangError):
    kind = "ResourceExhausted"


__all__ = [
    "SmartLangError",
    "LexError",
    "ParseError",
    "UnbalancedParens",
    "UnboundVariable",
    "InvalidOperand",
    "MalformedLambda",
    "InsufficientBalance",
    "DivisionByZero",
    "CapabilityDenied",
    "ArityMismatch",
    "UnknownForm",
    "ResourceExhausted",
]
