"""
SmartLang Lexer

Turns script text into a flat list of classified tokens:
- `;` starts a comment running to end of line
- `(` and `)` always lex as standalone tokens
- NUMBER: ^\\d+$, IDENTIFIER: ^\\w+$, SYMBOL: anything else

Character classes are ASCII only. There are no string literals, escapes or
floating point numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import re

NUMBER_RE = re.compile(r"\d+", re.ASCII)
IDENTIFIER_RE = re.compile(r"\w+", re.ASCII)
COMMENT_RE = re.compile(r";.*")


class TokenKind(Enum):
    PAREN_OPEN = "PAREN_OPEN"
    PAREN_CLOSE = "PAREN_CLOSE"
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    SYMBOL = "SYMBOL"


@dataclass(frozen=True)
class Token:
    """A classified lexical unit. NUMBER tokens also carry their integer value."""
    kind: TokenKind
    text: str
    value: Optional[int] = None

    def __str__(self) -> str:
        return self.text


def classify(fragment: str) -> Token:
    """Classify a single whitespace-free fragment."""
    if fragment == "(":
        return Token(TokenKind.PAREN_OPEN, fragment)
    if fragment == ")":
        return Token(TokenKind.PAREN_CLOSE, fragment)
    if NUMBER_RE.fullmatch(fragment):
        return Token(TokenKind.NUMBER, fragment, int(fragment))
    if IDENTIFIER_RE.fullmatch(fragment):
        return Token(TokenKind.IDENTIFIER, fragment)
    return Token(TokenKind.SYMBOL, fragment)


def tokenize(text: str) -> List[Token]:
    """Split script text into tokens."""
    tokens: List[Token] = []
    for line in text.split("\n"):
        line = COMMENT_RE.sub("", line)
        line = line.replace("(", " ( ").replace(")", " ) ")
        tokens.extend(classify(fragment) for fragment in line.split())
    return tokens
