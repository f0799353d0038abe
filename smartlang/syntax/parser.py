"""
SmartLang Parser

Builds a forest of S-expressions from the token stream. A single cursor walks
the tokens; an explicit stack tracks the lists still open.
"""

from __future__ import annotations

from typing import List
import logging

from smartlang.errors import UnbalancedParens
from smartlang.syntax.lexer import Token, TokenKind, tokenize
from smartlang.syntax.nodes import ListNode, Node, NumberNode, OperatorNode, VariableNode

logger = logging.getLogger(__name__)


def parse(tokens: List[Token]) -> List[Node]:
    """
    Parse tokens into the ordered list of top-level forms.

    Raises:
        UnbalancedParens: on a `)` at the root or when the stream ends
            while a list is still open
    """
    stack: List[List[Node]] = [[]]

    for position, tok in enumerate(tokens):
        if tok.kind == TokenKind.PAREN_OPEN:
            stack.append([])
        elif tok.kind == TokenKind.PAREN_CLOSE:
            if len(stack) == 1:
                raise UnbalancedParens(f"Unexpected ')' at token {position}")
            children = stack.pop()
            stack[-1].append(ListNode(tuple(children)))
        elif tok.kind == TokenKind.NUMBER:
            stack[-1].append(NumberNode(tok.value))
        elif tok.kind == TokenKind.IDENTIFIER:
            stack[-1].append(VariableNode(tok.text))
        else:
            stack[-1].append(OperatorNode(tok.text))

    if len(stack) > 1:
        raise UnbalancedParens(f"{len(stack) - 1} unclosed '(' at end of input")

    forms = stack[0]
    logger.debug("Parsed %d top-level form(s) from %d token(s)", len(forms), len(tokens))
    return forms


def parse_script(text: str) -> List[Node]:
    """Tokenize and parse script text."""
    return parse(tokenize(text))
