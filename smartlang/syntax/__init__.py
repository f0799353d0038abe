"""
SmartLang Syntax

- Lexer: script text to classified tokens
- Parser: tokens to a forest of S-expression nodes
- Nodes: immutable AST variants with dict dump and unparse
"""

from smartlang.syntax.lexer import Token, TokenKind, tokenize
from smartlang.syntax.nodes import (
    ListNode,
    Node,
    NumberNode,
    OperatorNode,
    VariableNode,
    ast_to_dict,
    unparse,
)
from smartlang.syntax.parser import parse, parse_script

__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "ListNode",
    "Node",
    "NumberNode",
    "OperatorNode",
    "VariableNode",
    "ast_to_dict",
    "unparse",
    "parse",
    "parse_script",
]
