"""
SmartLang AST nodes.

A parsed script is a forest of immutable nodes:
- ListNode: a parenthesized form, first child is the head
- NumberNode: integer literal
- VariableNode: identifier
- OperatorNode: any other bare symbol ($me, $balance, +, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, Union

from smartlang.errors import ResourceExhausted

# Deepest list nesting rendered by to_dict. JSON encoders recurse per level.
MAX_DUMP_DEPTH = 100


@dataclass(frozen=True)
class NumberNode:
    value: int

    @property
    def text(self) -> str:
        return str(self.value)

    def to_dict(self, max_depth: int = MAX_DUMP_DEPTH) -> Dict[str, Any]:
        return {"type": "NUM", "value": self.value}

    def unparse(self) -> str:
        return self.text


@dataclass(frozen=True)
class VariableNode:
    name: str

    @property
    def text(self) -> str:
        return self.name

    def to_dict(self, max_depth: int = MAX_DUMP_DEPTH) -> Dict[str, Any]:
        return {"type": "VAR", "value": self.name}

    def unparse(self) -> str:
        return self.name


@dataclass(frozen=True)
class OperatorNode:
    symbol: str

    @property
    def text(self) -> str:
        return self.symbol

    def to_dict(self, max_depth: int = MAX_DUMP_DEPTH) -> Dict[str, Any]:
        return {"type": "OP", "value": self.symbol}

    def unparse(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class ListNode:
    children: Tuple["Node", ...] = ()

    @property
    def head(self) -> "Node":
        return self.children[0]

    @property
    def operands(self) -> Tuple["Node", ...]:
        return self.children[1:]

    @property
    def text(self) -> str:
        """Textual head of the form, or '' for an empty list or a nested head."""
        if not self.children or isinstance(self.children[0], ListNode):
            return ""
        return self.children[0].text

    def to_dict(self, max_depth: int = MAX_DUMP_DEPTH) -> Dict[str, Any]:
        """
        Tagged dict dump, built without recursion.

        Raises:
            ResourceExhausted: the list nests deeper than max_depth
        """
        root: Dict[str, Any] = {"type": "LIST", "children": []}
        stack = [(self, root["children"], 1)]
        while stack:
            node, children, depth = stack.pop()
            if depth > max_depth:
                raise ResourceExhausted(f"AST nesting exceeds dump depth of {max_depth}")
            for child in node.children:
                if isinstance(child, ListNode):
                    entry = {"type": "LIST", "children": []}
                    stack.append((child, entry["children"], depth + 1))
                    children.append(entry)
                else:
                    children.append(child.to_dict())
        return root

    def unparse(self) -> str:
        parts: List[str] = []
        # Pending items in reverse order: nodes to render or literal text.
        stack: List[Union[str, Node]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, ListNode):
                stack.append(")")
                for i in range(len(item.children) - 1, -1, -1):
                    stack.append(item.children[i])
                    if i:
                        stack.append(" ")
                stack.append("(")
            else:
                parts.append(item.unparse())
        return "".join(parts)


Node = Union[ListNode, NumberNode, VariableNode, OperatorNode]


def ast_to_dict(nodes: Sequence[Node], max_depth: int = MAX_DUMP_DEPTH) -> List[Dict[str, Any]]:
    """JSON-serializable dump of a forest of top-level forms."""
    return [node.to_dict(max_depth) for node in nodes]


def unparse(nodes: Sequence[Node]) -> str:
    """Re-serialize a forest, one top-level form per line."""
    return "\n".join(node.unparse() for node in nodes)
