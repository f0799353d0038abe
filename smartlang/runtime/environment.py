"""
SmartLang Runtime Environment

Scopes live in an arena keyed by integer scope_id. Each scope record holds its
own bindings, the id of its parent and a capability whitelist. Closures refer
to their captured scope by id, so the arena owns every scope of a run.

Key classes:
- Scope: a single scope record
- Environment: the arena plus lexical lookup
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Set

from smartlang.errors import UnboundVariable


@dataclass
class Scope:
    """
    One scope record.

    Only the root scope's `permitted` set is consulted when checking calls;
    nested whitelists are recorded but inert.
    """
    scope_id: int
    parent_id: Optional[int] = None
    bindings: Dict[str, Any] = field(default_factory=dict)
    permitted: Set[str] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope_id": self.scope_id,
            "parent_id": self.parent_id,
            "bindings": sorted(self.bindings),
            "permitted": sorted(self.permitted),
        }


class Environment:
    """Scope arena for one script run. Created with its root scope."""

    def __init__(self):
        self.scopes: Dict[int, Scope] = {}
        self.root_id = self.new_scope(None)

    def new_scope(self, parent_id: Optional[int]) -> int:
        """Create a scope under parent_id and return its id."""
        scope_id = len(self.scopes)
        self.scopes[scope_id] = Scope(scope_id, parent_id)
        return scope_id

    def define(self, scope_id: int, name: str, value: Any) -> None:
        """Bind name in this scope, shadowing any parent binding."""
        self.scopes[scope_id].bindings[name] = value

    def lookup(self, scope_id: int, name: str) -> Any:
        """Find name in this scope or the nearest enclosing one."""
        current: Optional[int] = scope_id
        while current is not None:
            scope = self.scopes[current]
            if name in scope.bindings:
                return scope.bindings[name]
            current = scope.parent_id
        raise UnboundVariable(name)

    def add_permitted(self, scope_id: int, name: str) -> None:
        self.scopes[scope_id].permitted.add(name)

    def permitted(self, scope_id: int) -> FrozenSet[str]:
        return frozenset(self.scopes[scope_id].permitted)

    def snapshot(self) -> Dict[str, Any]:
        """Debug view of every scope in the arena."""
        return {"scopes": [scope.to_dict() for scope in self.scopes.values()]}
