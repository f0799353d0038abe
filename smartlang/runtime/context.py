"""
SmartLang execution configuration and per-run context.

Key classes:
- ExecutionConfig: knobs for a run (step bound, legacy semantics, tracing)
- ExecutionContext: everything one script run needs, threaded through every
  evaluate call. Never shared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from smartlang.errors import ResourceExhausted
from smartlang.runtime.environment import Environment
from smartlang.runtime.values import AccountId


@dataclass
class ExecutionConfig:
    """Configuration for script execution."""
    max_steps: Optional[int] = 10000
    legacy_semantics: bool = False
    trace: bool = False


@dataclass
class ExecutionContext:
    """
    Context for one script run.

    `ledger` is any object with get_balance/set_balance. `sink`, when set,
    receives every println line in addition to the `output` buffer.
    """
    me: AccountId
    ledger: Any
    environment: Environment = field(default_factory=Environment)
    config: ExecutionConfig = field(default_factory=ExecutionConfig)
    output: List[str] = field(default_factory=list)
    sink: Optional[Callable[[str], None]] = None
    steps: int = 0

    @property
    def root_id(self) -> int:
        return self.environment.root_id

    def tick(self) -> None:
        """Count one evaluation step."""
        self.steps += 1
        limit = self.config.max_steps
        if limit is not None and self.steps > limit:
            raise ResourceExhausted(f"Step limit of {limit} exceeded")

    def emit(self, line: str) -> None:
        self.output.append(line)
        if self.sink is not None:
            self.sink(line)
