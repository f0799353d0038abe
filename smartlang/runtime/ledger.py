"""
SmartLang in-memory Ledger

The interpreter consumes the ledger through two calls:
- get_balance(account_id) -> int
- set_balance(account_id, int)

Any host object offering those two methods can be passed instead. This
implementation backs the CLI, the API and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from smartlang.runtime.values import AccountId


@dataclass
class Ledger:
    """Mapping of AccountId to non-negative balance. Unknown accounts hold 0."""
    balances: Dict[AccountId, int] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, balances: Mapping[str, int]) -> "Ledger":
        """Build a ledger from address -> balance pairs."""
        ledger = cls()
        for address, amount in balances.items():
            ledger.set_balance(AccountId(address), amount)
        return ledger

    def get_balance(self, account_id: AccountId) -> int:
        return self.balances.get(account_id, 0)

    def set_balance(self, account_id: AccountId, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Balance of {account_id} cannot be negative: {amount}")
        self.balances[account_id] = amount

    def accounts(self) -> List[AccountId]:
        return list(self.balances)

    def total(self) -> int:
        """Sum of all balances."""
        return sum(self.balances.values())

    def to_dict(self) -> Dict[str, int]:
        return {account.address: amount for account, amount in self.balances.items()}
