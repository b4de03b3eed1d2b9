"""Per-user collateral ledger"""
from dataclasses import dataclass, field
from typing import Dict

from ..checked_math import checked_add, checked_sub


@dataclass
class CollateralVault:
    """Deposited collateral, keyed by user then token address"""
    balances: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def balance_of(self, user: str, token: str) -> int:
        return self.balances.get(user, {}).get(token, 0)

    def deposit(self, user: str, token: str, amount: int) -> None:
        """Credit collateral"""
        user_balances = self.balances.setdefault(user, {})
        user_balances[token] = checked_add(user_balances.get(token, 0), amount)

    def withdraw(self, user: str, token: str, amount: int) -> None:
        """Debit collateral, failing on underflow"""
        remaining = checked_sub(self.balance_of(user, token), amount)
        self.balances.setdefault(user, {})[token] = remaining

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {user: dict(tokens) for user, tokens in self.balances.items()}

    def restore(self, state: Dict[str, Dict[str, int]]) -> None:
        self.balances = {user: dict(tokens) for user, tokens in state.items()}
