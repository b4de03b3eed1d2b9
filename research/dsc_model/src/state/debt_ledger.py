"""Per-user minted stablecoin ledger"""
from dataclasses import dataclass, field
from typing import Dict

from ..checked_math import checked_add, checked_sub


@dataclass
class DebtLedger:
    minted: Dict[str, int] = field(default_factory=dict)

    def minted_of(self, user: str) -> int:
        return self.minted.get(user, 0)

    def increase(self, user: str, amount: int) -> None:
        self.minted[user] = checked_add(self.minted_of(user), amount)

    def decrease(self, user: str, amount: int) -> None:
        """Reduce debt, failing if more than the user owes"""
        self.minted[user] = checked_sub(self.minted_of(user), amount)

    def snapshot(self) -> Dict[str, int]:
        return dict(self.minted)

    def restore(self, state: Dict[str, int]) -> None:
        self.minted = dict(state)
