"""In-memory ERC20 token"""
from typing import Dict, Optional, Tuple

from ..checked_math import checked_add
from ..constants import MAX_UINT256

TokenState = Tuple[Dict[str, int], Dict[Tuple[str, str], int], int]


class ERC20:
    """Fungible token with balances and allowances.

    Transfers report failure by returning False, the same way the engine
    expects from any collateral token.
    """

    def __init__(self, name: str, symbol: str, address: Optional[str] = None, decimals: int = 18):
        self.name = name
        self.symbol = symbol
        self.address = address or symbol.lower()
        self.decimals = decimals
        self.balances: Dict[str, int] = {}
        self.allowances: Dict[Tuple[str, str], int] = {}
        self.total_supply = 0

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self.allowances[(owner, spender)] = amount
        return True

    def _mint(self, to: str, amount: int) -> None:
        self.total_supply = checked_add(self.total_supply, amount)
        self.balances[to] = self.balance_of(to) + amount

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        return self._move(sender, recipient, amount)

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool:
        allowed = self.allowance(sender, spender)
        if allowed < amount or self.balance_of(sender) < amount:
            return False
        if allowed != MAX_UINT256:
            self.allowances[(sender, spender)] = allowed - amount
        return self._move(sender, recipient, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0 or self.balance_of(sender) < amount:
            return False
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount
        return True

    def snapshot(self) -> TokenState:
        return dict(self.balances), dict(self.allowances), self.total_supply

    def restore(self, state: TokenState) -> None:
        balances, allowances, total_supply = state
        self.balances = dict(balances)
        self.allowances = dict(allowances)
        self.total_supply = total_supply


class ERC20Mock(ERC20):
    """Token with an unrestricted faucet, used as collateral in tests and simulations"""

    def mint(self, to: str, amount: int) -> None:
        self._mint(to, amount)
