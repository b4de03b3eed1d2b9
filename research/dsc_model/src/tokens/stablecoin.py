"""Decentralized stablecoin token, mintable and burnable by its owner only"""
from ..constants import ZERO_ADDRESS
from ..errors import (
    BurnAmountExceedsBalanceError,
    MustBeMoreThanZeroError,
    NotOwnerError,
    NotZeroAddressError,
)
from .erc20 import ERC20


class DecentralizedStableCoin(ERC20):
    """USD pegged token whose owner is the engine"""

    def __init__(self, owner: str, address: str = "dsc"):
        super().__init__("DecentralizedStableCoin", "DSC", address=address)
        self.owner = owner

    def _only_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise NotOwnerError(f"{caller} is not the owner")

    def mint(self, caller: str, to: str, amount: int) -> bool:
        self._only_owner(caller)
        if to == ZERO_ADDRESS:
            raise NotZeroAddressError("Cannot mint to the zero address")
        if amount <= 0:
            raise MustBeMoreThanZeroError("Mint amount must be more than zero")
        self._mint(to, amount)
        return True

    def burn(self, caller: str, amount: int) -> None:
        """Burn from the owner's own balance"""
        self._only_owner(caller)
        if amount <= 0:
            raise MustBeMoreThanZeroError("Burn amount must be more than zero")
        balance = self.balance_of(caller)
        if balance < amount:
            raise BurnAmountExceedsBalanceError(f"Burn of {amount} exceeds balance {balance}")
        self.balances[caller] = balance - amount
        self.total_supply -= amount
