"""Collaborator protocols consumed by the engine"""
from typing import Any, Protocol, Tuple, runtime_checkable


class PriceFeed(Protocol):
    """Chainlink style aggregator"""

    decimals: int

    def latest_round_data(self) -> Tuple[int, int, int, int, int]: ...


class CollateralToken(Protocol):
    """ERC20 style token moved by the engine"""

    address: str

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool: ...


class Stablecoin(CollateralToken, Protocol):
    """Token the engine may mint and burn"""

    def mint(self, caller: str, to: str, amount: int) -> bool: ...

    def burn(self, caller: str, amount: int) -> None: ...


@runtime_checkable
class Revertible(Protocol):
    """Collaborator whose state can be rolled back with a failed call"""

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...
