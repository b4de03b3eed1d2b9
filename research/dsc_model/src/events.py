"""Events emitted by the engine"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CollateralDeposited:
    user: str
    token: str
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed:
    redeemed_from: str
    redeemed_to: str
    token: str
    amount: int


Event = Union[CollateralDeposited, CollateralRedeemed]
