"""Shared argument checks for instructions"""
from ..errors import InvalidAmountError


def require_more_than_zero(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError(amount)
