"""Collateral deposit"""
import logging
from typing import TYPE_CHECKING

from ..errors import TransferFailedError
from ..events import CollateralDeposited
from .validation import require_more_than_zero

if TYPE_CHECKING:
    from ..engine import DSCEngine

logger = logging.getLogger(__name__)


def deposit_collateral(engine: "DSCEngine", user: str, token_address: str, amount: int) -> None:
    """Credit ``amount`` of collateral to ``user`` and pull the tokens in"""
    require_more_than_zero(amount)
    token = engine.collateral_token(token_address)

    # Effects before the external transfer
    engine.vault.deposit(user, token_address, amount)
    engine.emit(CollateralDeposited(user=user, token=token_address, amount=amount))

    if not token.transfer_from(engine.address, user, engine.address, amount):
        raise TransferFailedError(f"Collateral transfer of {amount} {token_address} from {user} failed")
    logger.info("%s deposited %s %s", user, amount, token_address)
