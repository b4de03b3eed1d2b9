"""Collateral redemption"""
import logging
from typing import TYPE_CHECKING

from ..errors import TransferFailedError
from ..events import CollateralRedeemed
from .validation import require_more_than_zero

if TYPE_CHECKING:
    from ..engine import DSCEngine

logger = logging.getLogger(__name__)


def redeem_collateral(
    engine: "DSCEngine",
    token_address: str,
    amount: int,
    redeemed_from: str,
    redeemed_to: str,
) -> None:
    """Move collateral out of ``redeemed_from``'s position to ``redeemed_to``.

    Does not check health; callers decide whose solvency must hold afterwards.
    """
    require_more_than_zero(amount)
    token = engine.collateral_token(token_address)

    engine.vault.withdraw(redeemed_from, token_address, amount)
    engine.emit(
        CollateralRedeemed(
            redeemed_from=redeemed_from,
            redeemed_to=redeemed_to,
            token=token_address,
            amount=amount,
        )
    )

    if not token.transfer(engine.address, redeemed_to, amount):
        raise TransferFailedError(f"Collateral transfer of {amount} {token_address} to {redeemed_to} failed")
    logger.info("Redeemed %s %s from %s to %s", amount, token_address, redeemed_from, redeemed_to)
