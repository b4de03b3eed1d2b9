"""Stablecoin minting"""
import logging
from typing import TYPE_CHECKING

from ..errors import MintFailedError, StablecoinError
from .validation import require_more_than_zero

if TYPE_CHECKING:
    from ..engine import DSCEngine

logger = logging.getLogger(__name__)


def mint_dsc(engine: "DSCEngine", user: str, amount: int) -> None:
    """Record new debt, check solvency, then mint to ``user``"""
    require_more_than_zero(amount)
    engine.debt.increase(user, amount)
    engine.health.assert_healthy(user)

    try:
        minted = engine.dsc.mint(engine.address, user, amount)
    except StablecoinError as exc:
        raise MintFailedError(f"Mint of {amount} DSC to {user} rejected: {exc}") from exc
    if not minted:
        raise MintFailedError(f"Mint of {amount} DSC to {user} failed")
    logger.info("%s minted %s DSC", user, amount)
