"""Liquidation of under-collateralized positions"""
import logging
from typing import TYPE_CHECKING

from ..constants import LIQUIDATION_BONUS, LIQUIDATION_PRECISION, MIN_HEALTH_FACTOR
from ..errors import HealthFactorNotImprovedError, HealthFactorOkError
from .burn_dsc import burn_dsc
from .redeem_collateral import redeem_collateral
from .validation import require_more_than_zero

if TYPE_CHECKING:
    from ..engine import DSCEngine

logger = logging.getLogger(__name__)


def liquidation_payout(engine: "DSCEngine", collateral: str, debt_to_cover: int) -> int:
    """Collateral owed to a liquidator covering ``debt_to_cover``, bonus included"""
    token_amount = engine.converter.get_token_amount_from_usd(collateral, debt_to_cover)
    # bonus = token_amount * LIQUIDATION_BONUS / LIQUIDATION_PRECISION
    bonus = token_amount * LIQUIDATION_BONUS // LIQUIDATION_PRECISION
    return token_amount + bonus


def liquidate(
    engine: "DSCEngine",
    liquidator: str,
    collateral: str,
    user: str,
    debt_to_cover: int,
) -> None:
    """Repay part of ``user``'s debt in exchange for discounted collateral.

    Collateral is only drawn from ``collateral``, even when the user holds
    other tokens. The call fails unless the user's health factor strictly
    improves and the liquidator stays solvent.
    """
    require_more_than_zero(debt_to_cover)
    engine.collateral_token(collateral)

    starting_health_factor = engine.health.health_factor(user)
    if starting_health_factor >= MIN_HEALTH_FACTOR:
        raise HealthFactorOkError(starting_health_factor)

    total_collateral_to_redeem = liquidation_payout(engine, collateral, debt_to_cover)
    redeem_collateral(engine, collateral, total_collateral_to_redeem, user, liquidator)
    burn_dsc(engine, debt_to_cover, user, liquidator)

    ending_health_factor = engine.health.health_factor(user)
    if ending_health_factor <= starting_health_factor:
        raise HealthFactorNotImprovedError(starting_health_factor, ending_health_factor)
    engine.health.assert_healthy(liquidator)

    logger.info(
        "%s liquidated %s: covered %s DSC for %s %s, health factor %s -> %s",
        liquidator,
        user,
        debt_to_cover,
        total_collateral_to_redeem,
        collateral,
        starting_health_factor,
        ending_health_factor,
    )
