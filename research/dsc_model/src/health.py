"""Health factor accounting"""
import logging
from typing import Sequence

from .constants import (
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_HEALTH_FACTOR,
    MIN_HEALTH_FACTOR,
    PRECISION,
)
from .errors import BreaksHealthFactorError
from .pricing import ValueConverter
from .state.collateral_vault import CollateralVault
from .state.debt_ledger import DebtLedger
from .state.position import AccountInformation

logger = logging.getLogger(__name__)


def calculate_health_factor(total_dsc_minted: int, collateral_value_in_usd: int) -> int:
    """Solvency ratio scaled by PRECISION.

    Only LIQUIDATION_THRESHOLD percent of the collateral value counts. An
    account without debt is reported as MAX_HEALTH_FACTOR.
    """
    if total_dsc_minted == 0:
        return MAX_HEALTH_FACTOR
    # adjusted = collateral * LIQUIDATION_THRESHOLD / LIQUIDATION_PRECISION
    adjusted = collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
    return adjusted * PRECISION // total_dsc_minted


class HealthFactorCalculator:
    def __init__(
        self,
        collateral_tokens: Sequence[str],
        vault: CollateralVault,
        debt: DebtLedger,
        converter: ValueConverter,
    ):
        self._collateral_tokens = tuple(collateral_tokens)
        self._vault = vault
        self._debt = debt
        self._converter = converter

    def get_account_collateral_value(self, user: str) -> int:
        """Sum of the USD value of every registered collateral the user holds"""
        total = 0
        for token in self._collateral_tokens:
            amount = self._vault.balance_of(user, token)
            if amount:
                total += self._converter.get_usd_value(token, amount)
        return total

    def get_account_information(self, user: str) -> AccountInformation:
        return AccountInformation(
            total_dsc_minted=self._debt.minted_of(user),
            collateral_value_in_usd=self.get_account_collateral_value(user),
        )

    def health_factor(self, user: str) -> int:
        if self._debt.minted_of(user) == 0:
            return MAX_HEALTH_FACTOR
        info = self.get_account_information(user)
        return calculate_health_factor(info.total_dsc_minted, info.collateral_value_in_usd)

    def assert_healthy(self, user: str) -> None:
        health_factor = self.health_factor(user)
        logger.debug("Health factor of %s is %s", user, health_factor)
        if health_factor < MIN_HEALTH_FACTOR:
            raise BreaksHealthFactorError(health_factor)
