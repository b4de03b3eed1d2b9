"""Account position views"""
from dataclasses import dataclass

from ..constants import PRECISION


@dataclass(frozen=True)
class AccountInformation:
    """Snapshot of a user's position"""
    total_dsc_minted: int
    collateral_value_in_usd: int

    @property
    def has_debt(self) -> bool:
        return self.total_dsc_minted > 0

    def describe(self) -> str:
        """Human readable summary in whole USD"""
        return (
            f"debt={self.total_dsc_minted / PRECISION:,.2f} DSC, "
            f"collateral=${self.collateral_value_in_usd / PRECISION:,.2f}"
        )
