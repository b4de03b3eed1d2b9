"""Stablecoin burning"""
import logging
from typing import TYPE_CHECKING

from ..errors import BurnFailedError, StablecoinError, TransferFailedError
from .validation import require_more_than_zero

if TYPE_CHECKING:
    from ..engine import DSCEngine

logger = logging.getLogger(__name__)


def burn_dsc(engine: "DSCEngine", amount: int, on_behalf_of: str, dsc_from: str) -> None:
    """Repay ``on_behalf_of``'s debt with DSC pulled from ``dsc_from``.

    Does not check health.
    """
    require_more_than_zero(amount)
    engine.debt.decrease(on_behalf_of, amount)

    if not engine.dsc.transfer_from(engine.address, dsc_from, engine.address, amount):
        raise TransferFailedError(f"DSC transfer of {amount} from {dsc_from} failed")
    try:
        engine.dsc.burn(engine.address, amount)
    except StablecoinError as exc:
        raise BurnFailedError(f"Burn of {amount} DSC rejected: {exc}") from exc
    logger.info("%s repaid %s DSC on behalf of %s", dsc_from, amount, on_behalf_of)
