"""Conversions between collateral quantities and USD value"""
import time
from typing import Callable, Dict, Optional

from .checked_math import checked_div, checked_mul
from .constants import ADDITIONAL_FEED_PRECISION, FEED_DECIMALS, PRECISION
from .errors import AssetNotAcceptedError, OracleUnavailableError, StalePriceError
from .interfaces import PriceFeed


class ValueConverter:
    """Prices collateral through its registered feed.

    All values are 18 decimal fixed point. Feed answers carry 8 decimals and
    are lifted by ADDITIONAL_FEED_PRECISION before use.

    Staleness is only checked when ``oracle_timeout`` is given; by default
    any positive answer is trusted regardless of age.
    """

    def __init__(
        self,
        price_feeds: Dict[str, PriceFeed],
        oracle_timeout: Optional[int] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._price_feeds = price_feeds
        self.oracle_timeout = oracle_timeout
        self._clock = clock or (lambda: int(time.time()))

    def price_feed(self, token: str) -> PriceFeed:
        try:
            return self._price_feeds[token]
        except KeyError:
            raise AssetNotAcceptedError(token) from None

    def latest_price(self, token: str) -> int:
        """Latest feed answer for ``token``, validated"""
        feed = self.price_feed(token)
        if feed.decimals != FEED_DECIMALS:
            raise OracleUnavailableError(
                f"Feed for {token} reports {feed.decimals} decimals, expected {FEED_DECIMALS}"
            )
        _, answer, _, updated_at, _ = feed.latest_round_data()
        if answer <= 0:
            raise OracleUnavailableError(f"Invalid price {answer} for {token}")
        if self.oracle_timeout is not None:
            age = self._clock() - updated_at
            if age > self.oracle_timeout:
                raise StalePriceError(f"Price for {token} is {age}s old")
        return answer

    def get_usd_value(self, token: str, amount: int) -> int:
        """USD value (1e18) of ``amount`` token units"""
        price = self.latest_price(token)
        # value = price * ADDITIONAL_FEED_PRECISION * amount / PRECISION
        return checked_mul(price * ADDITIONAL_FEED_PRECISION, amount) // PRECISION

    def get_token_amount_from_usd(self, token: str, usd_amount_in_wei: int) -> int:
        """Token units worth ``usd_amount_in_wei`` at the latest price"""
        price = self.latest_price(token)
        # amount = usd * PRECISION / (price * ADDITIONAL_FEED_PRECISION)
        return checked_div(
            checked_mul(usd_amount_in_wei, PRECISION),
            price * ADDITIONAL_FEED_PRECISION,
        )
