"""In-memory Chainlink style price feed"""
import time
from typing import Optional, Tuple

from ..constants import FEED_DECIMALS


class MockV3Aggregator:
    """Price feed returning the latest pushed answer.

    Mirrors the aggregator round data layout:
    (round_id, answer, started_at, updated_at, answered_in_round)
    """

    def __init__(self, initial_answer: int, decimals: int = FEED_DECIMALS, updated_at: Optional[int] = None):
        self.decimals = decimals
        self.round_id = 0
        self.latest_answer = 0
        self.latest_timestamp = 0
        self.update_answer(initial_answer, updated_at)

    def update_answer(self, answer: int, updated_at: Optional[int] = None) -> None:
        """Push a new answer, starting a new round"""
        self.round_id += 1
        self.latest_answer = answer
        self.latest_timestamp = int(time.time()) if updated_at is None else updated_at

    def latest_round_data(self) -> Tuple[int, int, int, int, int]:
        return (
            self.round_id,
            self.latest_answer,
            self.latest_timestamp,
            self.latest_timestamp,
            self.round_id,
        )


def to_feed_answer(price: float, decimals: int = FEED_DECIMALS) -> int:
    """Convert a USD float price to the feed's integer answer"""
    return int(round(price * 10**decimals))
