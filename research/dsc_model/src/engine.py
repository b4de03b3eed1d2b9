"""DSC engine: collateral, debt, health factor and liquidation"""
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import AssetNotAcceptedError, ConfigurationMismatchError
from .events import Event
from .guard import ReentrancyGuard
from .health import HealthFactorCalculator, calculate_health_factor
from .instructions.burn_dsc import burn_dsc
from .instructions.deposit_collateral import deposit_collateral
from .instructions.liquidate import liquidate
from .instructions.mint_dsc import mint_dsc
from .instructions.redeem_collateral import redeem_collateral
from .interfaces import CollateralToken, PriceFeed, Revertible, Stablecoin
from .pricing import ValueConverter
from .state.collateral_vault import CollateralVault
from .state.debt_ledger import DebtLedger
from .state.position import AccountInformation

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_ADDRESS = "dsc-engine"


class DSCEngine:
    """Over-collateralized stablecoin engine.

    Every mutating method runs as one transaction: it holds the reentrancy
    guard, and on any error the engine ledgers, every revertible
    collaborator and the pending events are rolled back before the error
    propagates.

    Accounts are passed explicitly as the first argument of each operation.
    """

    def __init__(
        self,
        collateral_tokens: Sequence[CollateralToken],
        price_feeds: Sequence[PriceFeed],
        dsc: Stablecoin,
        address: str = DEFAULT_ENGINE_ADDRESS,
        oracle_timeout: Optional[int] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        if len(collateral_tokens) != len(price_feeds):
            raise ConfigurationMismatchError(
                f"{len(collateral_tokens)} collateral tokens but {len(price_feeds)} price feeds"
            )
        self._tokens: Dict[str, CollateralToken] = {}
        feeds: Dict[str, PriceFeed] = {}
        for token, feed in zip(collateral_tokens, price_feeds):
            if token.address in self._tokens:
                raise ConfigurationMismatchError(f"Duplicate collateral token {token.address}")
            self._tokens[token.address] = token
            feeds[token.address] = feed
        self._collateral_tokens: Tuple[str, ...] = tuple(self._tokens)

        self.address = address
        self.dsc = dsc
        self.vault = CollateralVault()
        self.debt = DebtLedger()
        self.converter = ValueConverter(feeds, oracle_timeout=oracle_timeout, clock=clock)
        self.health = HealthFactorCalculator(self._collateral_tokens, self.vault, self.debt, self.converter)
        self.events: List[Event] = []

        self._guard = ReentrancyGuard()
        self._pending_events: List[Event] = []

    # ------------------------------------------------------------------
    # Transaction plumbing
    # ------------------------------------------------------------------

    def collateral_token(self, token_address: str) -> CollateralToken:
        """Registered token for ``token_address``"""
        try:
            return self._tokens[token_address]
        except KeyError:
            raise AssetNotAcceptedError(token_address) from None

    def emit(self, event: Event) -> None:
        self._pending_events.append(event)

    def _revertibles(self) -> List[Any]:
        collaborators: List[Any] = [self.vault, self.debt, self.dsc, *self._tokens.values()]
        return [c for c in collaborators if isinstance(c, Revertible)]

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        with self._guard:
            checkpoint = [(c, c.snapshot()) for c in self._revertibles()]
            self._pending_events = []
            try:
                yield
            except Exception as exc:
                for collaborator, state in checkpoint:
                    collaborator.restore(state)
                logger.debug("Rolled back %s: %s", operation, exc)
                raise
            finally:
                events, self._pending_events = self._pending_events, []
            self.events.extend(events)

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def deposit_collateral_and_mint_dsc(
        self, user: str, token_collateral_address: str, amount_collateral: int, amount_dsc_to_mint: int
    ) -> None:
        with self._transaction("deposit_collateral_and_mint_dsc"):
            deposit_collateral(self, user, token_collateral_address, amount_collateral)
            mint_dsc(self, user, amount_dsc_to_mint)

    def deposit_collateral(self, user: str, token_collateral_address: str, amount_collateral: int) -> None:
        with self._transaction("deposit_collateral"):
            deposit_collateral(self, user, token_collateral_address, amount_collateral)

    def redeem_collateral_for_dsc(
        self, user: str, token_collateral_address: str, amount_collateral: int, amount_dsc_to_burn: int
    ) -> None:
        """Burn DSC, then redeem collateral, so the health check sees the reduced debt"""
        with self._transaction("redeem_collateral_for_dsc"):
            burn_dsc(self, amount_dsc_to_burn, user, user)
            redeem_collateral(self, token_collateral_address, amount_collateral, user, user)
            self.health.assert_healthy(user)

    def redeem_collateral(self, user: str, token_collateral_address: str, amount_collateral: int) -> None:
        with self._transaction("redeem_collateral"):
            redeem_collateral(self, token_collateral_address, amount_collateral, user, user)
            self.health.assert_healthy(user)

    def mint_dsc(self, user: str, amount_dsc_to_mint: int) -> None:
        with self._transaction("mint_dsc"):
            mint_dsc(self, user, amount_dsc_to_mint)

    def burn_dsc(self, user: str, amount: int) -> None:
        with self._transaction("burn_dsc"):
            burn_dsc(self, amount, user, user)
            self.health.assert_healthy(user)

    def liquidate(self, liquidator: str, collateral: str, user: str, debt_to_cover: int) -> None:
        with self._transaction("liquidate"):
            liquidate(self, liquidator, collateral, user, debt_to_cover)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_usd_value(self, token: str, amount: int) -> int:
        return self.converter.get_usd_value(token, amount)

    def get_token_amount_from_usd(self, token: str, usd_amount_in_wei: int) -> int:
        return self.converter.get_token_amount_from_usd(token, usd_amount_in_wei)

    def get_account_collateral_value(self, user: str) -> int:
        return self.health.get_account_collateral_value(user)

    def get_account_information(self, user: str) -> AccountInformation:
        return self.health.get_account_information(user)

    def get_health_factor(self, user: str) -> int:
        return self.health.health_factor(user)

    @staticmethod
    def calculate_health_factor(total_dsc_minted: int, collateral_value_in_usd: int) -> int:
        return calculate_health_factor(total_dsc_minted, collateral_value_in_usd)

    def get_collateral_balance_of_user(self, user: str, token: str) -> int:
        return self.vault.balance_of(user, token)

    def get_dsc_minted(self, user: str) -> int:
        return self.debt.minted_of(user)

    def get_collateral_tokens(self) -> Tuple[str, ...]:
        return self._collateral_tokens

    def get_collateral_token_price_feed(self, token: str) -> PriceFeed:
        return self.converter.price_feed(token)
