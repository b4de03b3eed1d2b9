import argparse
import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from dsc_model.src.config import SimulationConfig, load_config
from dsc_model.src.constants import (
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_UINT256,
    MIN_HEALTH_FACTOR,
    PRECISION,
)
from dsc_model.src.engine import DEFAULT_ENGINE_ADDRESS, DSCEngine
from dsc_model.src.errors import ProtocolError
from dsc_model.src.logging_setup import configure_logging
from dsc_model.src.oracle.price_feed import MockV3Aggregator, to_feed_answer
from dsc_model.src.tokens.erc20 import ERC20Mock
from dsc_model.src.tokens.stablecoin import DecentralizedStableCoin

logger = logging.getLogger(__name__)

LIQUIDATOR = "liquidator"
BPS_SCALE = 10_000

RESULT_COLUMNS = [
    "step",
    "day",
    "price",
    "total_collateral_usd",
    "total_debt",
    "min_health_factor",
    "underwater_positions",
    "liquidations",
    "failed_liquidations",
    "liquidator_collateral",
]


def to_wei(amount: float) -> int:
    """Whole units to 18 decimal fixed point"""
    return int(Decimal(str(amount)) * PRECISION)


def from_wei(amount: int) -> float:
    return amount / PRECISION


def debt_for_health_factor(collateral_value_in_usd: int, health_factor: float) -> int:
    """Largest debt keeping the position at or above ``health_factor``"""
    adjusted = collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
    return adjusted * PRECISION // to_wei(health_factor)


class LiquidationSimulation:
    """Runs borrowers and a liquidator against a DSCEngine along a price path"""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.weth = ERC20Mock("Wrapped Ether", "WETH")
        self.eth_usd = MockV3Aggregator(to_feed_answer(config.price.initial_price))
        self.dsc = DecentralizedStableCoin(owner=DEFAULT_ENGINE_ADDRESS)
        self.engine = DSCEngine([self.weth], [self.eth_usd], self.dsc)
        self.borrowers: List[str] = []
        self.history: List[Dict[str, float]] = []
        self._opened = False

        if config.random_seed is not None:
            np.random.seed(config.random_seed)

    def generate_price_path(self) -> np.ndarray:
        """Geometric random walk of the collateral price"""
        params = self.config.price
        returns = np.random.normal(params.drift, params.volatility, self.config.total_steps)
        prices = params.initial_price * np.cumprod(1 + returns)
        # Feeds must stay positive
        return np.maximum(prices, 0.01)

    def _deposit_and_mint(self, account: str, collateral: float, health_factor: float) -> None:
        amount = to_wei(collateral)
        self.weth.mint(account, amount)
        self.weth.approve(account, self.engine.address, amount)
        value = self.engine.get_usd_value(self.weth.address, amount)
        debt = debt_for_health_factor(value, health_factor)
        self.engine.deposit_collateral_and_mint_dsc(account, self.weth.address, amount, debt)

    def open_positions(self) -> None:
        """Open every borrower position and fund the liquidator with DSC"""
        borrower_params = self.config.borrowers
        for i in range(borrower_params.count):
            borrower = f"borrower-{i}"
            target = float(
                np.random.uniform(borrower_params.min_health_factor, borrower_params.max_health_factor)
            )
            self._deposit_and_mint(borrower, borrower_params.collateral_per_borrower, target)
            self.borrowers.append(borrower)

        liquidator_params = self.config.liquidator
        self._deposit_and_mint(LIQUIDATOR, liquidator_params.collateral, liquidator_params.mint_health_factor)
        self.dsc.approve(LIQUIDATOR, self.engine.address, MAX_UINT256)
        self._opened = True
        logger.info("Opened %d borrower positions", len(self.borrowers))

    def _debt_to_cover(self, borrower: str) -> int:
        fraction_bps = int(round(self.config.liquidator.debt_fraction * BPS_SCALE))
        cover = self.engine.get_dsc_minted(borrower) * fraction_bps // BPS_SCALE
        return min(cover, self.dsc.balance_of(LIQUIDATOR))

    def step(self, step: int, price: float) -> Dict[str, float]:
        """Push a price, liquidate what is underwater, record the state"""
        self.eth_usd.update_answer(to_feed_answer(price))

        liquidations = 0
        failed = 0
        for borrower in self.borrowers:
            if self.engine.get_health_factor(borrower) >= MIN_HEALTH_FACTOR:
                continue
            cover = self._debt_to_cover(borrower)
            if cover <= 0:
                failed += 1
                continue
            try:
                self.engine.liquidate(LIQUIDATOR, self.weth.address, borrower, cover)
                liquidations += 1
            except ProtocolError as exc:
                failed += 1
                logger.debug("Liquidation of %s at $%.2f failed: %s", borrower, price, exc)

        total_collateral = 0
        total_debt = 0
        health_factors = []
        for borrower in self.borrowers:
            info = self.engine.get_account_information(borrower)
            total_collateral += info.collateral_value_in_usd
            total_debt += info.total_dsc_minted
            if info.has_debt:
                health_factors.append(self.engine.get_health_factor(borrower))

        row = {
            "step": step,
            "day": step / self.config.steps_per_day,
            "price": float(price),
            "total_collateral_usd": from_wei(total_collateral),
            "total_debt": from_wei(total_debt),
            "min_health_factor": from_wei(min(health_factors)) if health_factors else np.nan,
            "underwater_positions": sum(1 for hf in health_factors if hf < MIN_HEALTH_FACTOR),
            "liquidations": liquidations,
            "failed_liquidations": failed,
            "liquidator_collateral": from_wei(self.weth.balance_of(LIQUIDATOR)),
        }
        self.history.append(row)
        return row

    def simulate(self, prices: Optional[Sequence[float]] = None) -> pd.DataFrame:
        if not self._opened:
            self.open_positions()
        if prices is None:
            prices = self.generate_price_path()

        for i, price in enumerate(prices):
            self.step(i, price)

        return self.results()

    def results(self) -> pd.DataFrame:
        return pd.DataFrame(self.history, columns=RESULT_COLUMNS)

    def plot_results(self, results: pd.DataFrame, output_dir: Path) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

        # Plot price
        ax1.plot(results["day"], results["price"], label="ETH/USD")
        liquidated = results[results["liquidations"] > 0]
        ax1.scatter(liquidated["day"], liquidated["price"], color="r", s=12, label="Liquidations")
        ax1.set_ylabel("Price (USD)")
        ax1.set_title("Collateral Price Over Time")
        ax1.legend()
        ax1.grid(True, alpha=0.3)

        # Plot system collateral and debt
        ax2.plot(results["day"], results["total_collateral_usd"], label="Collateral value")
        ax2.plot(results["day"], results["total_debt"], label="DSC debt", color="orange")
        ax2.set_ylabel("USD")
        ax2.set_title("Borrower Collateral vs Debt")
        ax2.legend()
        ax2.grid(True, alpha=0.3)

        # Plot worst health factor
        ax3.plot(results["day"], results["min_health_factor"], label="Min health factor", color="green")
        ax3.axhline(y=1.0, color="r", linestyle="--", alpha=0.3)
        ax3.set_ylabel("Health factor")
        ax3.set_xlabel("Time (days)")
        ax3.set_title("Worst Borrower Health Factor")
        ax3.legend()
        ax3.grid(True, alpha=0.3)

        seed_text = (
            f"Random Seed: {self.config.random_seed}" if self.config.random_seed is not None else "No Seed"
        )
        fig.text(0.02, 0.02, seed_text, fontsize=8, alpha=0.7)

        plt.tight_layout()

        plot_path = output_dir / f"liquidations_vol_{self.config.price.volatility}_drift_{self.config.price.drift}.png"
        plt.savefig(plot_path, bbox_inches="tight", dpi=150)
        plt.close(fig)
        return plot_path


def save_results(results: pd.DataFrame, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / "results.csv"
    results.to_csv(csv_path, index=False)
    return csv_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liquidation-simulation",
        description="Stress the DSC engine with a simulated collateral price path",
    )
    parser.add_argument("--config", default=None, help="Path to a simulation YAML file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--no-plot", action="store_true", help="Skip writing the plot")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    config = load_config(args.config) if args.config else SimulationConfig()

    sim = LiquidationSimulation(config)
    results = sim.simulate()

    output_dir = Path(config.results_dir) / config.experiment_name
    csv_path = save_results(results, output_dir)
    logger.info(
        "%d liquidations, %d failed; results written to %s",
        int(results["liquidations"].sum()),
        int(results["failed_liquidations"].sum()),
        csv_path,
    )
    if not args.no_plot:
        plot_path = sim.plot_results(results, output_dir)
        logger.info("Plot written to %s", plot_path)


if __name__ == "__main__":
    main()
