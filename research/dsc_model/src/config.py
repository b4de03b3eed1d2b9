"""Simulation configuration: reads a YAML file, interpolates env vars, validates."""
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PriceParams:
    initial_price: float = 2000.0  # USD per collateral unit
    volatility: float = 0.01  # per step standard deviation
    drift: float = 0.0  # per step mean return


@dataclass(frozen=True)
class BorrowerParams:
    count: int = 20
    collateral_per_borrower: float = 10.0  # whole collateral units
    min_health_factor: float = 1.05
    max_health_factor: float = 2.0


@dataclass(frozen=True)
class LiquidatorParams:
    collateral: float = 1000.0  # whole collateral units
    mint_health_factor: float = 4.0  # health factor at which it mints its DSC float
    debt_fraction: float = 0.5  # share of a target's debt covered per liquidation


@dataclass(frozen=True)
class SimulationConfig:
    experiment_name: str = "default"
    random_seed: Optional[int] = None
    simulation_days: int = 30
    steps_per_day: int = 24
    results_dir: str = "research/results"
    price: PriceParams = field(default_factory=PriceParams)
    borrowers: BorrowerParams = field(default_factory=BorrowerParams)
    liquidator: LiquidatorParams = field(default_factory=LiquidatorParams)

    @property
    def total_steps(self) -> int:
        return self.simulation_days * self.steps_per_day


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML -> dataclass builders
# ---------------------------------------------------------------------------


def _build_price(raw: Dict[str, Any]) -> PriceParams:
    return PriceParams(
        initial_price=float(raw.get("initial_price", PriceParams.initial_price)),
        volatility=float(raw.get("volatility", PriceParams.volatility)),
        drift=float(raw.get("drift", PriceParams.drift)),
    )


def _build_borrowers(raw: Dict[str, Any]) -> BorrowerParams:
    return BorrowerParams(
        count=int(raw.get("count", BorrowerParams.count)),
        collateral_per_borrower=float(
            raw.get("collateral_per_borrower", BorrowerParams.collateral_per_borrower)
        ),
        min_health_factor=float(raw.get("min_health_factor", BorrowerParams.min_health_factor)),
        max_health_factor=float(raw.get("max_health_factor", BorrowerParams.max_health_factor)),
    )


def _build_liquidator(raw: Dict[str, Any]) -> LiquidatorParams:
    return LiquidatorParams(
        collateral=float(raw.get("collateral", LiquidatorParams.collateral)),
        mint_health_factor=float(raw.get("mint_health_factor", LiquidatorParams.mint_health_factor)),
        debt_fraction=float(raw.get("debt_fraction", LiquidatorParams.debt_fraction)),
    )


def build_config(raw: Dict[str, Any]) -> SimulationConfig:
    """Build and validate a config from already parsed YAML."""
    simulation = raw.get("simulation", {})
    seed = simulation.get("random_seed")
    cfg = SimulationConfig(
        experiment_name=str(simulation.get("experiment_name", SimulationConfig.experiment_name)),
        random_seed=int(seed) if seed not in (None, "") else None,
        simulation_days=int(simulation.get("days", SimulationConfig.simulation_days)),
        steps_per_day=int(simulation.get("steps_per_day", SimulationConfig.steps_per_day)),
        results_dir=str(simulation.get("results_dir") or SimulationConfig.results_dir),
        price=_build_price(raw.get("price", {})),
        borrowers=_build_borrowers(raw.get("borrowers", {})),
        liquidator=_build_liquidator(raw.get("liquidator", {})),
    )
    _validate(cfg)
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: Union[str, Path]) -> SimulationConfig:
    """Load and validate a simulation configuration from YAML + .env."""
    load_dotenv()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    cfg = build_config(_interpolate_env(raw))
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: SimulationConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.simulation_days <= 0 or cfg.steps_per_day <= 0:
        raise ValueError("Simulation must run for at least one step")
    if cfg.price.initial_price <= 0:
        raise ValueError("Initial price must be positive")
    if cfg.price.volatility < 0:
        raise ValueError("Volatility cannot be negative")
    if cfg.borrowers.count < 0:
        raise ValueError("Borrower count cannot be negative")
    if cfg.borrowers.collateral_per_borrower <= 0:
        raise ValueError("Borrower collateral must be positive")
    if not 1.0 <= cfg.borrowers.min_health_factor <= cfg.borrowers.max_health_factor:
        raise ValueError(
            "Borrower health factors must satisfy 1.0 <= min_health_factor <= max_health_factor"
        )
    if cfg.liquidator.collateral <= 0:
        raise ValueError("Liquidator collateral must be positive")
    if cfg.liquidator.mint_health_factor < 1.0:
        raise ValueError("Liquidator must mint at a health factor of at least 1.0")
    if not 0.0 < cfg.liquidator.debt_fraction <= 1.0:
        raise ValueError("Liquidator debt_fraction must be in (0, 1]")
