"""Tests for health factor accounting"""
from dataclasses import dataclass

import pytest

from dsc_model.src.constants import MAX_HEALTH_FACTOR, MIN_HEALTH_FACTOR
from dsc_model.src.engine import DSCEngine
from dsc_model.src.errors import BreaksHealthFactorError
from dsc_model.src.health import calculate_health_factor
from dsc_model.src.state.position import AccountInformation

from conftest import COLLATERAL_AMOUNT, ETHER, USER, approve_and_deposit


@dataclass
class HealthCase:
    """Test case for the health factor formula"""
    description: str
    total_dsc_minted: int
    collateral_value_in_usd: int
    expected: int


CASES = [
    HealthCase("no debt", 0, 1000 * ETHER, MAX_HEALTH_FACTOR),
    HealthCase("no debt, no collateral", 0, 0, MAX_HEALTH_FACTOR),
    HealthCase("exactly at threshold", 100 * ETHER, 200 * ETHER, MIN_HEALTH_FACTOR),
    HealthCase("200x over", 100 * ETHER, 20_000 * ETHER, 100 * ETHER),
    HealthCase("under threshold", 100 * ETHER, 180 * ETHER, 9 * ETHER // 10),
    HealthCase("debt without collateral", ETHER, 0, 0),
    HealthCase("rounds down", 3 * ETHER, 2 * ETHER, 333_333_333_333_333_333),
]


@pytest.mark.parametrize("case", CASES, ids=lambda c: c.description)
def test_calculate_health_factor(case):
    assert calculate_health_factor(case.total_dsc_minted, case.collateral_value_in_usd) == case.expected
    assert DSCEngine.calculate_health_factor(case.total_dsc_minted, case.collateral_value_in_usd) == case.expected


def test_health_factor_without_debt_is_max(deposited):
    assert deposited.get_health_factor(USER) == MAX_HEALTH_FACTOR


def test_untouched_account_is_healthy(engine):
    assert engine.get_health_factor("nobody") == MAX_HEALTH_FACTOR
    engine.health.assert_healthy("nobody")


def test_properly_reports_health_factor(minted):
    # $20,000 of collateral, half counts, against $100 of debt
    assert minted.get_health_factor(USER) == 100 * ETHER


def test_health_factor_can_go_below_one(minted, eth_usd):
    eth_usd.update_answer(18 * 10**8)
    # 10 ETH * $18 = $180, half is $90 against $100 of debt
    assert minted.get_health_factor(USER) == 9 * ETHER // 10


def test_assert_healthy_carries_health_factor(minted, eth_usd):
    eth_usd.update_answer(18 * 10**8)
    with pytest.raises(BreaksHealthFactorError) as exc_info:
        minted.health.assert_healthy(USER)
    assert exc_info.value.health_factor == 9 * ETHER // 10


def test_collateral_value_sums_all_tokens(engine, weth, wbtc):
    approve_and_deposit(engine, weth, USER, COLLATERAL_AMOUNT)
    approve_and_deposit(engine, wbtc, USER, ETHER)
    # 10 ETH * $2,000 + 1 BTC * $1,000
    assert engine.get_account_collateral_value(USER) == 21_000 * ETHER


def test_account_information(minted):
    info = minted.get_account_information(USER)
    assert info == AccountInformation(total_dsc_minted=100 * ETHER, collateral_value_in_usd=20_000 * ETHER)
    assert info.has_debt
    assert info.describe() == "debt=100.00 DSC, collateral=$20,000.00"


def test_fifteen_units_at_two_thousand_mint_to_the_boundary(engine, weth):
    """15 ETH at $2,000 supports exactly 15,000 DSC"""
    weth.mint(USER, 5 * ETHER)
    approve_and_deposit(engine, weth, USER, 15 * ETHER)
    assert engine.get_account_collateral_value(USER) == 30_000 * ETHER

    engine.mint_dsc(USER, 15_000 * ETHER)
    assert engine.get_health_factor(USER) == MIN_HEALTH_FACTOR

    with pytest.raises(BreaksHealthFactorError):
        engine.mint_dsc(USER, ETHER)
    with pytest.raises(BreaksHealthFactorError) as exc_info:
        engine.mint_dsc(USER, 1)
    assert exc_info.value.health_factor == MIN_HEALTH_FACTOR - 1
    assert engine.get_dsc_minted(USER) == 15_000 * ETHER
