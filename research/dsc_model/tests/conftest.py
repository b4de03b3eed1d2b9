"""Shared fixtures for the DSC engine tests"""
import pytest

from dsc_model.src.engine import DEFAULT_ENGINE_ADDRESS, DSCEngine
from dsc_model.src.oracle.price_feed import MockV3Aggregator
from dsc_model.src.tokens.erc20 import ERC20Mock
from dsc_model.src.tokens.stablecoin import DecentralizedStableCoin

ETHER = 10**18
ETH_USD_PRICE = 2000 * 10**8  # $2,000 with 8 decimals
BTC_USD_PRICE = 1000 * 10**8  # $1,000 with 8 decimals
FEED_TIMESTAMP = 1_700_000_000

COLLATERAL_AMOUNT = 10 * ETHER
AMOUNT_TO_MINT = 100 * ETHER
COLLATERAL_TO_COVER = 20 * ETHER
STARTING_USER_BALANCE = 10 * ETHER

USER = "user"
LIQUIDATOR = "liquidator"


def approve_and_deposit(engine: DSCEngine, token: ERC20Mock, account: str, amount: int) -> None:
    token.approve(account, engine.address, amount)
    engine.deposit_collateral(account, token.address, amount)


def deposit_and_mint(engine: DSCEngine, token: ERC20Mock, account: str, amount: int, to_mint: int) -> None:
    token.approve(account, engine.address, amount)
    engine.deposit_collateral_and_mint_dsc(account, token.address, amount, to_mint)


@pytest.fixture
def eth_usd():
    return MockV3Aggregator(ETH_USD_PRICE, updated_at=FEED_TIMESTAMP)


@pytest.fixture
def btc_usd():
    return MockV3Aggregator(BTC_USD_PRICE, updated_at=FEED_TIMESTAMP)


@pytest.fixture
def weth():
    token = ERC20Mock("Wrapped Ether", "WETH")
    token.mint(USER, STARTING_USER_BALANCE)
    return token


@pytest.fixture
def wbtc():
    token = ERC20Mock("Wrapped Bitcoin", "WBTC")
    token.mint(USER, STARTING_USER_BALANCE)
    return token


@pytest.fixture
def dsc():
    return DecentralizedStableCoin(owner=DEFAULT_ENGINE_ADDRESS)


@pytest.fixture
def engine(weth, wbtc, eth_usd, btc_usd, dsc):
    return DSCEngine([weth, wbtc], [eth_usd, btc_usd], dsc)


@pytest.fixture
def deposited(engine, weth):
    """USER has COLLATERAL_AMOUNT WETH deposited and no debt"""
    approve_and_deposit(engine, weth, USER, COLLATERAL_AMOUNT)
    return engine


@pytest.fixture
def minted(engine, weth):
    """USER has COLLATERAL_AMOUNT WETH deposited and AMOUNT_TO_MINT DSC minted"""
    deposit_and_mint(engine, weth, USER, COLLATERAL_AMOUNT, AMOUNT_TO_MINT)
    return engine


@pytest.fixture
def underwater(minted, eth_usd, weth, dsc):
    """USER at health factor 0.9 after ETH drops to $18; LIQUIDATOR holds 100 DSC"""
    eth_usd.update_answer(18 * 10**8, updated_at=FEED_TIMESTAMP)
    weth.mint(LIQUIDATOR, COLLATERAL_TO_COVER)
    deposit_and_mint(minted, weth, LIQUIDATOR, COLLATERAL_TO_COVER, AMOUNT_TO_MINT)
    dsc.approve(LIQUIDATOR, minted.address, AMOUNT_TO_MINT)
    return minted
