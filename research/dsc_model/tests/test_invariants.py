"""Randomized action sequences checked against the engine invariants"""
import numpy as np
import pytest

from dsc_model.src.constants import (
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_UINT256,
    MIN_HEALTH_FACTOR,
)
from dsc_model.src.errors import ProtocolError

from conftest import ETHER

ACTORS = ["alice", "bob", "carol"]
NUM_ACTIONS = 200


class Handler:
    """Picks bounded random actions so most of them succeed"""

    def __init__(self, engine, tokens, dsc, rng):
        self.engine = engine
        self.tokens = tokens
        self.dsc = dsc
        self.rng = rng
        for actor in ACTORS:
            self.dsc.approve(actor, engine.address, MAX_UINT256)
            for token in tokens:
                token.approve(actor, engine.address, MAX_UINT256)

    def _pick(self, seq):
        return seq[int(self.rng.integers(len(seq)))]

    def _fraction(self, amount: int) -> int:
        return int(amount * self.rng.random())

    def deposit(self, actor):
        token = self._pick(self.tokens)
        amount = int(self.rng.integers(1, 1000)) * ETHER // 10
        token.mint(actor, amount)
        self.engine.deposit_collateral(actor, token.address, amount)

    def mint(self, actor):
        info = self.engine.get_account_information(actor)
        max_debt = info.collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
        self.engine.mint_dsc(actor, self._fraction(max_debt - info.total_dsc_minted))

    def redeem(self, actor):
        token = self._pick(self.tokens)
        balance = self.engine.get_collateral_balance_of_user(actor, token.address)
        self.engine.redeem_collateral(actor, token.address, self._fraction(balance))

    def burn(self, actor):
        minted = self.engine.get_dsc_minted(actor)
        self.engine.burn_dsc(actor, self._fraction(min(minted, self.dsc.balance_of(actor))))

    def run_one(self):
        actor = self._pick(ACTORS)
        action = self._pick([self.deposit, self.mint, self.redeem, self.burn])
        try:
            action(actor)
            return True
        except ProtocolError:
            return False


def check_invariants(engine, tokens, dsc):
    # Custody: the engine holds exactly what its ledger says it holds
    for token in tokens:
        recorded = sum(engine.get_collateral_balance_of_user(actor, token.address) for actor in ACTORS)
        assert token.balance_of(engine.address) == recorded

    # Supply: every DSC in circulation is someone's recorded debt
    assert dsc.total_supply == sum(engine.get_dsc_minted(actor) for actor in ACTORS)

    # Solvency: protocol collateral is worth more than the supply, every debtor is healthy
    total_value = sum(engine.get_account_collateral_value(actor) for actor in ACTORS)
    assert total_value >= dsc.total_supply
    for actor in ACTORS:
        if engine.get_dsc_minted(actor) > 0:
            assert engine.get_health_factor(actor) >= MIN_HEALTH_FACTOR


@pytest.mark.parametrize("seed", [0, 1, 2, 57])
def test_invariants_hold_over_random_actions(engine, weth, wbtc, dsc, seed):
    handler = Handler(engine, [weth, wbtc], dsc, np.random.default_rng(seed))

    successes = 0
    for _ in range(NUM_ACTIONS):
        if handler.run_one():
            successes += 1
        check_invariants(engine, [weth, wbtc], dsc)

    # Deposits alone succeed a quarter of the time
    assert successes > NUM_ACTIONS // 5
