"""Tests for the run_simulations entry point."""

import pytest
from trade_mc.analytics import monte_carlo
from trade_mc.analytics.monte_carlo import run_simulations
from trade_mc.core.errors import (
    EmptyBatchError,
    EmptyLedgerError,
    InsufficientDataError,
    InvalidBalanceError,
)
from trade_mc.core.types import TradeLedger

LEDGER = TradeLedger([25.0, -10.0, 40.0, -15.0, -5.0, 30.0, -20.0, 12.0], 10000.0)


def test_run_simulations_count_and_bounds():
    result = run_simulations(LEDGER, 300, seed=1)
    assert len(result) == 300
    for m in result.runs:
        assert m.total_trades == len(LEDGER)
        assert m.max_drawdown >= 0
        assert 0 <= m.max_drawdown_percent <= 100
        assert 0 <= m.win_rate <= 100
    assert (
        result.percentile("final_balance", 0.05)
        <= result.percentile("final_balance", 0.50)
        <= result.percentile("final_balance", 0.95)
    )


def test_run_simulations_seeded_is_reproducible():
    a = run_simulations(LEDGER, 100, seed=8)
    b = run_simulations(LEDGER, 100, seed=8)
    assert a.runs == b.runs
    assert a.to_dict() == b.to_dict()


def test_degenerate_ledger_is_deterministic():
    result = run_simulations(TradeLedger([10.0, 10.0, 10.0], 1000.0), 20, seed=2)
    for m in result.runs:
        assert m.final_balance == 1030.0
        assert m.max_drawdown == 0.0
        assert m.win_rate == 100.0
        assert m.profit_factor == 0.0
        assert m.sharpe_ratio == 0.0


def test_zero_simulations():
    with pytest.raises(EmptyBatchError):
        run_simulations(LEDGER, 0)


def test_empty_ledger():
    with pytest.raises(EmptyLedgerError):
        run_simulations(TradeLedger([], 1000.0), 100)


def test_single_trade_ledger():
    with pytest.raises(InsufficientDataError):
        run_simulations(TradeLedger([50.0], 1000.0), 100)


def test_non_positive_balance():
    with pytest.raises(InvalidBalanceError):
        run_simulations(TradeLedger([1.0, -1.0], 0.0), 100)


def test_validation_happens_before_simulating(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("engine should not run")

    monkeypatch.setattr(monte_carlo.SimulationEngine, "run", fail)
    with pytest.raises(EmptyBatchError):
        run_simulations(LEDGER, 0)
    with pytest.raises(InsufficientDataError):
        run_simulations(TradeLedger([1.0], 100.0), 10)
