"""Unit tests for analytics.aggregate."""

import random

import pytest
from trade_mc.analytics.aggregate import aggregate, check_batch_size, percentile_index
from trade_mc.analytics.metrics import SimulationMetrics
from trade_mc.core.errors import EmptyBatchError, InsufficientRunsError


def make_metrics(**overrides) -> SimulationMetrics:
    values = dict(
        final_balance=1000.0,
        max_drawdown=0.0,
        max_drawdown_percent=0.0,
        profit_factor=1.0,
        total_trades=10,
        win_rate=50.0,
        sharpe_ratio=0.0,
        max_consecutive_losses=0,
        average_win=0.0,
        average_loss=0.0,
        risk_reward_ratio=0.0,
    )
    values.update(overrides)
    return SimulationMetrics(**values)


def test_percentile_index():
    assert percentile_index(100, 0.05) == 5
    assert percentile_index(100, 0.50) == 50
    assert percentile_index(100, 0.95) == 95
    assert percentile_index(1, 0.95) == 0


def test_percentile_index_out_of_range():
    with pytest.raises(InsufficientRunsError):
        percentile_index(10, 1.0)


def test_check_batch_size():
    check_batch_size(1)
    with pytest.raises(EmptyBatchError):
        check_batch_size(0)


def test_percentiles_over_final_balance():
    balances = [100.0 * k for k in range(1, 101)]
    random.Random(0).shuffle(balances)
    result = aggregate([make_metrics(final_balance=b) for b in balances])
    assert result.percentile("final_balance", 0.50) == 5100.0
    assert result.percentile("final_balance", 0.05) == 600.0
    assert result.percentile("final_balance", 0.95) == 9600.0


def test_percentiles_over_drawdown():
    runs = [make_metrics(max_drawdown_percent=float(k)) for k in reversed(range(20))]
    result = aggregate(runs)
    assert result.percentiles("max_drawdown_percent") == {0.05: 1.0, 0.50: 10.0, 0.95: 19.0}


def test_averages():
    runs = [
        make_metrics(win_rate=40.0, profit_factor=1.0, sharpe_ratio=0.5, max_consecutive_losses=2, risk_reward_ratio=1.0),
        make_metrics(win_rate=60.0, profit_factor=3.0, sharpe_ratio=1.5, max_consecutive_losses=5, risk_reward_ratio=2.0),
    ]
    result = aggregate(runs)
    assert result.average("win_rate") == 50.0
    assert result.average("profit_factor") == 2.0
    assert result.average("sharpe_ratio") == 1.0
    assert result.average("max_consecutive_losses") == 3.5
    assert result.average("risk_reward_ratio") == 1.5


def test_runs_keep_order():
    runs = [make_metrics(final_balance=b) for b in (3.0, 1.0, 2.0)]
    assert [m.final_balance for m in aggregate(runs).runs] == [3.0, 1.0, 2.0]


def test_empty_batch():
    with pytest.raises(EmptyBatchError):
        aggregate([])


def test_unknown_percentile_metric():
    result = aggregate([make_metrics()])
    with pytest.raises(KeyError):
        result.percentile("win_rate", 0.5)


def test_to_dict():
    d = aggregate([make_metrics(final_balance=float(b)) for b in range(10)]).to_dict()
    assert d["num_simulations"] == 10
    assert d["percentiles"]["final_balance"] == {"p5": 0.0, "p50": 5.0, "p95": 9.0}
    assert set(d["averages"]) == {"win_rate", "profit_factor", "sharpe_ratio", "max_consecutive_losses", "risk_reward_ratio"}


def test_result_mappings_are_read_only():
    result = aggregate([make_metrics(final_balance=float(b)) for b in range(5)])
    with pytest.raises(TypeError):
        result.averages["win_rate"] = 0.0
    with pytest.raises(TypeError):
        result.sorted_values["final_balance"] = ()
    assert result.average("win_rate") == 50.0
