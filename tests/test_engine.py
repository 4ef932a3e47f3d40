"""Unit tests for analytics.engine."""

import numpy as np
import pytest
from trade_mc.analytics.distribution import DistributionParameters
from trade_mc.analytics.engine import SimulationEngine, simulate_run, spawn_seeds
from trade_mc.analytics.metrics import metrics_for_run
from trade_mc.core.errors import EmptyBatchError

PARAMS = DistributionParameters(mean=2.0, std_dev=15.0)


def test_simulate_run_shape():
    run = simulate_run(PARAMS, 1000.0, 25, np.random.default_rng(1))
    assert len(run.outcomes) == 25
    assert len(run.balances) == 26
    assert run.balances[0] == 1000.0
    assert run.final_balance == pytest.approx(1000.0 + sum(run.outcomes))


def test_simulate_run_deterministic_with_same_generator_seed():
    a = simulate_run(PARAMS, 1000.0, 50, np.random.default_rng(42))
    b = simulate_run(PARAMS, 1000.0, 50, np.random.default_rng(42))
    assert a == b
    assert metrics_for_run(a) == metrics_for_run(b)


def test_zero_std_draws_mean():
    run = simulate_run(DistributionParameters(mean=3.0, std_dev=0.0), 100.0, 4, np.random.default_rng(0))
    assert run.outcomes == (3.0, 3.0, 3.0, 3.0)
    assert run.balances == (100.0, 103.0, 106.0, 109.0, 112.0)


def test_spawn_seeds_are_distinct():
    seeds = spawn_seeds(3, seed=7)
    draws = {tuple(np.random.default_rng(s).normal(size=5).tolist()) for s in seeds}
    assert len(draws) == 3


def test_engine_run_count_and_bounds():
    engine = SimulationEngine(PARAMS, 1000.0, 30)
    results = engine.run(200, seed=3)
    assert len(results) == 200
    for m in results:
        assert m.total_trades == 30
        assert m.max_drawdown >= 0
        assert 0 <= m.max_drawdown_percent <= 100
        assert 0 <= m.win_rate <= 100


def test_engine_seeded_runs_repeat():
    engine = SimulationEngine(PARAMS, 1000.0, 20)
    assert engine.run(50, seed=11) == engine.run(50, seed=11)
    assert engine.run(50, seed=11) != engine.run(50, seed=12)


def test_engine_runs_are_independent():
    runs = list(SimulationEngine(PARAMS, 1000.0, 20).iter_runs(10, seed=5))
    assert len({r.outcomes for r in runs}) == 10


def test_iter_runs_match_run_metrics():
    engine = SimulationEngine(PARAMS, 1000.0, 20)
    from_runs = [metrics_for_run(r) for r in engine.iter_runs(25, seed=9)]
    assert from_runs == engine.run(25, seed=9)


def test_worker_pool_matches_in_process():
    sequential = SimulationEngine(PARAMS, 1000.0, 20, workers=1).run(40, seed=21)
    pooled = SimulationEngine(PARAMS, 1000.0, 20, workers=2).run(40, seed=21)
    assert pooled == sequential


def test_engine_rejects_empty_batch():
    with pytest.raises(EmptyBatchError):
        SimulationEngine(PARAMS, 1000.0, 20).run(0)
