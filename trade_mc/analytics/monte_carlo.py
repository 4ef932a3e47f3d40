"""
Monte Carlo entry point: fit a normal model to historical trade outcomes, replay
N synthetic sequences of the same length and summarize the resulting balances
and risk metrics.
"""

from __future__ import annotations
import logging
from typing import Optional

from trade_mc.analytics.aggregate import SimulationBatchResult, aggregate, check_batch_size
from trade_mc.analytics.distribution import fit_distribution
from trade_mc.analytics.engine import SimulationEngine
from trade_mc.core.errors import EmptyBatchError
from trade_mc.core.types import TradeLedger

logger = logging.getLogger("trade_mc.analytics.monte_carlo")

DEFAULT_SIMULATIONS = 1000


def run_simulations(
    ledger: TradeLedger,
    num_simulations: int = DEFAULT_SIMULATIONS,
    seed: Optional[int] = None,
    workers: int = 1,
) -> SimulationBatchResult:
    """
    Simulate num_simulations future trade sequences for ledger.
    Input problems raise a MonteCarloError before any run starts.
    """
    params = fit_distribution(ledger)
    if num_simulations <= 0:
        raise EmptyBatchError(f"number of simulations must be positive, got {num_simulations}")
    check_batch_size(num_simulations)
    logger.info(
        "Simulating %d runs from %d trades (mean=%.2f, std=%.2f, start=%.2f)",
        num_simulations, len(ledger), params.mean, params.std_dev, ledger.starting_balance,
    )
    engine = SimulationEngine(params, ledger.starting_balance, len(ledger), workers=workers)
    return aggregate(engine.run(num_simulations, seed=seed))
