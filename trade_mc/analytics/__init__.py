"""Analytics: distribution fit, simulation engine, per-run metrics, batch summary."""

from trade_mc.analytics.distribution import DistributionParameters, fit_distribution
from trade_mc.analytics.engine import SimulationEngine, SimulationRun, simulate_run
from trade_mc.analytics.metrics import SimulationMetrics, compute_run_metrics
from trade_mc.analytics.aggregate import SimulationBatchResult, aggregate
from trade_mc.analytics.monte_carlo import run_simulations

__all__ = [
    "DistributionParameters",
    "fit_distribution",
    "SimulationEngine",
    "SimulationRun",
    "simulate_run",
    "SimulationMetrics",
    "compute_run_metrics",
    "SimulationBatchResult",
    "aggregate",
    "run_simulations",
]
