"""
Cross-run summary: percentiles of final balance and drawdown %, averages of the
remaining risk metrics.
"""

from __future__ import annotations
import math
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence, Tuple

import numpy as np

from trade_mc.analytics.metrics import SimulationMetrics
from trade_mc.core.errors import EmptyBatchError, InsufficientRunsError

PERCENTILES: Tuple[float, ...] = (0.05, 0.50, 0.95)
PERCENTILE_METRICS: Tuple[str, ...] = ("final_balance", "max_drawdown_percent")
AVERAGED_METRICS: Tuple[str, ...] = (
    "win_rate",
    "profit_factor",
    "sharpe_ratio",
    "max_consecutive_losses",
    "risk_reward_ratio",
)


def percentile_index(n: int, p: float) -> int:
    """Zero-based rank floor(n * p) into an ascending sample of size n."""
    if n <= 0:
        raise EmptyBatchError()
    idx = math.floor(n * p)
    if idx < 0 or idx >= n:
        raise InsufficientRunsError(n, p)
    return idx


def check_batch_size(n: int, percentiles: Sequence[float] = PERCENTILES) -> None:
    """Raise before any work if n runs cannot support every requested percentile."""
    for p in percentiles:
        percentile_index(n, p)


@dataclass(frozen=True)
class SimulationBatchResult:
    """Per-run metrics in run order plus their percentile and average summaries."""
    runs: Tuple[SimulationMetrics, ...]
    sorted_values: Mapping[str, Tuple[float, ...]] = field(repr=False)
    averages: Mapping[str, float]

    def __len__(self) -> int:
        return len(self.runs)

    def percentile(self, metric: str, p: float) -> float:
        """Value at rank floor(N * p) of the ascending metric sample."""
        if metric not in self.sorted_values:
            raise KeyError(f"no percentiles for {metric!r}; choose from {PERCENTILE_METRICS}")
        values = self.sorted_values[metric]
        return values[percentile_index(len(values), p)]

    def percentiles(self, metric: str) -> Dict[float, float]:
        return {p: self.percentile(metric, p) for p in PERCENTILES}

    def average(self, metric: str) -> float:
        return self.averages[metric]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_simulations": len(self.runs),
            "percentiles": {
                metric: {f"p{int(round(p * 100))}": v for p, v in self.percentiles(metric).items()}
                for metric in PERCENTILE_METRICS
            },
            "averages": dict(self.averages),
        }


def aggregate(runs: Sequence[SimulationMetrics]) -> SimulationBatchResult:
    """Build the batch summary from completed runs."""
    n = len(runs)
    if n == 0:
        raise EmptyBatchError()
    check_batch_size(n)
    sorted_values = {
        metric: tuple(np.sort(np.array([getattr(r, metric) for r in runs], dtype=float)).tolist())
        for metric in PERCENTILE_METRICS
    }
    averages = {
        metric: sum(float(getattr(r, metric)) for r in runs) / n
        for metric in AVERAGED_METRICS
    }
    return SimulationBatchResult(
        runs=tuple(runs),
        sorted_values=MappingProxyType(sorted_values),
        averages=MappingProxyType(averages),
    )
