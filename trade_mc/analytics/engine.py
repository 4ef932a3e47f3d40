"""
Simulation engine: draws synthetic trade sequences from the fitted normal model
and replays them against the starting balance.

Every run gets its own numpy Generator, spawned from one SeedSequence, so runs
share no state and can be mapped over a process pool. Results come back in run
order and depend only on the seed, not on the worker count.
"""

from __future__ import annotations
import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from trade_mc.analytics.distribution import DistributionParameters
from trade_mc.analytics.metrics import SimulationMetrics, metrics_for_run
from trade_mc.core.errors import EmptyBatchError

logger = logging.getLogger("trade_mc.analytics.engine")

_Task = Tuple[DistributionParameters, float, int, np.random.SeedSequence]


@dataclass(frozen=True)
class SimulationRun:
    """One synthetic trade sequence and the balance path it produces."""
    starting_balance: float
    outcomes: Tuple[float, ...]
    balances: Tuple[float, ...]

    @property
    def final_balance(self) -> float:
        return self.balances[-1]


def simulate_run(
    params: DistributionParameters,
    starting_balance: float,
    n_trades: int,
    rng: np.random.Generator,
) -> SimulationRun:
    """Draw n_trades outcomes from Normal(mean, std_dev) with rng and accumulate the balance."""
    if params.std_dev == 0:
        draws = [params.mean] * n_trades
    else:
        draws = rng.normal(params.mean, params.std_dev, size=n_trades).tolist()
    balance = starting_balance
    balances = [balance]
    for outcome in draws:
        balance += outcome
        balances.append(balance)
    return SimulationRun(
        starting_balance=starting_balance,
        outcomes=tuple(draws),
        balances=tuple(balances),
    )


def spawn_seeds(n_simulations: int, seed: Optional[int] = None) -> List[np.random.SeedSequence]:
    """Independent child seeds, one per run."""
    return np.random.SeedSequence(seed).spawn(n_simulations)


def _measure(task: _Task) -> SimulationMetrics:
    params, starting_balance, n_trades, seed_seq = task
    run = simulate_run(params, starting_balance, n_trades, np.random.default_rng(seed_seq))
    return metrics_for_run(run)


class SimulationEngine:
    """
    Runs N independent simulations of n_trades each.
    workers=1 runs in-process; workers>1 maps runs over a ProcessPoolExecutor.
    """

    def __init__(
        self,
        params: DistributionParameters,
        starting_balance: float,
        n_trades: int,
        workers: int = 1,
    ):
        self.params = params
        self.starting_balance = starting_balance
        self.n_trades = n_trades
        self.workers = max(1, int(workers))

    def _tasks(self, n_simulations: int, seed: Optional[int]) -> List[_Task]:
        if n_simulations <= 0:
            raise EmptyBatchError(f"number of simulations must be positive, got {n_simulations}")
        return [
            (self.params, self.starting_balance, self.n_trades, s)
            for s in spawn_seeds(n_simulations, seed)
        ]

    def iter_runs(self, n_simulations: int, seed: Optional[int] = None) -> Iterator[SimulationRun]:
        """Yield full trajectories in-process, one run at a time."""
        for _, balance, n_trades, seed_seq in self._tasks(n_simulations, seed):
            yield simulate_run(self.params, balance, n_trades, np.random.default_rng(seed_seq))

    def run(self, n_simulations: int, seed: Optional[int] = None) -> List[SimulationMetrics]:
        """Simulate and measure every run. Trajectories are dropped once measured."""
        tasks = self._tasks(n_simulations, seed)
        logger.info(
            "Starting %d simulations of %d trades (workers=%d)",
            n_simulations, self.n_trades, self.workers,
        )
        if self.workers == 1:
            results = [_measure(t) for t in tasks]
        else:
            chunksize = max(1, n_simulations // (self.workers * 4))
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                results = list(executor.map(_measure, tasks, chunksize=chunksize))
        logger.info("Completed %d simulations", len(results))
        return results
