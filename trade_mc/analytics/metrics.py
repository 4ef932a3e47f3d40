"""
Per-run performance metrics: drawdown, profit factor, win rate, Sharpe,
loss streaks, average win/loss and risk-reward.
Outcomes are walked in order with plain float arithmetic so identical inputs
always give identical results.
"""

from __future__ import annotations
import math
from dataclasses import asdict, dataclass
from typing import Dict, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from trade_mc.analytics.engine import SimulationRun

TRADING_DAYS_PER_YEAR = 252


@dataclass(frozen=True)
class SimulationMetrics:
    """Metrics for one simulated trade sequence."""
    final_balance: float
    max_drawdown: float
    max_drawdown_percent: float
    profit_factor: float
    total_trades: int
    win_rate: float
    sharpe_ratio: float
    max_consecutive_losses: int
    average_win: float
    average_loss: float
    risk_reward_ratio: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def mean_and_sample_std(values: Sequence[float]) -> Tuple[float, float]:
    """Arithmetic mean and sample (n-1) standard deviation. Std is 0.0 below 2 values."""
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    total = 0.0
    for v in values:
        total += v
    mean = total / n
    if n < 2:
        return mean, 0.0
    sq = 0.0
    for v in values:
        sq += (v - mean) ** 2
    return mean, math.sqrt(sq / (n - 1))


def drawdown(outcomes: Sequence[float], starting_balance: float) -> Tuple[float, float, float]:
    """
    Walk the balance path. Returns (final_balance, max_drawdown, max_drawdown_percent),
    percent taken against the peak balance reached over the whole walk.
    The percent is 100 * max_drawdown / peak, capped at 100 for runs whose
    balance falls below zero.
    """
    balance = starting_balance
    peak = starting_balance
    max_dd = 0.0
    for o in outcomes:
        balance += o
        if balance > peak:
            peak = balance
        current = peak - balance if balance < peak else 0.0
        if current > max_dd:
            max_dd = current
    if peak == 0:
        return balance, max_dd, 0.0
    # A balance driven below zero would push the ratio past 100.
    return balance, max_dd, min(100.0, 100.0 * max_dd / peak)


def profit_factor(outcomes: Sequence[float]) -> float:
    """Gross profit / gross loss. Returns 0 if no losses."""
    gross_profit = 0.0
    gross_loss = 0.0
    for o in outcomes:
        if o > 0:
            gross_profit += o
        elif o < 0:
            gross_loss += -o
    if gross_loss == 0:
        return 0.0
    return gross_profit / gross_loss


def win_rate(outcomes: Sequence[float]) -> float:
    """Percent of outcomes strictly above zero."""
    if not outcomes:
        return 0.0
    return 100.0 * sum(1 for o in outcomes if o > 0) / len(outcomes)


def sharpe_ratio(returns: Sequence[float]) -> float:
    """Annualized Sharpe over per-trade returns, 252 periods per year."""
    mean, std = mean_and_sample_std(returns)
    if std == 0:
        return 0.0
    return (mean / std) * math.sqrt(TRADING_DAYS_PER_YEAR)


def max_consecutive_losses(outcomes: Sequence[float]) -> int:
    """
    Longest streak of strictly negative outcomes, closed by an outcome >= 0
    (a zero outcome closes a streak too). A streak still open at the end of
    the sequence is not counted.
    """
    longest = 0
    current = 0
    for o in outcomes:
        if o < 0:
            current += 1
        else:
            if current > longest:
                longest = current
            current = 0
    return longest


def average_win_loss(outcomes: Sequence[float]) -> Tuple[float, float]:
    """(mean winning outcome, mean losing magnitude). 0 when there are none."""
    wins = [o for o in outcomes if o > 0]
    losses = [-o for o in outcomes if o < 0]
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = sum(losses) / len(losses) if losses else 0.0
    return avg_win, avg_loss


def compute_run_metrics(outcomes: Sequence[float], starting_balance: float) -> SimulationMetrics:
    """Compute the full metric set for one ordered outcome sequence."""
    final_balance, max_dd, max_dd_pct = drawdown(outcomes, starting_balance)
    avg_win, avg_loss = average_win_loss(outcomes)
    return SimulationMetrics(
        final_balance=final_balance,
        max_drawdown=max_dd,
        max_drawdown_percent=max_dd_pct,
        profit_factor=profit_factor(outcomes),
        total_trades=len(outcomes),
        win_rate=win_rate(outcomes),
        sharpe_ratio=sharpe_ratio(outcomes),
        max_consecutive_losses=max_consecutive_losses(outcomes),
        average_win=avg_win,
        average_loss=avg_loss,
        risk_reward_ratio=avg_win / avg_loss if avg_loss != 0 else 0.0,
    )


def metrics_for_run(run: "SimulationRun") -> SimulationMetrics:
    """Metrics for a SimulationRun, replayed from its own starting balance."""
    assert len(run.balances) == len(run.outcomes) + 1, "balance path out of step with outcomes"
    return compute_run_metrics(run.outcomes, run.starting_balance)
