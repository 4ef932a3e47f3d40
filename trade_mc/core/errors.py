"""
Typed failures for input validation. All are raised before any simulation
work starts and propagate to the caller unchanged.
"""

from __future__ import annotations


class MonteCarloError(ValueError):
    """Base error for the simulator."""


class EmptyLedgerError(MonteCarloError):
    """Ledger has no trade outcomes."""

    def __init__(self, message: str = "trade ledger has no outcomes") -> None:
        super().__init__(message)


class InvalidBalanceError(MonteCarloError):
    """Starting balance is not a strictly positive finite number."""

    def __init__(self, balance: float) -> None:
        self.balance = balance
        super().__init__(f"starting balance must be positive, got {balance!r}")


class InsufficientDataError(MonteCarloError):
    """Fewer than 2 outcomes: sample standard deviation is undefined."""

    def __init__(self, n_outcomes: int) -> None:
        self.n_outcomes = n_outcomes
        super().__init__(f"need at least 2 trade outcomes to fit a distribution, got {n_outcomes}")


class InsufficientRunsError(MonteCarloError):
    """Run count too small for the requested percentile."""

    def __init__(self, n_runs: int, percentile: float) -> None:
        self.n_runs = n_runs
        self.percentile = percentile
        super().__init__(f"{n_runs} runs is too few for percentile {percentile}")


class EmptyBatchError(MonteCarloError):
    """No simulation runs requested or supplied."""

    def __init__(self, message: str = "simulation batch is empty") -> None:
        super().__init__(message)


class ReportFormatError(MonteCarloError):
    """Trade report does not have the expected layout."""
