"""Normal model fitted to historical trade outcomes."""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from trade_mc.analytics.metrics import mean_and_sample_std
from trade_mc.core.errors import EmptyLedgerError, InsufficientDataError, InvalidBalanceError
from trade_mc.core.types import TradeLedger

logger = logging.getLogger("trade_mc.analytics.distribution")


@dataclass(frozen=True)
class DistributionParameters:
    mean: float
    std_dev: float


def validate_ledger(ledger: TradeLedger) -> None:
    """Raise if the ledger cannot seed a simulation."""
    if len(ledger.outcomes) == 0:
        raise EmptyLedgerError()
    balance = ledger.starting_balance
    if not math.isfinite(balance) or balance <= 0:
        raise InvalidBalanceError(balance)
    if len(ledger.outcomes) < 2:
        raise InsufficientDataError(len(ledger.outcomes))


def fit_distribution(ledger: TradeLedger) -> DistributionParameters:
    """Mean and sample (n-1) standard deviation of the ledger's outcomes."""
    validate_ledger(ledger)
    mean, std = mean_and_sample_std(ledger.outcomes)
    logger.debug("Fitted normal model: mean=%.4f std=%.4f (n=%d)", mean, std, len(ledger.outcomes))
    return DistributionParameters(mean=mean, std_dev=std)
