"""Core: config, types, errors, logging."""

from trade_mc.core.config import load_config, Config
from trade_mc.core.types import TradeSide, HistoricalTrade, TradeLedger
from trade_mc.core.errors import (
    MonteCarloError,
    EmptyLedgerError,
    InvalidBalanceError,
    InsufficientDataError,
    InsufficientRunsError,
    EmptyBatchError,
    ReportFormatError,
)
from trade_mc.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "TradeSide",
    "HistoricalTrade",
    "TradeLedger",
    "MonteCarloError",
    "EmptyLedgerError",
    "InvalidBalanceError",
    "InsufficientDataError",
    "InsufficientRunsError",
    "EmptyBatchError",
    "ReportFormatError",
    "setup_logging",
]
