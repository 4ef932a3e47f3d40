"""
MetaTrader 5 strategy tester report reader.

The report is a single sheet with positional columns. Trades live under a row
whose first cell is "Deals": one column-name row, then the initial balance
deposit row, then deals in "in"/"out" pairs. Only the paired outcomes and the
starting balance leave this module.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from trade_mc.core.errors import ReportFormatError
from trade_mc.core.types import HistoricalTrade, TradeLedger, TradeSide

logger = logging.getLogger("trade_mc.ingest.mt5_report")

SECTION_MARKER = "Deals"
COL_TYPE = 3
COL_DIRECTION = 4
COL_PROFIT = 10
COL_BALANCE = 11


def read_report(path: Path) -> pd.DataFrame:
    """Load the raw report grid (.xlsx/.xlsm via openpyxl, .csv otherwise)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"report not found: {path}")
    if path.suffix.lower() in (".xlsx", ".xlsm"):
        return pd.read_excel(path, header=None, dtype=object)
    return pd.read_csv(path, header=None, dtype=object, skip_blank_lines=False)


def _cell(row: pd.Series, col: int) -> Optional[object]:
    if col >= len(row):
        return None
    value = row.iloc[col]
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return value


def _text(row: pd.Series, col: int) -> str:
    value = _cell(row, col)
    return "" if value is None else str(value).strip()


def _number(row: pd.Series, col: int, what: str, line: int, required: bool = False) -> float:
    """Numeric cell; MT5 text exports use spaces as thousands separators. Empty is 0.0 unless required."""
    value = _cell(row, col)
    if value is None:
        if required:
            raise ReportFormatError(f"row {line}: {what} is empty")
        return 0.0
    if isinstance(value, str):
        value = value.replace(" ", "").replace("\u00a0", "").replace(",", "")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ReportFormatError(f"row {line}: {what} is not a number: {_cell(row, col)!r}") from None


def extract_trades(frame: pd.DataFrame) -> Tuple[float, List[HistoricalTrade]]:
    """Return (starting_balance, trades) from the Deals section of a report grid."""
    rows = frame.reset_index(drop=True)
    n = len(rows)
    start = None
    for i in range(n):
        if _text(rows.iloc[i], 0) == SECTION_MARKER:
            start = i + 1
            break
    if start is None:
        raise ReportFormatError(f"no '{SECTION_MARKER}' section in report")

    # First row after the marker holds column names.
    i = start + 1
    balance = 0.0
    while i < n and balance == 0.0:
        balance = _number(rows.iloc[i], COL_BALANCE, "balance", i)
        i += 1
    if balance == 0.0:
        raise ReportFormatError("no starting balance row in Deals section")

    trades: List[HistoricalTrade] = []
    while i < n:
        row = rows.iloc[i]
        if _text(row, COL_DIRECTION).lower() == "in":
            if i + 1 >= n:
                logger.warning("Row %d: 'in' deal has no closing row, dropped", i)
                break
            side_text = _text(row, COL_TYPE).lower()
            try:
                side = TradeSide(side_text)
            except ValueError:
                raise ReportFormatError(f"row {i}: unknown deal type {side_text!r}") from None
            outcome = _number(rows.iloc[i + 1], COL_PROFIT, "profit", i + 1, required=True)
            trades.append(HistoricalTrade(side=side, outcome=outcome))
            i += 2
            continue
        i += 1

    logger.info("Extracted %d trades, starting balance %.2f", len(trades), balance)
    return balance, trades


def load_ledger(path: Path) -> Tuple[TradeLedger, List[HistoricalTrade]]:
    """Read a report file and build the ledger the simulator consumes."""
    balance, trades = extract_trades(read_report(path))
    return TradeLedger.from_trades(trades, balance), trades
