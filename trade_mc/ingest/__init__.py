"""Ingest: trade reports to TradeLedger."""

from trade_mc.ingest.mt5_report import read_report, extract_trades, load_ledger

__all__ = ["read_report", "extract_trades", "load_ledger"]
