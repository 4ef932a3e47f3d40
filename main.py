#!/usr/bin/env python3
"""
Monte Carlo trade simulator CLI: simulate | trades
Usage:
  python main.py simulate [--report report.xlsx] [--config config.yaml] [--simulations N] [--seed S] [--workers W]
  python main.py trades [--report report.xlsx] [--config config.yaml]
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_mc.core.config import Config, load_config
from trade_mc.core.errors import MonteCarloError
from trade_mc.core.logger import setup_logging
from trade_mc.analytics.aggregate import AVERAGED_METRICS, PERCENTILES
from trade_mc.analytics.monte_carlo import run_simulations
from trade_mc.ingest.mt5_report import load_ledger

logger = logging.getLogger("trade_mc")


def _setup(args: argparse.Namespace) -> Config:
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    return config


def _report_path(args: argparse.Namespace, config: Config) -> Path | None:
    path = args.report or config.report_path
    if path is None:
        logger.error("No report given. Pass --report or set REPORT_PATH / report.path in config.yaml")
    return path


def run_trades(args: argparse.Namespace) -> int:
    """Print the trades extracted from the report."""
    config = _setup(args)
    path = _report_path(args, config)
    if path is None:
        return 1
    try:
        ledger, trades = load_ledger(path)
    except (MonteCarloError, FileNotFoundError) as e:
        logger.error("Cannot read report %s: %s", path, e)
        return 1
    print(f"Initial balance: {ledger.starting_balance:.2f}")
    print("Extracted trades:")
    for n, t in enumerate(trades, start=1):
        print(f"{n}: Type: {t.side.value}, Outcome: {t.outcome:.2f}")
    return 0


def run_simulate(args: argparse.Namespace) -> int:
    """Run Monte Carlo simulations on the report's trades and print the summary."""
    config = _setup(args)
    path = _report_path(args, config)
    if path is None:
        return 1
    num_simulations = args.simulations if args.simulations is not None else config.num_simulations
    seed = args.seed if args.seed is not None else config.seed
    workers = args.workers if args.workers is not None else config.workers
    try:
        ledger, _ = load_ledger(path)
        result = run_simulations(ledger, num_simulations, seed=seed, workers=workers)
    except (MonteCarloError, FileNotFoundError) as e:
        logger.error("Simulation failed: %s", e)
        return 1

    print(f"\nInitial balance: {ledger.starting_balance:.2f}")
    print(f"Historical trades: {len(ledger)}")
    print(f"Number of simulations: {len(result)}")
    if args.show_runs:
        print("\n--- Simulation final balances ---")
        for n, m in enumerate(result.runs, start=1):
            print(f"simulation #{n}: {m.final_balance:.2f}")
    print("\n--- Monte Carlo Results ---")
    for p in PERCENTILES:
        print(
            f"P{int(round(p * 100)):<3} final balance: {result.percentile('final_balance', p):>12.2f}"
            f" | max drawdown: {result.percentile('max_drawdown_percent', p):6.2f}%"
        )
    print("\n--- Averages across runs ---")
    for metric in AVERAGED_METRICS:
        print(f"{metric.replace('_', ' ').capitalize()}: {result.average(metric):.2f}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Monte Carlo trade simulator")
    parser.add_argument("mode", choices=["simulate", "trades"], help="Run simulations or list report trades")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--report", type=Path, default=None, help="MT5 tester report (.xlsx or .csv)")
    parser.add_argument("--simulations", type=int, default=None, help="Number of simulation runs")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes")
    parser.add_argument("--show-runs", action="store_true", help="Print each run's final balance")
    args = parser.parse_args()
    if args.mode == "trades":
        return run_trades(args)
    return run_simulate(args)


if __name__ == "__main__":
    sys.exit(main())
