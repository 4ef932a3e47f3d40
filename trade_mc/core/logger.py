"""
Logging for the simulator: one "trade_mc" logger tree, console + optional file.
Library warnings raised while reading reports (pandas, openpyxl) are routed
through the same handlers.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "trade_mc"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    capture_warnings: bool = True,
) -> logging.Logger:
    """
    Configure the package logger. Safe to call again: handlers are replaced,
    not stacked. Unknown level names fall back to INFO.
    """
    log_level = getattr(logging, str(level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(log_level)
    pkg.propagate = False
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        pkg.addHandler(handler)

    logging.captureWarnings(capture_warnings)
    warnings_logger = logging.getLogger("py.warnings")
    for handler in list(warnings_logger.handlers):
        warnings_logger.removeHandler(handler)
    if capture_warnings:
        warnings_logger.propagate = False
        for handler in handlers:
            warnings_logger.addHandler(handler)
    else:
        warnings_logger.propagate = True

    return pkg
