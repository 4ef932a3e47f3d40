"""
Load configuration from config.yaml and .env. Env vars override YAML values.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: Optional[str] = "") -> Optional[str]:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def env_int(key: str, default: Optional[int] = 0) -> Optional[int]:
        try:
            return int(os.getenv(key, ""))
        except ValueError:
            return default

    simulation = data.get("simulation", {}) or {}
    report = data.get("report", {}) or {}
    logging_cfg = data.get("logging", {}) or {}

    report_path = env("REPORT_PATH", report.get("path"))
    seed = simulation.get("seed")

    return Config(
        num_simulations=env_int("NUM_SIMULATIONS", int(simulation.get("num_simulations") or 1000)),
        seed=env_int("MC_SEED", int(seed) if seed is not None else None),
        workers=env_int("MC_WORKERS", int(simulation.get("workers") or 1)),
        report_path=Path(report_path) if report_path else None,
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=logging_cfg.get("log_dir", "logs"),
        log_file=logging_cfg.get("log_file", "trade_mc.log"),
    )


class Config:
    """Simulator configuration. Immutable after load."""

    __slots__ = (
        "num_simulations", "seed", "workers",
        "report_path",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        num_simulations: int = 1000,
        seed: Optional[int] = None,
        workers: int = 1,
        report_path: Optional[Path] = None,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "trade_mc.log",
    ):
        object.__setattr__(self, "num_simulations", num_simulations)
        object.__setattr__(self, "seed", seed)
        object.__setattr__(self, "workers", max(1, workers))
        object.__setattr__(self, "report_path", report_path)
        object.__setattr__(self, "log_level", log_level)
        object.__setattr__(self, "log_dir", Path(log_dir) if log_dir else Path("logs"))
        object.__setattr__(self, "log_file", log_file)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Config is read-only (tried to set {name!r})")
