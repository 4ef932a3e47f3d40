"""
Core data types: historical trades and the ledger fed to the simulator.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class HistoricalTrade:
    """Closed trade as read from a report."""
    side: TradeSide
    outcome: float


@dataclass(frozen=True)
class TradeLedger:
    """Ordered historical trade outcomes plus the account's starting balance."""
    outcomes: Tuple[float, ...] = field(default_factory=tuple)
    starting_balance: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "outcomes", tuple(float(x) for x in self.outcomes))
        object.__setattr__(self, "starting_balance", float(self.starting_balance))

    def __len__(self) -> int:
        return len(self.outcomes)

    @classmethod
    def from_trades(cls, trades: Iterable[HistoricalTrade], starting_balance: float) -> "TradeLedger":
        return cls(outcomes=tuple(t.outcome for t in trades), starting_balance=starting_balance)
