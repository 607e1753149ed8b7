"""
Data models for the Lighter stats client.

This package contains all data structures used throughout the client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig
from .account import (
    AccountSnapshot,
    BalanceSummary,
    Position,
    PositionSide,
    RecentTradePnL,
    TradeLogEntry,
)

__all__ = [
    # Configuration
    "ConnectionConfig",
    # Account
    "AccountSnapshot",
    "BalanceSummary",
    "Position",
    "PositionSide",
    "RecentTradePnL",
    "TradeLogEntry",
]
