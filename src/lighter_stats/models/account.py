"""
Account-related models for the Lighter stats client.

Immutable data structures for positions, trade history and the per-address
snapshot produced by the aggregator.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class PositionSide(Enum):
    """Position direction enumeration."""
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class Position:
    """Open position for one market."""
    market_index: Optional[int]
    symbol: str
    side: PositionSide
    size: Decimal  # always absolute, direction lives in side
    entry_price: Decimal
    pnl: Decimal  # unrealized

    @property
    def pnl_percentage(self) -> Decimal:
        """Unrealized PnL relative to the entry notional, in percent."""
        notional = self.entry_price * self.size
        if notional <= 0:
            return Decimal("0")
        return self.pnl / notional * 100


@dataclass(frozen=True)
class TradeLogEntry:
    """Executed trade taken from the account log."""
    market_index: Optional[int]
    price: Decimal
    size: Decimal  # signed, as reported
    is_taker_ask: bool
    time: Optional[str] = None

    @property
    def side(self) -> PositionSide:
        """Taker on the ask side sold, so the trade is a short."""
        return PositionSide.SHORT if self.is_taker_ask else PositionSide.LONG


@dataclass(frozen=True)
class RecentTradePnL:
    """Realized PnL of the two most recent executed trades."""
    symbol: str
    entry_price: Decimal
    close_price: Decimal
    pnl: Decimal


@dataclass(frozen=True)
class BalanceSummary:
    """Balance figures read from the account lookup endpoint."""
    available_balance: Decimal = Decimal("0")
    total_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class AccountSnapshot:
    """
    Aggregated view of one address.

    Attributes:
        address: Account address the snapshot was built for
        positions: Open positions, in upstream order
        recent_trade_pnl: Realized PnL of the last two trades, None if fewer exist
        available_balance: Tradeable balance
        total_balance: Total asset value, or available balance when unknown
        total_pnl: Sum of unrealized PnL over all positions
    """
    address: str
    positions: Tuple[Position, ...]
    recent_trade_pnl: Optional[RecentTradePnL]
    available_balance: Decimal
    total_balance: Decimal
    total_pnl: Decimal
