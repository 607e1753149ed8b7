"""
Lighter Stats - per-address account dashboard for the Lighter exchange.

This package fetches open positions, balances and recent realized PnL for
one or more account addresses from the public explorer and exchange APIs.
"""

from .aggregator import AccountAggregator, AggregationError
from .controller import AddressListController, parse_addresses
from .dashboard import AccountCard, Dashboard
from .http_client import HttpClient, HttpClientError, HttpStatusError
from .market_resolver import MarketSymbolResolver, symbol_for
from .models import (
    # Configuration
    ConnectionConfig,
    # Account
    AccountSnapshot,
    BalanceSummary,
    Position,
    PositionSide,
    RecentTradePnL,
    TradeLogEntry,
)
from .presenter import CardState, CardView, BalanceTone, present_card, render_card_text

__all__ = [
    # Main entry points
    "Dashboard",
    "AccountCard",
    "AccountAggregator",
    "AggregationError",
    "MarketSymbolResolver",
    "symbol_for",
    "AddressListController",
    "parse_addresses",
    # HTTP
    "HttpClient",
    "HttpClientError",
    "HttpStatusError",
    # Models
    "ConnectionConfig",
    "AccountSnapshot",
    "BalanceSummary",
    "Position",
    "PositionSide",
    "RecentTradePnL",
    "TradeLogEntry",
    # Presentation
    "CardState",
    "CardView",
    "BalanceTone",
    "present_card",
    "render_card_text",
]
