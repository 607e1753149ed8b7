"""
Account data aggregation.

Fetches the explorer account record and the exchange balance for one
address and derives positions, balances, aggregate PnL and the realized
PnL of the two most recent trades.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from aiohttp import ClientSession

from .constants import (
    ACCOUNT_ENDPOINT,
    ACCOUNT_RECORD_TYPE,
    ACCOUNT_SEARCH_ENDPOINT,
    EXECUTED_STATUS,
)
from .http_client import HttpClient, HttpClientError, HttpStatusError
from .market_resolver import MarketSymbolMap, symbol_for
from .models.account import (
    AccountSnapshot,
    BalanceSummary,
    Position,
    PositionSide,
    RecentTradePnL,
    TradeLogEntry,
)
from .models.config import ConnectionConfig
from .utils import ZERO, parse_market_index, parse_or_zero, safe_get

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """Raised when the account record for an address cannot be built."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.address = address


def _first_present(data: Dict[str, Any], *keys: str) -> Any:
    """Return the first key's value that is present and not None."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def parse_position(raw: Dict[str, Any], symbol_map: Optional[MarketSymbolMap]) -> Position:
    """Build a Position from an explorer position record."""
    market_index = parse_market_index(_first_present(raw, "market_index", "market_id"))
    raw_size = parse_or_zero(_first_present(raw, "size", "position"))

    explicit_side = raw.get("side")
    sign = parse_or_zero(raw.get("sign"))
    if isinstance(explicit_side, str) and explicit_side.upper() in ("LONG", "SHORT"):
        side = PositionSide(explicit_side.upper())
    elif sign:
        side = PositionSide.LONG if sign > 0 else PositionSide.SHORT
    else:
        side = PositionSide.SHORT if raw_size < 0 else PositionSide.LONG

    symbol = symbol_for(symbol_map, market_index)
    if symbol.startswith("#") and raw.get("symbol"):
        symbol = str(raw["symbol"])

    return Position(
        market_index=market_index,
        symbol=symbol,
        side=side,
        size=abs(raw_size),
        entry_price=parse_or_zero(_first_present(raw, "entry_price", "avg_entry_price")),
        pnl=parse_or_zero(_first_present(raw, "pnl", "unrealized_pnl")),
    )


def parse_trade(log: Dict[str, Any]) -> TradeLogEntry:
    """Build a TradeLogEntry from an executed log entry."""
    trade = log["pubdata"]["trade_pubdata_with_funding"]
    return TradeLogEntry(
        market_index=parse_market_index(trade.get("market_index")),
        price=parse_or_zero(trade.get("price")),
        size=parse_or_zero(trade.get("size")),
        is_taker_ask=bool(trade.get("is_taker_ask")),
        time=log.get("time"),
    )


def select_recent_trades(logs: Any, count: int = 2) -> List[TradeLogEntry]:
    """
    Pick the most recent executed trades from a chronological log.

    Only entries with status "executed" that carry funding-trade payload
    qualify. Returned most recent first.
    """
    if not isinstance(logs, list):
        return []

    executed = [
        log for log in logs
        if isinstance(log, dict)
        and log.get("status") == EXECUTED_STATUS
        and isinstance(safe_get(log, "pubdata.trade_pubdata_with_funding"), dict)
    ]
    return [parse_trade(log) for log in reversed(executed[-count:])]


def compute_recent_trade_pnl(
    trades: List[TradeLogEntry],
    symbol_map: Optional[MarketSymbolMap],
) -> Optional[RecentTradePnL]:
    """
    Realized PnL of the opening and closing leg.

    ``trades`` is most recent first; the most recent trade is the close.
    Returns None unless exactly two trades are given.
    """
    if len(trades) != 2:
        return None

    close_trade, open_trade = trades
    close_size = abs(close_trade.size)

    if close_trade.side is PositionSide.LONG:
        pnl = (close_trade.price - open_trade.price) * close_size
    else:
        pnl = (open_trade.price - close_trade.price) * close_size

    return RecentTradePnL(
        symbol=symbol_for(symbol_map, close_trade.market_index),
        entry_price=open_trade.price,
        close_price=close_trade.price,
        pnl=pnl,
    )


def parse_balance(response: Any) -> BalanceSummary:
    """Extract balances from an account lookup body; zeros when unusable."""
    if not isinstance(response, dict):
        return BalanceSummary()

    account = response.get("account")
    if not isinstance(account, dict):
        accounts = response.get("accounts")
        if isinstance(accounts, list) and accounts and isinstance(accounts[0], dict):
            account = accounts[0]
        else:
            return BalanceSummary()

    available = parse_or_zero(account.get("available_balance"))
    total_raw = _first_present(account, "total_asset_value", "cross_asset_value")
    total = parse_or_zero(total_raw) if total_raw is not None else available

    return BalanceSummary(available_balance=available, total_balance=total)


class AccountAggregator:
    """Builds AccountSnapshot objects for single addresses."""

    def __init__(
        self,
        config: ConnectionConfig,
        session_provider: Callable[[], Awaitable[ClientSession]],
        http_client: Optional[HttpClient] = None,
    ):
        """Initialize the aggregator with configuration and session source."""
        self._config = config
        self._session_provider = session_provider
        self._http_client = http_client or HttpClient()

    async def aggregate(
        self,
        address: str,
        symbol_map: Optional[MarketSymbolMap] = None,
    ) -> AccountSnapshot:
        """
        Fetch and aggregate account data for one address.

        Args:
            address: Account address (0x + 40 hex characters)
            symbol_map: Market id -> ticker map from the resolver

        Returns:
            Fresh AccountSnapshot

        Raises:
            AggregationError: If the account-search data is unusable
        """
        session = await self._session_provider()

        account, balance = await asyncio.gather(
            self._fetch_account_record(session, address),
            self._fetch_balance(session, address),
        )

        positions_raw = safe_get(account, "account_positions.positions") or {}
        if isinstance(positions_raw, dict):
            positions_raw = list(positions_raw.values())
        elif not isinstance(positions_raw, list):
            positions_raw = []

        positions = tuple(
            parse_position(raw, symbol_map)
            for raw in positions_raw
            if isinstance(raw, dict)
        )

        trades = select_recent_trades(account.get("account_logs"))
        recent_trade_pnl = compute_recent_trade_pnl(trades, symbol_map)

        total_pnl = sum((position.pnl for position in positions), ZERO)

        logger.debug(
            f"Aggregated {address}: {len(positions)} positions, "
            f"{len(trades)} recent trades, total pnl {total_pnl}"
        )

        return AccountSnapshot(
            address=address,
            positions=positions,
            recent_trade_pnl=recent_trade_pnl,
            available_balance=balance.available_balance,
            total_balance=balance.total_balance,
            total_pnl=total_pnl,
        )

    async def _fetch_account_record(self, session: ClientSession, address: str) -> Dict[str, Any]:
        """Fetch account-search data and return the "account" record."""
        url = f"{self._config.explorer_base_url}{ACCOUNT_SEARCH_ENDPOINT}"

        try:
            response = await self._http_client.get_json(session, url, params={"q": address})
        except HttpStatusError as e:
            raise AggregationError(f"API error: {e.status_code}", address) from e
        except HttpClientError as e:
            raise AggregationError(f"Request failed: {e}", address) from e

        if not isinstance(response, list) or not response:
            raise AggregationError("No data found for this address", address)

        for record in response:
            if isinstance(record, dict) and record.get("type") == ACCOUNT_RECORD_TYPE:
                return record

        raise AggregationError("No account data found", address)

    async def _fetch_balance(self, session: ClientSession, address: str) -> BalanceSummary:
        """Best-effort balance lookup; failures degrade to zeros."""
        url = f"{self._config.exchange_base_url}{ACCOUNT_ENDPOINT}"

        try:
            response = await self._http_client.get_json(
                session, url, params={"by": "l1_address", "value": address}
            )
        except HttpClientError as e:
            logger.warning(f"Balance lookup failed for {address}: {e}")
            return BalanceSummary()

        return parse_balance(response)
