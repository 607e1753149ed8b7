# -*- coding: utf-8 -*-
"""
Market symbol resolution.

Maps numeric market identifiers to display tickers using the exchange's
public market listing. The listing is fetched once per resolver and shared
read-only by every account card; if it cannot be fetched the static
fallback table is used instead.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Any, Callable, Awaitable, Dict, Mapping, Optional

from aiohttp import ClientSession

from .constants import FALLBACK_MARKET_SYMBOLS, MARKETS_ENDPOINT
from .http_client import HttpClient, HttpClientError
from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

MarketSymbolMap = Mapping[int, str]


def symbol_for(symbol_map: Optional[MarketSymbolMap], market_index: Any) -> str:
    """
    Resolve a ticker for a market identifier.

    Looks in the resolved map, then the fallback table, and finally
    renders the identifier itself as ``#<id>``.
    """
    if market_index is None:
        return "#?"
    try:
        key = int(market_index)
    except (TypeError, ValueError):
        return f"#{market_index}"

    if symbol_map and key in symbol_map:
        return symbol_map[key]
    if key in FALLBACK_MARKET_SYMBOLS:
        return FALLBACK_MARKET_SYMBOLS[key]
    return f"#{key}"


class MarketSymbolResolver:
    """
    Resolves the market id -> ticker map once per lifecycle.

    ``resolve()`` never raises: any failure yields the fallback table.
    Concurrent callers share a single fetch.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        session_provider: Callable[[], Awaitable[ClientSession]],
        http_client: Optional[HttpClient] = None,
    ):
        """
        Initialize the resolver.

        Args:
            config: Connection configuration holding the exchange base URL
            session_provider: Coroutine function returning the shared session
            http_client: Optional HTTP client (injected in tests)
        """
        self._config = config
        self._session_provider = session_provider
        self._http_client = http_client or HttpClient()
        self._symbol_map: Optional[MarketSymbolMap] = None
        self._lock = asyncio.Lock()

    @property
    def resolved(self) -> bool:
        """Whether a map has been resolved in this lifecycle."""
        return self._symbol_map is not None

    async def resolve(self) -> MarketSymbolMap:
        """Return the market symbol map, fetching it on first use."""
        if self._symbol_map is not None:
            return self._symbol_map

        async with self._lock:
            if self._symbol_map is None:
                self._symbol_map = await self._fetch_symbol_map()
        return self._symbol_map

    def reset(self) -> None:
        """Forget the resolved map so the next resolve() fetches again."""
        self._symbol_map = None

    async def _fetch_symbol_map(self) -> MarketSymbolMap:
        url = f"{self._config.exchange_base_url}{MARKETS_ENDPOINT}"

        try:
            session = await self._session_provider()
            response = await self._http_client.get_json(session, url)
        except HttpClientError as e:
            logger.warning(f"Market listing unavailable, using fallback symbols: {e}")
            return FALLBACK_MARKET_SYMBOLS

        symbol_map = self._parse_markets(response)
        if not symbol_map:
            logger.warning("Market listing malformed or empty, using fallback symbols")
            return FALLBACK_MARKET_SYMBOLS

        logger.info(f"Resolved {len(symbol_map)} market symbols")
        return MappingProxyType(symbol_map)

    @staticmethod
    def _parse_markets(response: Any) -> Dict[int, str]:
        """Build the id -> symbol dict from a market listing body."""
        if not isinstance(response, dict):
            return {}

        markets = response.get("markets")
        if not isinstance(markets, list):
            return {}

        symbol_map: Dict[int, str] = {}
        for market in markets:
            if not isinstance(market, dict):
                continue
            symbol = market.get("symbol")
            try:
                market_id = int(market.get("market_id"))
            except (TypeError, ValueError):
                continue
            if symbol:
                symbol_map[market_id] = str(symbol)
        return symbol_map
