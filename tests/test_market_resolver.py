# -*- coding: utf-8 -*-
"""
Tests for MarketSymbolResolver and symbol lookup.
"""

import asyncio
import pytest
from unittest.mock import AsyncMock

from lighter_stats.constants import FALLBACK_MARKET_SYMBOLS, MARKETS_ENDPOINT
from lighter_stats.http_client import HttpClient, HttpClientError, HttpStatusError
from lighter_stats.market_resolver import MarketSymbolResolver, symbol_for

from conftest import make_http_client, make_routed_session


class TestSymbolFor:
    """Test the map -> fallback -> #id lookup chain."""

    def test_resolved_map_wins(self):
        assert symbol_for({0: "WETH"}, 0) == "WETH"

    def test_fallback_table(self):
        assert symbol_for({}, 1) == "BTC"
        assert symbol_for(None, 2) == "SOL"

    def test_unknown_market(self):
        assert symbol_for({0: "ETH"}, 999) == "#999"

    def test_string_identifier(self):
        assert symbol_for({5: "WIF"}, "5") == "WIF"

    def test_unparsable_identifier(self):
        assert symbol_for({}, "abc") == "#abc"

    def test_missing_identifier(self):
        assert symbol_for({}, None) == "#?"


class TestFallbackTable:
    """Test the static fallback table."""

    def test_has_23_entries(self):
        assert len(FALLBACK_MARKET_SYMBOLS) == 23
        assert sorted(FALLBACK_MARKET_SYMBOLS) == list(range(23))

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            FALLBACK_MARKET_SYMBOLS[99] = "NEW"


class TestResolve:
    """Test resolve() behaviour."""

    @pytest.mark.asyncio
    async def test_resolve_from_listing(self, config, session_provider, http_client):
        resolver = MarketSymbolResolver(config, session_provider, http_client)

        symbol_map = await resolver.resolve()

        assert dict(symbol_map) == {0: "ETH", 1: "BTC", 42: "HYPE"}
        http_client.get_json.assert_awaited_once()
        url = http_client.get_json.call_args.args[1]
        assert url == f"https://exchange.example.com{MARKETS_ENDPOINT}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        HttpStatusError("HTTP 503", status_code=503),
        HttpClientError("Connection error"),
    ])
    async def test_fetch_failure_returns_fallback(self, config, session_provider, error):
        client = make_http_client({MARKETS_ENDPOINT: error})
        resolver = MarketSymbolResolver(config, session_provider, client)

        symbol_map = await resolver.resolve()

        assert dict(symbol_map) == dict(FALLBACK_MARKET_SYMBOLS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        None,
        [],
        {"markets": "nope"},
        {"markets": []},
        {"markets": [{"symbol": "ETH"}, {"market_id": "x", "symbol": "BTC"}, "junk"]},
    ])
    async def test_malformed_listing_returns_fallback(self, config, session_provider, body):
        client = make_http_client({MARKETS_ENDPOINT: body})
        resolver = MarketSymbolResolver(config, session_provider, client)

        assert await resolver.resolve() is FALLBACK_MARKET_SYMBOLS

    @pytest.mark.asyncio
    async def test_non_utf8_listing_returns_fallback(self, config):
        body = b'{"markets": [{"market_id": 0, "symbol": "\xff\xfe"}]}'
        session = make_routed_session({MARKETS_ENDPOINT: body})
        resolver = MarketSymbolResolver(config, AsyncMock(return_value=session), HttpClient())

        symbol_map = await resolver.resolve()

        assert dict(symbol_map) == dict(FALLBACK_MARKET_SYMBOLS)
        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_partial_listing_skips_bad_entries(self, config, session_provider):
        body = {"markets": [
            {"market_id": 3, "symbol": "DOGE"},
            {"market_id": None, "symbol": "BAD"},
            {"market_id": 4},
        ]}
        client = make_http_client({MARKETS_ENDPOINT: body})
        resolver = MarketSymbolResolver(config, session_provider, client)

        assert dict(await resolver.resolve()) == {3: "DOGE"}

    @pytest.mark.asyncio
    async def test_resolved_once_per_lifecycle(self, config, session_provider, http_client):
        resolver = MarketSymbolResolver(config, session_provider, http_client)

        first = await resolver.resolve()
        second = await resolver.resolve()

        assert first is second
        assert resolver.resolved
        assert http_client.get_json.await_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self, config, session_provider, http_client):
        resolver = MarketSymbolResolver(config, session_provider, http_client)

        results = await asyncio.gather(*(resolver.resolve() for _ in range(5)))

        assert all(result is results[0] for result in results)
        assert http_client.get_json.await_count == 1

    @pytest.mark.asyncio
    async def test_reset_forces_new_fetch(self, config, session_provider, http_client):
        resolver = MarketSymbolResolver(config, session_provider, http_client)

        await resolver.resolve()
        resolver.reset()
        assert not resolver.resolved
        await resolver.resolve()

        assert http_client.get_json.await_count == 2
