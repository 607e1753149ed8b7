# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing the Lighter stats client.
"""

import aiohttp
import pytest
from typing import Any, Dict, List
from unittest.mock import Mock, AsyncMock, MagicMock

from lighter_stats.constants import (
    ACCOUNT_ENDPOINT,
    ACCOUNT_SEARCH_ENDPOINT,
    MARKETS_ENDPOINT,
)
from lighter_stats.http_client import HttpClient
from lighter_stats.models.config import ConnectionConfig


ADDRESS = "0x1234567890abcdef1234567890ABCDEF12345678"
OTHER_ADDRESS = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"


def make_trade_log(price, size, is_taker_ask, market_index=0, time="2025-01-01T00:00:00Z",
                   status="executed") -> Dict[str, Any]:
    """Build an explorer log entry carrying a funding trade payload."""
    return {
        "status": status,
        "time": time,
        "pubdata": {
            "trade_pubdata_with_funding": {
                "price": str(price),
                "size": str(size),
                "market_index": market_index,
                "is_taker_ask": is_taker_ask,
            }
        },
    }


def make_http_client(routes: Dict[str, Any]) -> Mock:
    """
    Fake HttpClient answering by endpoint suffix.

    A route value that is an exception instance is raised instead of returned.
    """
    client = Mock(spec=HttpClient)

    async def get_json(session, url, params=None):
        for endpoint, result in routes.items():
            if url.endswith(endpoint):
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"Unexpected URL: {url}")

    client.get_json = AsyncMock(side_effect=get_json)
    return client


def make_routed_session(routes: Dict[str, bytes], status: int = 200) -> MagicMock:
    """Mock ClientSession returning raw response bodies by endpoint suffix."""

    def get(url, params=None):
        for endpoint, body in routes.items():
            if url.endswith(endpoint):
                response = Mock()
                response.status = status
                response.read = AsyncMock(return_value=body)
                context = MagicMock()
                context.__aenter__ = AsyncMock(return_value=response)
                context.__aexit__ = AsyncMock(return_value=False)
                return context
        raise AssertionError(f"Unexpected URL: {url}")

    session = MagicMock(spec=aiohttp.ClientSession)
    session.get.side_effect = get
    return session


# Mock data fixtures
@pytest.fixture
def address() -> str:
    return ADDRESS


@pytest.fixture
def config() -> ConnectionConfig:
    """Configuration pointing at test hosts."""
    return ConnectionConfig(
        explorer_base_url="https://explorer.example.com",
        exchange_base_url="https://exchange.example.com",
    )


@pytest.fixture
def session_provider() -> AsyncMock:
    """Session provider returning a placeholder session."""
    return AsyncMock(return_value=Mock())


@pytest.fixture
def markets_response_data() -> Dict[str, Any]:
    """Mock market listing response data."""
    return {
        "code": 200,
        "markets": [
            {"market_id": 0, "symbol": "ETH"},
            {"market_id": 1, "symbol": "BTC"},
            {"market_id": 42, "symbol": "HYPE"},
        ],
    }


@pytest.fixture
def search_response_data() -> List[Dict[str, Any]]:
    """Mock account-search response with two positions and a trade history."""
    return [
        {"type": "l1_address", "value": ADDRESS},
        {
            "type": "account",
            "index": 281,
            "account_positions": {
                "positions": {
                    "0": {
                        "market_index": 0,
                        "side": "long",
                        "size": "2",
                        "entry_price": "50",
                        "pnl": "10",
                    },
                    "42": {
                        "market_id": 42,
                        "sign": -1,
                        "position": "1.5",
                        "avg_entry_price": "20",
                        "unrealized_pnl": "-4.5",
                    },
                }
            },
            "account_logs": [
                make_trade_log(100, 5, False, time="2025-01-01T00:00:00Z"),
                {"status": "pending", "time": "2025-01-01T00:30:00Z"},
                make_trade_log(90, -5, True, time="2025-01-01T01:00:00Z"),
            ],
        },
    ]


@pytest.fixture
def balance_response_data() -> Dict[str, Any]:
    """Mock account lookup response data."""
    return {
        "code": 200,
        "total": 1,
        "accounts": [
            {
                "index": 281,
                "l1_address": ADDRESS,
                "available_balance": "1200.50",
                "total_asset_value": "1500.25",
                "cross_asset_value": "1490.00",
            }
        ],
    }


@pytest.fixture
def routes(markets_response_data, search_response_data, balance_response_data) -> Dict[str, Any]:
    """Default happy-path routes for the fake HTTP client."""
    return {
        MARKETS_ENDPOINT: markets_response_data,
        ACCOUNT_SEARCH_ENDPOINT: search_response_data,
        ACCOUNT_ENDPOINT: balance_response_data,
    }


@pytest.fixture
def http_client(routes) -> Mock:
    return make_http_client(routes)
