"""
Constants for the Lighter stats client.
"""

from types import MappingProxyType

# API Configuration
DEFAULT_EXPLORER_URL = "https://explorer.elliot.ai"
DEFAULT_EXCHANGE_URL = "https://mainnet.zklighter.elliot.ai"
DEFAULT_TIMEOUT = 30.0

# HTTP session
USER_AGENT = "lighter-stats/1.0"
CONNECTIONS_PER_HOST = 10

# Endpoints
ACCOUNT_SEARCH_ENDPOINT = "/api/search"
MARKETS_ENDPOINT = "/api/v1/markets"
ACCOUNT_ENDPOINT = "/api/v1/account"

# Account identifiers: 0x + 40 hex characters
ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

# Log entry markers
EXECUTED_STATUS = "executed"
ACCOUNT_RECORD_TYPE = "account"

EMPTY_POSITIONS_MESSAGE = "No active positions."

# Used when the live market listing is unavailable
FALLBACK_MARKET_SYMBOLS = MappingProxyType({
    0: "ETH",
    1: "BTC",
    2: "SOL",
    3: "DOGE",
    4: "1000PEPE",
    5: "WIF",
    6: "WLD",
    7: "XRP",
    8: "LINK",
    9: "AVAX",
    10: "NEAR",
    11: "DOT",
    12: "TON",
    13: "TAO",
    14: "POL",
    15: "TRUMP",
    16: "SUI",
    17: "1000SHIB",
    18: "1000BONK",
    19: "1000FLOKI",
    20: "BERA",
    21: "FARTCOIN",
    22: "AI16Z",
})
