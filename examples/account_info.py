#!/usr/bin/env python3
"""
Example: Fetch and display account stats for a single address.

This example demonstrates how to:
1. Resolve the market symbol map once
2. Aggregate positions, balances and recent PnL for one address
3. Print the card view

Prerequisites:
- Install lighter-stats in development mode: pip install -e .
- Optionally set LIGHTER_EXPLORER_URL / LIGHTER_EXCHANGE_URL in .env

Usage:
    python examples/account_info.py 0xYourAddress
"""

import asyncio
import logging
import sys

from lighter_stats import (
    AccountAggregator,
    AggregationError,
    ConnectionConfig,
    MarketSymbolResolver,
    present_card,
    render_card_text,
)
from lighter_stats.session_manager import SessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main(address: str) -> int:
    config = ConnectionConfig.from_env()
    session_manager = SessionManager(config)

    resolver = MarketSymbolResolver(config, session_manager.create_session)
    aggregator = AccountAggregator(config, session_manager.create_session)

    try:
        symbol_map = await resolver.resolve()
        logger.info(f"Using {len(symbol_map)} market symbols")

        try:
            snapshot = await aggregator.aggregate(address, symbol_map)
        except AggregationError as e:
            print(render_card_text(present_card(address, False, e.message, None)))
            return 1
    finally:
        await session_manager.close_session()

    print(render_card_text(present_card(address, False, None, snapshot)))
    print(f"\nAggregate unrealized PnL: {snapshot.total_pnl:+.3f}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python examples/account_info.py <address>")
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
