#!/usr/bin/env python3
"""
Example: Watch several addresses load in parallel.

Every card fetches in its own task; the on_update callback prints each
state change as it happens, so cards finish in whatever order the network
answers.

Usage:
    python examples/multi_account_info.py 0xFirst 0xSecond 0xThird
"""

import asyncio
import sys

from lighter_stats import AccountCard, ConnectionConfig, Dashboard


def on_update(card: AccountCard) -> None:
    """Print one line per card state change."""
    state = card.view.state.value
    detail = card.error or ""
    if card.snapshot is not None:
        detail = f"{len(card.snapshot.positions)} positions, total {card.snapshot.total_balance:,.2f}"
    print(f"[{state:>7}] {card.address} {detail}")


async def main(addresses) -> None:
    async with Dashboard(ConnectionConfig.from_env(), on_update=on_update) as dashboard:
        await dashboard.show("\n".join(addresses))
        await dashboard.wait()

        # Show again: same addresses, every card re-fetches
        await dashboard.show("\n".join(addresses))
        await dashboard.wait()

        print()
        print(dashboard.render())


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python examples/multi_account_info.py <address> [<address> ...]")
        sys.exit(2)
    asyncio.run(main(sys.argv[1:]))
