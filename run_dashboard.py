#!/usr/bin/env python
"""
Run Lighter Stats - Entry point script for the account dashboard.

Location: run_dashboard.py
Purpose: Fetch and print account cards for one or more addresses
Relevant files: src/lighter_stats/dashboard.py, config.yml

Usage:
    python run_dashboard.py 0xAbc... 0xDef...
    python run_dashboard.py --file addresses.txt
    cat addresses.txt | python run_dashboard.py
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path

import colorama
import yaml


def load_config():
    """Load configuration from config.yml"""
    config_path = Path(__file__).parent / "config.yml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def main():
    config = load_config()
    api_config = config.get("api", {})
    logging_config = config.get("logging", {})

    parser = argparse.ArgumentParser(description="Show Lighter account stats")
    parser.add_argument("addresses", nargs="*", help="Account addresses (0x...)")
    parser.add_argument("--file", help="Read addresses from a file, one per line")
    parser.add_argument("--log_level", default=logging_config.get("level", "WARNING"))
    parser.add_argument("--no_color", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Import after parsing args
    from lighter_stats import ConnectionConfig, Dashboard

    if args.addresses:
        text = "\n".join(args.addresses)
    elif args.file:
        text = Path(args.file).read_text()
    else:
        text = sys.stdin.read()

    if api_config:
        connection_config = ConnectionConfig(
            explorer_base_url=api_config.get("explorer_url", ConnectionConfig.explorer_base_url),
            exchange_base_url=api_config.get("exchange_url", ConnectionConfig.exchange_base_url),
            timeout=api_config.get("timeout", ConnectionConfig.timeout),
        )
    else:
        connection_config = ConnectionConfig.from_env()

    colorama.init()

    async def run():
        async with Dashboard(connection_config) as dashboard:
            cards = await dashboard.show(text)
            if not cards:
                print("No valid addresses given (expected 0x followed by 40 hex characters)")
                return 1
            await dashboard.wait()
            print(dashboard.render(color=not args.no_color))
            return 0

    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
