#!/usr/bin/env python3
"""
Example 02: JitoSOL price history.

Fetches the USD price series from CoinGecko and prints the summary.

Usage:
    python examples/02_price_history.py          # last 7 days
    python examples/02_price_history.py 0.04     # roughly the last hour
"""

import asyncio
import sys

import httpx

from zoff.market import PriceHistoryClient, PriceHistoryError

days = float(sys.argv[1]) if len(sys.argv) > 1 else 7.0


async def main():
    async with httpx.AsyncClient() as client:
        try:
            history = await PriceHistoryClient(client).get_history(days)
        except PriceHistoryError as e:
            print(f"[!] {e}")
            return

    print(f"=== JitoSOL/USD, last {days:g} days ===")
    print(f"Samples:        {len(history.prices)}")
    print(f"Current price:  ${history.current_price:.4f}")
    print(f"Change:         {history.change_percent:+.2f}%")


asyncio.run(main())
