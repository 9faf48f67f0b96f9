#!/usr/bin/env python3
"""
Example 01: Compare swap quotes across aggregators.

Fetches live quotes for SOL -> JitoSOL from every configured provider and
prints them best first. Set DFLOW_API_KEY / TITAN_API_URL to include dFlow
and Titan.

Usage:
    python examples/01_swap_quotes.py
    python examples/01_swap_quotes.py 5.0          # swap 5 SOL
    python examples/01_swap_quotes.py 5.0 reverse  # swap 5 JitoSOL for SOL
"""

import asyncio
import sys

import httpx

from zoff import QuoteAggregator, Settings
from zoff.core import DECIMALS, MINTS, SwapRequest, format_amount, to_raw_amount

amount = sys.argv[1] if len(sys.argv) > 1 else "1"
reverse = len(sys.argv) > 2 and sys.argv[2] == "reverse"

token_in, token_out = ("JitoSOL", "SOL") if reverse else ("SOL", "JitoSOL")


async def main():
    request = SwapRequest(
        input_mint=MINTS[token_in],
        output_mint=MINTS[token_out],
        amount=to_raw_amount(amount, DECIMALS[token_in]),
    )
    settings = Settings.from_env()

    async with httpx.AsyncClient() as client:
        quotes = await QuoteAggregator.from_settings(client, settings).get_quotes(request)

    print(f"=== {amount} {token_in} -> {token_out} ===")
    for q in quotes:
        if q.ok:
            out = format_amount(q.output_amount, DECIMALS[token_out])
            print(f"{q.platform.value:<8} {out:>14} {token_out}  impact {q.price_impact_pct}%  via {q.route}")
        else:
            print(f"{q.platform.value:<8} unavailable ({q.error[:60]})")


asyncio.run(main())
