"""
zoff-watch: terminal dashboard for the best SOL/JitoSOL route.

Usage:
    zoff-watch                      # 1 SOL -> JitoSOL, refresh every 15s
    zoff-watch --amount 2.5 --reverse
    zoff-watch --once --days 0.04   # one snapshot with the 1-hour price window
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from zoff.aggregator import QuoteAggregator
from zoff.core.config import Settings, configure_logging
from zoff.display.board import DEFAULT_AMOUNT, QuoteBoard
from zoff.display.refresh import DEFAULT_REFRESH_INTERVAL, RefreshTask
from zoff.market.coingecko import DEFAULT_DAYS, PriceHistoryClient

logger = logging.getLogger("zoff.display")


class Dashboard:
    """Wires a QuoteBoard to the aggregator and the price client."""

    def __init__(
        self,
        board: QuoteBoard,
        aggregator: QuoteAggregator,
        prices: PriceHistoryClient,
        days: float = DEFAULT_DAYS,
    ) -> None:
        self.board = board
        self._aggregator = aggregator
        self._prices = prices
        self._days = days

    async def refresh_quotes(self) -> None:
        self.board.quotes = await self._aggregator.get_quotes(self.board.swap_request())

    async def refresh_prices(self) -> None:
        try:
            self.board.history = await self._prices.get_history(self._days)
        except Exception as e:
            logger.warning(f"Price history unavailable: {e}")
            self.board.history = None

    async def refresh(self) -> None:
        await asyncio.gather(self.refresh_quotes(), self.refresh_prices())
        print(self.board.render(), flush=True)
        print("-" * 72, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zoff-watch", description=__doc__.splitlines()[1])
    parser.add_argument("--amount", default=DEFAULT_AMOUNT, help="input amount in whole tokens")
    parser.add_argument("--reverse", action="store_true", help="quote JitoSOL -> SOL instead")
    parser.add_argument("--interval", type=float, default=DEFAULT_REFRESH_INTERVAL,
                        help="seconds between refreshes")
    parser.add_argument("--days", type=float, default=DEFAULT_DAYS, help="price history window in days")
    parser.add_argument("--once", action="store_true", help="print one snapshot and exit")
    parser.add_argument("--log-level", default=None, help="override ZOFF_LOG_LEVEL")
    return parser


async def run(args: argparse.Namespace, board: QuoteBoard, settings: Settings) -> None:
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        dashboard = Dashboard(
            board,
            QuoteAggregator.from_settings(client, settings),
            PriceHistoryClient(
                client,
                coin_id=settings.coingecko_coin_id,
                cache_ttl=settings.price_cache_ttl,
                timeout=settings.request_timeout,
            ),
            days=args.days,
        )
        if args.once:
            await dashboard.refresh()
            return

        async with RefreshTask(dashboard.refresh, interval=args.interval):
            # Runs until interrupted; leaving the block cancels the timer
            await asyncio.Event().wait()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    board = QuoteBoard(reverse=args.reverse)
    try:
        board.set_amount(args.amount)
    except ValueError as e:
        parser.error(str(e))

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)
    try:
        asyncio.run(run(args, board, settings))
    except KeyboardInterrupt:
        pass
