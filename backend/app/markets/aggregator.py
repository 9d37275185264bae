"""Concurrent aggregation of all market data providers into one snapshot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from .fallback import fallback_snapshot
from .interface import MarketDataProvider
from .models import Snapshot

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MarketAggregator:
    """Builds a Snapshot from the gold, currency and crypto providers.

    All three providers run concurrently and are awaited together; since
    ``fetch_quotes()`` never raises, the join cannot fail. Partial data is a
    valid live snapshot. Only when every provider comes back empty is the
    static fallback dataset served instead.

    Cancelling ``snapshot()`` cancels the in-flight provider calls.
    """

    def __init__(
        self,
        gold: MarketDataProvider,
        currency: MarketDataProvider,
        crypto: MarketDataProvider,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gold = gold
        self._currency = currency
        self._crypto = crypto
        self._clock = clock

    @property
    def providers(self) -> tuple[MarketDataProvider, ...]:
        return (self._gold, self._currency, self._crypto)

    @property
    def live_source(self) -> str:
        """Source label for live snapshots, e.g. ``altinkaynak+truncgil+binance``."""
        return "+".join(p.name for p in self.providers)

    async def snapshot(self) -> Snapshot:
        """Fetch every provider and assemble the current snapshot."""
        golds, currencies, cryptos = await asyncio.gather(
            self._gold.fetch_quotes(),
            self._currency.fetch_quotes(),
            self._crypto.fetch_quotes(),
        )

        if not (golds or currencies or cryptos):
            logger.warning("No data from any market provider; serving fallback snapshot")
            return fallback_snapshot(self._clock())

        return Snapshot(
            currencies=tuple(currencies),
            golds=tuple(golds),
            cryptos=tuple(cryptos),
            timestamp=self._clock(),
            source=self.live_source,
        )
