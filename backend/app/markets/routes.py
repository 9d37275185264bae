"""HTTP endpoint serving the aggregated market snapshot."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from .aggregator import MarketAggregator

logger = logging.getLogger(__name__)

# Search terms beyond this length are truncated, not rejected
MAX_QUERY_LENGTH = 64


def create_markets_router(aggregator: MarketAggregator) -> APIRouter:
    """Create the markets router serving snapshots from ``aggregator``."""
    router = APIRouter(prefix="/api", tags=["markets"])

    @router.get("/markets")
    async def get_markets(
        q: str | None = Query(default=None, description="Filter by code or name"),
    ) -> dict:
        """Current gold, currency and crypto quotes.

        Always answers 200 with ``{"success": true, "data": {...}}``. When every
        upstream provider is down the data is the static fallback set and
        ``data.source`` is ``"fallback"``.
        """
        snapshot = await aggregator.snapshot()
        logger.debug(
            "Markets snapshot: source=%s currencies=%d golds=%d cryptos=%d",
            snapshot.source,
            len(snapshot.currencies),
            len(snapshot.golds),
            len(snapshot.cryptos),
        )
        return {"success": True, "data": snapshot.filter((q or "")[:MAX_QUERY_LENGTH]).to_dict()}

    @router.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return router
