"""Factory for wiring the market data aggregator."""

from __future__ import annotations

import logging
import os

import httpx

from .aggregator import MarketAggregator
from .cache import ResponseCache
from .crypto import BINANCE_TICKER_URL, CryptoAdapter
from .currency import TRUNCGIL_URL, CurrencyAdapter
from .gold import ALTINKAYNAK_URL, GoldAdapter
from .instruments import DEFAULT_USD_TRY_RATE

logger = logging.getLogger(__name__)

_FALSY = {"0", "false", "no", "off"}


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r (must be positive), using %s", name, raw, default)
        return default
    return value


def create_market_aggregator(client: httpx.AsyncClient) -> MarketAggregator:
    """Create the aggregator and its three providers from environment variables.

    - MARKETS_GOLD_URL / MARKETS_CURRENCY_URL / MARKETS_TICKER_URL override the upstream endpoints
    - MARKETS_HTTP_TIMEOUT → gold and crypto deadline in seconds (default 10)
    - MARKETS_CURRENCY_TIMEOUT → currency deadline in seconds (default 5)
    - MARKETS_USD_TRY_FALLBACK → rate used when USDTTRY is unlisted (default 34.0)
    - MARKETS_CACHE_ENABLED=0 → disable the per-provider freshness cache

    All providers share ``client``; the caller owns its lifecycle.
    """
    timeout = _env_float("MARKETS_HTTP_TIMEOUT", GoldAdapter.default_deadline)
    currency_timeout = _env_float("MARKETS_CURRENCY_TIMEOUT", CurrencyAdapter.default_deadline)
    fallback_rate = _env_float("MARKETS_USD_TRY_FALLBACK", DEFAULT_USD_TRY_RATE)

    cache_enabled = os.environ.get("MARKETS_CACHE_ENABLED", "1").strip().lower() not in _FALSY
    cache = ResponseCache() if cache_enabled else None

    gold = GoldAdapter(
        client,
        url=_env_str("MARKETS_GOLD_URL", ALTINKAYNAK_URL),
        deadline=timeout,
        cache=cache,
    )
    currency = CurrencyAdapter(
        client,
        url=_env_str("MARKETS_CURRENCY_URL", TRUNCGIL_URL),
        deadline=currency_timeout,
        cache=cache,
    )
    crypto = CryptoAdapter(
        client,
        url=_env_str("MARKETS_TICKER_URL", BINANCE_TICKER_URL),
        deadline=timeout,
        fallback_rate=fallback_rate,
        cache=cache,
    )

    logger.info(
        "Market aggregator: %s (timeout %.1fs, currency %.1fs, cache %s)",
        "+".join((gold.name, currency.name, crypto.name)),
        timeout,
        currency_timeout,
        "on" if cache_enabled else "off",
    )
    return MarketAggregator(gold=gold, currency=currency, crypto=crypto)
