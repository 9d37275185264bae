"""Market data aggregation subsystem.

Public API:
    Quote, Snapshot       - Immutable quote and aggregation result dataclasses
    MarketDataProvider    - Abstract never-raise interface for upstream providers
    GoldAdapter           - Altinkaynak SOAP gold prices
    CurrencyAdapter       - Truncgil JSON currency rates
    CryptoAdapter         - Binance 24h ticker crypto prices
    MarketAggregator      - Concurrent fan-out with static fallback
    ResponseCache         - Per-provider freshness cache
    create_market_aggregator - Factory wiring providers from the environment
    create_markets_router - FastAPI router factory for GET /api/markets
"""

from .aggregator import MarketAggregator
from .cache import ResponseCache
from .crypto import CryptoAdapter
from .currency import CurrencyAdapter
from .factory import create_market_aggregator
from .gold import GoldAdapter
from .interface import MarketDataProvider
from .models import Category, Quote, RawInstrumentRecord, Snapshot
from .routes import create_markets_router

__all__ = [
    "Category",
    "Quote",
    "RawInstrumentRecord",
    "Snapshot",
    "MarketDataProvider",
    "GoldAdapter",
    "CurrencyAdapter",
    "CryptoAdapter",
    "MarketAggregator",
    "ResponseCache",
    "create_market_aggregator",
    "create_markets_router",
]
