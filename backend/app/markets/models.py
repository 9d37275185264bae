"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

FALLBACK_SOURCE = "fallback"


class Category(str, Enum):
    CURRENCY = "currency"
    GOLD = "gold"
    CRYPTO = "crypto"


@dataclass(frozen=True, slots=True)
class Quote:
    """Immutable priced state of a single instrument.

    Currency and gold quotes carry TRY bid/ask. Crypto quotes carry a USD last
    price (mirrored into bid/ask) and a derived TRY price.
    """

    code: str
    name: str
    category: Category
    bid: float = 0.0
    ask: float = 0.0
    change_percent: float = 0.0
    price_usd: float | None = None
    price_try: float | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on code or name."""
        needle = query.lower()
        return needle in self.code.lower() or needle in self.name.lower()

    def to_dict(self) -> dict:
        """Serialize for JSON transmission."""
        if self.category is Category.CRYPTO:
            return {
                "code": self.code,
                "name": self.name,
                "priceUSD": self.price_usd,
                "priceTRY": self.price_try,
                "change": self.change_percent,
            }
        return {
            "code": self.code,
            "name": self.name,
            "buying": self.bid,
            "selling": self.ask,
            "change": self.change_percent,
        }


@dataclass(frozen=True, slots=True)
class RawInstrumentRecord:
    """Gold provider row before reconciliation.

    ``provider_code`` is the provider's own code (``EC``); ``mapped_code`` is the
    canonical instrument it belongs to (``C``).
    """

    provider_code: str
    mapped_code: str
    name: str
    bid: float
    ask: float


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Complete aggregation result for one request cycle."""

    currencies: tuple[Quote, ...] = ()
    golds: tuple[Quote, ...] = ()
    cryptos: tuple[Quote, ...] = ()
    timestamp: datetime = field(default_factory=_utcnow)
    source: str = ""

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK_SOURCE

    def filter(self, query: str | None) -> Snapshot:
        """Return a snapshot narrowed to quotes whose code or name contains ``query``."""
        query = (query or "").strip()
        if not query:
            return self
        return replace(
            self,
            currencies=tuple(q for q in self.currencies if q.matches(query)),
            golds=tuple(q for q in self.golds if q.matches(query)),
            cryptos=tuple(q for q in self.cryptos if q.matches(query)),
        )

    def to_dict(self) -> dict:
        """Serialize for JSON transmission."""
        return {
            "currencies": [q.to_dict() for q in self.currencies],
            "golds": [q.to_dict() for q in self.golds],
            "cryptos": [q.to_dict() for q in self.cryptos],
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }
