"""Static last-known-good market data, served when every provider fails."""

from __future__ import annotations

from datetime import datetime, timezone

from .models import FALLBACK_SOURCE, Category, Quote, Snapshot

FALLBACK_CURRENCIES: tuple[Quote, ...] = (
    Quote("USD", "Amerikan Doları", Category.CURRENCY, bid=42.49, ask=42.50, change_percent=0.16),
    Quote("EUR", "Euro", Category.CURRENCY, bid=49.31, ask=49.34, change_percent=0.05),
    Quote("GBP", "İngiliz Sterlini", Category.CURRENCY, bid=56.28, ask=56.38, change_percent=0.06),
)

FALLBACK_GOLDS: tuple[Quote, ...] = (
    Quote("GA", "Gram Altın", Category.GOLD, bid=5780, ask=5888),
    Quote("C", "Çeyrek Altın", Category.GOLD, bid=9340, ask=9690),
    Quote("Y", "Yarım Altın", Category.GOLD, bid=18678, ask=19380),
    Quote("T", "Tam Altın", Category.GOLD, bid=37525, ask=38760),
    Quote("A", "Ata Altın", Category.GOLD, bid=38655, ask=40280),
    Quote("R", "Reşat Altın", Category.GOLD, bid=38125, ask=40280),
)

FALLBACK_CRYPTOS: tuple[Quote, ...] = (
    Quote(
        "BTC", "Bitcoin", Category.CRYPTO,
        bid=94989, ask=94989, change_percent=-1.16, price_usd=94989, price_try=4028211,
    ),
    Quote(
        "ETH", "Ethereum", Category.CRYPTO,
        bid=3183, ask=3183, change_percent=-0.82, price_usd=3183, price_try=134988,
    ),
)


def fallback_snapshot(now: datetime | None = None) -> Snapshot:
    """The static dataset stamped with ``now`` (default: current UTC time)."""
    return Snapshot(
        currencies=FALLBACK_CURRENCIES,
        golds=FALLBACK_GOLDS,
        cryptos=FALLBACK_CRYPTOS,
        timestamp=now or datetime.now(timezone.utc),
        source=FALLBACK_SOURCE,
    )
