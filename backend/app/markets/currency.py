"""Truncgil REST client for currency rates."""

from __future__ import annotations

import logging
from typing import Any

from .errors import ParseError, SchemaMismatch
from .instruments import CURRENCY_NAMES
from .interface import MarketDataProvider, to_float
from .models import Category, Quote

logger = logging.getLogger(__name__)

TRUNCGIL_URL = "https://finans.truncgil.com/v4/today.json"
USER_AGENT = "Mozilla/5.0 (compatible; KeeperWeb/1.0; +https://keeper-web.vercel.app)"


def parse_currencies(payload: Any) -> list[Quote]:
    """Extract USD, EUR, GBP and CHF from a today.json document.

    Missing currencies are skipped; missing fields become 0.
    """
    if not isinstance(payload, dict):
        raise ParseError(f"expected a JSON object, got {type(payload).__name__}")

    quotes: list[Quote] = []
    for code, name in CURRENCY_NAMES.items():
        try:
            quotes.append(_parse_entry(code, name, payload.get(code)))
        except SchemaMismatch as e:
            logger.debug("Skipping currency: %s", e)
    return quotes


def _parse_entry(code: str, name: str, entry: Any) -> Quote:
    if entry is None:
        raise SchemaMismatch(f"{code} not in response")
    if not isinstance(entry, dict):
        raise SchemaMismatch(f"{code} entry is not an object")
    return Quote(
        code=code,
        name=name,
        category=Category.CURRENCY,
        bid=to_float(entry.get("Buying")),
        ask=to_float(entry.get("Selling")),
        change_percent=to_float(entry.get("Change")),
    )


class CurrencyAdapter(MarketDataProvider):
    """Currency quotes (TRY) from the Truncgil finance feed.

    The feed also carries gold and other currencies; only the four in
    CURRENCY_NAMES are consumed. The request has a hard 5s deadline.
    """

    name = "truncgil"
    default_deadline = 5.0

    def __init__(self, client, *, url: str = TRUNCGIL_URL, **kwargs) -> None:
        super().__init__(client, url=url, **kwargs)

    async def _fetch(self) -> list[Quote]:
        response = await self._request(
            "GET",
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )
        return parse_currencies(self._json(response))
