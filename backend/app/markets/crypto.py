"""Binance 24h ticker client for crypto prices."""

from __future__ import annotations

import logging
from typing import Any

from .errors import ParseError
from .instruments import CRYPTO_NAMES, DEFAULT_USD_TRY_RATE
from .interface import MarketDataProvider, to_float
from .models import Category, Quote

logger = logging.getLogger(__name__)

BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/24hr"


def index_tickers(payload: Any) -> dict[str, dict]:
    """Map symbol -> ticker row. Rows without a symbol are ignored."""
    if not isinstance(payload, list):
        raise ParseError(f"expected a JSON array, got {type(payload).__name__}")
    return {
        row["symbol"]: row
        for row in payload
        if isinstance(row, dict) and isinstance(row.get("symbol"), str)
    }


class CryptoAdapter(MarketDataProvider):
    """Crypto quotes from the Binance 24h ticker endpoint.

    The endpoint returns every traded pair in one call. Prices come from the
    ``{BASE}{quote_asset}`` pairs and are converted to TRY through the
    ``{quote_asset}TRY`` pair, or ``fallback_rate`` if that pair is missing.
    """

    name = "binance"
    default_deadline = 10.0

    def __init__(
        self,
        client,
        *,
        url: str = BINANCE_TICKER_URL,
        quote_asset: str = "USDT",
        fallback_rate: float = DEFAULT_USD_TRY_RATE,
        **kwargs,
    ) -> None:
        super().__init__(client, url=url, **kwargs)
        self._quote_asset = quote_asset.upper().strip()
        self._fallback_rate = fallback_rate

    @property
    def rate_symbol(self) -> str:
        return f"{self._quote_asset}TRY"

    async def _fetch(self) -> list[Quote]:
        response = await self._request("GET")
        return self.parse_tickers(self._json(response))

    def parse_tickers(self, payload: Any) -> list[Quote]:
        """Build quotes for the allow-listed assets present in ``payload``."""
        tickers = index_tickers(payload)
        rate = self._try_rate(tickers)

        quotes: list[Quote] = []
        for code, name in CRYPTO_NAMES.items():
            ticker = tickers.get(f"{code}{self._quote_asset}")
            if ticker is None:
                continue
            price_usd = to_float(ticker.get("lastPrice"))
            quotes.append(
                Quote(
                    code=code,
                    name=name,
                    category=Category.CRYPTO,
                    bid=price_usd,
                    ask=price_usd,
                    change_percent=to_float(ticker.get("priceChangePercent")),
                    price_usd=price_usd,
                    price_try=price_usd * rate,
                )
            )
        return quotes

    def _try_rate(self, tickers: dict[str, dict]) -> float:
        ticker = tickers.get(self.rate_symbol)
        rate = to_float(ticker.get("lastPrice")) if ticker else 0.0
        if rate <= 0:
            logger.warning(
                "%s not available, using fallback rate %.2f", self.rate_symbol, self._fallback_rate
            )
            return self._fallback_rate
        return rate
