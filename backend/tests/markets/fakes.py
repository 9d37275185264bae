"""Fake upstream payloads and providers shared by the market data tests.

Upstream providers are faked with ``httpx.MockTransport`` so adapters run
their real request, status and parsing paths without network access.
"""

from xml.sax.saxutils import escape

import httpx

from app.markets.interface import MarketDataProvider
from app.markets.models import Quote


def soap_response(rows: list[dict], *, double_escape: bool = False) -> str:
    """Build a GetGold SOAP response whose result is the escaped <Kurlar> table."""
    kurlar = "".join(
        "<Kur>" + "".join(f"<{k}>{v}</{k}>" for k, v in row.items()) + "</Kur>" for row in rows
    )
    inner = f'<?xml version="1.0" encoding="utf-16"?><Kurlar>{kurlar}</Kurlar>'
    payload = escape(inner, {'"': "&quot;"})
    if double_escape:
        payload = escape(payload)
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        "<soap:Body>"
        '<GetGoldResponse xmlns="http://data.altinkaynak.com/">'
        f"<GetGoldResult>{payload}</GetGoldResult>"
        "</GetGoldResponse>"
        "</soap:Body>"
        "</soap:Envelope>"
    )


def truncgil_payload(*codes: str) -> dict:
    """today.json-like document with the given currencies plus unrelated entries."""
    values = {
        "USD": {"Buying": "42.4912", "Selling": "42.5023", "Change": "0.16", "Type": "Currency"},
        "EUR": {"Buying": "49.31", "Selling": "49.34", "Change": "0.05", "Type": "Currency"},
        "GBP": {"Buying": "56.28", "Selling": "56.38", "Change": "-0.06", "Type": "Currency"},
        "CHF": {"Buying": "52.80", "Selling": "52.95", "Change": "0.02", "Type": "Currency"},
    }
    payload = {"Update_Date": "2026-10-19 10:00:00", "JPY": {"Buying": "0.28", "Selling": "0.29"}}
    payload.update({code: values[code] for code in codes})
    return payload


def ticker(symbol: str, last_price: str, change: str = "0.00") -> dict:
    return {"symbol": symbol, "lastPrice": last_price, "priceChangePercent": change}


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class StubProvider(MarketDataProvider):
    """Provider returning fixed quotes (or raising) without any HTTP."""


    def __init__(self, name: str, quotes=None, error: Exception | None = None, cache=None) -> None:
        super().__init__(None, url=f"stub://{name}", cache=cache)  # type: ignore[arg-type]
        self.name = name
        self._quotes = list(quotes or [])
        self._error = error
        self.calls = 0

    async def _fetch(self) -> list[Quote]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._quotes)
