"""Fixtures for market data tests."""

import pytest

from app.markets.models import Category, Quote


@pytest.fixture
def usd_quote() -> Quote:
    return Quote("USD", "Amerikan Doları", Category.CURRENCY, bid=42.49, ask=42.50, change_percent=0.16)


@pytest.fixture
def btc_quote() -> Quote:
    return Quote(
        "BTC", "Bitcoin", Category.CRYPTO,
        bid=94989.0, ask=94989.0, change_percent=-1.16, price_usd=94989.0, price_try=94989.0 * 34.0,
    )
