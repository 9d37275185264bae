"""Abstract interface for upstream market data providers."""

from __future__ import annotations

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .cache import ResponseCache
from .errors import ParseError, ProviderError, TransportError, UpstreamStatusError
from .models import Quote

logger = logging.getLogger(__name__)


def to_float(value: Any) -> float:
    """Parse a provider number, treating missing, malformed or non-finite values as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


class MarketDataProvider(ABC):
    """Contract for upstream price providers.

    ``fetch_quotes()`` never raises: transport, status and parse failures are
    logged here and turned into an empty list, so the aggregator can run every
    provider unconditionally. Only cancellation propagates.

    Subclasses implement ``_fetch()``, which issues exactly one request through
    ``_request()`` and may raise any ``ProviderError``.

    Lifecycle:
        provider = CryptoAdapter(client, cache=cache)
        quotes = await provider.fetch_quotes()   # [] on failure
    """

    name: str
    default_deadline: float = 10.0

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        url: str,
        deadline: float | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._deadline = self.default_deadline if deadline is None else deadline
        self._cache = cache

    @property
    def url(self) -> str:
        return self._url

    @property
    def deadline(self) -> float:
        return self._deadline

    async def fetch_quotes(self) -> list[Quote]:
        """Current quotes from this provider, or [] if anything went wrong."""
        if self._cache is not None:
            cached = self._cache.get(self.name)
            if cached is not None:
                logger.debug("%s: serving %d cached quotes", self.name, len(cached))
                return cached

        try:
            quotes = await self._fetch()
        except TransportError as e:
            if e.recoverable:
                logger.warning("%s connection issue (no data this cycle): %s", self.name, e)
            else:
                logger.error("%s transport error: %s", self.name, e)
            return []
        except (UpstreamStatusError, ParseError) as e:
            logger.error("%s request failed: %s", self.name, e)
            return []
        except ProviderError as e:
            logger.error("%s provider error: %s", self.name, e)
            return []
        except Exception:
            logger.exception("%s: unexpected error while fetching quotes", self.name)
            return []

        logger.debug("%s: fetched %d quotes", self.name, len(quotes))
        if self._cache is not None:
            self._cache.put(self.name, quotes)
        return quotes

    @abstractmethod
    async def _fetch(self) -> list[Quote]:
        """Fetch and normalize quotes. May raise ProviderError subclasses."""

    # --- Internal ---

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        """Issue the single outbound call, bounded by the adapter's deadline.

        Maps httpx/asyncio failures onto TransportError and non-2xx answers
        onto UpstreamStatusError.
        """
        try:
            response = await asyncio.wait_for(
                self._client.request(method, self._url, timeout=self._deadline, **kwargs),
                timeout=self._deadline,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"no response within {self._deadline:.1f}s", recoverable=True
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"timed out: {e!r}", recoverable=True) from e
        except httpx.NetworkError as e:
            # Connect/read/write/close failures on the socket
            raise TransportError(f"socket error: {e!r}", recoverable=True) from e
        except httpx.TransportError as e:
            raise TransportError(f"transport failure: {e!r}") from e

        if not response.is_success:
            raise UpstreamStatusError(response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"invalid JSON body: {e}") from e
