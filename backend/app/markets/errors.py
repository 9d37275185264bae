"""Provider failure taxonomy.

These never leave an adapter: ``MarketDataProvider.fetch_quotes`` catches them,
logs at the matching severity and returns an empty list.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for failures while talking to an upstream provider."""


class TransportError(ProviderError):
    """DNS, connect, socket or deadline failure.

    ``recoverable`` marks transient connectivity trouble (timeouts, dropped
    sockets) which is logged as a warning rather than an error.
    """

    def __init__(self, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.recoverable = recoverable


class UpstreamStatusError(ProviderError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"upstream returned HTTP {status_code}")
        self.status_code = status_code


class ParseError(ProviderError):
    """Malformed XML/JSON, or a document missing the nodes we need."""


class SchemaMismatch(ProviderError):
    """A single record lacks an expected field. Skipped per record."""
