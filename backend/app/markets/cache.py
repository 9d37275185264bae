"""Per-provider response cache implementing the freshness windows."""

from __future__ import annotations

from threading import Lock

from cachetools import TTLCache

from .models import Quote

# Seconds a provider's normalized result may be reused before re-fetching
FRESHNESS_WINDOWS: dict[str, float] = {
    "altinkaynak": 60.0,
    "truncgil": 60.0,
    "binance": 30.0,
}

DEFAULT_FRESHNESS = 60.0


class ResponseCache:
    """Thread-safe cache of the last good result of each provider.

    Each provider gets its own TTLCache so the windows stay independent.
    Writers: provider adapters after a successful, non-empty fetch.
    Readers: the same adapters, before issuing an outbound request.
    """

    def __init__(self, windows: dict[str, float] | None = None, timer=None) -> None:
        self._windows = dict(FRESHNESS_WINDOWS if windows is None else windows)
        self._timer = timer
        self._caches: dict[str, TTLCache] = {}
        self._lock = Lock()

    def window(self, provider: str) -> float:
        """Freshness window in seconds for a provider."""
        return self._windows.get(provider, DEFAULT_FRESHNESS)

    def get(self, provider: str) -> list[Quote] | None:
        """Cached quotes for a provider, or None if missing or expired."""
        with self._lock:
            cached = self._cache_for(provider).get(provider)
            return list(cached) if cached is not None else None

    def put(self, provider: str, quotes: list[Quote]) -> None:
        """Store a provider's quotes for its freshness window. Empty results are ignored."""
        if not quotes:
            return
        with self._lock:
            self._cache_for(provider)[provider] = tuple(quotes)

    def __contains__(self, provider: str) -> bool:
        with self._lock:
            return provider in self._cache_for(provider)

    def _cache_for(self, provider: str) -> TTLCache:
        """Caller must hold the lock."""
        cache = self._caches.get(provider)
        if cache is None:
            kwargs = {"timer": self._timer} if self._timer is not None else {}
            cache = TTLCache(maxsize=1, ttl=self.window(provider), **kwargs)
            self._caches[provider] = cache
        return cache
