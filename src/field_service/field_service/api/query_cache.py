"""Cached reads keyed by endpoint path.

A query key is a tuple of path segments, e.g. ``("/api/promotions", 5,
"redemptions")``; the request URL is the segments joined with ``/``.
Mutations call ``invalidate`` with a key prefix so the next read of any
matching key goes back to the backend.
"""

from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Optional, Sequence

from cachetools import TTLCache

from ..core.exceptions import AuthorizationError
from .connection import ApiConnection
from .http_base import api_request

QueryKey = tuple


def normalize_key(key: Sequence[Any] | str) -> QueryKey:
    if isinstance(key, str):
        key = (key,)
    return tuple(part for part in key if part not in (None, ""))


def key_to_path(key: QueryKey) -> str:
    return "/".join(str(part).strip("/") if i else str(part).rstrip("/") for i, part in enumerate(key))


def _params_token(params: Optional[dict]) -> str:
    if not params:
        return ""
    return json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)


class QueryClient:
    def __init__(
        self,
        conn: ApiConnection,
        *,
        stale_seconds: int = 300,
        max_items: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._conn = conn
        self._stale_seconds = max(int(stale_seconds), 0)
        self._clock = clock
        # TTL is an upper bound only; per-entry freshness is checked in fetch().
        self._cache: TTLCache = TTLCache(maxsize=max(int(max_items), 1), ttl=max(self._stale_seconds, 60) * 10, timer=clock)
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def _lookup(self, cache_key, max_age: float):
        with self._lock:
            entry = self._cache.get(cache_key)
            if entry is not None and (self._clock() - entry[0]) < max_age:
                self._hits += 1
                return True, entry[1]
            self._misses += 1
            return False, None

    def fetch(
        self,
        key: Sequence[Any] | str,
        *,
        params: Optional[dict] = None,
        refetch_interval: Optional[int] = None,
        on_unauthorized: str = "throw",
        fetcher: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """Return the cached value for ``key`` or fetch it.

        ``refetch_interval`` (seconds) marks polled reads: the entry goes
        stale after that interval instead of the default staleness.
        """

        qkey = normalize_key(key)
        cache_key = (qkey, _params_token(params))
        max_age = refetch_interval if refetch_interval is not None else self._stale_seconds

        found, value = self._lookup(cache_key, max_age)
        if found:
            return value

        try:
            if fetcher is not None:
                value = fetcher()
            else:
                value = api_request(self._conn, "GET", key_to_path(qkey), params=params)
        except AuthorizationError as e:
            if on_unauthorized == "return_null" and e.status == 401:
                return None
            raise

        with self._lock:
            self._cache[cache_key] = (self._clock(), value)
        return value

    def invalidate(self, key_prefix: Sequence[Any] | str) -> int:
        prefix = normalize_key(key_prefix)
        if not prefix:
            return 0
        n = len(prefix)
        removed = 0
        with self._lock:
            for cache_key in [k for k in self._cache.keys() if k[0][:n] == prefix]:
                del self._cache[cache_key]
                removed += 1
        return removed

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._cache),
                "maxsize": self._cache.maxsize,
                "hits": self._hits,
                "misses": self._misses,
            }
