from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from .connection import ApiConnection
from .http_base import api_request
from .query_cache import QueryClient


class HttpRepository:
    """Shared plumbing for repositories backed by the REST API.

    Reads go through the query client; writes go straight to the backend and
    then drop the cached keys they affect.
    """

    def __init__(self, conn: ApiConnection, queries: QueryClient):
        self._conn = conn
        self._queries = queries

    def _query(self, *key: Any, params: Optional[dict] = None, refetch_interval: Optional[int] = None) -> Any:
        return self._queries.fetch(key, params=params, refetch_interval=refetch_interval)

    def _query_list(self, *key: Any, params: Optional[dict] = None, refetch_interval: Optional[int] = None) -> list[dict]:
        data = self._query(*key, params=params, refetch_interval=refetch_interval)
        return list(data or [])

    def _mutate(self, method: str, path: str, data: Any = None, *, invalidate: Iterable[Sequence[Any]] = ()) -> Any:
        result = api_request(self._conn, method, path, data)
        for prefix in invalidate:
            self._queries.invalidate(prefix)
        return result


def as_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    return int(value)


def as_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def as_enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default
